"""AgentCard builder for agents served over the A2A route, using a2a-sdk."""

from a2a.types import AgentCapabilities, AgentCard, AgentProvider, AgentSkill

from devils_advocate import __version__
from devils_advocate.config import get_settings
from devils_advocate.core import AGENT_DESCRIPTION, AGENT_DISPLAY_NAME, AGENT_ID

_AGENT_SKILLS: dict[str, list[AgentSkill]] = {
    AGENT_ID: [
        AgentSkill(
            id="critical-analysis",
            name="Critical Analysis",
            description=(
                "Finds flawed assumptions, market risks, operational hurdles, financial "
                "vulnerabilities and customer backlash risks in a business idea"
            ),
            tags=["red-team", "business", "risk"],
            examples=[
                "My idea is to create a subscription box for rare, indoor plants "
                "sourced from small, independent growers."
            ],
        ),
        AgentSkill(
            id="competitor-search",
            name="Competitor Search",
            description="Searches the web to find existing competitors",
            tags=["search", "competitors"],
        ),
    ],
}

_AGENT_DETAILS: dict[str, tuple[str, str]] = {
    AGENT_ID: (AGENT_DISPLAY_NAME, AGENT_DESCRIPTION),
}


def build_agent_card(agent_id: str) -> AgentCard | None:
    """Build the AgentCard of a registered agent.

    Returns:
        The AgentCard, or None if the agent id is unknown.
    """
    if agent_id not in _AGENT_DETAILS:
        return None

    settings = get_settings()
    name, description = _AGENT_DETAILS[agent_id]

    return AgentCard(
        name=name,
        description=description,
        version=__version__,
        url=f"{settings.agent_provider_url}/a2a/agent/{agent_id}",
        provider=AgentProvider(
            organization=settings.app_name,
            url=settings.agent_provider_url,
        ),
        capabilities=AgentCapabilities(
            streaming=False,
            push_notifications=False,
            state_transition_history=True,
        ),
        skills=_AGENT_SKILLS.get(agent_id, []),
        default_input_modes=["text"],
        default_output_modes=["text"],
    )


def get_agent_card_dict(agent_id: str) -> dict | None:
    """Get an AgentCard as a dictionary for JSON serialization."""
    agent_card = build_agent_card(agent_id)
    if agent_card is None:
        return None
    return agent_card.model_dump(mode="json", by_alias=True, exclude_none=True)
