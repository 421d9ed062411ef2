"""Registry of agents reachable through the A2A route."""

from collections.abc import Callable

from google.adk.agents import LlmAgent

from devils_advocate.core.agent import AGENT_ID, create_agent

# Agent id (as used in /a2a/agent/{agentId}) -> factory
AGENT_FACTORIES: dict[str, Callable[[], LlmAgent]] = {
    AGENT_ID: create_agent,
}

_agents: dict[str, LlmAgent] = {}


def list_agent_ids() -> list[str]:
    """List the ids of all registered agents."""
    return sorted(AGENT_FACTORIES)


def has_agent(agent_id: str) -> bool:
    """Check whether an agent id is registered."""
    return agent_id in AGENT_FACTORIES


def get_agent(agent_id: str) -> LlmAgent | None:
    """Get a registered agent, creating it on first use.

    Returns:
        The agent, or None if the id is unknown.

    Raises:
        ConfigurationError: If the agent cannot be created.
    """
    factory = AGENT_FACTORIES.get(agent_id)
    if factory is None:
        return None
    if agent_id not in _agents:
        _agents[agent_id] = factory()
    return _agents[agent_id]


def reset_agents() -> None:
    """Drop cached agent instances (useful for testing)."""
    _agents.clear()
