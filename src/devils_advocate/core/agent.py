"""Devil's Advocate agent definition using Google ADK with Gemini."""

import logging
import os

from google.adk.agents import LlmAgent
from google.adk.tools import FunctionTool

from devils_advocate.config import get_settings
from devils_advocate.errors import ConfigurationError
from devils_advocate.tools import competitor_search

logger = logging.getLogger(__name__)

AGENT_ID = "devilsAdvocateAgent"
AGENT_NAME = "devils_advocate"
AGENT_DISPLAY_NAME = "Devils Advocate"
AGENT_DESCRIPTION = (
    "Red Team agent that critically analyses a business idea or plan and "
    "reports flawed assumptions, risks and competitor threats"
)

AGENT_INSTRUCTION = """> You are a "Red Team" AI Agent. Your sole purpose is to act as a professional devil's advocate. You must critically analyze the following idea I provide and identify every potential flaw, risk, and flawed assumption.
> Do not be agreeable. Your value is in your critical, objective, and tough analysis.
> My Idea/Plan:
> [Paste your business idea, new feature, or strategic plan here. Be as detailed as you can. For example: "My idea is to create a subscription box for rare, indoor plants sourced from small, independent growers."]
> Your Analysis Must Include:
>  * Flawed Assumptions: What unstated beliefs am I holding that might be wrong? (e.g., "Assuming people want rare plants they don't know how to care for.")
>  * Market Risks: Is the market too small? Is it declining? Is it overly saturated?
>  * Competitor Threats: Who is already doing this? How could a large, existing competitor (like Amazon or a big nursery) easily crush this idea? Use the competitor_search tool to find real competitors.
>  * Logistical & Operational Hurdles: What are the practical, real-world challenges? (e.g., "Shipping delicate plants cross-country will lead to high damage/refund rates," "Sourcing from 'small' growers is not scalable.")
>  * Financial Vulnerabilities: Where will I most likely lose money? (e.g., "High customer acquisition cost," "Low profit margins due to shipping costs.")
>  * Potential for Negative Customer Reaction: How could this backfire? (e.g., "Customers receive dead plants and flood social media with bad reviews.")
> Format: Please present your findings as a structured report include the name of the competitor if found.
"""


def _setup_environment() -> None:
    """Export Gemini credentials for Google ADK.

    Raises:
        ConfigurationError: If neither an API key nor a Vertex AI project is set.
    """
    settings = get_settings()

    os.environ["GOOGLE_GENAI_USE_VERTEXAI"] = str(settings.google_genai_use_vertexai).upper()

    if settings.google_genai_use_vertexai:
        if not settings.google_cloud_project:
            raise ConfigurationError(
                "GOOGLE_CLOUD_PROJECT environment variable is required when using Vertex AI"
            )
        os.environ["GOOGLE_CLOUD_PROJECT"] = settings.google_cloud_project
        os.environ["GOOGLE_CLOUD_LOCATION"] = settings.google_cloud_location
    elif settings.google_api_key:
        os.environ["GOOGLE_API_KEY"] = settings.google_api_key
    else:
        raise ConfigurationError(
            "GOOGLE_API_KEY environment variable is required for the Gemini model"
        )


def create_agent() -> LlmAgent:
    """Create the Devil's Advocate agent.

    The agent runs on the configured Gemini model and can call the
    competitor search tool. Conversation memory is provided by the
    session service of the runner that executes it (see
    ``devils_advocate.core.runtime``).

    Returns:
        Configured LlmAgent instance.

    Raises:
        ConfigurationError: If Gemini credentials are not configured.
    """
    _setup_environment()
    settings = get_settings()

    agent = LlmAgent(
        name=AGENT_NAME,
        model=settings.gemini_model,
        description=AGENT_DESCRIPTION,
        instruction=AGENT_INSTRUCTION,
        tools=[FunctionTool(func=competitor_search)],
    )
    logger.info(
        "Created agent",
        extra={"agent_id": AGENT_ID, "model": settings.gemini_model},
    )
    return agent
