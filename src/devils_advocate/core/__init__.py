"""Core agent module."""

from devils_advocate.core.agent import (
    AGENT_DESCRIPTION,
    AGENT_DISPLAY_NAME,
    AGENT_ID,
    AGENT_INSTRUCTION,
    create_agent,
)
from devils_advocate.core.registry import get_agent, has_agent, list_agent_ids
from devils_advocate.core.runtime import AgentMessage, AgentResponse, generate

__all__ = [
    "AGENT_DESCRIPTION",
    "AGENT_DISPLAY_NAME",
    "AGENT_ID",
    "AGENT_INSTRUCTION",
    "AgentMessage",
    "AgentResponse",
    "create_agent",
    "generate",
    "get_agent",
    "has_agent",
    "list_agent_ids",
]
