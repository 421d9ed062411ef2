"""A2A (Agent-to-Agent) JSON-RPC route and wire models."""

from devils_advocate.api.a2a.agent_card import build_agent_card, get_agent_card_dict
from devils_advocate.api.a2a.messages import (
    build_history,
    flatten_parts,
    normalize_part,
    to_agent_messages,
)
from devils_advocate.api.a2a.models import (
    A2AError,
    A2AErrorCode,
    A2ARequestParams,
    A2ATask,
    InboundMessage,
)
from devils_advocate.api.a2a.router import build_task, router as a2a_router

__all__ = [
    "A2AError",
    "A2AErrorCode",
    "A2ARequestParams",
    "A2ATask",
    "InboundMessage",
    "a2a_router",
    "build_agent_card",
    "build_history",
    "build_task",
    "flatten_parts",
    "get_agent_card_dict",
    "normalize_part",
    "to_agent_messages",
]
