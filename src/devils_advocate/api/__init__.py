"""API module for the A2A route and AgentCards."""

from devils_advocate.api.a2a import a2a_router, build_agent_card, get_agent_card_dict
from devils_advocate.api.app import create_app

__all__ = [
    "a2a_router",
    "build_agent_card",
    "create_app",
    "get_agent_card_dict",
]
