"""Agent definition for ADK CLI.

This module defines the root_agent for the `adk web` and `adk run` commands.
"""

from dotenv import load_dotenv

# Load environment variables before importing agent
load_dotenv()

from devils_advocate.core.agent import create_agent  # noqa: E402

root_agent = create_agent()
