"""Tests for the agent definition and registry."""

from unittest.mock import patch

import pytest

from devils_advocate.config import Settings
from devils_advocate.core import AGENT_ID, AGENT_INSTRUCTION, create_agent
from devils_advocate.core import registry
from devils_advocate.errors import ConfigurationError


class TestCreateAgent:
    """Tests for create_agent."""

    def test_agent_configuration(self):
        """Test the agent carries model, instruction and search tool."""
        agent = create_agent()

        assert agent.name == "devils_advocate"
        assert agent.model == "gemini-2.5-flash"
        assert agent.instruction == AGENT_INSTRUCTION
        assert [tool.name for tool in agent.tools] == ["competitor_search"]

    def test_instruction_covers_dimensions(self):
        for dimension in (
            "Flawed Assumptions",
            "Market Risks",
            "Competitor Threats",
            "Financial Vulnerabilities",
        ):
            assert dimension in AGENT_INSTRUCTION

    def test_model_from_settings(self):
        with patch(
            "devils_advocate.core.agent.get_settings",
            return_value=Settings(google_api_key="test-api-key", gemini_model="gemini-2.5-pro"),
        ):
            agent = create_agent()

        assert agent.model == "gemini-2.5-pro"

    def test_missing_api_key(self):
        with patch(
            "devils_advocate.core.agent.get_settings",
            return_value=Settings(google_api_key=None, google_genai_use_vertexai=False),
        ):
            with pytest.raises(ConfigurationError):
                create_agent()

    def test_vertex_requires_project(self):
        with (
            patch.dict("os.environ", {}),
            patch(
                "devils_advocate.core.agent.get_settings",
                return_value=Settings(google_genai_use_vertexai=True, google_cloud_project=None),
            ),
        ):
            with pytest.raises(ConfigurationError):
                create_agent()


class TestRegistry:
    """Tests for the agent registry."""

    def setup_method(self):
        registry.reset_agents()

    def teardown_method(self):
        registry.reset_agents()

    def test_list_agent_ids(self):
        assert registry.list_agent_ids() == [AGENT_ID]

    def test_has_agent(self):
        assert registry.has_agent(AGENT_ID)
        assert not registry.has_agent("unknownAgent")

    def test_get_unknown_agent(self):
        assert registry.get_agent("unknownAgent") is None

    def test_get_agent_is_cached(self):
        first = registry.get_agent(AGENT_ID)

        assert first is registry.get_agent(AGENT_ID)
        assert first.name == "devils_advocate"
