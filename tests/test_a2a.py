"""Tests for the A2A JSON-RPC agent route."""

from unittest.mock import AsyncMock, patch

import pytest

from devils_advocate.config import Settings
from devils_advocate.core import AgentMessage, AgentResponse

AGENT_URL = "/a2a/agent/devilsAdvocateAgent"


def _rpc(params=None, **overrides):
    body = {
        "jsonrpc": "2.0",
        "id": "req-1",
        "method": "message/send",
        "params": params
        if params is not None
        else {
            "message": {
                "role": "user",
                "parts": [{"kind": "text", "text": "A subscription box for rare plants"}],
                "messageId": "msg-1",
            },
        },
    }
    body.update(overrides)
    return body


class TestEnvelopeValidation:
    """Tests for JSON-RPC envelope validation."""

    def test_malformed_body_returns_placeholder(self, client, mock_generate):
        """Test unparseable JSON is answered with the placeholder reply."""
        response = client.post(
            AGENT_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["jsonrpc"] == "2.0"
        assert data["id"] is None
        message = data["result"]["status"]["message"]
        assert message["parts"] == [{"kind": "text", "text": "No message provided"}]
        mock_generate.assert_not_called()

    def test_non_object_body_returns_placeholder(self, client, mock_generate):
        """Test a JSON array body is treated like a malformed body."""
        response = client.post(AGENT_URL, json=[1, 2, 3])

        assert response.status_code == 200
        assert response.json()["result"]["status"]["state"] == "completed"
        mock_generate.assert_not_called()

    def test_wrong_jsonrpc_version(self, client, mock_generate):
        """Test jsonrpc other than 2.0 is an invalid request."""
        response = client.post(AGENT_URL, json=_rpc(jsonrpc="1.0"))

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == -32600
        assert data["id"] == "req-1"

    def test_empty_object_is_invalid_request(self, client, mock_generate):
        """Test a well-formed but empty object fails envelope validation."""
        response = client.post(AGENT_URL, json={})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32600

    def test_missing_id(self, client, mock_generate):
        """Test a request without id is an invalid request."""
        body = _rpc()
        del body["id"]

        response = client.post(AGENT_URL, json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == -32600
        assert data["id"] is None
        assert "data" not in data["error"]

    def test_integer_id_is_echoed(self, client, mock_generate):
        """Test numeric request ids are accepted and echoed."""
        response = client.post(AGENT_URL, json=_rpc(id=7))

        assert response.status_code == 200
        assert response.json()["id"] == 7

    def test_float_id_is_echoed(self, client, mock_generate):
        response = client.post(AGENT_URL, json=_rpc(id=1.5))

        assert response.status_code == 200
        assert response.json()["id"] == 1.5

    @pytest.mark.parametrize("request_id", [0, "", None, True, {"n": 1}])
    def test_falsy_or_non_scalar_id_is_missing(self, client, mock_generate, request_id):
        response = client.post(AGENT_URL, json=_rpc(id=request_id))

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == -32600
        assert data["id"] is None
        mock_generate.assert_not_awaited()

    def test_unknown_agent(self, client, mock_generate):
        """Test an unknown agent id returns 404."""
        response = client.post("/a2a/agent/unknownAgent", json=_rpc())

        assert response.status_code == 404
        data = response.json()
        assert data["error"]["code"] == -32602
        assert "unknownAgent" in data["error"]["message"]

    def test_missing_params(self, client, mock_generate):
        """Test a request without params is rejected."""
        body = _rpc()
        del body["params"]

        response = client.post(AGENT_URL, json=body)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32602

    def test_no_messages(self, client, mock_generate):
        """Test params without message or messages are rejected."""
        response = client.post(AGENT_URL, json=_rpc(params={"contextId": "ctx-1"}))

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == -32602
        assert "message or messages" in data["error"]["message"]

    def test_no_resolvable_text(self, client, mock_generate):
        """Test messages that flatten to nothing are rejected."""
        params = {
            "message": {
                "role": "user",
                "parts": [{"kind": "data", "data": [{"kind": "text", "text": "short"}]}],
            }
        }

        response = client.post(AGENT_URL, json=_rpc(params=params))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32602
        mock_generate.assert_not_called()

    def test_invalid_message_shape(self, client, mock_generate):
        """Test a message with a bad role is rejected as invalid params."""
        params = {"message": {"role": "assistant", "content": "hello there"}}

        response = client.post(AGENT_URL, json=_rpc(params=params))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32602


class TestSuccessResponse:
    """Tests for the completed task response."""

    def test_task_shape(self, client, mock_generate):
        """Test the result is a completed task with reply, artifacts and history."""
        params = {
            "message": {
                "role": "user",
                "parts": [{"kind": "text", "text": "A subscription box for rare plants"}],
                "messageId": "msg-1",
            },
            "contextId": "ctx-1",
            "taskId": "task-1",
        }

        response = client.post(AGENT_URL, json=_rpc(params=params))

        assert response.status_code == 200
        data = response.json()
        assert data["jsonrpc"] == "2.0"
        assert data["id"] == "req-1"

        task = data["result"]
        assert task["kind"] == "task"
        assert task["id"] == "task-1"
        assert task["contextId"] == "ctx-1"
        assert task["status"]["state"] == "completed"
        assert task["status"]["timestamp"]
        status_message = task["status"]["message"]
        assert status_message["kind"] == "message"
        assert status_message["role"] == "agent"
        assert status_message["messageId"]
        assert status_message["parts"] == [{"kind": "text", "text": "Your idea has flaws."}]

        assert len(task["artifacts"]) == 1
        artifact = task["artifacts"][0]
        assert artifact["name"] == "devilsAdvocateAgentResponse"
        assert artifact["artifactId"]
        assert artifact["parts"] == [{"kind": "text", "text": "Your idea has flaws."}]

        history = task["history"]
        assert len(history) == 2
        assert history[0] == {
            "kind": "message",
            "messageId": "msg-1",
            "role": "user",
            "parts": [{"kind": "text", "text": "A subscription box for rare plants"}],
            "taskId": "task-1",
        }
        assert history[1]["role"] == "agent"
        assert history[1]["taskId"] == "task-1"

    def test_agent_invoked_with_flattened_messages(self, client, mock_generate):
        """Test the agent receives flattened messages and the context id."""
        params = {
            "message": {
                "parts": [
                    {"kind": "text", "text": "Plant subscription box"},
                    {"kind": "data", "data": {"budget": 5000}},
                ],
            },
            "contextId": "ctx-1",
        }

        client.post(AGENT_URL, json=_rpc(params=params))

        mock_generate.assert_awaited_once()
        _agent, messages, context_id = mock_generate.await_args.args
        assert messages == [
            AgentMessage(role="user", content='Plant subscription box\n{"budget":5000}')
        ]
        assert context_id == "ctx-1"

    def test_generated_ids(self, client, mock_generate):
        """Test task and context ids are generated when not provided."""
        response = client.post(AGENT_URL, json=_rpc())

        task = response.json()["result"]
        assert task["id"]
        assert task["contextId"]
        assert task["history"][0]["taskId"]
        assert mock_generate.await_args.args[2] == task["contextId"]

    def test_messages_array(self, client, mock_generate):
        """Test a messages array is mapped turn by turn."""
        params = {
            "messages": [
                {"role": "user", "content": "I want to sell ice to penguins"},
                {"role": "agent", "content": "Penguins live on ice."},
                {"role": "user", "parts": [{"kind": "text", "text": "What about seals?"}]},
            ]
        }

        response = client.post(AGENT_URL, json=_rpc(params=params))

        assert response.status_code == 200
        messages = mock_generate.await_args.args[1]
        assert [m.role for m in messages] == ["user", "agent", "user"]
        history = response.json()["result"]["history"]
        assert len(history) == 4
        assert history[0]["parts"] == [
            {"kind": "text", "text": "I want to sell ice to penguins"}
        ]
        assert history[1]["role"] == "agent"

    def test_message_wins_over_messages(self, client, mock_generate):
        """Test a single message takes precedence over a messages array."""
        params = {
            "message": {"content": "Single message idea"},
            "messages": [{"content": "Ignored idea"}],
        }

        client.post(AGENT_URL, json=_rpc(params=params))

        messages = mock_generate.await_args.args[1]
        assert [m.content for m in messages] == ["Single message idea"]

    def test_tool_results_become_data_artifacts(self, client, mock_generate):
        """Test each tool result is attached as a data artifact."""
        tool_results = [
            {
                "toolCallId": "call-1",
                "toolName": "competitor_search",
                "args": {"query": "plant subscription"},
                "result": {"result": [{"title": "The Sill", "url": "https://thesill.com"}]},
            },
            {
                "toolCallId": "call-2",
                "toolName": "competitor_search",
                "args": {"query": "rare plants"},
                "result": {"result": []},
            },
        ]
        mock_generate.return_value = AgentResponse(text="Report", tool_results=tool_results)

        response = client.post(AGENT_URL, json=_rpc())

        artifacts = response.json()["result"]["artifacts"]
        assert len(artifacts) == 3
        assert artifacts[1]["name"] == "ToolResults"
        assert artifacts[1]["parts"] == [{"kind": "data", "data": tool_results[0]}]
        assert artifacts[2]["parts"] == [{"kind": "data", "data": tool_results[1]}]


class TestInvocationFailure:
    """Tests for downstream agent failures."""

    def test_internal_error_includes_stack(self, client, mock_generate):
        """Test agent failures map to -32603 with a stack outside production."""
        mock_generate.side_effect = RuntimeError("model unavailable")

        response = client.post(AGENT_URL, json=_rpc())

        assert response.status_code == 500
        data = response.json()
        assert data["id"] == "req-1"
        assert data["error"]["code"] == -32603
        assert data["error"]["message"] == "model unavailable"
        assert data["error"]["data"]["details"] == "model unavailable"
        assert "RuntimeError" in data["error"]["data"]["stack"]

    def test_internal_error_hides_stack_in_production(self, client, mock_generate):
        """Test the stack is omitted in production mode."""
        mock_generate.side_effect = RuntimeError("model unavailable")

        with patch(
            "devils_advocate.api.a2a.router.get_settings",
            return_value=Settings(environment="production"),
        ):
            response = client.post(AGENT_URL, json=_rpc())

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == -32603
        assert "stack" not in error["data"]
        assert error["data"]["details"] == "model unavailable"

    def test_agent_creation_failure(self, client):
        """Test agent configuration errors are internal errors."""
        from devils_advocate.errors import ConfigurationError

        with patch(
            "devils_advocate.api.a2a.router.get_agent",
            side_effect=ConfigurationError("GOOGLE_API_KEY environment variable is required"),
        ):
            response = client.post(AGENT_URL, json=_rpc())

        assert response.status_code == 500
        assert response.json()["error"]["code"] == -32603


class TestScoring:
    """Tests for background scoring of completed turns."""

    def test_scoring_disabled_by_default(self, client, mock_generate):
        """Test no scoring happens unless enabled."""
        with patch("devils_advocate.api.a2a.router.score_run", new=AsyncMock()) as score_run:
            client.post(AGENT_URL, json=_rpc())

        score_run.assert_not_called()

    def test_scoring_enabled(self, client, mock_generate):
        """Test the turn is scored after responding when enabled."""
        with (
            patch(
                "devils_advocate.api.a2a.router.get_settings",
                return_value=Settings(scoring_enabled=True),
            ),
            patch("devils_advocate.api.a2a.router.score_run", new=AsyncMock()) as score_run,
        ):
            response = client.post(AGENT_URL, json=_rpc())

        assert response.status_code == 200
        score_run.assert_awaited_once()
        run = score_run.await_args.args[0]
        assert run.user_text == "A subscription box for rare plants"
        assert run.assistant_text == "Your idea has flaws."


class TestAgentCard:
    """Tests for AgentCard endpoints."""

    def test_agent_card_endpoint(self, client):
        """Test the AgentCard of a registered agent."""
        response = client.get(f"{AGENT_URL}/.well-known/agent.json")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Devils Advocate"
        assert data["url"].endswith(AGENT_URL)
        assert "defaultInputModes" in data
        skill_ids = [skill["id"] for skill in data["skills"]]
        assert "competitor-search" in skill_ids

    def test_agent_card_unknown_agent(self, client):
        """Test AgentCard of an unknown agent is 404."""
        response = client.get("/a2a/agent/unknownAgent/.well-known/agent.json")

        assert response.status_code == 404


class TestHealth:
    """Tests for health endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_lists_agents(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["agents"] == ["devilsAdvocateAgent"]
