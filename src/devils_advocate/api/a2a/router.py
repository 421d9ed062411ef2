"""A2A JSON-RPC route adapting external agent calls to agent invocations."""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from fastapi.responses import JSONResponse
from opentelemetry import trace
from pydantic import ValidationError

from devils_advocate.api.a2a.agent_card import get_agent_card_dict
from devils_advocate.api.a2a.messages import build_history, to_agent_messages
from devils_advocate.api.a2a.models import (
    A2AError,
    A2AErrorCode,
    A2ARequestParams,
    A2ATask,
    A2ATaskStatus,
    Artifact,
    InboundMessage,
    JSONRPCErrorResponse,
    JSONRPCSuccessResponse,
    Role,
    TaskState,
    WireMessage,
    data_part,
    text_part,
)
from devils_advocate.config import get_settings
from devils_advocate.core import AgentResponse, generate, get_agent, has_agent
from devils_advocate.scorers import ScorerRun, score_run

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

router = APIRouter(tags=["A2A Protocol"])

NO_MESSAGE_PLACEHOLDER = "No message provided"


def _error_response(
    request_id: str | int | float | None,
    code: A2AErrorCode,
    message: str,
    status_code: int,
    data: dict[str, Any] | None = None,
) -> JSONResponse:
    response = JSONRPCErrorResponse(
        id=request_id,
        error=A2AError(code=int(code), message=message, data=data),
    )
    return JSONResponse(content=response.to_dict(), status_code=status_code)


def _is_valid_request_id(value: Any) -> bool:
    # Empty strings and zero count as a missing id
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return False
    return bool(value)


def build_task(
    agent_id: str,
    messages: list[InboundMessage],
    response: AgentResponse,
    task_id: str | None = None,
    context_id: str | None = None,
) -> A2ATask:
    """Shape an agent reply as a completed A2A task.

    Args:
        agent_id: Id of the agent that replied, used to name the artifact.
        messages: Inbound messages of the call.
        response: The agent's reply and tool results.
        task_id: Task id from the request, if any.
        context_id: Context id from the request, if any.

    Returns:
        Completed task with status message, artifacts and history.
    """
    # One text artifact with the reply, then one data artifact per tool result
    artifacts = [
        Artifact(
            artifact_id=str(uuid4()),
            name=f"{agent_id}Response",
            parts=[text_part(response.text)],
        )
    ]
    for result in response.tool_results:
        artifacts.append(
            Artifact(
                artifact_id=str(uuid4()),
                name="ToolResults",
                parts=[data_part(result)],
            )
        )

    return A2ATask(
        id=task_id or str(uuid4()),
        context_id=context_id or str(uuid4()),
        status=A2ATaskStatus(
            state=TaskState.completed,
            timestamp=datetime.now(timezone.utc).isoformat(),
            message=WireMessage(
                message_id=str(uuid4()),
                role=Role.agent,
                parts=[text_part(response.text)],
            ),
        ),
        artifacts=artifacts,
        history=build_history(messages, response.text, task_id),
    )


@router.get("/a2a/agent/{agent_id}/.well-known/agent.json")
async def get_agent_card(agent_id: str) -> JSONResponse:
    """Get the AgentCard of an agent.

    Returns:
        AgentCard JSON document.
    """
    agent_card = get_agent_card_dict(agent_id)
    if agent_card is None:
        raise HTTPException(status_code=404, detail=f"Agent '{agent_id}' not found")
    return JSONResponse(content=agent_card)


@router.post("/a2a/agent/{agent_id}")
async def send_agent_message(
    agent_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
) -> JSONResponse:
    """A2A JSON-RPC endpoint for a registered agent.

    Validates the JSON-RPC envelope, flattens the inbound messages for the
    agent, runs it, and returns the reply as a completed task.

    Args:
        agent_id: Id of the agent to invoke.
        request: The incoming HTTP request with JSON-RPC payload.
        background_tasks: Used to score the turn after responding.

    Returns:
        JSON-RPC response with the task result or an error.
    """
    settings = get_settings()

    # Parse the JSON-RPC body; anything unparseable is answered with a placeholder task
    try:
        body = await request.json()
    except ValueError:
        body = None

    if not isinstance(body, dict):
        logger.warning("Malformed A2A request body for agent %s", agent_id)
        task = build_task(agent_id, [], AgentResponse(text=NO_MESSAGE_PLACEHOLDER))
        return JSONResponse(content=JSONRPCSuccessResponse(id=None, result=task).to_dict())

    request_id = body.get("id")
    logger.info(
        "A2A request received",
        extra={"agent_id": agent_id, "method": body.get("method"), "request_id": request_id},
    )
    logger.debug("A2A request body: %s", body)

    # Validate the JSON-RPC envelope
    if not _is_valid_request_id(request_id):
        request_id = None
    if body.get("jsonrpc") != "2.0" or request_id is None:
        return _error_response(
            request_id,
            A2AErrorCode.INVALID_REQUEST,
            'Invalid Request: jsonrpc must be "2.0" and id is required',
            400,
        )

    if not has_agent(agent_id):
        return _error_response(
            request_id,
            A2AErrorCode.INVALID_PARAMS,
            f"Agent '{agent_id}' not found",
            404,
        )

    # Validate params and resolve the message list
    raw_params = body.get("params")
    if not isinstance(raw_params, dict):
        return _error_response(
            request_id,
            A2AErrorCode.INVALID_PARAMS,
            "Invalid params: params object is required",
            400,
        )

    try:
        params = A2ARequestParams.model_validate(raw_params)
    except ValidationError as e:
        return _error_response(
            request_id,
            A2AErrorCode.INVALID_PARAMS,
            f"Invalid params: {e.errors()[0]['msg']}",
            400,
        )

    messages = params.message_list()
    if not messages:
        return _error_response(
            request_id,
            A2AErrorCode.INVALID_PARAMS,
            "Invalid params: message or messages array is required",
            400,
        )

    # Flatten parts to plain text for the agent
    agent_messages = to_agent_messages(messages)
    if not agent_messages:
        return _error_response(
            request_id,
            A2AErrorCode.INVALID_PARAMS,
            "Invalid params: no message text provided",
            400,
        )

    # The context id keys the agent session, so memory follows the conversation
    context_id = params.context_id or str(uuid4())

    try:
        # Agent is created on first use; missing credentials surface here
        agent = get_agent(agent_id)

        with tracer.start_as_current_span("a2a.generate") as span:
            span.set_attribute("a2a.agent_id", agent_id)
            span.set_attribute("a2a.context_id", context_id)
            span.set_attribute("a2a.message_count", len(agent_messages))
            response = await generate(agent, agent_messages, context_id)

        logger.info(
            "Agent response generated",
            extra={
                "agent_id": agent_id,
                "text_length": len(response.text),
                "tool_results": len(response.tool_results),
            },
        )

        task = build_task(agent_id, messages, response, params.task_id, context_id)
    except Exception as e:
        logger.exception(f"Error invoking agent {agent_id}: {e}")
        # Stack traces are only exposed outside production
        error_data: dict[str, Any] = {"details": str(e)}
        if not settings.is_production:
            error_data["stack"] = "".join(traceback.format_exception(e))
        return _error_response(
            request_id,
            A2AErrorCode.INTERNAL_ERROR,
            str(e) or "Internal error",
            500,
            data=error_data,
        )

    # Score the turn after the response is sent; failures never reach the caller
    if settings.scoring_enabled:
        background_tasks.add_task(
            score_run,
            ScorerRun(
                input_messages=[
                    {"role": message.role, "content": message.content}
                    for message in agent_messages
                ],
                output_messages=[{"role": "assistant", "content": response.text}],
                tool_calls=response.tool_results,
            ),
        )

    return JSONResponse(content=JSONRPCSuccessResponse(id=request_id, result=task).to_dict())
