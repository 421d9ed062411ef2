"""Agent invocation on top of the ADK Runner."""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any
from uuid import uuid4

from google.adk.agents import LlmAgent
from google.adk.events import Event
from google.adk.memory import InMemoryMemoryService
from google.adk.runners import Runner
from google.adk.sessions import BaseSessionService, InMemorySessionService
from google.genai import types

from devils_advocate.config import get_settings

logger = logging.getLogger(__name__)

A2A_USER_ID = "a2a-user"


@dataclass
class AgentMessage:
    """A single turn handed to the agent."""

    role: str
    content: str


@dataclass
class AgentResponse:
    """Result of an agent invocation."""

    text: str = ""
    tool_results: list[dict[str, Any]] = field(default_factory=list)


@lru_cache
def get_session_service() -> BaseSessionService:
    """Get the session service that stores agent conversations.

    Uses ADK's DatabaseSessionService on ``session_database_url`` and falls
    back to InMemorySessionService when the URL is empty or the database
    cannot be opened.
    """
    settings = get_settings()
    db_url = settings.session_database_url

    # Persist sessions in the database when configured
    if db_url:
        try:
            from google.adk.sessions import DatabaseSessionService

            logger.info("Using DatabaseSessionService for agent memory (%s)", db_url.split("@")[-1])
            return DatabaseSessionService(db_url=db_url)
        except Exception as e:
            logger.warning(
                "Failed to initialize DatabaseSessionService (%s), falling back to InMemorySessionService",
                e,
            )

    logger.info("Using InMemorySessionService for agent memory")
    return InMemorySessionService()


def _to_content(message: AgentMessage) -> types.Content:
    role = "model" if message.role == "agent" else "user"
    return types.Content(role=role, parts=[types.Part(text=message.content)])


async def _seed_history(
    session_service: BaseSessionService,
    session: Any,
    agent: LlmAgent,
    messages: list[AgentMessage],
) -> None:
    """Append earlier turns of a new conversation to its session."""
    invocation_id = f"e-{uuid4()}"
    for message in messages:
        author = agent.name if message.role == "agent" else "user"
        await session_service.append_event(
            session,
            Event(
                invocation_id=invocation_id,
                author=author,
                content=_to_content(message),
            ),
        )


async def generate(
    agent: LlmAgent,
    messages: list[AgentMessage],
    context_id: str,
    session_service: BaseSessionService | None = None,
) -> AgentResponse:
    """Run the agent over a message list and collect its reply.

    The conversation is stored in the session ``context_id``. When that
    session does not exist yet, every message but the last is recorded as
    prior history; the last message is sent to the agent.

    Args:
        agent: The ADK agent to run.
        messages: Conversation turns, oldest first. Must not be empty.
        context_id: Conversation identifier, used as session id.
        session_service: Session service override. Defaults to the shared one.

    Returns:
        The reply text and the result of every tool call made.
    """
    if not messages:
        raise ValueError("At least one message is required")

    settings = get_settings()
    session_service = session_service or get_session_service()

    # Reuse the conversation session, creating and seeding it on first contact
    session = await session_service.get_session(
        app_name=settings.app_name,
        user_id=A2A_USER_ID,
        session_id=context_id,
    )
    if session is None:
        session = await session_service.create_session(
            app_name=settings.app_name,
            user_id=A2A_USER_ID,
            session_id=context_id,
        )
        await _seed_history(session_service, session, agent, messages[:-1])

    # Use ADK's Runner to execute the agent
    runner = Runner(
        app_name=settings.app_name,
        agent=agent,
        session_service=session_service,
        memory_service=InMemoryMemoryService(),
    )

    response = AgentResponse()
    pending_calls: dict[str, tuple[str, dict[str, Any]]] = {}
    event_count = 0

    # Run agent and collect tool results and the final response
    async for event in runner.run_async(
        user_id=A2A_USER_ID,
        session_id=session.id,
        new_message=_to_content(messages[-1]),
    ):
        event_count += 1
        logger.debug(
            "Event %d: author=%s, is_final=%s",
            event_count,
            event.author,
            event.is_final_response(),
        )

        # Pair tool calls with their responses by call id
        for call in event.get_function_calls():
            pending_calls[call.id or call.name] = (call.name, dict(call.args or {}))

        for function_response in event.get_function_responses():
            call_id = function_response.id or function_response.name
            tool_name, args = pending_calls.pop(call_id, (function_response.name, {}))
            response.tool_results.append(
                {
                    "toolCallId": call_id,
                    "toolName": tool_name,
                    "args": args,
                    "result": function_response.response,
                }
            )

        # Check for final response using ADK's helper method
        if event.is_final_response():
            if event.content and event.content.parts:
                # Collect text from all parts, skipping model thoughts
                text_parts = [
                    part.text
                    for part in event.content.parts
                    if part.text and not part.thought
                ]
                response.text = "".join(text_parts)
            break

    logger.debug(
        "Agent run finished: events=%d, text_length=%d, tool_results=%d",
        event_count,
        len(response.text),
        len(response.tool_results),
    )
    return response
