"""Conversion between A2A message parts and agent messages."""

import json
from typing import Any
from uuid import uuid4

from devils_advocate.api.a2a.models import HistoryMessage, InboundMessage, Role, text_part
from devils_advocate.core.runtime import AgentMessage

# History entries shorter than this are acknowledgements, not context
MIN_HISTORY_TEXT_LENGTH = 20
MARKUP_PREFIX = "<p>"


def _part_kind(part: dict[str, Any]) -> str | None:
    # Older A2A clients send "type" instead of "kind"
    return part.get("kind") or part.get("type")


def normalize_part(part: dict[str, Any]) -> dict[str, Any]:
    """Normalize a part to its ``kind``-tagged shape."""
    kind = _part_kind(part)
    if kind == "text":
        return text_part(part.get("text") or "")
    if kind == "data":
        return {"kind": "data", "data": part.get("data")}
    return dict(part)


def _last_history_text(items: list[Any]) -> str | None:
    """Pick the most recent meaningful text of an embedded history."""
    texts = [
        item["text"]
        for item in items
        if isinstance(item, dict)
        and item.get("kind") == "text"
        and isinstance(item.get("text"), str)
        and item["text"]
    ]
    texts = [
        text
        for text in texts
        if not text.startswith(MARKUP_PREFIX) and len(text) > MIN_HISTORY_TEXT_LENGTH
    ]
    return texts[-1] if texts else None


def flatten_parts(parts: list[dict[str, Any]]) -> str:
    """Flatten message parts into a single text payload.

    Text parts contribute their text. Data parts holding an object
    contribute its JSON; data parts holding a conversation history
    contribute only its last meaningful text, unless already present.
    """
    fragments: list[str] = []
    for part in parts:
        kind = _part_kind(part)
        if kind == "text":
            text = part.get("text")
            if text:
                fragments.append(str(text))
        elif kind == "data":
            data = part.get("data")
            if isinstance(data, list):
                last_text = _last_history_text(data)
                if last_text and last_text not in fragments:
                    fragments.append(last_text)
            elif isinstance(data, dict):
                fragments.append(json.dumps(data, separators=(",", ":"), ensure_ascii=False))
    return "\n".join(fragments).strip()


def message_text(message: InboundMessage) -> str:
    """Resolve the text of a message, falling back to its raw content."""
    return flatten_parts(message.parts or []) or message.content or ""


def to_agent_messages(messages: list[InboundMessage]) -> list[AgentMessage]:
    """Convert inbound A2A messages to agent messages.

    Messages without resolvable text are skipped.
    """
    agent_messages = []
    for message in messages:
        content = message_text(message)
        if not content:
            continue
        role = message.role or Role.user
        agent_messages.append(AgentMessage(role=role.value, content=content))
    return agent_messages


def build_history(
    messages: list[InboundMessage],
    reply_text: str,
    task_id: str | None,
) -> list[HistoryMessage]:
    """Reconstruct the turn sequence: inbound messages then the agent reply."""
    history = []
    for message in messages:
        if message.parts:
            parts = [normalize_part(part) for part in message.parts]
        else:
            parts = [text_part(message.content or "")]
        history.append(
            HistoryMessage(
                message_id=message.message_id or str(uuid4()),
                role=message.role or Role.user,
                parts=parts,
                task_id=message.task_id or task_id or str(uuid4()),
            )
        )

    history.append(
        HistoryMessage(
            message_id=str(uuid4()),
            role=Role.agent,
            parts=[text_part(reply_text)],
            task_id=task_id or str(uuid4()),
        )
    )
    return history
