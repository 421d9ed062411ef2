"""A2A wire models for the JSON-RPC agent route.

Inbound models are deliberately loose: A2A clients send heterogeneous
message shapes. Outbound models produce the task/artifact/history
structure, serialized with camelCase aliases.
"""

from enum import Enum
from typing import Any, Literal

from a2a.types import Role, TaskState
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "A2AError",
    "A2AErrorCode",
    "A2ARequestParams",
    "A2ATask",
    "A2ATaskStatus",
    "Artifact",
    "HistoryMessage",
    "InboundMessage",
    "JSONRPCErrorResponse",
    "JSONRPCSuccessResponse",
    "Role",
    "TaskState",
    "WireMessage",
    "data_part",
    "text_part",
]


class A2AErrorCode(int, Enum):
    """A2A protocol error codes (JSON-RPC 2.0 compatible)."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class A2AError(BaseModel):
    """A2A protocol error response."""

    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    data: dict[str, Any] | None = Field(None, description="Additional error data")


class InboundMessage(BaseModel):
    """A message as sent by an A2A client."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    role: Role | None = None
    parts: list[dict[str, Any]] | None = None
    content: str | None = None
    message_id: str | None = Field(None, alias="messageId")
    task_id: str | None = Field(None, alias="taskId")


class A2ARequestParams(BaseModel):
    """``params`` of an agent JSON-RPC call."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    message: InboundMessage | None = None
    messages: list[InboundMessage] | None = None
    context_id: str | None = Field(None, alias="contextId")
    task_id: str | None = Field(None, alias="taskId")
    metadata: dict[str, Any] | None = None

    def message_list(self) -> list[InboundMessage]:
        """Messages of the call; a single ``message`` wins over ``messages``."""
        if self.message is not None:
            return [self.message]
        return list(self.messages or [])


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WireMessage(_WireModel):
    """Message in the A2A response."""

    kind: Literal["message"] = "message"
    message_id: str
    role: Role
    parts: list[dict[str, Any]]


class HistoryMessage(WireMessage):
    """Message in the task history, bound to a task."""

    task_id: str


class Artifact(_WireModel):
    """Named output chunk attached to a completed task."""

    artifact_id: str
    name: str
    parts: list[dict[str, Any]]


class A2ATaskStatus(_WireModel):
    """Task status with the final agent message."""

    state: TaskState
    timestamp: str
    message: WireMessage


class A2ATask(_WireModel):
    """Task returned as the JSON-RPC result."""

    id: str
    context_id: str
    status: A2ATaskStatus
    artifacts: list[Artifact] = Field(default_factory=list)
    history: list[HistoryMessage] = Field(default_factory=list)
    kind: Literal["task"] = "task"


class JSONRPCSuccessResponse(BaseModel):
    """JSON-RPC 2.0 success response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | float | None = None
    result: A2ATask

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class JSONRPCErrorResponse(BaseModel):
    """JSON-RPC 2.0 error response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | float | None = None
    error: A2AError

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        if data["error"]["data"] is None:
            del data["error"]["data"]
        return data


def text_part(text: str) -> dict[str, Any]:
    """Build a text part."""
    return {"kind": "text", "text": text}


def data_part(data: Any) -> dict[str, Any]:
    """Build a data part."""
    return {"kind": "data", "data": data}
