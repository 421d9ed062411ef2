"""Common scorer types."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ScorerRun:
    """One agent turn to be scored.

    Messages are ``{"role": ..., "content": ...}`` dicts; tool calls are the
    tool results collected by the agent runtime.
    """

    input_messages: list[dict[str, Any]] = field(default_factory=list)
    output_messages: list[dict[str, Any]] = field(default_factory=list)
    tool_calls: list[dict[str, Any]] = field(default_factory=list)

    @property
    def user_text(self) -> str:
        """Content of the first input message."""
        if not self.input_messages:
            return ""
        return str(self.input_messages[0].get("content") or "")

    @property
    def assistant_text(self) -> str:
        """Content of the first output message."""
        if not self.output_messages:
            return ""
        return str(self.output_messages[0].get("content") or "")

    @property
    def called_tools(self) -> list[str]:
        """Names of the tools called, in call order."""
        return [str(call.get("toolName", "")) for call in self.tool_calls]


@dataclass
class ScoreResult:
    """Outcome of a scorer."""

    scorer: str
    score: float
    reason: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scorer": self.scorer,
            "score": self.score,
            "reason": self.reason,
            "details": self.details,
        }


def clamp(value: float) -> float:
    """Clamp a score to [0, 1]."""
    return max(0.0, min(1.0, value))


class Scorer(ABC):
    """Base class for all scorers."""

    name: str = ""
    description: str = ""

    @abstractmethod
    async def run(self, run: ScorerRun) -> ScoreResult:
        """Score a single agent turn."""
