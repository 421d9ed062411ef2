"""Deterministic scorers computed from the run itself."""

import re

from devils_advocate.scorers.base import Scorer, ScoreResult, ScorerRun, clamp
from devils_advocate.tools import TOOL_NAME

_WORD_RE = re.compile(r"[a-z0-9][a-z0-9'-]*")

STOPWORDS = frozenset(
    """
    a about above after again against all am an and any are as at be because
    been before being below between both but by can could did do does doing
    down during each few for from further had has have having he her here hers
    herself him himself his how i if in into is it its itself just me more most
    my myself no nor not now of off on once only or other our ours ourselves
    out over own same she should so some such than that the their theirs them
    themselves then there these they this those through to too under until up
    very was we were what when where which while who whom why will with would
    you your yours yourself yourselves idea plan want wants
    """.split()
)


def extract_terms(text: str) -> set[str]:
    """Extract lowercased content words from text."""
    return {
        word.strip("'-")
        for word in _WORD_RE.findall(text.lower())
        if len(word) > 2 and word not in STOPWORDS
    }


class ToolCallAccuracyScorer(Scorer):
    """Checks that the agent called the expected tool.

    In strict mode the expected tool must be the only tool called.
    """

    name = "Tool Call Accuracy"
    description = "Checks that the agent called the competitor search tool"

    def __init__(self, expected_tool: str = TOOL_NAME, strict_mode: bool = False) -> None:
        self.expected_tool = expected_tool
        self.strict_mode = strict_mode

    async def run(self, run: ScorerRun) -> ScoreResult:
        called = run.called_tools
        if self.strict_mode:
            matched = bool(called) and all(tool == self.expected_tool for tool in called)
        else:
            matched = self.expected_tool in called

        score = 1.0 if matched else 0.0
        if not called:
            reason = f"No tools were called; expected '{self.expected_tool}'"
        elif matched:
            reason = f"Expected tool '{self.expected_tool}' was called"
        else:
            reason = (
                f"Expected tool '{self.expected_tool}' "
                f"{'was not the only tool' if self.strict_mode and self.expected_tool in called else 'was not'} "
                f"called; called: {', '.join(called)}"
            )
        return ScoreResult(
            scorer=self.name,
            score=score,
            reason=reason,
            details={"calledTools": called, "strictMode": self.strict_mode},
        )


class CompletenessScorer(Scorer):
    """Fraction of the input's content terms that the output covers."""

    name = "Completeness"
    description = "Checks that the analysis addresses the terms of the idea"

    async def run(self, run: ScorerRun) -> ScoreResult:
        input_terms = extract_terms(run.user_text)
        output_terms = extract_terms(run.assistant_text)

        if not input_terms:
            score = 1.0
        elif not output_terms:
            score = 0.0
        else:
            score = clamp(len(input_terms & output_terms) / len(input_terms))

        missing = sorted(input_terms - output_terms)
        return ScoreResult(
            scorer=self.name,
            score=score,
            reason=(
                f"Covered {len(input_terms) - len(missing)}/{len(input_terms)} input terms. "
                f"Score={score}"
            ),
            details={"missingTerms": missing},
        )
