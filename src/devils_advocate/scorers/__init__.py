"""Scorers that post-process agent output."""

import logging

from devils_advocate.scorers.base import Scorer, ScoreResult, ScorerRun, clamp
from devils_advocate.scorers.code import CompletenessScorer, ToolCallAccuracyScorer
from devils_advocate.scorers.competitor_research import CompetitorResearchScorer
from devils_advocate.scorers.critical_analysis import CriticalAnalysisDepthScorer
from devils_advocate.scorers.judge import GeminiJudge, LLMJudgedScorer

logger = logging.getLogger(__name__)


def get_default_scorers() -> dict[str, Scorer]:
    """Build the scorers applied to every agent turn."""
    judge = GeminiJudge()
    return {
        "toolCallAppropriatenessScorer": ToolCallAccuracyScorer(strict_mode=False),
        "completenessScorer": CompletenessScorer(),
        "competitorResearchScorer": CompetitorResearchScorer(judge=judge),
        "criticalAnalysisDepthScorer": CriticalAnalysisDepthScorer(judge=judge),
    }


async def score_run(
    run: ScorerRun,
    scorers: dict[str, Scorer] | None = None,
) -> list[ScoreResult]:
    """Apply scorers to a run and log each result.

    A failing scorer is logged and skipped so the others still report.
    """
    if scorers is None:
        scorers = get_default_scorers()

    results = []
    for key, scorer in scorers.items():
        try:
            result = await scorer.run(run)
        except Exception as e:
            logger.warning("Scorer %s failed: %s", key, e)
            continue
        logger.info(
            "Scored agent turn",
            extra={"scorer": key, "score": result.score, "reason": result.reason},
        )
        results.append(result)
    return results


__all__ = [
    "CompetitorResearchScorer",
    "CompletenessScorer",
    "CriticalAnalysisDepthScorer",
    "GeminiJudge",
    "LLMJudgedScorer",
    "ScoreResult",
    "Scorer",
    "ScorerRun",
    "ToolCallAccuracyScorer",
    "clamp",
    "get_default_scorers",
    "score_run",
]
