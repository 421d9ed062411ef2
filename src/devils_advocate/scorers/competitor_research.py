"""LLM-judged scorer for the quality of competitor research."""

from typing import Any

from pydantic import BaseModel, Field

from devils_advocate.errors import ScorerError
from devils_advocate.scorers.base import clamp
from devils_advocate.scorers.judge import LLMJudgedScorer


class CompetitorResearchAnalysis(BaseModel):
    """Judge verdict on competitor research."""

    competitorsFound: bool = Field(..., description="Did the assistant mention competitors at all?")
    specificNames: bool = Field(..., description="Are actual company/product names included?")
    relevantToIdea: bool = Field(..., description="Is the competitive analysis relevant and substantive?")
    confidence: float = Field(1, ge=0, le=1, description="Confidence in this assessment")
    explanation: str = Field("", description="Brief explanation of the evaluation")


class CompetitorResearchScorer(LLMJudgedScorer):
    """Checks that the agent searched for and cited actual competitors."""

    name = "Competitor Research Quality"
    description = "Checks that the agent appropriately searched for and cited actual competitors"
    judge_instructions = (
        "You are an expert evaluator of competitive analysis quality. "
        "Determine whether the assistant properly researched competitors and included "
        "specific, real competitor names in its analysis. "
        "Check if competitor information is substantive (not generic) and relevant to "
        "the user's idea. "
        "Return only the structured JSON matching the provided schema."
    )
    analysis_schema = CompetitorResearchAnalysis

    def create_prompt(self, preprocessed: dict[str, str]) -> str:
        return f"""
You are evaluating if a devil's advocate agent properly researched and cited competitors.

User's business idea:
\"\"\"
{preprocessed["user_text"]}
\"\"\"

Assistant's analysis:
\"\"\"
{preprocessed["assistant_text"]}
\"\"\"

Tasks:
1) Identify if the assistant mentioned any competitors or competitive threats.
2) Check if specific competitor names are included (not just generic phrases like "competitors exist").
3) Evaluate if the competitor information is relevant to the user's specific idea.
4) Assess overall quality of competitive research.

Return JSON with fields competitorsFound, specificNames, relevantToIdea (booleans),
confidence (number between 0 and 1) and explanation (string).
"""

    def generate_score(self, analysis: dict[str, Any]) -> float:
        flags = ("competitorsFound", "specificNames", "relevantToIdea")
        if any(not isinstance(analysis.get(flag), bool) for flag in flags):
            raise ScorerError(
                "Failed to generate score for competitor research: "
                "missing or invalid boolean fields"
            )

        if not analysis["competitorsFound"]:
            return 0.3
        if not analysis["specificNames"]:
            return 0.5
        if not analysis["relevantToIdea"]:
            return 0.6

        confidence = analysis.get("confidence")
        if not isinstance(confidence, (int, float)):
            confidence = 1.0
        return clamp(0.8 + 0.2 * confidence)

    def generate_reason(self, analysis: dict[str, Any], score: float) -> str:
        return (
            "Competitor research scoring: "
            f"competitorsFound={analysis.get('competitorsFound', False)}, "
            f"specificNames={analysis.get('specificNames', False)}, "
            f"relevantToIdea={analysis.get('relevantToIdea', False)}, "
            f"confidence={analysis.get('confidence', 0)}. "
            f"Score={score}. {analysis.get('explanation', '')}"
        ).strip()
