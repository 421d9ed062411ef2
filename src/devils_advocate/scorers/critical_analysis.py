"""LLM-judged scorer for the depth of the critical analysis."""

from typing import Any

from pydantic import BaseModel, Field

from devils_advocate.config import get_settings
from devils_advocate.scorers.base import clamp
from devils_advocate.scorers.judge import LLMJudgedScorer

# Analysis field -> label used in reasons
DIMENSIONS = {
    "flawedAssumptions": "Flawed Assumptions",
    "marketRisks": "Market Risks",
    "competitorThreats": "Competitor Threats",
    "operationalHurdles": "Operational Hurdles",
    "financialVulnerabilities": "Financial Vulnerabilities",
    "customerReactionRisks": "Customer Reaction Risks",
}

COVERAGE_WEIGHT = 0.6
DEPTH_WEIGHT = 0.4


class CriticalAnalysisDepthAnalysis(BaseModel):
    """Judge verdict on coverage of the required critique dimensions."""

    flawedAssumptions: bool
    marketRisks: bool
    competitorThreats: bool
    operationalHurdles: bool
    financialVulnerabilities: bool
    customerReactionRisks: bool
    overallDepth: float = Field(..., ge=0, le=1, description="Overall quality and depth")
    explanation: str


class CriticalAnalysisDepthScorer(LLMJudgedScorer):
    """Evaluates whether the critique covers every required dimension."""

    name = "Critical Analysis Depth"
    description = (
        "Evaluates if the devil's advocate provided thorough, multi-dimensional criticism"
    )
    judge_instructions = (
        "You are an expert evaluator of critical analysis quality. "
        "Determine whether the assistant covered multiple dimensions of criticism as "
        "specified in its instructions: flawed assumptions, market risks, competitor "
        "threats, operational hurdles, financial vulnerabilities, and customer reaction "
        "risks. Return only the structured JSON matching the provided schema."
    )
    analysis_schema = CriticalAnalysisDepthAnalysis

    def default_model(self) -> str:
        return get_settings().judge_pro_model

    def create_prompt(self, preprocessed: dict[str, str]) -> str:
        return f"""
You are evaluating if a devil's advocate agent provided comprehensive critical analysis.

User's business idea:
\"\"\"
{preprocessed["user_text"]}
\"\"\"

Assistant's critical analysis:
\"\"\"
{preprocessed["assistant_text"]}
\"\"\"

The agent is instructed to cover these dimensions:
1. Flawed Assumptions: Unstated beliefs that might be wrong
2. Market Risks: Market size, saturation, or decline issues
3. Competitor Threats: Existing players and competitive risks
4. Operational Hurdles: Practical, real-world challenges
5. Financial Vulnerabilities: Where money could be lost
6. Customer Reaction Risks: How it could backfire with customers

Evaluate if the assistant meaningfully addressed each dimension. Mark true if the
dimension is covered with substance (not just mentioned in passing).

Return JSON with one boolean per dimension (flawedAssumptions, marketRisks,
competitorThreats, operationalHurdles, financialVulnerabilities,
customerReactionRisks), overallDepth (number between 0 and 1) and explanation.
"""

    def generate_score(self, analysis: dict[str, Any]) -> float:
        covered = sum(1 for field in DIMENSIONS if analysis.get(field))
        depth = analysis.get("overallDepth")
        if not isinstance(depth, (int, float)):
            depth = 0.5
        return clamp(COVERAGE_WEIGHT * covered / len(DIMENSIONS) + DEPTH_WEIGHT * depth)

    def generate_reason(self, analysis: dict[str, Any], score: float) -> str:
        covered = ", ".join(label for field, label in DIMENSIONS.items() if analysis.get(field))
        return (
            f"Critical analysis depth: Covered dimensions: [{covered}]. "
            f"Overall depth={analysis.get('overallDepth', 0)}. "
            f"Score={score}. {analysis.get('explanation', '')}"
        ).strip()
