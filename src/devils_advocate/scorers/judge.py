"""LLM-judged scorers.

A judged scorer runs in four steps: ``preprocess`` extracts the texts to
judge from the run, ``create_prompt`` renders the judge prompt, the judge
model returns a structured analysis validated against ``analysis_schema``,
and ``generate_score`` / ``generate_reason`` turn that analysis into a
score.
"""

import logging
from abc import abstractmethod
from typing import Any

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from devils_advocate.config import get_settings
from devils_advocate.errors import ScorerError
from devils_advocate.scorers.base import Scorer, ScoreResult, ScorerRun

logger = logging.getLogger(__name__)


class GeminiJudge:
    """Structured-output judge backed by the Gemini API."""

    def __init__(self, client: genai.Client | None = None) -> None:
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            settings = get_settings()
            if settings.google_genai_use_vertexai:
                self._client = genai.Client(
                    vertexai=True,
                    project=settings.google_cloud_project,
                    location=settings.google_cloud_location,
                )
            else:
                self._client = genai.Client(api_key=settings.google_api_key)
        return self._client

    async def analyze(
        self,
        model: str,
        instructions: str,
        prompt: str,
        schema: type[BaseModel],
    ) -> dict[str, Any]:
        """Ask the judge model for a JSON analysis matching ``schema``."""
        response = await self._get_client().aio.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=instructions,
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        if isinstance(response.parsed, BaseModel):
            return response.parsed.model_dump()
        if not response.text:
            raise ScorerError("Judge returned an empty response")
        try:
            return schema.model_validate_json(response.text).model_dump()
        except ValidationError as e:
            raise ScorerError(f"Judge returned invalid JSON: {e}") from e


class LLMJudgedScorer(Scorer):
    """Base class for scorers that delegate analysis to an LLM judge."""

    judge_instructions: str = ""
    analysis_schema: type[BaseModel]

    def __init__(self, judge: GeminiJudge | None = None, model: str | None = None) -> None:
        self.judge = judge or GeminiJudge()
        self.model = model or self.default_model()

    def default_model(self) -> str:
        return get_settings().judge_model

    def preprocess(self, run: ScorerRun) -> dict[str, str]:
        return {"user_text": run.user_text, "assistant_text": run.assistant_text}

    @abstractmethod
    def create_prompt(self, preprocessed: dict[str, str]) -> str:
        """Render the judge prompt."""

    @abstractmethod
    def generate_score(self, analysis: dict[str, Any]) -> float:
        """Compute the score from the judge analysis."""

    @abstractmethod
    def generate_reason(self, analysis: dict[str, Any], score: float) -> str:
        """Explain the score."""

    async def run(self, run: ScorerRun) -> ScoreResult:
        preprocessed = self.preprocess(run)
        prompt = self.create_prompt(preprocessed)
        analysis = await self.judge.analyze(
            self.model,
            self.judge_instructions,
            prompt,
            self.analysis_schema,
        )
        if not isinstance(analysis, dict):
            raise ScorerError(
                f"Invalid analyze step result for {self.name}: expected a non-null object"
            )
        score = self.generate_score(analysis)
        reason = self.generate_reason(analysis, score)
        logger.debug("Scorer %s produced %.3f", self.name, score)
        return ScoreResult(scorer=self.name, score=score, reason=reason, details=analysis)
