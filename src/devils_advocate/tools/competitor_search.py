"""Competitor search tool backed by the Exa web search API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from devils_advocate.config import get_settings
from devils_advocate.errors import (
    ConfigurationError,
    SearchAuthenticationError,
    SearchError,
    SearchInputError,
    SearchNetworkError,
    SearchRateLimitError,
    SearchResponseError,
)

logger = logging.getLogger(__name__)

TOOL_NAME = "competitor_search"
TOOL_DESCRIPTION = "searches the web to find existing competitors"

# Result text is truncated to keep tool output small in the model context
MAX_CONTENT_LENGTH = 500


class CompetitorSearchInput(BaseModel):
    """Validated input of the competitor search tool."""

    query: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="The search query",
    )


class SearchResult(BaseModel):
    """A single competitor search hit."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    url: str
    content: str
    published_date: str | None = Field(default=None, alias="publishedDate")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the tool's JSON output shape."""
        data: dict[str, Any] = {"title": self.title, "url": self.url, "content": self.content}
        if self.published_date is not None:
            data["publishedDate"] = self.published_date
        return data


class ExaSearchClient:
    """Minimal async client for the Exa ``/search`` endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        num_results: int | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Exa client.

        Args:
            api_key: Exa API key. Defaults to settings.
            base_url: Exa API base URL. Defaults to settings.
            num_results: Results requested per query. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
            http_client: Optional HTTP client for testing.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        settings = get_settings()
        self._api_key = api_key or settings.exa_api_key
        if not self._api_key:
            raise ConfigurationError(
                "EXA_API_KEY environment variable is required for competitor search tool"
            )
        self._base_url = (base_url or settings.exa_base_url).rstrip("/")
        self._num_results = num_results or settings.exa_num_results
        self._timeout = timeout or settings.exa_timeout_seconds
        self._http_client = http_client

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Run a search and return the raw result objects.

        Raises:
            SearchAuthenticationError: If the API key is rejected.
            SearchRateLimitError: If the rate limit is exceeded.
            SearchNetworkError: If the API cannot be reached.
            SearchResponseError: If the response has no results array.
            SearchError: For any other API failure.
        """
        payload = {
            "query": query,
            "numResults": self._num_results,
            "contents": {"text": True},
        }
        headers = {"x-api-key": self._api_key, "Content-Type": "application/json"}

        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    f"{self._base_url}/search", json=payload, headers=headers
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(
                        f"{self._base_url}/search", json=payload, headers=headers
                    )
        except httpx.TransportError as e:
            raise SearchNetworkError(f"Network error with Exa API: {e}") from e

        if response.status_code in (401, 403):
            raise SearchAuthenticationError(
                f"Authentication failed with Exa API: {response.text}",
                status_code=response.status_code,
            )
        if response.status_code == 429:
            raise SearchRateLimitError(
                f"Rate limit exceeded with Exa API: {response.text}",
                status_code=response.status_code,
            )
        if response.status_code >= 400:
            raise SearchError(
                f"Failed to search competitors: HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SearchResponseError(f"Invalid response from Exa API: {e}") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise SearchResponseError("Invalid response from Exa API: results array expected")
        return results


def _to_search_result(raw: dict[str, Any]) -> SearchResult:
    return SearchResult(
        title=raw.get("title") or None,
        url=raw.get("url") or "",
        content=(raw.get("text") or "")[:MAX_CONTENT_LENGTH],
        published_date=raw.get("publishedDate"),
    )


async def search_competitors(
    query: str,
    client: ExaSearchClient | None = None,
) -> list[SearchResult]:
    """Validate the query, search, and shape the results.

    Results without a URL are dropped.
    """
    try:
        validated = CompetitorSearchInput(query=query)
    except ValidationError as e:
        raise SearchInputError(f"Invalid query parameter: {e.errors()[0]['msg']}") from e

    client = client or ExaSearchClient()
    raw_results = await client.search(validated.query)

    results = []
    for raw in raw_results:
        if not isinstance(raw, dict):
            continue
        result = _to_search_result(raw)
        if result.url:
            results.append(result)

    logger.info(
        "Competitor search returned %d results",
        len(results),
        extra={"query": validated.query},
    )
    return results


async def competitor_search(query: str) -> list[dict] | dict:
    """Searches the web to find existing competitors.

    Args:
        query: The search query, between 1 and 50 characters.

    Returns:
        A list of results with title, url, content and publishedDate, or
        an object with an ``error`` message when the search failed.
    """
    try:
        results = await search_competitors(query)
    except (SearchError, ConfigurationError) as e:
        # Hand the failure back to the model so it can retry or answer without it
        logger.warning(
            "Competitor search failed: %s",
            e,
            extra={"query": query, "error_type": type(e).__name__},
        )
        return {"error": str(e)}
    return [result.to_dict() for result in results]
