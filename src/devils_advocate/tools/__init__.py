"""Tools available to the Devil's Advocate agent."""

from devils_advocate.tools.competitor_search import (
    TOOL_DESCRIPTION,
    TOOL_NAME,
    CompetitorSearchInput,
    ExaSearchClient,
    SearchResult,
    competitor_search,
    search_competitors,
)

__all__ = [
    "TOOL_DESCRIPTION",
    "TOOL_NAME",
    "CompetitorSearchInput",
    "ExaSearchClient",
    "SearchResult",
    "competitor_search",
    "search_competitors",
]
