"""Exceptions raised by the Devil's Advocate agent."""


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""


class SearchError(Exception):
    """Error from the competitor search provider."""

    def __init__(self, message: str, status_code: int | None = None, details: dict | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details or {}


class SearchInputError(SearchError):
    """The search query failed validation."""


class SearchResponseError(SearchError):
    """The search provider returned an unexpected payload."""


class SearchAuthenticationError(SearchError):
    """The search provider rejected the API key."""


class SearchRateLimitError(SearchError):
    """The search provider rate limit was exceeded."""


class SearchNetworkError(SearchError):
    """The search provider could not be reached."""


class ScorerError(Exception):
    """A scorer could not produce a score."""
