"""Exception hierarchy for GitHub access and repository traversal."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docs_vectorizer.github.models import ApiRequest, RepositoryEntry


class DocsVectorizerError(Exception):
    """Base class for every error raised by this package."""


class HostingAPIError(DocsVectorizerError):
    """A GitHub API call failed for a reason other than rate limiting.

    Attributes
    ----------
    status:
        HTTP status code, or ``None`` when the request never got a response.
    request:
        The request that failed.
    """

    def __init__(self, message: str, *, status: int | None = None, request: ApiRequest | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.request = request

    def __str__(self) -> str:
        text = super().__str__()
        if self.status is not None:
            text = f"[{self.status}] {text}"
        if self.request is not None:
            text = f"{text} ({self.request.describe()})"
        return text


class RateLimitExceeded(HostingAPIError):
    """Rate-limit rejections outlasted the configured retry cap."""


class UnsupportedEntryType(DocsVectorizerError):
    """A contents listing returned an entry that is neither a file nor a directory."""

    def __init__(self, entry: RepositoryEntry) -> None:
        super().__init__(f"Unsupported entry type {entry.type!r} at {entry.path!r}")
        self.entry = entry
