"""
GitHub — rate-limited access to the contents and pull-request APIs.

Public surface
--------------
- :class:`RateLimitedRequester` — sends one request, waiting out rate limits.
- :class:`RepoWalker` — depth-bounded walk that yields decoded documents.
- :class:`PullRequestScanner` — re-ingests documentation changed by a PR.
"""

from docs_vectorizer.github.errors import (
    DocsVectorizerError,
    HostingAPIError,
    RateLimitExceeded,
    UnsupportedEntryType,
)
from docs_vectorizer.github.models import (
    ApiRequest,
    ChangedFile,
    DecodedDocument,
    DocumentGroup,
    RepositoryEntry,
)
from docs_vectorizer.github.requester import RateLimitedRequester
from docs_vectorizer.github.walker import RepoWalker

__all__ = [
    "ApiRequest",
    "ChangedFile",
    "DecodedDocument",
    "DocsVectorizerError",
    "DocumentGroup",
    "HostingAPIError",
    "PullRequestScanner",
    "RateLimitExceeded",
    "RateLimitedRequester",
    "RepoWalker",
    "RepositoryEntry",
    "UnsupportedEntryType",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import PullRequestScanner; it pulls in the ingestion pipeline."""
    if name == "PullRequestScanner":
        from docs_vectorizer.github.pull_requests import PullRequestScanner

        return PullRequestScanner
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
