"""Depth-bounded walk over the GitHub contents API."""

from __future__ import annotations

import base64
import logging
from collections.abc import Iterator
from typing import Any

from docs_vectorizer.config import Settings, settings
from docs_vectorizer.github.errors import HostingAPIError, UnsupportedEntryType
from docs_vectorizer.github.models import ApiRequest, DecodedDocument, DocumentGroup, RepositoryEntry
from docs_vectorizer.github.requester import RateLimitedRequester

logger = logging.getLogger(__name__)


class RepoWalker:
    """List and fetch documentation files below a repository path.

    The root listing is walked in API order. A file at the root is kept as
    is (this is what lets a pull-request scan point the walker at a single
    changed file). A directory is listed once more and only its files
    ending in *file_extension* are kept; directories nested below
    *max_depth* are skipped.

    Parameters
    ----------
    requester:
        Rate-limited GitHub client.
    owner / repo:
        Repository coordinates.
    file_extension:
        Extension filter for files inside directories, with or without the
        leading dot.
    max_depth:
        Number of directory levels listed below the root.
    """

    def __init__(
        self,
        requester: RateLimitedRequester,
        *,
        owner: str,
        repo: str,
        file_extension: str = "md",
        max_depth: int = 1,
    ) -> None:
        self._requester = requester
        self.owner = owner
        self.repo = repo
        self.suffix = "." + file_extension.lstrip(".")
        self.max_depth = max_depth

    @classmethod
    def from_settings(cls, requester: RateLimitedRequester, config: Settings = settings) -> RepoWalker:
        return cls(
            requester,
            owner=config.github_owner,
            repo=config.github_repo,
            file_extension=config.file_extension,
            max_depth=config.max_depth,
        )

    # -- public API -----------------------------------------------------------

    def iter_groups(self, root_path: str) -> Iterator[DocumentGroup]:
        """Yield one :class:`DocumentGroup` per entry of the root listing.

        Raises
        ------
        UnsupportedEntryType
            When the listing holds something other than a file or directory.
        """
        for entry in self.list_entries(root_path):
            if entry.is_dir:
                if self.max_depth < 1:
                    logger.debug("skipping %s: max_depth=0", entry.path)
                    continue
                logger.info("requesting dir: %s", entry.name)
                files = list(self._collect_files(f"{root_path}/{entry.name}", depth=1))
            elif entry.is_file:
                files = [entry]
            else:
                raise UnsupportedEntryType(entry)
            yield DocumentGroup(entry=entry, documents=self._fetch_all(files))

    def list_documents(self, root_path: str) -> Iterator[DecodedDocument]:
        """Flatten :meth:`iter_groups` into a single ordered stream."""
        for group in self.iter_groups(root_path):
            yield from group.documents

    def list_entries(self, path: str) -> list[RepositoryEntry]:
        """Return the listing of *path*; a single file becomes a one-item list."""
        data = self._requester.get_json(ApiRequest.contents(self.owner, self.repo, path))
        items = data if isinstance(data, list) else [data]
        return [RepositoryEntry.model_validate(item) for item in items]

    def fetch_document(self, entry: RepositoryEntry) -> DecodedDocument:
        """Download *entry* and decode its base64 payload as UTF-8."""
        logger.info("requesting doc: %s", entry.path)
        payload = self._requester.get_json(ApiRequest.contents(self.owner, self.repo, entry.path))
        return DecodedDocument(path=entry.path, text=_decode_content(payload, entry.path))

    # -- internals ------------------------------------------------------------

    def _collect_files(self, path: str, depth: int) -> Iterator[RepositoryEntry]:
        for entry in self.list_entries(path):
            if entry.is_dir:
                if depth < self.max_depth:
                    yield from self._collect_files(f"{path}/{entry.name}", depth + 1)
                else:
                    logger.debug("skipping %s: deeper than max_depth=%d", entry.path, self.max_depth)
            elif entry.is_file and entry.name.endswith(self.suffix):
                yield entry

    def _fetch_all(self, entries: list[RepositoryEntry]) -> Iterator[DecodedDocument]:
        for entry in entries:
            yield self.fetch_document(entry)


def _decode_content(payload: Any, path: str) -> str:
    if not isinstance(payload, dict) or "content" not in payload:
        raise HostingAPIError(f"No file content returned for {path!r}")
    return base64.b64decode(payload["content"]).decode("utf-8")
