"""Incremental ingestion of the documentation touched by a pull request."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator

from docs_vectorizer.config import Settings, settings
from docs_vectorizer.github.models import ApiRequest, ChangedFile
from docs_vectorizer.github.requester import RateLimitedRequester
from docs_vectorizer.ingestion.pipeline import IngestionPipeline

logger = logging.getLogger(__name__)


class PullRequestScanner:
    """Re-ingest every documentation file changed by a pull request.

    Each matching file is handed to the pipeline as its own traversal root,
    so only that file is fetched instead of the whole documentation tree.

    Parameters
    ----------
    requester:
        Rate-limited GitHub client.
    pipeline:
        Pipeline run once per matching file.
    owner / repo:
        Repository coordinates.
    docs_root:
        A changed file matches when its path contains ``"<docs_root>/"``.
    page_size / max_pages:
        Pagination of the pull-request files listing.
    throttle_seconds:
        Pause after each ingested file.
    sleep:
        Sleep function; injectable for tests.
    """

    def __init__(
        self,
        requester: RateLimitedRequester,
        pipeline: IngestionPipeline,
        *,
        owner: str,
        repo: str,
        docs_root: str = "docs",
        page_size: int = 100,
        max_pages: int = 1,
        throttle_seconds: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._requester = requester
        self.pipeline = pipeline
        self.owner = owner
        self.repo = repo
        self.docs_root = docs_root
        self.page_size = page_size
        self.max_pages = max_pages
        self.throttle_seconds = throttle_seconds
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        config: Settings = settings,
        *,
        pipeline: IngestionPipeline | None = None,
        requester: RateLimitedRequester | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> PullRequestScanner:
        requester = requester or RateLimitedRequester.from_settings(config, sleep=sleep)
        pipeline = pipeline or IngestionPipeline.from_settings(config, requester=requester, sleep=sleep)
        return cls(
            requester,
            pipeline,
            owner=config.github_owner,
            repo=config.github_repo,
            docs_root=config.docs_root,
            page_size=config.pr_page_size,
            max_pages=config.pr_max_pages,
            throttle_seconds=config.throttle_seconds,
            sleep=sleep,
        )

    # -- public API -----------------------------------------------------------

    def scan_pull_request(self, pull_number: int) -> None:
        """Ingest the documentation files changed by *pull_number*.

        Never raises: any failure ends the scan and is logged.
        """
        try:
            for changed in self.changed_docs(pull_number):
                self.pipeline.run(root_path=changed.filename)
                self._sleep(self.throttle_seconds)
        except Exception:
            logger.exception("Error fetching data from GitHub API (pull request #%s)", pull_number)

    def changed_docs(self, pull_number: int) -> Iterator[ChangedFile]:
        """Yield the changed files that live under the documentation root."""
        marker = f"{self.docs_root.rstrip('/')}/"
        for changed in self.list_changed_files(pull_number):
            if marker not in changed.filename:
                continue
            if changed.status == "removed":
                logger.info("skipping removed file: %s", changed.filename)
                continue
            yield changed

    def list_changed_files(self, pull_number: int) -> Iterator[ChangedFile]:
        """Yield the pull request's files, following at most ``max_pages`` pages."""
        for page in range(1, self.max_pages + 1):
            request = ApiRequest.pull_request_files(
                self.owner, self.repo, int(pull_number), per_page=self.page_size, page=page
            )
            items = self._requester.get_json(request)
            for item in items:
                yield ChangedFile.model_validate(item)
            if len(items) < self.page_size:
                break
