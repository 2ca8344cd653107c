"""Ingestion pipeline orchestration.

Walks the documentation tree, sectionizes every document, and submits the
sections one by one:

    RepoWalker → sectionize → provenance URL → SectionStore

All work happens in a single sequential flow. Sections of one document are
submitted in order, documents in discovery order, and the pipeline pauses
for ``throttle_seconds`` after every top-level listing entry to keep the
aggregate request rate under GitHub's limits.

Usage::

    from docs_vectorizer.ingestion.pipeline import IngestionPipeline

    IngestionPipeline.from_settings().run()            # whole docs tree
    IngestionPipeline.from_settings().run("docs/a.md") # one file
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from docs_vectorizer.config import Settings, settings
from docs_vectorizer.github.models import DecodedDocument
from docs_vectorizer.github.requester import RateLimitedRequester
from docs_vectorizer.github.walker import RepoWalker
from docs_vectorizer.ingestion.embedder import SectionStore
from docs_vectorizer.ingestion.sectionizer import sectionize

logger = logging.getLogger(__name__)


def provenance_url(path: str, base_url: str, strip_prefix: str = "docs/") -> str:
    """Return the public URL recorded for every section of *path*."""
    return base_url + path.removeprefix(strip_prefix)


@dataclass
class IngestionStats:
    """Counters accumulated over every run of one pipeline."""

    documents: int = 0
    sections_submitted: int = 0
    sections_failed: int = 0


class IngestionPipeline:
    """Sequential walk → sectionize → embed → store driver.

    Parameters
    ----------
    walker:
        Source of decoded documents.
    section_store:
        Embedding / storage step, called once per section.
    docs_root:
        Root walked when :meth:`run` gets no explicit path.
    section_delimiter:
        Token passed to :func:`sectionize`.
    base_docs_url / strip_prefix:
        Inputs of :func:`provenance_url`.
    throttle_seconds:
        Pause after each top-level listing entry.
    sleep:
        Sleep function; injectable for tests.
    """

    def __init__(
        self,
        walker: RepoWalker,
        section_store: SectionStore,
        *,
        docs_root: str = "docs",
        section_delimiter: str = "#",
        base_docs_url: str = "",
        strip_prefix: str = "docs/",
        throttle_seconds: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.walker = walker
        self.section_store = section_store
        self.docs_root = docs_root
        self.section_delimiter = section_delimiter
        self.base_docs_url = base_docs_url
        self.strip_prefix = strip_prefix
        self.throttle_seconds = throttle_seconds
        self._sleep = sleep
        self.stats = IngestionStats()

    @classmethod
    def from_settings(
        cls,
        config: Settings = settings,
        *,
        requester: RateLimitedRequester | None = None,
        section_store: SectionStore | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> IngestionPipeline:
        requester = requester or RateLimitedRequester.from_settings(config, sleep=sleep)
        return cls(
            RepoWalker.from_settings(requester, config),
            section_store or SectionStore.from_settings(config),
            docs_root=config.docs_root,
            section_delimiter=config.section_delimiter,
            base_docs_url=config.base_docs_url,
            strip_prefix=config.provenance_strip_prefix,
            throttle_seconds=config.throttle_seconds,
            sleep=sleep,
        )

    # -- public API -----------------------------------------------------------

    def run(self, root_path: str | None = None) -> None:
        """Ingest every document below *root_path* (default: the docs root).

        Never raises: any failure ends the run and is logged.
        """
        root = root_path or self.docs_root
        before = replace(self.stats)
        try:
            for group in self.walker.iter_groups(root):
                for document in group.documents:
                    self.ingest_document(document)
                self._sleep(self.throttle_seconds)
        except Exception:
            logger.exception("Error fetching data from GitHub API (root=%s)", root)

        logger.info(
            "Ingested %d documents from %s: %d sections submitted, %d failed",
            self.stats.documents - before.documents,
            root,
            self.stats.sections_submitted - before.sections_submitted,
            self.stats.sections_failed - before.sections_failed,
        )

    def ingest_document(self, document: DecodedDocument) -> None:
        """Sectionize *document* and submit its sections in order."""
        sections = sectionize(document.text, self.section_delimiter)
        source_url = provenance_url(document.path, self.base_docs_url, self.strip_prefix)
        for section in sections:
            if self.section_store.submit(section, source_url) is None:
                self.stats.sections_failed += 1
            else:
                self.stats.sections_submitted += 1
        self.stats.documents += 1
