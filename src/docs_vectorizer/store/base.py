"""Abstract base class for vector-store backends.

Adding a new backend (pgvector, Qdrant …) only requires subclassing
:class:`VectorStoreBase` and implementing the abstract methods. The
ingestion pipeline never talks to a concrete backend directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from docs_vectorizer.store.models import EmbeddingRecord


class VectorStoreBase(ABC):
    """Backend-agnostic, append-only vector-store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / table / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def add(self, records: list[EmbeddingRecord]) -> list[str]:
        """Append *records* and return their ids.

        Backends must not deduplicate on their own; callers choose ids with
        :func:`~docs_vectorizer.store.models.record_id`.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- optional overrides ---------------------------------------------------

    def upsert(self, records: list[EmbeddingRecord]) -> list[str]:
        """Insert or overwrite *records* by id.  Optional — raises by default."""
        raise NotImplementedError(f"{type(self).__name__} does not support upsert")
