"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging

import chromadb

from docs_vectorizer.config import settings
from docs_vectorizer.store.base import VectorStoreBase
from docs_vectorizer.store.models import EmbeddingRecord

logger = logging.getLogger(__name__)


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    distance_metric:
        ``cosine`` | ``l2`` | ``ip``; only applied when the collection is created.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        distance_metric: str = "cosine",
    ) -> None:
        super().__init__(collection_name)
        self._client = chromadb.HttpClient(host=host, port=port)
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": distance_metric},
        )

    # -- VectorStoreBase overrides --------------------------------------------

    def add(self, records: list[EmbeddingRecord]) -> list[str]:
        if not records:
            return []
        self._collection.add(**_columns(records))
        return [r.id for r in records]

    def upsert(self, records: list[EmbeddingRecord]) -> list[str]:
        if not records:
            return []
        self._collection.upsert(**_columns(records))
        return [r.id for r in records]

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False


def _columns(records: list[EmbeddingRecord]) -> dict[str, list]:
    return {
        "ids": [r.id for r in records],
        "embeddings": [r.embedding for r in records],
        "documents": [r.content for r in records],
        "metadatas": [r.metadata for r in records],
    }
