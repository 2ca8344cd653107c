"""
Store — append-only persistence of embedded documentation sections.

Public surface
--------------
- :class:`VectorStoreBase` — abstract backend (subclass for pgvector, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`EmbeddingRecord` — the record written for every section.
"""

from docs_vectorizer.store.base import VectorStoreBase
from docs_vectorizer.store.models import EmbeddingRecord, record_id

__all__ = [
    "ChromaVectorStore",
    "EmbeddingRecord",
    "VectorStoreBase",
    "record_id",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from docs_vectorizer.store.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
