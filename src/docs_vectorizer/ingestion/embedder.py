"""Embedding and vector-store persistence for single sections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from docs_vectorizer.config import Settings, settings
from docs_vectorizer.store.models import SOURCE_URL_KEY, EmbeddingRecord, record_id

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from docs_vectorizer.store.base import VectorStoreBase

logger = logging.getLogger(__name__)


def get_embedding_function(config: Settings = settings) -> Embeddings:
    """Return the configured LangChain embedding function."""
    if config.embedding_provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=config.embedding_model)

    from langchain_openai import OpenAIEmbeddings

    kwargs: dict = {"model": config.embedding_model}
    if config.openai_api_key:
        kwargs["api_key"] = config.openai_api_key
    return OpenAIEmbeddings(**kwargs)


class SectionStore:
    """Embed one section at a time and append it to a vector store.

    Parameters
    ----------
    embeddings:
        Any LangChain ``Embeddings`` implementation.
    store:
        Target backend.
    dedupe_policy:
        ``"none"`` appends every submission; ``"content"`` derives the id
        from the text and source URL and upserts, so unchanged sections
        overwrite their previous copy.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        store: VectorStoreBase,
        *,
        dedupe_policy: Literal["none", "content"] = "none",
    ) -> None:
        self._embeddings = embeddings
        self._store = store
        self.dedupe_policy = dedupe_policy

    @classmethod
    def from_settings(cls, config: Settings = settings) -> SectionStore:
        from docs_vectorizer.store.chroma_store import ChromaVectorStore

        store = ChromaVectorStore(
            config.chroma_collection,
            host=config.chroma_host,
            port=config.chroma_port,
        )
        return cls(get_embedding_function(config), store, dedupe_policy=config.dedupe_policy)

    def submit(self, text: str, source_url: str) -> list[str] | None:
        """Embed *text* and store it with *source_url* as provenance.

        Returns the stored ids, or ``None`` when embedding or storage failed.
        Failures are logged, never raised.
        """
        try:
            # Newlines degrade embedding quality; the stored content keeps them.
            vector = self._embeddings.embed_query(text.replace("\n", " "))
            record = EmbeddingRecord(
                id=record_id(text, source_url, self.dedupe_policy),
                content=text,
                embedding=vector,
                metadata={SOURCE_URL_KEY: source_url},
            )
            if self.dedupe_policy == "content":
                ids = self._store.upsert([record])
            else:
                ids = self._store.add([record])
        except Exception:
            logger.exception("Error inserting section from %s", source_url)
            return None

        logger.debug("successful insert: %s", source_url)
        return ids
