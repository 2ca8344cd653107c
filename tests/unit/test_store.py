"""Unit tests for the vector-store layer — models, base, and Chroma backend."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from docs_vectorizer.store.base import VectorStoreBase
from docs_vectorizer.store.models import EmbeddingRecord, record_id

RECORDS = [
    EmbeddingRecord(id="a", content="Alpha", embedding=[0.1, 0.2], metadata={"sourceUrl": "https://x/a.md"}),
    EmbeddingRecord(id="b", content="Beta", embedding=[0.3, 0.4], metadata={"sourceUrl": "https://x/a.md"}),
]


class TestRecordId:
    def test_content_policy_is_deterministic(self) -> None:
        assert record_id("text", "https://x/a.md", "content") == record_id("text", "https://x/a.md", "content")

    def test_content_policy_depends_on_source(self) -> None:
        assert record_id("text", "https://x/a.md", "content") != record_id("text", "https://x/b.md", "content")

    def test_default_policy_is_unique(self) -> None:
        assert record_id("text", "https://x/a.md") != record_id("text", "https://x/a.md")


class TestBase:
    def test_upsert_is_optional(self) -> None:
        class AppendOnly(VectorStoreBase):
            def add(self, records):  # noqa: ANN001, ANN202
                return [r.id for r in records]

            def health_check(self) -> bool:
                return True

        with pytest.raises(NotImplementedError, match="AppendOnly"):
            AppendOnly("c").upsert(RECORDS)


class TestChromaVectorStore:
    @pytest.fixture()
    def client(self) -> MagicMock:
        with patch("docs_vectorizer.store.chroma_store.chromadb.HttpClient") as client_cls:
            yield client_cls.return_value

    @pytest.fixture()
    def store(self, client: MagicMock):  # noqa: ANN201
        from docs_vectorizer.store.chroma_store import ChromaVectorStore

        return ChromaVectorStore("docs", host="h", port=1)

    def test_collection_created_with_distance_metric(self, store, client: MagicMock) -> None:  # noqa: ANN001
        client.get_or_create_collection.assert_called_once_with(name="docs", metadata={"hnsw:space": "cosine"})
        assert store.collection_name == "docs"

    def test_add_writes_columns(self, store, client: MagicMock) -> None:  # noqa: ANN001
        assert store.add(RECORDS) == ["a", "b"]
        client.get_or_create_collection.return_value.add.assert_called_once_with(
            ids=["a", "b"],
            embeddings=[[0.1, 0.2], [0.3, 0.4]],
            documents=["Alpha", "Beta"],
            metadatas=[{"sourceUrl": "https://x/a.md"}, {"sourceUrl": "https://x/a.md"}],
        )

    def test_upsert_uses_collection_upsert(self, store, client: MagicMock) -> None:  # noqa: ANN001
        store.upsert(RECORDS[:1])
        collection = client.get_or_create_collection.return_value
        collection.upsert.assert_called_once()
        collection.add.assert_not_called()

    def test_empty_batches_skip_the_server(self, store, client: MagicMock) -> None:  # noqa: ANN001
        assert store.add([]) == []
        client.get_or_create_collection.return_value.add.assert_not_called()

    def test_health_check(self, store, client: MagicMock) -> None:  # noqa: ANN001
        assert store.health_check() is True
        client.heartbeat.side_effect = ConnectionError("down")
        assert store.health_check() is False
