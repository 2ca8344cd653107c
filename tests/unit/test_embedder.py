"""Unit tests for the embedding / storage step."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from langchain_core.embeddings import Embeddings

from docs_vectorizer.config import Settings
from docs_vectorizer.ingestion.embedder import SectionStore, get_embedding_function
from docs_vectorizer.store.base import VectorStoreBase
from docs_vectorizer.store.models import EmbeddingRecord


class FakeEmbeddings(Embeddings):
    """Deterministic embeddings that remember what they were asked to embed."""

    def __init__(self, fail: bool = False) -> None:
        self.inputs: list[str] = []
        self.fail = fail

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        if self.fail:
            raise RuntimeError("embedding quota exceeded")
        self.inputs.append(text)
        return [float(len(text)), 1.0]


class InMemoryStore(VectorStoreBase):
    """Append-only list with an id-keyed upsert."""

    def __init__(self, fail: bool = False) -> None:
        super().__init__("test-collection")
        self.records: list[EmbeddingRecord] = []
        self.calls: list[str] = []
        self.fail = fail

    def add(self, records: list[EmbeddingRecord]) -> list[str]:
        self.calls.append("add")
        if self.fail:
            raise ConnectionError("store unavailable")
        self.records.extend(records)
        return [r.id for r in records]

    def upsert(self, records: list[EmbeddingRecord]) -> list[str]:
        self.calls.append("upsert")
        for record in records:
            self.records = [r for r in self.records if r.id != record.id] + [record]
        return [r.id for r in records]

    def health_check(self) -> bool:
        return True


SECTION = "Camera\nThe camera defines\nthe view."
URL = "https://aframe.io/docs/master/components/camera.md"


def test_newlines_replaced_only_for_embedding() -> None:
    embeddings, store = FakeEmbeddings(), InMemoryStore()
    SectionStore(embeddings, store).submit(SECTION, URL)

    assert embeddings.inputs == ["Camera The camera defines the view."]
    (record,) = store.records
    assert record.content == SECTION
    assert record.embedding == [float(len(SECTION)), 1.0]
    assert record.metadata == {"sourceUrl": URL}
    assert record.source_url == URL


def test_default_policy_appends_every_submission() -> None:
    store = InMemoryStore()
    section_store = SectionStore(FakeEmbeddings(), store)

    first = section_store.submit(SECTION, URL)
    second = section_store.submit(SECTION, URL)

    assert store.calls == ["add", "add"]
    assert len(store.records) == 2
    assert first != second


def test_content_policy_overwrites_unchanged_sections() -> None:
    store = InMemoryStore()
    section_store = SectionStore(FakeEmbeddings(), store, dedupe_policy="content")

    first = section_store.submit(SECTION, URL)
    second = section_store.submit(SECTION, URL)
    section_store.submit(SECTION, URL + "#other")

    assert store.calls == ["upsert", "upsert", "upsert"]
    assert first == second
    assert len(store.records) == 2


def test_embedding_failure_returns_none(caplog: pytest.LogCaptureFixture) -> None:
    store = InMemoryStore()
    with caplog.at_level("ERROR"):
        result = SectionStore(FakeEmbeddings(fail=True), store).submit(SECTION, URL)
    assert result is None
    assert store.records == []
    assert "Error inserting section" in caplog.text


def test_store_failure_returns_none() -> None:
    assert SectionStore(FakeEmbeddings(), InMemoryStore(fail=True)).submit(SECTION, URL) is None


def test_openai_embedding_function() -> None:
    config = Settings(embedding_provider="openai", embedding_model="text-embedding-3-small", openai_api_key="sk-x")
    with patch("langchain_openai.OpenAIEmbeddings") as openai_cls:
        get_embedding_function(config)
    openai_cls.assert_called_once_with(model="text-embedding-3-small", api_key="sk-x")


def test_huggingface_embedding_function() -> None:
    config = Settings(embedding_provider="huggingface", embedding_model="sentence-transformers/all-MiniLM-L6-v2")
    with patch("langchain_huggingface.HuggingFaceEmbeddings") as hf_cls:
        get_embedding_function(config)
    hf_cls.assert_called_once_with(model_name="sentence-transformers/all-MiniLM-L6-v2")


def test_from_settings_builds_chroma_backend() -> None:
    config = Settings(chroma_host="chroma", chroma_port=9000, chroma_collection="docs", dedupe_policy="content")
    with (
        patch("docs_vectorizer.store.chroma_store.chromadb.HttpClient") as client_cls,
        patch("docs_vectorizer.ingestion.embedder.get_embedding_function", return_value=FakeEmbeddings()),
    ):
        section_store = SectionStore.from_settings(config)

    client_cls.assert_called_once_with(host="chroma", port=9000)
    assert section_store.dedupe_policy == "content"
