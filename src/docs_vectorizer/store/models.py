"""Domain model for the records written to the vector store."""

from __future__ import annotations

import hashlib
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

SOURCE_URL_KEY = "sourceUrl"


def record_id(content: str, source_url: str, policy: Literal["none", "content"] = "none") -> str:
    """Return the store id for a section.

    With ``policy="content"`` the id is derived from the section and its
    source URL, so re-ingesting unchanged text overwrites the earlier record.
    Otherwise every call yields a fresh id and the store keeps both copies.
    """
    if policy == "content":
        return hashlib.sha256(f"{source_url}\n{content}".encode()).hexdigest()
    return uuid4().hex


class EmbeddingRecord(BaseModel):
    """One embedded section.

    Attributes
    ----------
    id:
        Store identifier (see :func:`record_id`).
    content:
        The section text exactly as sectionized.
    embedding:
        Dense vector computed from *content*.
    metadata:
        Provenance; always carries ``sourceUrl``.
    """

    id: str
    content: str
    embedding: list[float]
    metadata: dict[str, str] = Field(default_factory=dict)

    @property
    def source_url(self) -> str | None:
        return self.metadata.get(SOURCE_URL_KEY)
