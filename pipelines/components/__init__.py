"""KFP v2 components — each file exports one @dsl.component."""

from pipelines.components.ingest_docs import ingest_repository_docs

__all__ = [
    "ingest_repository_docs",
]
