"""docs-vectorizer — ingest a GitHub repository's Markdown docs into a vector store."""

__version__ = "0.1.0"
