"""
Ingestion — sectionizing, embedding, and storing repository documentation.

This module turns the Markdown files yielded by the GitHub walker into
embedded sections appended to the vector store, one section at a time and
in document order.
"""
