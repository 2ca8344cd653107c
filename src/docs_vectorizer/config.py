"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file.

    Settings are frozen: the traversal root for a run is passed explicitly
    instead of being written back into the configuration.
    """

    # GitHub
    github_owner: str = Field(default="", description="Owner of the documentation repository")
    github_repo: str = Field(default="", description="Name of the documentation repository")
    github_token: str = Field(default="", description="Optional token; raises the API rate limit")
    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    github_timeout: float = 30.0

    # Traversal
    docs_root: str = Field(default="docs", description="Repository path holding the documentation")
    file_extension: str = "md"
    max_depth: int = Field(default=1, ge=0, description="Directory levels walked below the root")
    section_delimiter: str = Field(default="#", min_length=1)

    # Provenance
    base_docs_url: str = Field(
        default="",
        description=(
            "Public URL of the rendered documentation. Each section is stored "
            "with base_docs_url + (path minus provenance_strip_prefix)."
        ),
    )
    provenance_strip_prefix: str = "docs/"

    # Throttling
    throttle_seconds: float = Field(default=0.2, ge=0.0)
    pr_page_size: int = Field(default=100, ge=1, le=100)
    pr_max_pages: int = Field(default=1, ge=1)
    max_rate_limit_retries: int | None = Field(
        default=None,
        description="Cap on consecutive rate-limit waits per request (None = keep waiting)",
    )

    # Embedding
    embedding_provider: Literal["openai", "huggingface"] = "openai"
    embedding_model: str = "text-embedding-3-small"
    openai_api_key: str = ""

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "docs_sections"
    dedupe_policy: Literal["none", "content"] = "none"

    # Serving
    webhook_secret: str = ""

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True}


# Module-level instance; build a new `Settings(...)` for overrides.
settings = Settings()
