"""Domain models for GitHub requests, listings, and fetched documents."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

CONTENTS_ROUTE = "/repos/{owner}/{repo}/contents/{path}"
PULL_FILES_ROUTE = "/repos/{owner}/{repo}/pulls/{pull_number}/files"


class ApiRequest(BaseModel):
    """One GitHub REST call, described as data so it can be re-sent verbatim.

    Attributes
    ----------
    method:
        HTTP verb.
    route:
        Route template, e.g. ``/repos/{owner}/{repo}/contents/{path}``.
    path_params:
        Values substituted into *route*.
    params:
        Query-string parameters.
    """

    model_config = ConfigDict(frozen=True)

    method: str = "GET"
    route: str
    path_params: dict[str, Any] = Field(default_factory=dict)
    params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def contents(cls, owner: str, repo: str, path: str) -> ApiRequest:
        return cls(route=CONTENTS_ROUTE, path_params={"owner": owner, "repo": repo, "path": path})

    @classmethod
    def pull_request_files(
        cls, owner: str, repo: str, pull_number: int, *, per_page: int = 100, page: int = 1
    ) -> ApiRequest:
        return cls(
            route=PULL_FILES_ROUTE,
            path_params={"owner": owner, "repo": repo, "pull_number": pull_number},
            params={"per_page": per_page, "page": page},
        )

    def url_path(self) -> str:
        """Return *route* with its placeholders filled in."""
        return self.route.format(**self.path_params)

    def describe(self) -> str:
        return f"{self.method} {self.url_path()}"


class RepositoryEntry(BaseModel):
    """One item of a contents listing."""

    name: str
    path: str
    type: str

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"


class DecodedDocument(BaseModel):
    """A fetched file with its base64 payload decoded to text."""

    path: str
    text: str


class ChangedFile(BaseModel):
    """One entry of a pull request's file list."""

    filename: str
    status: str = "modified"


@dataclass
class DocumentGroup:
    """Documents produced by one top-level listing entry.

    *documents* is lazy: each content request is only issued when the
    consumer advances the iterator.
    """

    entry: RepositoryEntry
    documents: Iterator[DecodedDocument]
