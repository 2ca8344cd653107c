"""FastAPI application exposing documentation ingestion as a REST API."""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any

from fastapi import BackgroundTasks, FastAPI, Header, HTTPException, Request
from pydantic import BaseModel

from docs_vectorizer import __version__
from docs_vectorizer.config import settings

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Docs Vectorizer API",
    version=__version__,
    description="Triggers ingestion of repository documentation into the vector store.",
)


# ── Background jobs ───────────────────────────────────────────────────
def run_ingestion(root_path: str | None = None) -> None:
    """Walk and ingest *root_path* with a freshly built pipeline."""
    from docs_vectorizer.ingestion.pipeline import IngestionPipeline

    IngestionPipeline.from_settings().run(root_path)


def run_pull_request_scan(pull_number: int) -> None:
    """Re-ingest the documentation changed by *pull_number*."""
    from docs_vectorizer.github.pull_requests import PullRequestScanner

    PullRequestScanner.from_settings().scan_pull_request(pull_number)


def verify_signature(secret: str, body: bytes, signature_header: str | None) -> bool:
    """Check a GitHub ``X-Hub-Signature-256`` header (``sha256=<hex>``)."""
    if not secret or not signature_header or not signature_header.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature_header.removeprefix("sha256="))


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """Optional narrower root for a full ingestion."""

    root_path: str | None = None


class JobAccepted(BaseModel):
    """Acknowledgement for a scheduled background job."""

    status: str = "accepted"
    job: str
    target: str


class WebhookResult(BaseModel):
    """Outcome of a webhook delivery."""

    status: str
    reason: str = ""
    pull_request: int | None = None


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/ingest", response_model=JobAccepted, status_code=202)
async def ingest(background_tasks: BackgroundTasks, request: IngestRequest | None = None) -> JobAccepted:
    """Schedule ingestion of the documentation tree (or a narrower root)."""
    root_path = request.root_path if request else None
    background_tasks.add_task(run_ingestion, root_path)
    return JobAccepted(job="ingest", target=root_path or settings.docs_root)


@app.post("/pull-requests/{pull_number}", response_model=JobAccepted, status_code=202)
async def ingest_pull_request(pull_number: int, background_tasks: BackgroundTasks) -> JobAccepted:
    """Schedule re-ingestion of the docs changed by a pull request."""
    background_tasks.add_task(run_pull_request_scan, pull_number)
    return JobAccepted(job="pull-request", target=str(pull_number))


@app.post("/webhook/github", response_model=WebhookResult)
async def github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_github_event: str = Header(default=""),
    x_hub_signature_256: str | None = Header(default=None),
) -> WebhookResult:
    """Handle a GitHub webhook; merged pull requests trigger a scan."""
    body = await request.body()
    if not verify_signature(settings.webhook_secret, body, x_hub_signature_256):
        logger.warning("GitHub webhook signature verification failed")
        raise HTTPException(status_code=401, detail="Invalid signature")

    if x_github_event != "pull_request":
        return WebhookResult(status="ignored", reason=f"Event type '{x_github_event}' not supported")

    try:
        payload: dict[str, Any] = await request.json()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid JSON payload") from exc
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid JSON payload")
    pr =payload.get("pull_request") or {}
    number = pr.get("number") or payload.get("number")
    if payload.get("action") != "closed" or not pr.get("merged"):
        return WebhookResult(status="ignored", reason="Pull request not merged", pull_request=number)
    if number is None:
        raise HTTPException(status_code=422, detail="Missing pull request number")

    logger.info("Merged pull request #%s, scheduling scan", number)
    background_tasks.add_task(run_pull_request_scan, int(number))
    return WebhookResult(status="accepted", pull_request=int(number))
