"""Unit tests for the serving layer."""

from __future__ import annotations

import hashlib
import hmac
import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from docs_vectorizer.config import Settings
from docs_vectorizer.serving import app as app_module
from docs_vectorizer.serving.app import app, verify_signature

SECRET = "webhook-secret"


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def jobs():  # noqa: ANN201
    """Replace the background jobs with mocks."""
    with (
        patch.object(app_module, "run_ingestion") as run_ingestion,
        patch.object(app_module, "run_pull_request_scan") as run_scan,
        patch.object(app_module, "settings", Settings(webhook_secret=SECRET)),
    ):
        yield run_ingestion, run_scan


def _signed(payload: dict) -> tuple[bytes, str]:
    body = json.dumps(payload).encode()
    digest = hmac.new(SECRET.encode(), body, hashlib.sha256).hexdigest()
    return body, f"sha256={digest}"


def _pr_event(action: str = "closed", merged: bool = True, number: int = 42) -> dict:
    return {"action": action, "number": number, "pull_request": {"number": number, "merged": merged}}


def test_health_endpoint(client: TestClient) -> None:
    """GET /health should return 200 with status ok."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ingest_schedules_full_run(client: TestClient, jobs) -> None:  # noqa: ANN001
    run_ingestion, _ = jobs
    response = client.post("/ingest")
    assert response.status_code == 202
    assert response.json() == {"status": "accepted", "job": "ingest", "target": "docs"}
    run_ingestion.assert_called_once_with(None)


def test_ingest_accepts_narrower_root(client: TestClient, jobs) -> None:  # noqa: ANN001
    run_ingestion, _ = jobs
    response = client.post("/ingest", json={"root_path": "docs/guides"})
    assert response.json()["target"] == "docs/guides"
    run_ingestion.assert_called_once_with("docs/guides")


def test_pull_request_endpoint_schedules_scan(client: TestClient, jobs) -> None:  # noqa: ANN001
    _, run_scan = jobs
    response = client.post("/pull-requests/17")
    assert response.status_code == 202
    run_scan.assert_called_once_with(17)


def test_webhook_merged_pull_request_triggers_scan(client: TestClient, jobs) -> None:  # noqa: ANN001
    _, run_scan = jobs
    body, signature = _signed(_pr_event())
    response = client.post(
        "/webhook/github",
        content=body,
        headers={"X-GitHub-Event": "pull_request", "X-Hub-Signature-256": signature},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "accepted"
    run_scan.assert_called_once_with(42)


@pytest.mark.parametrize(
    ("event", "payload"),
    [
        ("pull_request", _pr_event(merged=False)),
        ("pull_request", _pr_event(action="opened", merged=False)),
        ("push", {"ref": "refs/heads/main"}),
    ],
)
def test_webhook_ignores_other_events(client: TestClient, jobs, event: str, payload: dict) -> None:  # noqa: ANN001
    _, run_scan = jobs
    body, signature = _signed(payload)
    response = client.post(
        "/webhook/github",
        content=body,
        headers={"X-GitHub-Event": event, "X-Hub-Signature-256": signature},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "ignored"
    run_scan.assert_not_called()


def test_webhook_rejects_bad_signature(client: TestClient, jobs) -> None:  # noqa: ANN001
    _, run_scan = jobs
    response = client.post(
        "/webhook/github",
        content=json.dumps(_pr_event()).encode(),
        headers={"X-GitHub-Event": "pull_request", "X-Hub-Signature-256": "sha256=deadbeef"},
    )
    assert response.status_code == 401
    run_scan.assert_not_called()


@pytest.mark.parametrize("body", [b"{not json", b"[1, 2]"])
def test_webhook_rejects_malformed_payload(client: TestClient, jobs, body: bytes) -> None:  # noqa: ANN001
    _, run_scan = jobs
    signature = "sha256=" + hmac.new(SECRET.encode(), body, hashlib.sha256).hexdigest()
    response = client.post(
        "/webhook/github",
        content=body,
        headers={"X-GitHub-Event": "pull_request", "X-Hub-Signature-256": signature},
    )
    assert response.status_code == 400
    run_scan.assert_not_called()


def test_verify_signature_requires_secret_and_prefix() -> None:
    body, signature = _signed({"a": 1})
    assert verify_signature(SECRET, body, signature)
    assert not verify_signature("", body, signature)
    assert not verify_signature(SECRET, body, None)
    assert not verify_signature(SECRET, body, signature.removeprefix("sha256="))
