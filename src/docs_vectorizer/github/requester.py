"""Rate-limit-aware wrapper around a single GitHub REST call.

GitHub answers an exhausted quota with ``403`` plus
``x-ratelimit-remaining: 0`` and an ``x-ratelimit-reset`` epoch timestamp.
Since the reset time is exactly when the quota refills, the requester sleeps
until then and re-sends the identical request; it does not add backoff or
jitter. Any other failure is raised as :class:`HostingAPIError`.

Usage::

    requester = RateLimitedRequester.from_settings()
    listing = requester.get_json(ApiRequest.contents("owner", "repo", "docs"))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import requests

from docs_vectorizer.config import Settings, settings
from docs_vectorizer.github.errors import HostingAPIError, RateLimitExceeded
from docs_vectorizer.github.models import ApiRequest

logger = logging.getLogger(__name__)

# Wait used when a rate-limit rejection carries no reset time.
DEFAULT_RATE_LIMIT_WAIT = 60


@dataclass(frozen=True)
class RateLimitState:
    """Quota information parsed from one rejected response."""

    remaining: str | None
    reset_at: int | None
    retry_after: int | None = None

    @classmethod
    def from_response(cls, response: requests.Response) -> RateLimitState:
        return cls(
            remaining=response.headers.get("x-ratelimit-remaining"),
            reset_at=_int_header(response, "x-ratelimit-reset"),
            retry_after=_int_header(response, "retry-after"),
        )

    def seconds_until_reset(self, now: float) -> int:
        """Seconds to wait before re-sending.

        Without a usable ``x-ratelimit-reset`` the wait falls back to
        ``retry-after``, then to :data:`DEFAULT_RATE_LIMIT_WAIT`.
        """
        if self.reset_at is None:
            if self.retry_after is not None:
                return max(self.retry_after, 0)
            return DEFAULT_RATE_LIMIT_WAIT
        return max(self.reset_at - int(now), 0)


def _int_header(response: requests.Response, name: str) -> int | None:
    value = response.headers.get(name)
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def is_rate_limited(response: requests.Response) -> bool:
    """Return ``True`` for a 403 whose remaining quota is zero."""
    return response.status_code == 403 and response.headers.get("x-ratelimit-remaining") == "0"


class RateLimitedRequester:
    """Send GitHub API requests, waiting out rate-limit windows.

    Parameters
    ----------
    session:
        HTTP session used for every call; default headers are added to it.
    api_url:
        Base URL of the REST API.
    api_version:
        Value of the ``X-GitHub-Api-Version`` header.
    token:
        Optional bearer token.
    timeout:
        Per-request timeout in seconds.
    max_rate_limit_retries:
        Consecutive rate-limit waits allowed for one request; ``None`` keeps
        waiting for as long as GitHub keeps rejecting.
    clock / sleep:
        Time source and sleep function; injectable for tests.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        api_url: str = "https://api.github.com",
        api_version: str = "2022-11-28",
        token: str = "",
        timeout: float = 30.0,
        max_rate_limit_retries: int | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": api_version,
            }
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.max_rate_limit_retries = max_rate_limit_retries
        self._clock = clock
        self._sleep = sleep

    @classmethod
    def from_settings(cls, config: Settings = settings, **kwargs: Any) -> RateLimitedRequester:
        return cls(
            api_url=config.github_api_url,
            api_version=config.github_api_version,
            token=config.github_token,
            timeout=config.github_timeout,
            max_rate_limit_retries=config.max_rate_limit_retries,
            **kwargs,
        )

    # -- public API -----------------------------------------------------------

    def send(self, request: ApiRequest) -> requests.Response:
        """Send *request*, re-sending it after every rate-limit rejection.

        Raises
        ------
        HostingAPIError
            For any non-2xx response that is not a rate-limit rejection, or
            when the request could not be sent at all.
        RateLimitExceeded
            Only when ``max_rate_limit_retries`` is set and used up.
        """
        waits = 0
        while True:
            response = self._send_once(request)
            if not is_rate_limited(response):
                break

            if self.max_rate_limit_retries is not None and waits >= self.max_rate_limit_retries:
                raise RateLimitExceeded(
                    f"Still rate limited after {waits} waits",
                    status=response.status_code,
                    request=request,
                )
            retry_after = RateLimitState.from_response(response).seconds_until_reset(self._clock())
            logger.warning("Rate limited. Retrying in %d seconds...", retry_after)
            self._sleep(retry_after)
            waits += 1

        if not response.ok:
            raise HostingAPIError(_error_message(response), status=response.status_code, request=request)
        return response

    def get_json(self, request: ApiRequest) -> Any:
        """Send *request* and return its decoded JSON body."""
        return self.send(request).json()

    # -- internals ------------------------------------------------------------

    def _send_once(self, request: ApiRequest) -> requests.Response:
        try:
            return self._session.request(
                request.method,
                self.api_url + request.url_path(),
                params=request.params or None,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise HostingAPIError(str(exc), request=request) from exc


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason or "request failed"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason or "request failed"
