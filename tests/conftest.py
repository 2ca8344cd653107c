"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


@pytest.fixture()
def events() -> list:
    """Shared, ordered log of requests, submissions and sleeps."""
    return []


@pytest.fixture()
def sleeper(events: list) -> Callable[[float], None]:
    """Sleep replacement that only records the requested pause."""

    def _sleep(seconds: float) -> None:
        events.append(("sleep", seconds))

    return _sleep
