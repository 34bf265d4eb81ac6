from __future__ import annotations

"""Functional test bootstrap for the conformance API.

Builds the FastAPI app in-process via TestClient. Configuration is pinned
through environment variables before any app import so a stray
`conformance_config.json` in the working directory cannot change results.
"""

import os
import pathlib
from typing import Any, Optional

import pytest

os.environ["CONFORMANCE_SERVICE_MODE"] = "memory"
os.environ.pop("CONFORMANCE_TESTS_PATH", None)

FIXTURES_DIR = pathlib.Path(__file__).resolve().parents[1] / "fixtures"
CONFORMANCE_TESTS_FILE = FIXTURES_DIR / "conformance_tests.json"


class StubApi:
    """API service double returning pre-set results per operation.

    Records every typed request it receives in ``calls`` as
    ``(operation, request)`` tuples.
    """

    def __init__(self, results: Optional[dict[str, Any]] = None) -> None:
        self.results: dict[str, Any] = dict(results or {})
        self.calls: list[tuple[str, Any]] = []

    def __getattr__(self, operation: str):  # type: ignore[no-untyped-def]
        if operation.startswith("_"):
            raise AttributeError(operation)

        async def call(request):  # type: ignore[no-untyped-def]
            self.calls.append((operation, request))
            return self.results[operation]

        return call


@pytest.fixture()
def memory_client():
    """TestClient over a fresh in-memory widget service."""
    from fastapi.testclient import TestClient
    from conformance_server.main import create_app
    from conformance_server.logic.memory_service import InMemoryWidgetService

    api = InMemoryWidgetService(version="test")
    with TestClient(create_app(api=api)) as client:
        client.api = api  # type: ignore[attr-defined]
        yield client


@pytest.fixture()
def stub_api() -> StubApi:
    return StubApi()


@pytest.fixture()
def stub_client(stub_api: StubApi):
    """TestClient over a StubApi; server errors surface as responses."""
    from fastapi.testclient import TestClient
    from conformance_server.main import create_app

    with TestClient(create_app(api=stub_api), raise_server_exceptions=False) as client:
        yield client


@pytest.fixture()
def conformance_client():
    """TestClient over the fixture-driven service using the sample fixture file."""
    from fastapi.testclient import TestClient
    from conformance_server.main import create_app
    from conformance_server.logic.conformance_service import ConformanceApiService
    from conformance_server.logic.fixtures_loader import load_conformance_tests

    api = ConformanceApiService(load_conformance_tests(CONFORMANCE_TESTS_FILE))
    with TestClient(create_app(api=api)) as client:
        yield client
