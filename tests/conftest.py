"""Pytest fixtures for the problem details test suite."""

from __future__ import annotations

from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from starlette_problems import Problems, PydanticProblemConverter
from starlette_problems.core import configure_logging, get_settings

from .fixtures import build_app


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> None:
    configure_logging()


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    try:
        yield
    finally:
        get_settings.cache_clear()


@pytest.fixture
def problems() -> Problems:
    return Problems(converter=PydanticProblemConverter())


@pytest.fixture
def client_for() -> Callable[..., TestClient]:
    """Install ``problems`` on a fresh copy of the demo app and return a client."""

    def factory(problems: Problems, app: FastAPI | None = None) -> TestClient:
        target = app or build_app()
        problems.install(target)
        return TestClient(target)

    return factory


@pytest.fixture
def make_request() -> Callable[..., Request]:
    def factory(path: str = "/orders/42", method: str = "GET", **scope: Any) -> Request:
        base = {
            "type": "http",
            "http_version": "1.1",
            "method": method,
            "scheme": "http",
            "server": ("testserver", 80),
            "root_path": "",
            "path": path,
            "raw_path": path.encode(),
            "query_string": b"",
            "headers": [],
            "state": {},
        }
        base.update(scope)
        return Request(base)

    return factory
