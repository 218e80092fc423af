"""Shared fixtures: request construction and middleware call tracing."""

from collections.abc import Callable
from typing import Any

import pytest

from perch.http.request import Request


def _scope(
    path: str = "/",
    *,
    method: str = "GET",
    host: str | None = "localhost:8080",
    query: str = "",
) -> dict[str, Any]:
    headers = [(b"host", host.encode("latin-1"))] if host is not None else []
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": headers,
        "server": ("localhost", 8080),
        "client": ("127.0.0.1", 54321),
    }


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Build a Request without going through ASGI."""

    def make(path: str = "/", **kwargs: Any) -> Request:
        return Request.from_asgi(_scope(path, **kwargs))

    return make


@pytest.fixture
def calls() -> list[str]:
    """Ordered record of what ran during a request."""
    return []


@pytest.fixture
def tracer(calls: list[str]) -> Callable[[str], Callable[..., Any]]:
    """Factory for middleware that records ``name>`` before and ``<name`` after."""

    def make(name: str) -> Callable[..., Any]:
        def middleware(next):
            async def handler(request):
                calls.append(f"{name}>")
                response = await next(request)
                calls.append(f"<{name}")
                return response

            return handler

        return middleware

    return make


@pytest.fixture
def endpoint(calls: list[str]) -> Callable[[Request], str]:
    """A plain endpoint that records ``h`` and answers ``ok``."""

    def index(request: Request) -> str:
        calls.append("h")
        return "ok"

    return index
