"""The request as routing sees it.

A ServeMux decides on method, host and path; the HTTPS redirect
rebuilds its target from host, path and the raw query. Everything
else a handler might want is read lazily from the headers or the body.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any
from urllib.parse import parse_qs

from perch._internal.asgi import Receive, Scope
from perch.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """One incoming HTTP request, frozen at arrival.

    ``host`` is the ``Host`` header exactly as sent, port included
    (``"localhost:8080"``). ``raw_query`` is the query string without
    its ``?``, undecoded, ``""`` when there is none.
    """

    method: str
    path: str
    host: str
    raw_query: str = ""
    headers: Headers = field(default_factory=Headers)
    scheme: str = "http"
    client: tuple[str, int] | None = None

    _receive: Receive | None = field(default=None, repr=False, compare=False)
    # Filled on first body() call
    _body: list[bytes] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive | None = None) -> Request:
        """Build a Request from an HTTP connection scope.

        Without a ``Host`` header the server address stands in for it.
        """
        headers = Headers(scope.get("headers", ()))
        host = headers.get("host")
        if host is None:
            server = scope.get("server")
            host = f"{server[0]}:{server[1]}" if server else ""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            host=host,
            raw_query=scope.get("query_string", b"").decode("latin-1"),
            headers=headers,
            scheme=scope.get("scheme", "http"),
            client=tuple(client) if client else None,
            _receive=receive,
        )

    @property
    def url(self) -> str:
        """Path plus ``?query`` when a query was sent."""
        return f"{self.path}?{self.raw_query}" if self.raw_query else self.path

    @property
    def query(self) -> MappingProxyType[str, list[str]]:
        """The decoded query string, each name mapped to all its values."""
        return MappingProxyType(parse_qs(self.raw_query, keep_blank_values=True))

    def replace(self, **changes: Any) -> Request:
        """A copy with *changes* applied; the copy shares the body."""
        return replace(self, **changes)

    async def body(self) -> bytes:
        """The whole request body, read from ASGI once."""
        if not self._body:
            chunks = []
            more = self._receive is not None
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._body.append(b"".join(chunks))
        return self._body[0]
