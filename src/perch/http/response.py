"""Responses as values.

Handlers and middleware never write to the connection: they return a
Response, and a middleware that wants to add a header returns a changed
copy of the one it got from ``next``.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, replace
from http import HTTPStatus


@dataclass(frozen=True, slots=True)
class Response:
    """Status, content type, extra headers and body of an HTTP response.

    Header names keep the case they were given; ``header()`` looks them
    up case-insensitively. ``content-length`` is never stored here, the
    sender computes it.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """A copy with ``name: value`` appended; existing values are kept."""
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str, default: str | None = None) -> str | None:
        """The first value stored under *name*, or *default*."""
        return next(
            (value for key, value in self.headers if key.lower() == name.lower()),
            default,
        )

    @property
    def body_bytes(self) -> bytes:
        """The body as sent on the wire (UTF-8 for text bodies)."""
        return self.body if isinstance(self.body, bytes) else self.body.encode("utf-8")

    @property
    def text(self) -> str:
        return self.body_bytes.decode("utf-8")


@dataclass(frozen=True, slots=True)
class Redirect:
    """Handler return value asking for a redirect to *url*."""

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()


def redirect_response(url: str, status: int = 302, *, method: str = "GET") -> Response:
    """Build a redirect Response with a ``Location`` header.

    GET and HEAD requests also get a short HTML body linking to *url*,
    as browsers without redirect support would show it.
    """
    response = Response(status=status, headers=(("Location", url),))
    if method not in ("GET", "HEAD"):
        return response
    link = f'<a href="{html.escape(url)}">{HTTPStatus(status).phrase}</a>.\n'
    return replace(response, body=link, content_type="text/html; charset=utf-8")
