"""ServeMux — the dispatch table a composed route tree is registered into.

Patterns follow the classic ``net/http`` multiplexer rules:

- ``/about`` matches only ``/about``.
- ``/static/`` names a rooted subtree: it matches ``/static/`` and
  everything below it. The longest matching subtree wins.
- ``example.com/`` is host-specific and is tried before the generic
  patterns for requests whose ``Host`` is ``example.com``.
- Registering a pattern twice replaces the earlier handler.

Non-canonical paths (``//``, ``.``, ``..``) are redirected to their
cleaned form, and ``/static`` is redirected to ``/static/`` when only
the subtree is registered. Both redirects are 301 and keep the query.

``CONNECT`` requests carry an authority, not a path: they are matched
as sent, with the ``Host`` port kept and no path cleaning. Only the
trailing-slash redirect applies to them.
"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import invoke
from perch._internal.types import Handler
from perch.errors import InvalidHandlerError, InvalidPatternError
from perch.http.request import Request
from perch.http.response import Response, redirect_response
from perch.server.negotiation import negotiate

logger = logging.getLogger("perch.routing")

MOVED_PERMANENTLY = 301


@dataclass(frozen=True, slots=True)
class MuxEntry:
    """A registered ``(pattern, handler)`` pair."""

    pattern: str
    handler: Any


def clean_path(path: str) -> str:
    """Return the canonical form of *path*.

    Collapses repeated slashes, resolves ``.`` and ``..``, and keeps a
    trailing slash::

        clean_path("")             -> "/"
        clean_path("a//b/../c/")   -> "/a/c/"
    """
    if not path:
        return "/"
    if not path.startswith("/"):
        path = "/" + path
    cleaned = posixpath.normpath(path)
    # POSIX keeps a leading "//" as implementation-defined; URLs do not
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    if path.endswith("/") and cleaned != "/":
        cleaned += "/"
    return cleaned


def strip_host_port(host: str) -> str:
    """Remove the ``:port`` suffix from a Host header value.

    Values that are not ``host:port`` (an unbracketed IPv6 address, say)
    are returned unchanged.
    """
    if ":" not in host:
        return host
    if host.startswith("["):
        # IPv6 literal: [::1]:8080
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    if host.count(":") > 1:
        return host
    return host.rsplit(":", 1)[0]


def _redirect_handler(url: str) -> Handler:
    async def redirect(request: Request) -> Response:
        return redirect_response(url, MOVED_PERMANENTLY, method=request.method)

    return redirect


async def not_found(request: Request) -> Response:  # noqa: ARG001
    """Answer 404 for requests no pattern matches."""
    return Response(body="404 page not found\n", status=404)


class ServeMux:
    """Request multiplexer: maps URL patterns to handlers.

    Usage::

        mux = ServeMux()
        mux.handle("/", index)
        mux.handle("/static/", files)
        handler, pattern = mux.match("example.com", "/static/app.css")

    A ServeMux is itself a serve-capable handler (``serve()``) and an
    ASGI application (``__call__``).
    """

    __slots__ = ("_exact", "_hosts", "_subtrees")

    def __init__(self) -> None:
        self._exact: dict[str, MuxEntry] = {}
        # Subtree patterns, longest first
        self._subtrees: list[MuxEntry] = []
        self._hosts = False

    # -- Registration --

    def handle(self, pattern: str, handler: Any) -> None:
        """Register *handler* for *pattern*. A later registration of the same pattern wins."""
        if not isinstance(pattern, str) or not pattern:
            msg = f"invalid pattern {pattern!r}"
            raise InvalidPatternError(msg)
        if handler is None or not (callable(handler) or callable(getattr(handler, "serve", None))):
            msg = f"handler for {pattern!r} must be callable or have serve(), got: {type(handler).__name__}"
            raise InvalidHandlerError(msg)

        entry = MuxEntry(pattern, handler)
        if pattern in self._exact:
            logger.warning("Pattern %r registered again; the later handler wins", pattern)
            self._subtrees = [e for e in self._subtrees if e.pattern != pattern]
        self._exact[pattern] = entry

        if pattern.endswith("/"):
            index = 0
            while index < len(self._subtrees) and len(self._subtrees[index].pattern) >= len(pattern):
                index += 1
            self._subtrees.insert(index, entry)
        if not pattern.startswith("/"):
            self._hosts = True
        logger.debug("Registered %s", pattern)

    # -- Introspection --

    @property
    def patterns(self) -> list[str]:
        """Registered patterns, in first-registration order."""
        return list(self._exact)

    def entries(self) -> list[MuxEntry]:
        """Registered entries, in first-registration order."""
        return list(self._exact.values())

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._exact

    def __len__(self) -> int:
        return len(self._exact)

    def __repr__(self) -> str:
        return f"ServeMux({self.patterns!r})"

    # -- Matching --

    def _match_path(self, path: str) -> tuple[Any, str] | None:
        entry = self._exact.get(path)
        if entry is not None:
            return entry.handler, entry.pattern
        for entry in self._subtrees:
            if path.startswith(entry.pattern):
                return entry.handler, entry.pattern
        return None

    def match(self, host: str, path: str) -> tuple[Any, str]:
        """Return ``(handler, pattern)`` for a host (without port) and a clean path.

        Falls back to ``(not_found, "")`` when nothing matches.
        """
        found = None
        if self._hosts:
            found = self._match_path(host + path)
        if found is None:
            found = self._match_path(path)
        if found is None:
            return not_found, ""
        return found

    def _should_redirect(self, host: str, path: str) -> bool:
        candidates = (path, host + path)
        if any(c in self._exact for c in candidates):
            return False
        if not path:
            return False
        if any(c + "/" in self._exact for c in candidates):
            return not path.endswith("/")
        return False

    def handler(self, request: Request) -> tuple[Any, str]:
        """Return the handler and pattern that should serve *request*.

        Redirect handlers are returned for non-canonical paths and for
        subtree roots requested without their trailing slash.
        """
        query = f"?{request.raw_query}" if request.raw_query else ""

        if request.method == "CONNECT":
            if self._should_redirect(request.host, request.path):
                target = request.path + "/"
                return _redirect_handler(target + query), target
            return self.match(request.host, request.path)

        host = strip_host_port(request.host)
        path = clean_path(request.path)

        if self._should_redirect(host, path):
            target = path + "/"
            return _redirect_handler(target + query), target

        if path != request.path:
            _, pattern = self.match(host, path)
            return _redirect_handler(path + query), pattern

        return self.match(host, request.path)

    # -- Serving --

    async def serve(self, request: Request) -> Response:
        """Dispatch *request* to the matching handler and return its response."""
        handler, _ = self.handler(request)
        target = getattr(handler, "serve", None)
        if not callable(target):
            target = handler
        return negotiate(await invoke(target, request))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point. Use ``asgi_app(mux, debug=True)`` to serve tracebacks."""
        from perch.server.handler import handle_asgi

        await handle_asgi(scope, receive, send, mux=self)
