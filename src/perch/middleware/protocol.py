"""Middleware protocol and the wrap loop.

A middleware is any callable that takes a handler and returns a handler::

    def timing(next: Handler) -> Handler:
        async def handler(request: Request) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        return handler

No base class required. ``apply()`` is the only place a sequence of
middleware is folded onto a handler, so every level of the route tree
(route, group, router) nests the same way: for ``[m1, m2, m3]`` the
result is ``m3(m2(m1(h)))``. On a request m3 runs first and finishes
last.
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeAlias

from perch._internal.invoke import invoke
from perch._internal.types import Handler, Middleware
from perch.errors import InvalidMiddlewareError
from perch.http.request import Request
from perch.http.response import Response
from perch.server.negotiation import negotiate

# Middleware written as (request, next) -> response
Around: TypeAlias = Callable[[Request, Handler], Awaitable[Any] | Any]


def check_middleware(middleware: Iterable[Any]) -> tuple[Middleware, ...]:
    """Return *middleware* as a tuple, rejecting anything not callable."""
    checked = tuple(middleware)
    for mw in checked:
        if not callable(mw):
            msg = f"middleware must be callable, got: {type(mw).__name__}"
            raise InvalidMiddlewareError(msg)
    return checked


def apply(handler: Handler, middleware: Iterable[Middleware]) -> Handler:
    """Wrap *handler* with each middleware in order; the last one ends up outermost."""
    for mw in middleware:
        handler = mw(handler)
    return handler


def around(fn: Around) -> Middleware:
    """Adapt a ``(request, next)`` callable into a wrap-style middleware.

    Usage::

        async def auth(request, next):
            if "authorization" not in request.headers:
                return Response("unauthorized", status=401)
            return await next(request)

        group = Group().wrap(around(auth))

    *fn* may be sync or async and may return any value ``negotiate()``
    understands.
    """

    def middleware(next: Handler) -> Handler:
        async def handler(request: Request) -> Response:
            return negotiate(await invoke(fn, request, next))

        handler.__name__ = getattr(fn, "__name__", "around")
        return handler

    middleware.__name__ = getattr(fn, "__name__", "around")
    return middleware
