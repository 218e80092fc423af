"""Route, Routes, and handle() — the leaves of a route tree.

``handle()`` is the only way to turn an endpoint into a Route. Groups
and Routers accept Routes, never raw handlers, so every endpoint passes
through the same normalization and per-route middleware.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from perch._internal.invoke import invoke
from perch._internal.types import Handler, HandlerLike, Middleware
from perch.errors import InvalidHandlerError, InvalidPatternError
from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import apply, check_middleware
from perch.server.negotiation import negotiate

if TYPE_CHECKING:
    from perch.routing.mux import ServeMux


def describe(handler: Any) -> str:
    """A readable name for a handler-like value."""
    if callable(getattr(handler, "serve", None)) and not isinstance(handler, type):
        return type(handler).__qualname__
    return getattr(handler, "__qualname__", None) or repr(handler)


def as_handler(handler: HandlerLike) -> Handler:
    """Normalize a handler-like value into an async ``Request -> Response`` handler.

    Accepted, checked in this order:

    1. an object with a callable ``serve(request)`` attribute (a
       ``ServeMux`` qualifies, so muxes can be mounted under a pattern);
    2. a plain function or callable object taking the request.

    Sync and async callables are both accepted, and any return value
    ``negotiate()`` understands is converted to a Response.

    Raises:
        InvalidHandlerError: For classes and non-callable values.
    """
    if isinstance(handler, type):
        msg = f"require an object with serve() or a request handler function, got class: {handler.__name__}"
        raise InvalidHandlerError(msg)

    serve = getattr(handler, "serve", None)
    if callable(serve):
        target = serve
    elif callable(handler):
        target = handler
    else:
        msg = f"require an object with serve() or a request handler function, got: {type(handler).__name__}"
        raise InvalidHandlerError(msg)

    async def endpoint(request: Request) -> Response:
        return negotiate(await invoke(target, request))

    if target is handler:
        functools.update_wrapper(endpoint, handler)
    else:
        endpoint.__name__ = endpoint.__qualname__ = describe(handler)
    return endpoint


@dataclass(frozen=True, slots=True)
class Route:
    """A URL pattern bound to a fully wrapped handler.

    Created by ``handle()``. ``wrap()`` returns a new Route; the pattern
    never changes once set. ``name`` records the original endpoint for
    introspection and is carried through every wrap.
    """

    pattern: str
    handler: Handler
    name: str | None = None

    def wrap(self, *middleware: Middleware) -> Route:
        """Return a copy whose handler is further wrapped by *middleware*.

        The new middleware runs outside everything already applied, so
        ``route.wrap(m1).wrap(m2)`` behaves like ``route.wrap(m1, m2)``.
        """
        checked = check_middleware(middleware)
        return replace(self, handler=apply(self.handler, checked))


def handle(pattern: str, handler: HandlerLike, *middleware: Middleware) -> Route:
    """Bind *handler* to *pattern*, wrapped by *middleware*.

    Middleware is applied left to right, each one wrapping the result
    of the previous::

        handle("/", index, m1, m2, m3)  # handler is m3(m2(m1(index)))

    On a request m3's code before ``await next(request)`` runs first and
    its code after runs last.

    Raises:
        InvalidPatternError: If *pattern* is empty or not a string.
        InvalidHandlerError: If *handler* cannot serve a request.
        InvalidMiddlewareError: If any middleware is not callable.
    """
    if not isinstance(pattern, str) or not pattern:
        msg = f"route pattern must be a non-empty string, got: {pattern!r}"
        raise InvalidPatternError(msg)
    endpoint = as_handler(handler)
    return Route(pattern, endpoint, name=describe(handler)).wrap(*middleware)


class Routes(tuple[Route, ...]):
    """An ordered, flat collection of Routes.

    What ``Group.compose()`` returns, and usable on its own when no
    nested scoping is needed::

        mux = Routes([handle("/", index), handle("/about", about)]).wrap(logged).serve()
    """

    __slots__ = ()

    def __new__(cls, routes: Iterable[Route] = ()) -> Routes:
        return super().__new__(cls, routes)

    def wrap(self, *middleware: Middleware) -> Routes:
        """Return a copy with every route wrapped by *middleware*."""
        checked = check_middleware(middleware)
        return Routes(route.wrap(*checked) for route in self)

    def serve(self) -> ServeMux:
        """Register every route on a new ServeMux and return it."""
        from perch.routing.mux import ServeMux

        mux = ServeMux()
        for route in self:
            mux.handle(route.pattern, route.handler)
        return mux

    def __repr__(self) -> str:
        return f"Routes({[route.pattern for route in self]!r})"
