"""Router — the root of a route tree and owner of the dispatch table.

Routes and groups are collected during setup; ``compose()`` flattens
them, applies the router's middleware outermost, and registers the
result on a ServeMux in one pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from perch._internal.types import Middleware
from perch.middleware.protocol import check_middleware
from perch.routing.group import Group, split_members
from perch.routing.mux import ServeMux
from perch.routing.route import Route, Routes

logger = logging.getLogger("perch.routing")


@dataclass(frozen=True, slots=True)
class Router:
    """Collects your endpoints and composes them into a ServeMux.

    Middleware added with ``wrap()`` is the outermost layer of every
    route: it runs first when a request arrives and last when the
    response leaves.

    Usage::

        router = new_router().wrap(access_log).add(
            handle("/", index),
            Group().add(handle("/admin/", admin)).wrap(require_admin),
        )
        mux = router.compose()

    Copies made by ``add()``/``wrap()`` share the same ServeMux; use
    ``set()`` to bind a different one.
    """

    mux: ServeMux = field(default_factory=ServeMux)
    groups: tuple[Group, ...] = ()
    routes: tuple[Route, ...] = ()
    middleware: tuple[Middleware, ...] = ()

    def set(self, mux: ServeMux) -> Router:
        """Return a copy that registers into *mux*."""
        return replace(self, mux=mux)

    def wrap(self, *middleware: Middleware) -> Router:
        """Return a copy with *middleware* appended to the router's middleware."""
        checked = check_middleware(middleware)
        return replace(self, middleware=(*self.middleware, *checked))

    def add(self, *members: Any) -> Router:
        """Return a copy with Groups, Routes, or collections of either added.

        Raw handlers and pattern strings are rejected; wrap endpoints
        with ``handle()`` first.
        """
        groups, routes = split_members(members)
        return replace(self, groups=(*self.groups, *groups), routes=(*self.routes, *routes))

    def routes_table(self) -> Routes:
        """Flatten the tree into the final routes without registering them.

        Direct routes first, then each top-level group's composed routes
        in declaration order, all wrapped by the router's middleware.
        """
        flat: list[Route] = list(self.routes)
        for group in self.groups:
            flat.extend(group.compose())
        return Routes(route.wrap(*self.middleware) for route in flat)

    def compose(self, *members: Any) -> ServeMux:
        """Add *members*, flatten the whole tree, and register it on the mux.

        Each route's pattern is registered with its final handler in
        order; when a pattern repeats, the last registration wins.
        Returns the populated ServeMux.
        """
        router = self.add(*members)
        table = router.routes_table()
        for route in table:
            router.mux.handle(route.pattern, route.handler)
        logger.info("Composed %d routes", len(table))
        return router.mux


def new_router() -> Router:
    """Return a Router with a fresh ServeMux."""
    return Router()
