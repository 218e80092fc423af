"""Group — a composite of routes and sub-groups with scoped middleware.

A Group is pure data until ``compose()`` flattens it. Every builder
method returns a new Group, so partially built groups can be shared
and extended without affecting each other::

    api = Group().add(
        handle("/api/users", users),
        Group().add(handle("/api/admin", admin)).wrap(require_admin),
    ).wrap(json_errors)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from perch._internal.types import Middleware
from perch.errors import InvalidMemberError
from perch.middleware.protocol import check_middleware
from perch.routing.route import Route, Routes


def split_members(members: Iterable[Any]) -> tuple[tuple[Group, ...], tuple[Route, ...]]:
    """Sort ``add()`` arguments into groups and routes, keeping order.

    Each member is a Group, a Route, or a list/tuple/Routes holding only
    Groups or only Routes. Raw strings and bare callables are rejected
    with a pointer to ``handle()``.

    Raises:
        InvalidMemberError: For any other value.
    """
    groups: list[Group] = []
    routes: list[Route] = []
    for member in members:
        match member:
            case Group():
                groups.append(member)
            case Route():
                routes.append(member)
            case str():
                msg = f"use perch.handle() to add an endpoint, got pattern string {member!r}"
                raise InvalidMemberError(msg)
            case list() | tuple():
                items = tuple(member)
                if all(isinstance(item, Group) for item in items):
                    groups.extend(items)
                elif all(isinstance(item, Route) for item in items):
                    routes.extend(items)
                else:
                    kinds = sorted({type(item).__name__ for item in items})
                    msg = f"a collection must hold only Groups or only Routes, got: {', '.join(kinds)}"
                    raise InvalidMemberError(msg)
            case _ if callable(member):
                msg = f"use perch.handle() to add an endpoint, got: {type(member).__name__}"
                raise InvalidMemberError(msg)
            case _:
                msg = f"unknown type: {type(member).__name__}"
                raise InvalidMemberError(msg)
    return tuple(groups), tuple(routes)


@dataclass(frozen=True, slots=True)
class Group:
    """Routes and sub-groups sharing a list of middleware.

    The group's middleware wraps every route it contains, directly or
    through sub-groups, outside any middleware those routes or
    sub-groups already carry.
    """

    groups: tuple[Group, ...] = ()
    routes: tuple[Route, ...] = ()
    middleware: tuple[Middleware, ...] = ()

    def add(self, *members: Any) -> Group:
        """Return a copy with *members* (Groups, Routes, or collections of either) added."""
        groups, routes = split_members(members)
        return replace(self, groups=(*self.groups, *groups), routes=(*self.routes, *routes))

    def wrap(self, *middleware: Middleware) -> Group:
        """Return a copy with *middleware* appended to the group's own middleware."""
        checked = check_middleware(middleware)
        return replace(self, middleware=(*self.middleware, *checked))

    def compose(self) -> Routes:
        """Flatten the group into fully wrapped routes.

        Order: the group's direct routes, then each sub-group's composed
        routes in declaration order. Every route is then wrapped by the
        group's middleware in declaration order. Patterns are untouched
        and the group itself is not modified.
        """
        flat: list[Route] = list(self.routes)
        for group in self.groups:
            flat.extend(group.compose())
        return Routes(route.wrap(*self.middleware) for route in flat)
