"""Routing — compose routes, groups, and middleware into a dispatch table.

Endpoints are bound with ``handle()``, grouped with ``Group``, and
collapsed by ``Router.compose()`` into a ServeMux during setup.
"""

from perch.routing.group import Group
from perch.routing.mux import ServeMux
from perch.routing.route import Route, Routes, handle
from perch.routing.router import Router, new_router

__all__ = [
    "Group",
    "Route",
    "Router",
    "Routes",
    "ServeMux",
    "handle",
    "new_router",
]
