"""Target resolution — resolves ``"module:attribute"`` strings to a ServeMux.

Shared by ``perch routes`` and ``perch run``. The attribute may be a
Router, Group, Routes, or an already composed ServeMux, or a factory
returning one of those.
"""

import importlib
from typing import Any

from perch.routing.group import Group
from perch.routing.mux import ServeMux
from perch.routing.route import Routes
from perch.routing.router import Router


def load_target(import_string: str) -> Any:
    """Import the object named by *import_string*.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"router"`` (e.g. ``"myapp"`` resolves to
    ``myapp.router``). Factories are called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a route tree or dispatch table.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if isinstance(obj, (Router, Group, Routes, ServeMux)):
        return obj

    if callable(obj):
        obj = obj()
    if not isinstance(obj, (Router, Group, Routes, ServeMux)):
        msg = (
            f"{import_string!r} resolved to {type(obj).__name__}, "
            "not a perch Router, Group, Routes, or ServeMux"
        )
        raise TypeError(msg)
    return obj


def flatten(target: Any) -> Routes | None:
    """The final routes for a route tree; ``None`` for an already composed ServeMux."""
    match target:
        case Router():
            return target.routes_table()
        case Group():
            return target.compose()
        case Routes():
            return target
        case _:
            return None


def compose(target: Any) -> ServeMux:
    """Compose *target* into a ServeMux ready to serve."""
    match target:
        case Router():
            return target.compose()
        case Group():
            return target.compose().serve()
        case Routes():
            return target.serve()
        case _:
            return target
