"""Perch — compose HTTP endpoints, groups, and middleware into one dispatch table.

Declare endpoints with ``handle()``, bundle them into nested groups,
attach middleware at any level with ``wrap()``, and let the ``Router``
flatten everything into a ``ServeMux`` (an ASGI application).

Basic usage::

    from perch import Group, handle, new_router

    def index(request):
        return "Hello, World!"

    app = new_router().add(
        handle("/", index),
        Group().add(handle("/admin/", admin)).wrap(require_admin),
    ).compose()

Middleware is a plain ``Handler -> Handler`` function. For
``[m1, m2, m3]`` the handler becomes ``m3(m2(m1(h)))``: route
middleware sits innermost, then each enclosing group, then the router.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Group",
    "HTTPError",
    "InvalidHandlerError",
    "InvalidMemberError",
    "NotFound",
    "PerchError",
    "Redirect",
    "Request",
    "Response",
    "Route",
    "Router",
    "Routes",
    "ServeMux",
    "ServerConfig",
    "around",
    "handle",
    "new_router",
    "redirect",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name in ("Group", "Route", "Router", "Routes", "ServeMux", "handle", "new_router"):
        from perch import routing as _routing

        return getattr(_routing, name)

    if name in ("around", "redirect"):
        from perch import middleware as _mw

        return getattr(_mw, name)

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from perch.http import response as _resp

        return getattr(_resp, name)

    if name == "ServerConfig":
        from perch.config import ServerConfig

        return ServerConfig

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InvalidHandlerError",
        "InvalidMemberError",
        "NotFound",
        "PerchError",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
