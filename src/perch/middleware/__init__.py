"""Middleware — plain ``Handler -> Handler`` functions, no inheritance required.

A middleware is any callable matching:
    def mw(next: Handler) -> Handler

Helpers:
    apply -- Fold a sequence of middleware onto a handler
    around -- Adapt a ``(request, next)`` callable into a middleware

Built-in handlers:
    redirect -- Send plain-HTTP requests to their HTTPS equivalent
"""

from perch.middleware.protocol import apply, around, check_middleware
from perch.middleware.redirect import redirect

__all__ = [
    "apply",
    "around",
    "check_middleware",
    "redirect",
]
