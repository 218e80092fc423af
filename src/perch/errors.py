"""Perch exception hierarchy.

Shared across handle(), Group, Router, ServeMux, and the ASGI pipeline
so every module raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when the route tree is built from invalid parts.

    Always raised while composing, before any request is served.
    The ``perch`` CLI turns it into a message and exit status 1.
    """


class InvalidHandlerError(ConfigurationError):
    """``handle()`` received something that cannot serve a request."""


class InvalidMemberError(ConfigurationError):
    """``Group.add()`` or ``Router.add()`` received something other than Groups or Routes."""


class InvalidPatternError(ConfigurationError):
    """A route pattern is empty or not a string."""


class InvalidMiddlewareError(ConfigurationError):
    """A middleware passed to ``wrap()`` is not callable."""


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers or middleware. The ASGI handler catches these
    and answers with the status, detail, and extra headers.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no pattern matched the request path."""

    def __init__(self, detail: str = "404 page not found") -> None:
        super().__init__(status=404, detail=detail)
