"""Shared type aliases used across perch modules."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from perch.http.request import Request
    from perch.http.response import Response

# Normalized route handler — what handle() produces and middleware wraps
Handler: TypeAlias = Callable[["Request"], Awaitable["Response"]]

# Middleware — transforms one handler into another
Middleware: TypeAlias = Callable[[Handler], Handler]

# Anything handle() may be given: a serve-capable object or a plain function
HandlerLike: TypeAlias = Any
