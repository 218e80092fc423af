"""Invoke helpers — call sync or async handlers uniformly.

Endpoint functions given to ``handle()`` can be ``def`` or ``async def``,
and so can a ``serve`` method. This module keeps the sync/async check
in exactly one place.

Usage::

    from perch._internal.invoke import invoke

    result = await invoke(handler, request)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        def health(request):
            return "ok"

        async def users(request):
            return await load_users()
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
