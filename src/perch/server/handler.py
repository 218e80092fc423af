"""ASGI handler — translates ASGI scope/messages to perch types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through a ServeMux, and sends the
Response back through ASGI send().
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from perch._internal.asgi import ASGIApp, Receive, Scope, Send
from perch.errors import HTTPError
from perch.http.request import Request
from perch.server.errors import handle_http_error, handle_internal_error
from perch.server.sender import send_response

if TYPE_CHECKING:
    from perch.routing.mux import ServeMux

logger = logging.getLogger("perch.server")


def asgi_app(mux: ServeMux, *, debug: bool = False) -> ASGIApp:
    """The ASGI callable that serves *mux*.

    A ServeMux is already an ASGI app; this one also carries the debug
    setting, so unexpected errors answer with their traceback.
    """
    return functools.partial(handle_asgi, mux=mux, debug=debug)


async def handle_asgi(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    mux: ServeMux,
    debug: bool = False,
) -> None:
    """Route one ASGI connection scope to the right protocol handler."""
    if scope["type"] == "lifespan":
        await handle_lifespan(receive, send)
        return
    await handle_request(scope, receive, send, mux=mux, debug=debug)


async def handle_lifespan(receive: Receive, send: Send) -> None:
    """Run the ASGI lifespan protocol.

    The dispatch table is complete before serving starts, so startup and
    shutdown have nothing to do but acknowledge.
    """
    while True:
        message = await receive()
        msg_type = message["type"]

        if msg_type == "lifespan.startup":
            logger.debug("Lifespan startup")
            await send({"type": "lifespan.startup.complete"})
        elif msg_type == "lifespan.shutdown":
            logger.debug("Lifespan shutdown")
            await send({"type": "lifespan.shutdown.complete"})
            return


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    mux: ServeMux,
    debug: bool = False,
) -> None:
    """Process a single HTTP request through the dispatch table."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await mux.serve(request)
    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)

    await send_response(response, send)
