"""Content negotiation — maps handler return values to Response objects.

Endpoint functions may return a Response or a plain value; middleware
always sees a Response. isinstance-based dispatch, no magic, fully
predictable.
"""

import json as json_module
from typing import Any

from perch.http.response import Redirect, Response


def negotiate(value: Any) -> Response:
    """Convert an endpoint's return value to a Response.

    Dispatch order:

    1. ``Response``      -> returned as-is
    2. ``Redirect``      -> status with Location header
    3. ``str``           -> 200 text/plain
    4. ``bytes``         -> 200 application/octet-stream
    5. ``dict``/``list`` -> 200 application/json
    6. ``None``          -> 204 No Content

    Anything else raises ``TypeError``; the ASGI handler reports it as a 500.
    """
    match value:
        case Response():
            return value
        case Redirect():
            return Response(status=value.status, headers=(("Location", value.url), *value.headers))
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value),
                content_type="application/json",
            )
        case None:
            return Response(body="", status=204)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return a Response, Redirect, str, bytes, dict, list, or None."
            )
            raise TypeError(msg)
