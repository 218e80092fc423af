"""HTTPS redirect handler.

A standalone endpoint, usually served on the plain-HTTP port, that
answers every request with a 307 to the same path and query on
``https://``. Requests addressed to ``localhost`` on the HTTP port are
pointed at the HTTPS port instead::

    mux = Routes([handle("/", redirect(":8080", ":8443"))]).serve()
"""

from perch._internal.types import Handler
from perch.http.request import Request
from perch.http.response import Response, redirect_response

TEMPORARY_REDIRECT = 307


def redirect(http: str, https: str) -> Handler:
    """Return a handler that redirects any request to its HTTPS equivalent.

    Args:
        http: Port suffix of the plain-HTTP listener, e.g. ``":8080"``.
        https: Port suffix of the TLS listener, e.g. ``":8443"``.

    Only a host of exactly ``"localhost" + http`` is rewritten; every other
    host is kept as sent. The query is appended only when present, so the
    target never ends in a bare ``?``.
    """
    plain_host = "localhost" + http
    tls_host = "localhost" + https

    async def redirect_to_https(request: Request) -> Response:
        host = tls_host if request.host == plain_host else request.host
        target = "https://" + host + request.path
        if request.raw_query:
            target += "?" + request.raw_query
        return redirect_response(target, TEMPORARY_REDIRECT, method=request.method)

    return redirect_to_https
