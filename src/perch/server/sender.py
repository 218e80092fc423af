"""Write a Response to an ASGI ``send`` callable."""

from perch._internal.asgi import Send
from perch.http.response import Response


def _encode(name: str, value: str) -> tuple[bytes, bytes]:
    return name.lower().encode("latin-1"), value.encode("latin-1")


async def send_response(response: Response, send: Send) -> None:
    """Emit ``http.response.start`` then a single ``http.response.body``.

    Informational, 204 and 304 responses go out with an empty body
    whatever the Response holds. ``content-length`` always matches what
    is sent.
    """
    status = response.status
    bodiless = status < 200 or status in (204, 304)
    payload = b"" if bodiless else response.body_bytes

    headers = [
        _encode("content-type", response.content_type),
        *(_encode(name, value) for name, value in response.headers),
        _encode("content-length", str(len(payload))),
    ]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": payload})
