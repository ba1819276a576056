"""ASGI response sending: turns a finished ``Context`` into ASGI messages."""

import json
import logging
from dataclasses import dataclass
from http import HTTPStatus

from switchyard._internal.asgi import Send
from switchyard.context import Context
from switchyard.errors import HTTPError

logger = logging.getLogger("switchyard.server")


@dataclass(frozen=True, slots=True)
class Response:
    """Status, headers, and encoded body ready to send."""

    status: int
    body: bytes = b""
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()


def _phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def response_from_context(context: Context) -> Response:
    """Build the response a handler chain left on *context*.

    Nothing set at all means nothing handled the request: 404.
    A body without a status is a 200.
    """
    headers = tuple(context.headers)
    body = context.body

    if body is None:
        status = context.status or 404
        return Response(status=status, body=_phrase(status).encode("utf-8"), headers=headers)

    status = context.status or 200
    if isinstance(body, bytes):
        return Response(status, body, "application/octet-stream", headers)
    if isinstance(body, (dict, list)):
        return Response(status, json.dumps(body).encode("utf-8"), "application/json", headers)
    return Response(status, str(body).encode("utf-8"), headers=headers)


def response_from_error(exc: HTTPError) -> Response:
    """Map an ``HTTPError`` to its status, with the detail as the body."""
    detail = exc.detail or _phrase(exc.status)
    return Response(exc.status, detail.encode("utf-8"), headers=exc.headers)


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a ``Response`` into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            # HEAD keeps content-length but sends no body
            "body": b"" if head else body,
        }
    )
