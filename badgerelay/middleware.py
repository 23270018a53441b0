"""Request-ID middleware for badgerelay.

Assigns a ULID to every inbound request, binds it into the structlog
context for the duration of the request and echoes it back in the
``X-Request-ID`` response header so client reports can be matched to logs.
A well-formed incoming ``X-Request-ID`` is reused instead of generating one.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from badgerelay.utils.logger import bind_request_id, unbind_request_id
from badgerelay.utils.ulid import generate_ulid

REQUEST_ID_HEADER = "X-Request-ID"

# Upper bound on a caller-supplied request ID; longer values are replaced.
_MAX_INCOMING_ID_LENGTH = 128


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a per-request correlation ID into logs and the response."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        incoming = request.headers.get(REQUEST_ID_HEADER)
        if incoming and len(incoming) <= _MAX_INCOMING_ID_LENGTH and incoming.isprintable():
            request_id = incoming
        else:
            request_id = generate_ulid()

        bind_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            unbind_request_id()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
