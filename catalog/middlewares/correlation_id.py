"""
Request correlation ids.

Every request carries a short id, taken from the client's X-Correlation-ID
header when it is usable or generated otherwise. Log lines written while
the request is handled include it, and it is echoed back on the response.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from catalog.constants import CORRELATION_ID_HEADER, CORRELATION_ID_LENGTH

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Header values are echoed into logs and responses; keep them plain
_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


def _new_correlation_id() -> str:
    return uuid.uuid4().hex[:CORRELATION_ID_LENGTH]


def normalize_correlation_id(value: str | None) -> str:
    """
    Make a client-supplied correlation id safe to log.

    Unsafe characters are dropped and the result is cut to
    CORRELATION_ID_LENGTH; an empty result is replaced by a fresh id.
    """
    cleaned = _UNSAFE_CHARS_RE.sub("", value or "")[:CORRELATION_ID_LENGTH]
    return cleaned or _new_correlation_id()


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id to the request, its log context and its response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        cid = normalize_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        request.state.request_id = cid

        token = correlation_id.set(cid)
        try:
            response = await call_next(request)
        finally:
            correlation_id.reset(token)

        response.headers[CORRELATION_ID_HEADER] = cid
        return response


def get_correlation_id() -> str:
    """Correlation id of the current request, or "" outside a request."""
    return correlation_id.get()
