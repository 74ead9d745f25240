"""
Middleware for injecting contextual fields into structured logs.

This middleware adds request-specific information to the log context
that will be included in all log messages during request processing.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from catalog.logging import clear_log_context, set_log_context


class LoggingContextMiddleware(BaseHTTPMiddleware):  # type: ignore[misc]
    """
    Middleware to inject contextual fields into structured logs.

    Adds endpoint, method and status_code to the log context and clears
    the context after the request completes.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        """
        Process request and inject logging context.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            Response from the endpoint.
        """
        set_log_context(
            endpoint=request.url.path,
            method=request.method,
        )

        try:
            response = await call_next(request)
            set_log_context(status_code=response.status_code)
        finally:
            clear_log_context()

        return response
