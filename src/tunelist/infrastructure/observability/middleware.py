"""Middleware for observability: request/response logging."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from tunelist.infrastructure.observability.logging import (
    get_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)


# Hey future me, this wraps EVERY request: sets the correlation ID (from X-Correlation-ID or a
# fresh UUID), logs method/path before and status/duration after, and echoes the ID back in the
# response header. Request bodies are only logged when log_request_body=True - keep it off in prod.
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    def __init__(self, app: ASGIApp, log_request_body: bool = False) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            log_request_body: Whether to log request body (can be verbose)
        """
        super().__init__(app)
        self.log_request_body = log_request_body

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and log details.

        Args:
            request: Incoming request
            call_next: Next middleware/handler in chain

        Returns:
            Response from application
        """
        set_correlation_id(request.headers.get("X-Correlation-ID"))

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        extra: dict[str, object] = {
            "method": method,
            "path": path,
            "query_params": str(request.query_params),
            "client_ip": client_ip,
        }
        if self.log_request_body and method in {"POST", "PUT", "PATCH"}:
            body = await request.body()
            extra["body"] = body.decode("utf-8", errors="replace")[:2000]

        logger.info(f"→ {method} {path}", extra=extra)

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.exception(
                f"Request failed: {method} {path}",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": int(duration * 1000),
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        status_mark = "✓" if response.status_code < 400 else "✗"
        logger.info(
            f"{status_mark} {method} {path} → {response.status_code} ({duration_ms}ms)",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers["X-Correlation-ID"] = get_correlation_id()
        return response
