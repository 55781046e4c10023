"""Observability infrastructure for structured logging."""

from tunelist.infrastructure.observability.logger_template import (
    end_operation,
    log_operation,
    start_operation,
)
from tunelist.infrastructure.observability.logging import (
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)
from tunelist.infrastructure.observability.middleware import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
    "end_operation",
    "get_correlation_id",
    "log_operation",
    "set_correlation_id",
    "start_operation",
]
