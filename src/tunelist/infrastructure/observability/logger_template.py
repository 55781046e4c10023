"""Shared helpers for consistent operation logging.

USAGE:
    from tunelist.infrastructure.observability.logger_template import (
        end_operation,
        log_operation,
        start_operation,
    )

    start_time, op_id = start_operation(logger, "playlist.add_track", playlist_id="xyz")
    ...
    end_operation(logger, "playlist.add_track", start_time, op_id, playlist_id="xyz")

    async with log_operation(logger, "playlist.delete", playlist_id="xyz"):
        await repository.delete(playlist_id)
"""

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any


# Hey future me, operation names follow "<area>.<action>" and every log gets the suffix
# .started / .completed / .failed, so grepping "playlist.add_tracks" shows the whole story.
def start_operation(
    logger: logging.Logger,
    operation: str,
    operation_id: str | None = None,
    log_level: int = logging.INFO,
    **context: Any,
) -> tuple[float, str]:
    """Log operation start and return timing info.

    Use this with end_operation() for manual timing control.

    Args:
        logger: Logger instance
        operation: Operation name
        operation_id: Optional unique ID for this operation instance
        log_level: Logging level (default INFO)
        **context: Additional fields

    Returns:
        (start_time, operation_id) - Pass to end_operation()
    """
    if operation_id is None:
        operation_id = str(uuid.uuid4())

    start_time = time.time()
    logger.log(
        log_level,
        f"{operation}.started",
        extra={**context, "operation_id": operation_id},
    )
    return start_time, operation_id


def end_operation(
    logger: logging.Logger,
    operation: str,
    start_time: float,
    operation_id: str,
    success: bool = True,
    error: Exception | None = None,
    log_level: int = logging.INFO,
    **context: Any,
) -> None:
    """Log operation end with duration.

    Args:
        logger: Logger instance
        operation: Operation name (must match start_operation)
        start_time: Start time from start_operation()
        operation_id: Operation ID from start_operation()
        success: Whether operation succeeded
        error: Exception if failed
        log_level: Logging level for success; failures log at WARNING
        **context: Additional fields (should match start_operation)
    """
    duration_ms = int((time.time() - start_time) * 1000)

    if success:
        logger.log(
            log_level,
            f"{operation}.completed",
            extra={
                **context,
                "operation_id": operation_id,
                "duration_ms": duration_ms,
            },
        )
    else:
        # Domain failures (not found, bad position) are caller errors, not crashes
        logger.warning(
            f"{operation}.failed",
            extra={
                **context,
                "operation_id": operation_id,
                "duration_ms": duration_ms,
                "error": str(error) if error else "Unknown error",
                "error_type": type(error).__name__ if error else "Unknown",
            },
        )


@asynccontextmanager
async def log_operation(
    logger: logging.Logger,
    operation: str,
    **context: Any,
) -> AsyncIterator[None]:
    """Context manager logging operation start/end with automatic timing.

    Logs {operation}.started, then {operation}.completed or {operation}.failed
    (with duration_ms). Exceptions are re-raised.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "playlist.delete")
        **context: Additional fields to include in logs
    """
    start_time, operation_id = start_operation(logger, operation, **context)
    try:
        yield
    except Exception as e:
        end_operation(
            logger, operation, start_time, operation_id, success=False, error=e, **context
        )
        raise
    end_operation(logger, operation, start_time, operation_id, **context)
