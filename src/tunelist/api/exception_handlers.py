"""Custom exception handlers for FastAPI application.

This module registers global exception handlers that convert domain exceptions
and validation errors into structured JSON error responses:

    {"timestamp": "...", "status": 404, "error": "TRACK_NOT_FOUND", "message": "..."}

Request validation failures additionally carry a fieldErrors list.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tunelist.domain.exceptions import (
    DomainException,
    EntityNotFoundException,
    InvalidArgumentException,
    InvalidTrackPositionException,
    PlaylistNotFoundException,
    StaleEntityException,
    TrackNotFoundException,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"
VALIDATION_FAILED_MESSAGE = "Request validation failed"

# pydantic prefixes messages of ValueErrors raised in validators
_VALUE_ERROR_PREFIX = "Value error, "

# Request sections that don't belong in a field name
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def error_response(
    status_code: int, error: str, message: str, **extra: Any
) -> JSONResponse:
    """Build a structured error response.

    Args:
        status_code: HTTP status code
        error: Machine-readable error tag (e.g. TRACK_NOT_FOUND)
        message: Human-readable message
        **extra: Additional payload fields

    Returns:
        JSONResponse with timestamp, status, error and message
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "timestamp": datetime.now(UTC).isoformat(),
            "status": status_code,
            "error": error,
            "message": message,
            **extra,
        },
    )


# Hey future me - this helper converts bytes to strings in validation error values!
# Pydantic's exc.errors() can include raw request body as bytes in the 'input' field,
# which blows up JSON serialization of the error response itself.
def _stringify(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.decode("latin-1")
    return str(value)


def to_field_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic validation errors into field/rejectedValue/message entries.

    Args:
        errors: Errors from RequestValidationError.errors()

    Returns:
        One dict per error with the dotted field path, the rejected value as a
        string ("null" when the field was missing) and the message
    """
    field_errors = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]

        # For a missing field pydantic reports the whole parent object as input
        rejected = None if error.get("type") == "missing" else error.get("input")

        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX) :]

        field_errors.append(
            {
                "field": ".".join(loc),
                "rejectedValue": _stringify(rejected),
                "message": message,
            }
        )
    return field_errors


# Hey future me, this registers GLOBAL exception handlers for the entire app! Starlette picks the
# handler registered for the most specific class in the exception's MRO, so TrackNotFoundException
# wins over EntityNotFoundException, which wins over DomainException. The Exception handler is the
# last resort: it answers 500 with a fixed message, the real error only goes to the log.
def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers for domain and validation exceptions.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(TrackNotFoundException)
    async def track_not_found_handler(
        request: Request, exc: TrackNotFoundException
    ) -> JSONResponse:
        """Handle unknown track IDs with 404 Not Found."""
        logger.warning(
            "Track not found at %s: %s",
            request.url.path,
            exc.entity_id,
            extra={"path": request.url.path, "entity_id": exc.entity_id},
        )
        return error_response(status.HTTP_404_NOT_FOUND, "TRACK_NOT_FOUND", exc.message)

    @app.exception_handler(PlaylistNotFoundException)
    async def playlist_not_found_handler(
        request: Request, exc: PlaylistNotFoundException
    ) -> JSONResponse:
        """Handle unknown playlist IDs with 404 Not Found."""
        logger.warning(
            "Playlist not found at %s: %s",
            request.url.path,
            exc.entity_id,
            extra={"path": request.url.path, "entity_id": exc.entity_id},
        )
        return error_response(
            status.HTTP_404_NOT_FOUND, "PLAYLIST_NOT_FOUND", exc.message
        )

    @app.exception_handler(EntityNotFoundException)
    async def entity_not_found_handler(
        request: Request, exc: EntityNotFoundException
    ) -> JSONResponse:
        """Handle other entity not found exceptions with 404 Not Found."""
        logger.warning(
            "Entity not found at %s: %s %s",
            request.url.path,
            exc.entity_type,
            exc.entity_id,
            extra={
                "path": request.url.path,
                "entity_type": exc.entity_type,
                "entity_id": exc.entity_id,
            },
        )
        return error_response(status.HTTP_404_NOT_FOUND, "NOT_FOUND", exc.message)

    @app.exception_handler(InvalidTrackPositionException)
    async def invalid_position_handler(
        request: Request, exc: InvalidTrackPositionException
    ) -> JSONResponse:
        """Handle out-of-range insert positions with 400 Bad Request."""
        logger.warning(
            "Invalid track position at %s: %s",
            request.url.path,
            exc.message,
            extra={
                "path": request.url.path,
                "position": exc.position,
                "max_position": exc.max_position,
            },
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST, "INVALID_TRACK_POSITION", exc.message
        )

    @app.exception_handler(InvalidArgumentException)
    async def invalid_argument_handler(
        request: Request, exc: InvalidArgumentException
    ) -> JSONResponse:
        """Handle missing/empty track arguments with 400 Bad Request."""
        logger.warning(
            "Invalid argument at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return error_response(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", exc.message)

    @app.exception_handler(StaleEntityException)
    async def stale_entity_handler(
        request: Request, exc: StaleEntityException
    ) -> JSONResponse:
        """Handle lost optimistic concurrency races with 409 Conflict."""
        logger.warning(
            "Concurrent modification at %s: %s %s",
            request.url.path,
            exc.entity_type,
            exc.entity_id,
            extra={
                "path": request.url.path,
                "entity_type": exc.entity_type,
                "entity_id": exc.entity_id,
            },
        )
        return error_response(status.HTTP_409_CONFLICT, "CONFLICT", exc.message)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request, exc: DomainException
    ) -> JSONResponse:
        """Handle any other domain exception with 400 Bad Request."""
        logger.warning(
            "Domain error at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return error_response(status.HTTP_400_BAD_REQUEST, "DOMAIN_ERROR", exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic request validation errors with 400 Bad Request."""
        field_errors = to_field_errors(list(exc.errors()))

        logger.warning(
            "Request validation error at %s: %s",
            request.url.path,
            field_errors,
            extra={"path": request.url.path, "field_errors": field_errors},
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            VALIDATION_FAILED_MESSAGE,
            fieldErrors=field_errors,
        )

    @app.exception_handler(json.JSONDecodeError)
    async def json_decode_error_handler(
        request: Request, exc: json.JSONDecodeError
    ) -> JSONResponse:
        """Handle malformed JSON with 400 Bad Request."""
        logger.warning(
            "Malformed JSON at %s: %s",
            request.url.path,
            str(exc),
            extra={"path": request.url.path, "error": str(exc)},
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", f"Malformed JSON: {exc.msg}"
        )

    # Blank IDs (TrackId/PlaylistId.from_string) land here
    @app.exception_handler(ValueError)
    async def value_error_exception_handler(
        request: Request, exc: ValueError
    ) -> JSONResponse:
        """Handle ValueError with 400 Bad Request."""
        logger.warning(
            "Value error at %s: %s",
            request.url.path,
            str(exc),
            extra={"path": request.url.path, "error": str(exc)},
        )
        return error_response(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions (unknown routes, wrong methods) with proper logging."""
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "HTTP error %d at %s: %s",
            exc.status_code,
            request.url.path,
            exc.detail,
            extra={
                "path": request.url.path,
                "status_code": exc.status_code,
                "detail": exc.detail,
            },
        )
        return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle anything else with 500 and a generic message."""
        logger.error(
            "Unhandled error at %s: %s",
            request.url.path,
            exc,
            exc_info=exc,
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", INTERNAL_ERROR_MESSAGE
        )
