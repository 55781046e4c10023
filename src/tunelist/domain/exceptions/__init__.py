"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is stored as an attribute so handlers can read it without parsing
    # str(exception). Don't raise this directly - use a subclass so callers can catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    # entity_type and entity_id are kept separately so the error handler can log them structured.
    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} not found with ID: {entity_id}")
        self.entity_type = entity_type
        self.entity_id = entity_id


class TrackNotFoundException(EntityNotFoundException):
    """Raised when a track ID does not resolve to a stored track."""

    def __init__(self, track_id: Any) -> None:
        super().__init__("Track", track_id)


class PlaylistNotFoundException(EntityNotFoundException):
    """Raised when a playlist ID does not resolve to a stored playlist."""

    def __init__(self, playlist_id: Any) -> None:
        super().__init__("Playlist", playlist_id)


class InvalidTrackPositionException(DomainException):
    """Raised when an insertion position is outside ``0..len(tracks)``.

    HTTP Status: 400

    Example:
        raise InvalidTrackPositionException(5, 2)
    """

    def __init__(self, position: int, max_position: int) -> None:
        super().__init__(
            f"Invalid track position: {position}. "
            f"Position must be between 0 and {max_position}"
        )
        self.position = position
        self.max_position = max_position


class InvalidArgumentException(DomainException):
    """Raised when a required track or tracks collection is missing or empty.

    HTTP Status: 400

    Example:
        raise InvalidArgumentException("Track cannot be None")
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class StaleEntityException(DomainException):
    """Raised when an entity was modified by someone else since it was loaded.

    The playlist repository compares the stored version with the loaded one on
    every update; a mismatch means a concurrent writer won the race.

    HTTP Status: 409 (Conflict)
    """

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(
            f"{entity_type} with ID {entity_id} was modified concurrently, reload and retry"
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


__all__ = [
    "DomainException",
    "EntityNotFoundException",
    "InvalidArgumentException",
    "InvalidTrackPositionException",
    "PlaylistNotFoundException",
    "StaleEntityException",
    "TrackNotFoundException",
]
