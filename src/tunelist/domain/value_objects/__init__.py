"""Value objects for entity identity."""

import uuid
from dataclasses import dataclass


# Hey future me, IDs are VALUE OBJECTS, not raw strings! Wrapping the string means a TrackId
# can never be passed where a PlaylistId is expected (mypy catches it). The value is an opaque
# token: we mint UUID4 strings, but any non-blank string a client sends is a valid identity.
# An id we never issued simply isn't found (404), it is not a malformed request.
# frozen=True makes them hashable so they work as dict keys and in sets.
@dataclass(frozen=True)
class _EntityId:
    """Base for opaque string identities."""

    value: str

    def __post_init__(self) -> None:
        """Reject non-string and blank identities."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError(f"Invalid {type(self).__name__}: {self.value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TrackId(_EntityId):
    """Unique identity of a Track."""

    @classmethod
    def generate(cls) -> "TrackId":
        """Generate a new random track ID."""
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str) -> "TrackId":
        """Wrap a track ID received as a string.

        Raises:
            ValueError: If the string is blank
        """
        return cls(value)


@dataclass(frozen=True)
class PlaylistId(_EntityId):
    """Unique identity of a Playlist."""

    @classmethod
    def generate(cls) -> "PlaylistId":
        """Generate a new random playlist ID."""
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str) -> "PlaylistId":
        """Wrap a playlist ID received as a string.

        Raises:
            ValueError: If the string is blank
        """
        return cls(value)


__all__ = ["PlaylistId", "TrackId"]
