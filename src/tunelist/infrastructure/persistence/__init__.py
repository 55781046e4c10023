"""Persistence layer: database engine, ORM models and repositories."""

from tunelist.infrastructure.persistence.database import Database
from tunelist.infrastructure.persistence.repositories import (
    PlaylistRepository,
    TrackRepository,
)

__all__ = ["Database", "PlaylistRepository", "TrackRepository"]
