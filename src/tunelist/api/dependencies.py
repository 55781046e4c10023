"""Dependency injection for API endpoints."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tunelist.application.services import PlaylistService, TrackService
from tunelist.infrastructure.persistence import (
    Database,
    PlaylistRepository,
    TrackRepository,
)


# Hey future me - this is a FastAPI dependency that yields a DB session to endpoints.
# One session per request: session_scope() commits when the endpoint returns normally and
# rolls back when it raises (domain errors included), so a failed bulk add writes nothing.
# Use this in endpoint params like: "session: AsyncSession = Depends(get_db_session)"
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session from app state."""
    db: Database = request.app.state.db
    async with db.session_scope() as session:
        yield session


def get_track_repository(
    session: AsyncSession = Depends(get_db_session),
) -> TrackRepository:
    """Get track repository instance."""
    return TrackRepository(session)


def get_playlist_repository(
    session: AsyncSession = Depends(get_db_session),
) -> PlaylistRepository:
    """Get playlist repository instance."""
    return PlaylistRepository(session)


def get_track_service(
    track_repository: TrackRepository = Depends(get_track_repository),
) -> TrackService:
    """Get track service instance."""
    return TrackService(track_repository)


# Both repositories come from the same cached get_db_session call, so playlist and track
# lookups within one request share a session and a transaction.
def get_playlist_service(
    playlist_repository: PlaylistRepository = Depends(get_playlist_repository),
    track_service: TrackService = Depends(get_track_service),
) -> PlaylistService:
    """Get playlist service instance."""
    return PlaylistService(playlist_repository, track_service)
