"""Tests for API dependency providers."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tunelist.api.dependencies import (
    get_db_session,
    get_playlist_repository,
    get_playlist_service,
    get_track_repository,
    get_track_service,
)
from tunelist.application.services import PlaylistService, TrackService
from tunelist.domain.entities import Track
from tunelist.domain.value_objects import TrackId
from tunelist.infrastructure.persistence import (
    Database,
    PlaylistRepository,
    TrackRepository,
)
from tunelist.infrastructure.persistence.models import TrackModel


def make_request(db: Database) -> MagicMock:
    request = MagicMock()
    request.app.state.db = db
    return request


@pytest.mark.asyncio
async def test_get_db_session_commits_on_success(db: Database) -> None:
    """Test the yielded session is committed when the endpoint returns normally."""
    track = Track(id=TrackId.generate(), title="Kept", artist="A", duration=1)

    generator = get_db_session(make_request(db))
    session = await anext(generator)
    await TrackRepository(session).add(track)
    with pytest.raises(StopAsyncIteration):
        await anext(generator)

    async with db.session_scope() as check:
        assert await check.scalar(select(TrackModel.title)) == "Kept"


@pytest.mark.asyncio
async def test_get_db_session_rolls_back_on_error(db: Database) -> None:
    """Test an exception inside the request discards the session's writes."""
    track = Track(id=TrackId.generate(), title="Dropped", artist="A", duration=1)

    generator = get_db_session(make_request(db))
    session = await anext(generator)
    await TrackRepository(session).add(track)
    with pytest.raises(RuntimeError):
        await generator.athrow(RuntimeError("endpoint failed"))

    async with db.session_scope() as check:
        assert await check.scalar(select(TrackModel.title)) is None


def test_service_factories_share_the_session() -> None:
    session = MagicMock(spec=AsyncSession)

    track_repository = get_track_repository(session)
    playlist_repository = get_playlist_repository(session)
    track_service = get_track_service(track_repository)
    playlist_service = get_playlist_service(playlist_repository, track_service)

    assert isinstance(track_repository, TrackRepository)
    assert isinstance(playlist_repository, PlaylistRepository)
    assert track_repository.session is playlist_repository.session is session
    assert isinstance(track_service, TrackService)
    assert isinstance(playlist_service, PlaylistService)
