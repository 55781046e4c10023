"""Tests for TrackService."""

from unittest.mock import AsyncMock

import pytest

from tunelist.application.services import TrackService
from tunelist.domain.entities import Track
from tunelist.domain.exceptions import TrackNotFoundException
from tunelist.domain.ports import ITrackRepository
from tunelist.domain.value_objects import TrackId


@pytest.fixture
def repository() -> AsyncMock:
    return AsyncMock(spec=ITrackRepository)


@pytest.fixture
def service(repository: AsyncMock) -> TrackService:
    return TrackService(repository)


def make_track(title: str = "Song") -> Track:
    return Track(id=TrackId.generate(), title=title, artist="Artist", duration=200)


class TestTrackService:
    """Test TrackService against a mocked repository."""

    @pytest.mark.asyncio
    async def test_create_track_stores_new_track(
        self, service: TrackService, repository: AsyncMock
    ) -> None:
        track = await service.create_track("Song", "Artist", 200)

        repository.add.assert_awaited_once_with(track)
        assert (track.title, track.artist, track.duration) == ("Song", "Artist", 200)

    @pytest.mark.asyncio
    async def test_get_track_raises_when_missing(
        self, service: TrackService, repository: AsyncMock
    ) -> None:
        repository.get_by_id.return_value = None
        track_id = TrackId.generate()

        with pytest.raises(TrackNotFoundException) as exc_info:
            await service.get_track(track_id)

        assert exc_info.value.entity_id == track_id.value

    @pytest.mark.asyncio
    async def test_get_tracks_preserves_request_order(
        self, service: TrackService, repository: AsyncMock
    ) -> None:
        a, b = make_track("A"), make_track("B")
        repository.get_many.return_value = {a.id: a, b.id: b}

        result = await service.get_tracks([b.id, a.id, b.id])

        assert [t.title for t in result] == ["B", "A", "B"]

    @pytest.mark.asyncio
    async def test_get_tracks_fails_on_first_unknown_id(
        self, service: TrackService, repository: AsyncMock
    ) -> None:
        a = make_track("A")
        missing = TrackId.generate()
        repository.get_many.return_value = {a.id: a}

        with pytest.raises(TrackNotFoundException) as exc_info:
            await service.get_tracks([a.id, missing])

        assert exc_info.value.entity_id == missing.value

    @pytest.mark.asyncio
    async def test_update_track_keeps_duration_when_omitted(
        self, service: TrackService, repository: AsyncMock
    ) -> None:
        track = make_track()
        repository.get_by_id.return_value = track

        updated = await service.update_track(track.id, "New", "Someone", None)

        assert (updated.title, updated.artist, updated.duration) == ("New", "Someone", 200)
        repository.update.assert_awaited_once_with(track)

    @pytest.mark.asyncio
    async def test_update_missing_track_does_not_write(
        self, service: TrackService, repository: AsyncMock
    ) -> None:
        repository.get_by_id.return_value = None

        with pytest.raises(TrackNotFoundException):
            await service.update_track(TrackId.generate(), "New", "Someone", 10)

        repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_track_propagates_not_found(
        self, service: TrackService, repository: AsyncMock
    ) -> None:
        track_id = TrackId.generate()
        repository.delete.side_effect = TrackNotFoundException(track_id.value)

        with pytest.raises(TrackNotFoundException):
            await service.delete_track(track_id)
