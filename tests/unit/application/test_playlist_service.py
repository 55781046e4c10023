"""Tests for PlaylistService.

Hey future me - the important one here is the bulk add: every track id gets resolved BEFORE
the playlist is mutated or written. A single unknown id must leave the repository untouched.
"""

from unittest.mock import AsyncMock

import pytest

from tunelist.application.services import PlaylistService, TrackService
from tunelist.domain.entities import Playlist, Track
from tunelist.domain.exceptions import (
    InvalidArgumentException,
    InvalidTrackPositionException,
    PlaylistNotFoundException,
    StaleEntityException,
    TrackNotFoundException,
)
from tunelist.domain.ports import IPlaylistRepository, ITrackRepository
from tunelist.domain.value_objects import PlaylistId, TrackId


def make_track(title: str) -> Track:
    return Track(id=TrackId.generate(), title=title, artist="Artist", duration=100)


@pytest.fixture
def playlist_repository() -> AsyncMock:
    return AsyncMock(spec=IPlaylistRepository)


@pytest.fixture
def track_repository() -> AsyncMock:
    return AsyncMock(spec=ITrackRepository)


@pytest.fixture
def service(playlist_repository: AsyncMock, track_repository: AsyncMock) -> PlaylistService:
    return PlaylistService(playlist_repository, TrackService(track_repository))


@pytest.fixture
def playlist(playlist_repository: AsyncMock) -> Playlist:
    stored = Playlist(id=PlaylistId.generate(), name="Mix")
    playlist_repository.get_by_id.return_value = stored
    return stored


class TestPlaylistCrud:
    """Test playlist create/read/update/delete."""

    @pytest.mark.asyncio
    async def test_create_playlist_starts_empty(
        self, service: PlaylistService, playlist_repository: AsyncMock
    ) -> None:
        created = await service.create_playlist("Mix", True)

        playlist_repository.add.assert_awaited_once_with(created)
        assert created.is_public is True
        assert created.tracks == []
        assert created.version == 1

    @pytest.mark.asyncio
    async def test_get_playlist_raises_when_missing(
        self, service: PlaylistService, playlist_repository: AsyncMock
    ) -> None:
        playlist_repository.get_by_id.return_value = None

        with pytest.raises(PlaylistNotFoundException):
            await service.get_playlist(PlaylistId.generate())

    @pytest.mark.asyncio
    async def test_update_playlist_renames(
        self, service: PlaylistService, playlist_repository: AsyncMock, playlist: Playlist
    ) -> None:
        updated = await service.update_playlist(playlist.id, "Renamed", True)

        assert updated.name == "Renamed"
        assert updated.is_public is True
        playlist_repository.update.assert_awaited_once_with(playlist)

    @pytest.mark.asyncio
    async def test_update_playlist_rejects_outdated_version(
        self, service: PlaylistService, playlist_repository: AsyncMock, playlist: Playlist
    ) -> None:
        playlist.version = 3

        with pytest.raises(StaleEntityException):
            await service.update_playlist(playlist.id, "Renamed", True, expected_version=2)

        playlist_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_playlist_delegates(
        self, service: PlaylistService, playlist_repository: AsyncMock
    ) -> None:
        playlist_id = PlaylistId.generate()

        await service.delete_playlist(playlist_id)

        playlist_repository.delete.assert_awaited_once_with(playlist_id)


class TestPlaylistTrackOperations:
    """Test adding tracks through the service."""

    @pytest.mark.asyncio
    async def test_add_track_appends_and_persists(
        self,
        service: PlaylistService,
        playlist_repository: AsyncMock,
        track_repository: AsyncMock,
        playlist: Playlist,
    ) -> None:
        track = make_track("A")
        track_repository.get_by_id.return_value = track

        result = await service.add_track(playlist.id, track.id)

        assert result.tracks == [track]
        playlist_repository.update.assert_awaited_once_with(playlist)

    @pytest.mark.asyncio
    async def test_add_track_with_unknown_track(
        self,
        service: PlaylistService,
        playlist_repository: AsyncMock,
        track_repository: AsyncMock,
        playlist: Playlist,
    ) -> None:
        track_repository.get_by_id.return_value = None

        with pytest.raises(TrackNotFoundException):
            await service.add_track(playlist.id, TrackId.generate())

        playlist_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_track_at_invalid_position(
        self,
        service: PlaylistService,
        playlist_repository: AsyncMock,
        track_repository: AsyncMock,
        playlist: Playlist,
    ) -> None:
        track = make_track("A")
        track_repository.get_by_id.return_value = track

        with pytest.raises(InvalidTrackPositionException):
            await service.add_track_at_position(playlist.id, track.id, 1)

        playlist_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_tracks_inserts_block(
        self,
        service: PlaylistService,
        track_repository: AsyncMock,
        playlist: Playlist,
    ) -> None:
        x = make_track("X")
        playlist.add_track(x)
        a, b = make_track("A"), make_track("B")
        track_repository.get_many.return_value = {a.id: a, b.id: b}

        result = await service.add_tracks(playlist.id, [a.id, b.id], 0)

        assert [t.title for t in result.tracks] == ["A", "B", "X"]

    @pytest.mark.asyncio
    async def test_add_tracks_is_all_or_nothing(
        self,
        service: PlaylistService,
        playlist_repository: AsyncMock,
        track_repository: AsyncMock,
        playlist: Playlist,
    ) -> None:
        a = make_track("A")
        track_repository.get_many.return_value = {a.id: a}

        with pytest.raises(TrackNotFoundException):
            await service.add_tracks(playlist.id, [a.id, TrackId.generate()])

        assert playlist.tracks == []
        playlist_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_tracks_rejects_empty_list(
        self, service: PlaylistService, playlist_repository: AsyncMock
    ) -> None:
        with pytest.raises(InvalidArgumentException):
            await service.add_tracks(PlaylistId.generate(), [])

        playlist_repository.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_playlist_tracks_returns_copy(
        self, service: PlaylistService, playlist: Playlist
    ) -> None:
        playlist.add_track(make_track("A"))

        tracks = await service.get_playlist_tracks(playlist.id)
        tracks.clear()

        assert playlist.track_count() == 1
