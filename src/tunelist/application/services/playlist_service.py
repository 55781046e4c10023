"""Playlist service for playlist operations.

Hey future me - every mutation here follows the same shape: load the playlist (404 if
missing), resolve the track(s) through TrackService (404 if missing), let the Playlist
entity do the ordering work, then persist through the repository. The repository's
version check turns a lost race into StaleEntityException (409).
"""

import logging

from tunelist.application.services.track_service import TrackService
from tunelist.domain.entities import Playlist, Track
from tunelist.domain.exceptions import (
    InvalidArgumentException,
    PlaylistNotFoundException,
    StaleEntityException,
)
from tunelist.domain.ports import IPlaylistRepository
from tunelist.domain.value_objects import PlaylistId, TrackId
from tunelist.infrastructure.observability.logger_template import log_operation

logger = logging.getLogger(__name__)


class PlaylistService:
    """Service for playlist management and track ordering operations."""

    def __init__(
        self, playlist_repository: IPlaylistRepository, track_service: TrackService
    ) -> None:
        """Initialize playlist service.

        Args:
            playlist_repository: Repository for playlist persistence
            track_service: Resolves track IDs to tracks
        """
        self._playlist_repository = playlist_repository
        self._track_service = track_service

    async def create_playlist(self, name: str, is_public: bool) -> Playlist:
        """Create an empty playlist.

        Args:
            name: Playlist name
            is_public: Whether the playlist is public

        Returns:
            The stored playlist
        """
        playlist = Playlist(id=PlaylistId.generate(), name=name, is_public=is_public)
        await self._playlist_repository.add(playlist)
        logger.info(
            "playlist.created",
            extra={"playlist_id": playlist.id.value, "playlist_name": name},
        )
        return playlist

    async def list_playlists(self) -> list[Playlist]:
        """List every playlist."""
        return await self._playlist_repository.list_all()

    async def get_playlist(self, playlist_id: PlaylistId) -> Playlist:
        """Get a playlist by ID.

        Raises:
            PlaylistNotFoundException: If no playlist has this ID
        """
        playlist = await self._playlist_repository.get_by_id(playlist_id)
        if playlist is None:
            raise PlaylistNotFoundException(playlist_id.value)
        return playlist

    async def update_playlist(
        self,
        playlist_id: PlaylistId,
        name: str,
        is_public: bool,
        expected_version: int | None = None,
    ) -> Playlist:
        """Rename a playlist and/or change its visibility.

        Args:
            playlist_id: Playlist to update
            name: New name
            is_public: New visibility
            expected_version: Version the caller last saw; None skips the check

        Returns:
            The updated playlist

        Raises:
            PlaylistNotFoundException: If no playlist has this ID
            StaleEntityException: If expected_version is outdated
        """
        async with log_operation(logger, "playlist.update", playlist_id=playlist_id.value):
            playlist = await self.get_playlist(playlist_id)
            if expected_version is not None and expected_version != playlist.version:
                raise StaleEntityException("Playlist", playlist_id.value)
            playlist.rename(name)
            playlist.set_visibility(is_public)
            await self._playlist_repository.update(playlist)
        return playlist

    async def delete_playlist(self, playlist_id: PlaylistId) -> None:
        """Delete a playlist. Its tracks are NOT deleted.

        Raises:
            PlaylistNotFoundException: If no playlist has this ID
        """
        async with log_operation(logger, "playlist.delete", playlist_id=playlist_id.value):
            await self._playlist_repository.delete(playlist_id)

    async def get_playlist_tracks(self, playlist_id: PlaylistId) -> list[Track]:
        """Get the tracks of a playlist in playback order.

        Raises:
            PlaylistNotFoundException: If no playlist has this ID
        """
        playlist = await self.get_playlist(playlist_id)
        return playlist.tracks

    async def add_track(self, playlist_id: PlaylistId, track_id: TrackId) -> Playlist:
        """Append a track to the end of a playlist.

        Adding a track that is already in the playlist changes nothing.

        Raises:
            PlaylistNotFoundException: If no playlist has this ID
            TrackNotFoundException: If no track has this ID
        """
        async with log_operation(
            logger,
            "playlist.add_track",
            playlist_id=playlist_id.value,
            track_id=track_id.value,
        ):
            playlist = await self.get_playlist(playlist_id)
            track = await self._track_service.get_track(track_id)
            playlist.add_track(track)
            await self._playlist_repository.update(playlist)
        return playlist

    async def add_track_at_position(
        self, playlist_id: PlaylistId, track_id: TrackId, position: int
    ) -> Playlist:
        """Insert a track at a 0-based position.

        Raises:
            PlaylistNotFoundException: If no playlist has this ID
            TrackNotFoundException: If no track has this ID
            InvalidTrackPositionException: If position is outside 0..track count
        """
        async with log_operation(
            logger,
            "playlist.add_track_at_position",
            playlist_id=playlist_id.value,
            track_id=track_id.value,
            position=position,
        ):
            playlist = await self.get_playlist(playlist_id)
            track = await self._track_service.get_track(track_id)
            playlist.add_track_at_position(track, position)
            await self._playlist_repository.update(playlist)
        return playlist

    # Listen, ALL ids are resolved before the playlist is touched. One bad id -> 404 and the
    # playlist is never mutated or written, so bulk add is all-or-nothing from the outside.
    async def add_tracks(
        self,
        playlist_id: PlaylistId,
        track_ids: list[TrackId],
        position: int | None = None,
    ) -> Playlist:
        """Add several tracks, appended or as one block at a position.

        Args:
            playlist_id: Target playlist
            track_ids: Tracks to add, in the order they should appear
            position: Insert position for the block; None appends

        Returns:
            The updated playlist

        Raises:
            InvalidArgumentException: If track_ids is empty
            PlaylistNotFoundException: If no playlist has this ID
            TrackNotFoundException: If any track ID doesn't exist
            InvalidTrackPositionException: If position is outside 0..track count
        """
        if not track_ids:
            raise InvalidArgumentException("Tracks list cannot be null or empty")

        async with log_operation(
            logger,
            "playlist.add_tracks",
            playlist_id=playlist_id.value,
            track_count=len(track_ids),
            position=position,
        ):
            playlist = await self.get_playlist(playlist_id)
            tracks = await self._track_service.get_tracks(track_ids)
            playlist.add_tracks(tracks, position)
            await self._playlist_repository.update(playlist)
        return playlist
