"""Track service for track library operations."""

import logging

from tunelist.domain.entities import Track
from tunelist.domain.exceptions import TrackNotFoundException
from tunelist.domain.ports import ITrackRepository
from tunelist.domain.value_objects import TrackId
from tunelist.infrastructure.observability.logger_template import (
    end_operation,
    start_operation,
)

logger = logging.getLogger(__name__)


class TrackService:
    """Service for creating, reading, updating and deleting tracks."""

    def __init__(self, track_repository: ITrackRepository) -> None:
        """Initialize track service.

        Args:
            track_repository: Repository for track persistence
        """
        self._track_repository = track_repository

    async def create_track(self, title: str, artist: str, duration: int) -> Track:
        """Create and store a new track.

        Args:
            title: Track title
            artist: Artist name
            duration: Duration in seconds

        Returns:
            The stored track, with id and created_at assigned
        """
        track = Track(id=TrackId.generate(), title=title, artist=artist, duration=duration)
        await self._track_repository.add(track)
        logger.info(
            "track.created",
            extra={"track_id": track.id.value, "title": title, "artist": artist},
        )
        return track

    async def list_tracks(self) -> list[Track]:
        """List every track in the library."""
        return await self._track_repository.list_all()

    async def get_track(self, track_id: TrackId) -> Track:
        """Get a track by ID.

        Raises:
            TrackNotFoundException: If no track has this ID
        """
        track = await self._track_repository.get_by_id(track_id)
        if track is None:
            raise TrackNotFoundException(track_id.value)
        return track

    # Hey future me, this is the lookup step for bulk adds. It fails on the FIRST unknown id
    # (in input order) before anyone touches a playlist - that's what makes bulk add
    # all-or-nothing. Result keeps input order, repeats included; the playlist filters those.
    async def get_tracks(self, track_ids: list[TrackId]) -> list[Track]:
        """Resolve several track IDs at once.

        Args:
            track_ids: IDs to resolve, in the order the caller wants them

        Returns:
            Tracks in the same order as track_ids

        Raises:
            TrackNotFoundException: For the first ID that doesn't exist
        """
        found = await self._track_repository.get_many(track_ids)
        for track_id in track_ids:
            if track_id not in found:
                raise TrackNotFoundException(track_id.value)
        return [found[track_id] for track_id in track_ids]

    async def update_track(
        self, track_id: TrackId, title: str, artist: str, duration: int | None = None
    ) -> Track:
        """Update a track's metadata.

        Args:
            track_id: Track to update
            title: New title
            artist: New artist
            duration: New duration in seconds, None keeps the current value

        Returns:
            The updated track

        Raises:
            TrackNotFoundException: If no track has this ID
        """
        track = await self.get_track(track_id)
        track.update(title, artist, duration)
        await self._track_repository.update(track)
        logger.info("track.updated", extra={"track_id": track_id.value})
        return track

    async def delete_track(self, track_id: TrackId) -> None:
        """Delete a track and drop it from every playlist.

        Raises:
            TrackNotFoundException: If no track has this ID
        """
        start_time, operation_id = start_operation(
            logger, "track.delete", track_id=track_id.value
        )
        try:
            await self._track_repository.delete(track_id)
        except TrackNotFoundException as e:
            end_operation(
                logger,
                "track.delete",
                start_time,
                operation_id,
                success=False,
                error=e,
                track_id=track_id.value,
            )
            raise
        end_operation(logger, "track.delete", start_time, operation_id, track_id=track_id.value)
