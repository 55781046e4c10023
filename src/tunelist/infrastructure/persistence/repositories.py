"""Repository implementations for data persistence."""

import logging

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from tunelist.domain.entities import Playlist, Track
from tunelist.domain.exceptions import (
    PlaylistNotFoundException,
    StaleEntityException,
    TrackNotFoundException,
)
from tunelist.domain.ports import IPlaylistRepository, ITrackRepository
from tunelist.domain.value_objects import PlaylistId, TrackId
from tunelist.infrastructure.persistence.models import (
    PlaylistModel,
    PlaylistTrackModel,
    TrackModel,
    ensure_utc_aware,
    utc_now,
)

logger = logging.getLogger(__name__)


def _track_to_entity(model: TrackModel) -> Track:
    return Track(
        id=TrackId.from_string(model.id),
        title=model.title,
        artist=model.artist,
        duration=model.duration,
        created_at=ensure_utc_aware(model.created_at),
    )


def _playlist_to_entity(model: PlaylistModel) -> Playlist:
    # playlist_tracks comes back ordered by position (see relationship order_by)
    return Playlist(
        id=PlaylistId.from_string(model.id),
        name=model.name,
        is_public=model.is_public,
        created_at=ensure_utc_aware(model.created_at),
        version=model.version,
        initial_tracks=[_track_to_entity(pt.track) for pt in model.playlist_tracks],
    )


class TrackRepository(ITrackRepository):
    """SQLAlchemy implementation of Track repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    async def add(self, track: Track) -> None:
        """Add a new track.

        Stamps track.created_at when the caller left it empty.
        """
        if track.created_at is None:
            track.created_at = utc_now()
        model = TrackModel(
            id=track.id.value,
            title=track.title,
            artist=track.artist,
            duration=track.duration,
            created_at=track.created_at,
        )
        self.session.add(model)
        await self.session.flush()

    async def get_by_id(self, track_id: TrackId) -> Track | None:
        """Get a track by ID."""
        stmt = select(TrackModel).where(TrackModel.id == track_id.value)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return _track_to_entity(model)

    # Hey future me, bulk endpoints resolve ALL ids before touching the playlist. One IN query
    # instead of N round trips; callers diff the returned keys against what they asked for.
    async def get_many(self, track_ids: list[TrackId]) -> dict[TrackId, Track]:
        """Get several tracks by ID in one query."""
        if not track_ids:
            return {}
        stmt = select(TrackModel).where(
            TrackModel.id.in_({track_id.value for track_id in track_ids})
        )
        result = await self.session.execute(stmt)
        tracks = (_track_to_entity(model) for model in result.scalars().all())
        return {track.id: track for track in tracks}

    async def list_all(self) -> list[Track]:
        """List all tracks, oldest first."""
        stmt = select(TrackModel).order_by(TrackModel.created_at, TrackModel.id)
        result = await self.session.execute(stmt)
        return [_track_to_entity(model) for model in result.scalars().all()]

    async def update(self, track: Track) -> None:
        """Update an existing track."""
        stmt = select(TrackModel).where(TrackModel.id == track.id.value)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise TrackNotFoundException(track.id.value)

        model.title = track.title
        model.artist = track.artist
        model.duration = track.duration
        await self.session.flush()

    # Listen, deleting a track must not leave dangling playlist entries. The FK cascade covers
    # SQLite with foreign_keys=ON, but we delete the association rows explicitly so it doesn't
    # depend on the pragma. Every affected playlist gets its version bumped first - its track
    # sequence just changed, so a concurrent writer holding the old version must get a conflict.
    async def delete(self, track_id: TrackId) -> None:
        """Delete a track and remove it from every playlist."""
        affected_playlists = select(PlaylistTrackModel.playlist_id).where(
            PlaylistTrackModel.track_id == track_id.value
        )
        await self.session.execute(
            update(PlaylistModel)
            .where(PlaylistModel.id.in_(affected_playlists))
            .values(version=PlaylistModel.version + 1)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(PlaylistTrackModel).where(PlaylistTrackModel.track_id == track_id.value)
        )

        stmt = delete(TrackModel).where(TrackModel.id == track_id.value)
        result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise TrackNotFoundException(track_id.value)


class PlaylistRepository(IPlaylistRepository):
    """SQLAlchemy implementation of Playlist repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    def _select_with_tracks(self) -> Select[tuple[PlaylistModel]]:
        return select(PlaylistModel).options(
            selectinload(PlaylistModel.playlist_tracks).selectinload(
                PlaylistTrackModel.track
            )
        )

    async def add(self, playlist: Playlist) -> None:
        """Add a new playlist along with its track entries."""
        if playlist.created_at is None:
            playlist.created_at = utc_now()
        model = PlaylistModel(
            id=playlist.id.value,
            name=playlist.name,
            is_public=playlist.is_public,
            version=playlist.version,
            created_at=playlist.created_at,
        )
        self.session.add(model)

        for position, track_id in enumerate(playlist.track_ids):
            self.session.add(
                PlaylistTrackModel(
                    playlist_id=playlist.id.value,
                    track_id=track_id.value,
                    position=position,
                )
            )
        await self.session.flush()

    # Hey future me, this is the optimistic concurrency check. Two layers:
    #   1. the freshly loaded row version must equal playlist.version (entity went stale
    #      before we even got here)
    #   2. the mapper's version_id_col turns the UPDATE into "... WHERE version = :loaded",
    #      so a writer that committed between our SELECT and our flush makes it match
    #      zero rows -> StaleDataError, which we translate.
    # The association rows are synced IN PLACE (reuse existing PlaylistTrackModel objects,
    # only renumber them) - deleting and re-adding rows with the same composite PK in one
    # session makes the identity map blow up.
    async def update(self, playlist: Playlist) -> None:
        """Persist name, visibility and track order, bumping the version.

        Raises:
            PlaylistNotFoundException: If the playlist no longer exists
            StaleEntityException: If someone else updated the playlist first
        """
        stmt = (
            self._select_with_tracks()
            .where(PlaylistModel.id == playlist.id.value)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise PlaylistNotFoundException(playlist.id.value)
        if model.version != playlist.version:
            raise StaleEntityException("Playlist", playlist.id.value)

        model.name = playlist.name
        model.is_public = playlist.is_public
        model.version = playlist.version + 1

        existing = {pt.track_id: pt for pt in model.playlist_tracks}
        synced: list[PlaylistTrackModel] = []
        for position, track_id in enumerate(playlist.track_ids):
            entry = existing.get(track_id.value)
            if entry is None:
                entry = PlaylistTrackModel(
                    playlist_id=playlist.id.value, track_id=track_id.value
                )
            entry.position = position
            synced.append(entry)
        model.playlist_tracks = synced

        try:
            await self.session.flush()
        except StaleDataError as e:
            logger.warning(
                "Concurrent playlist update detected",
                extra={"playlist_id": playlist.id.value, "version": playlist.version},
            )
            raise StaleEntityException("Playlist", playlist.id.value) from e

        playlist.version = model.version

    async def delete(self, playlist_id: PlaylistId) -> None:
        """Delete a playlist. Its tracks stay in the library."""
        await self.session.execute(
            delete(PlaylistTrackModel).where(
                PlaylistTrackModel.playlist_id == playlist_id.value
            )
        )
        stmt = delete(PlaylistModel).where(PlaylistModel.id == playlist_id.value)
        result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise PlaylistNotFoundException(playlist_id.value)

    async def get_by_id(self, playlist_id: PlaylistId) -> Playlist | None:
        """Get a playlist by ID with eager loading of tracks."""
        stmt = (
            self._select_with_tracks()
            .where(PlaylistModel.id == playlist_id.value)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return _playlist_to_entity(model)

    async def list_all(self) -> list[Playlist]:
        """List all playlists with their tracks, oldest first."""
        stmt = self._select_with_tracks().order_by(
            PlaylistModel.created_at, PlaylistModel.id
        )
        result = await self.session.execute(stmt)
        return [_playlist_to_entity(model) for model in result.scalars().all()]
