"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod

from tunelist.domain.entities import Playlist, Track
from tunelist.domain.value_objects import PlaylistId, TrackId


class ITrackRepository(ABC):
    """Repository interface for Track entities."""

    @abstractmethod
    async def add(self, track: Track) -> None:
        """Add a new track."""
        pass

    @abstractmethod
    async def get_by_id(self, track_id: TrackId) -> Track | None:
        """Get a track by ID."""
        pass

    @abstractmethod
    async def get_many(self, track_ids: list[TrackId]) -> dict[TrackId, Track]:
        """Get several tracks by ID in one round trip.

        Args:
            track_ids: IDs to look up

        Returns:
            Mapping of found IDs to tracks; unknown IDs are simply absent
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[Track]:
        """List all tracks."""
        pass

    @abstractmethod
    async def update(self, track: Track) -> None:
        """Update an existing track."""
        pass

    @abstractmethod
    async def delete(self, track_id: TrackId) -> None:
        """Delete a track and drop it from every playlist that references it."""
        pass


class IPlaylistRepository(ABC):
    """Repository interface for Playlist entities."""

    @abstractmethod
    async def add(self, playlist: Playlist) -> None:
        """Add a new playlist."""
        pass

    @abstractmethod
    async def get_by_id(self, playlist_id: PlaylistId) -> Playlist | None:
        """Get a playlist by ID with its tracks in order."""
        pass

    @abstractmethod
    async def list_all(self) -> list[Playlist]:
        """List all playlists."""
        pass

    @abstractmethod
    async def update(self, playlist: Playlist) -> None:
        """Update an existing playlist.

        Raises:
            PlaylistNotFoundException: If the playlist no longer exists
            StaleEntityException: If the stored version differs from playlist.version
        """
        pass

    @abstractmethod
    async def delete(self, playlist_id: PlaylistId) -> None:
        """Delete a playlist (tracks are kept)."""
        pass


__all__ = ["IPlaylistRepository", "ITrackRepository"]
