"""Application services."""

from tunelist.application.services.playlist_service import PlaylistService
from tunelist.application.services.track_service import TrackService

__all__ = ["PlaylistService", "TrackService"]
