"""API request/response schemas."""

from tunelist.api.schemas.playlists import (
    AddTrackAtPositionRequest,
    AddTrackRequest,
    AddTracksRequest,
    CreatePlaylistRequest,
    PlaylistResponse,
    UpdatePlaylistRequest,
)
from tunelist.api.schemas.tracks import (
    CreateTrackRequest,
    TrackResponse,
    UpdateTrackRequest,
)

__all__ = [
    "AddTrackAtPositionRequest",
    "AddTrackRequest",
    "AddTracksRequest",
    "CreatePlaylistRequest",
    "CreateTrackRequest",
    "PlaylistResponse",
    "TrackResponse",
    "UpdatePlaylistRequest",
    "UpdateTrackRequest",
]
