"""API schemas for playlists.

Wire names are camelCase (isPublic, trackId, trackIds, createdAt, ...). Requests also
accept the snake_case field names.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tunelist.api.schemas.tracks import TrackResponse
from tunelist.domain.entities import Playlist


class CreatePlaylistRequest(BaseModel):
    """Request schema for creating a playlist."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., max_length=150, description="Playlist name")
    is_public: bool = Field(..., alias="isPublic", description="Public visibility")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name must not be blank")
        return value


class UpdatePlaylistRequest(CreatePlaylistRequest):
    """Request schema for updating a playlist.

    version is optional; when sent, the update is rejected with 409 if the
    playlist has changed since the client read it.
    """

    version: int | None = Field(
        default=None, ge=1, description="Playlist version the client last saw"
    )


class AddTrackRequest(BaseModel):
    """Request schema for appending a track to a playlist."""

    model_config = ConfigDict(populate_by_name=True)

    track_id: str = Field(..., alias="trackId", description="Track to add")

    @field_validator("track_id")
    @classmethod
    def track_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Track ID must not be blank")
        return value


class AddTrackAtPositionRequest(AddTrackRequest):
    """Request schema for inserting a track at a 0-based position."""

    position: int = Field(..., ge=0, description="0-based insert position")


class AddTracksRequest(BaseModel):
    """Request schema for adding several tracks at once."""

    model_config = ConfigDict(populate_by_name=True)

    track_ids: list[str] = Field(
        ..., alias="trackIds", min_length=1, description="Tracks to add, in order"
    )
    position: int | None = Field(
        default=None, ge=0, description="Insert position for the block, omit to append"
    )


class PlaylistResponse(BaseModel):
    """Response schema for a playlist with its tracks in playback order."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Playlist ID")
    name: str = Field(..., description="Playlist name")
    is_public: bool = Field(..., alias="isPublic", description="Public visibility")
    created_at: datetime | None = Field(
        default=None, alias="createdAt", description="When the playlist was created"
    )
    version: int = Field(..., description="Optimistic concurrency version")
    track_count: int = Field(..., alias="trackCount", description="Number of tracks")
    total_duration: int = Field(
        ..., alias="totalDuration", description="Sum of track durations in seconds"
    )
    tracks: list[TrackResponse] = Field(
        default_factory=list, description="Tracks in playback order"
    )

    @classmethod
    def from_entity(cls, playlist: Playlist) -> "PlaylistResponse":
        """Build the response from a domain playlist."""
        return cls(
            id=playlist.id.value,
            name=playlist.name,
            is_public=playlist.is_public,
            created_at=playlist.created_at,
            version=playlist.version,
            track_count=playlist.track_count(),
            total_duration=playlist.total_duration(),
            tracks=[TrackResponse.from_entity(track) for track in playlist.tracks],
        )
