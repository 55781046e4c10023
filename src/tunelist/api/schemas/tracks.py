"""API schemas for tracks."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tunelist.domain.entities import Track


def _not_blank(value: str, message: str) -> str:
    if not value.strip():
        raise ValueError(message)
    return value


class CreateTrackRequest(BaseModel):
    """Request schema for creating a track."""

    title: str = Field(..., max_length=100, description="Track title")
    artist: str = Field(..., max_length=100, description="Artist name")
    duration: int = Field(..., description="Duration in seconds")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _not_blank(value, "Title must not be blank")

    @field_validator("artist")
    @classmethod
    def artist_not_blank(cls, value: str) -> str:
        return _not_blank(value, "Artist must not be blank")

    @field_validator("duration")
    @classmethod
    def duration_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Duration must be a positive number in seconds")
        return value


class UpdateTrackRequest(BaseModel):
    """Request schema for updating a track. Omitting duration keeps the current one."""

    title: str = Field(..., max_length=100, description="New track title")
    artist: str = Field(..., max_length=100, description="New artist name")
    duration: int | None = Field(default=None, description="New duration in seconds")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _not_blank(value, "Title must not be blank")

    @field_validator("artist")
    @classmethod
    def artist_not_blank(cls, value: str) -> str:
        return _not_blank(value, "Artist must not be blank")

    @field_validator("duration")
    @classmethod
    def duration_positive(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            raise ValueError("Duration must be a positive number in seconds")
        return value


class TrackResponse(BaseModel):
    """Response schema for a track."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Track ID")
    title: str = Field(..., description="Track title")
    artist: str = Field(..., description="Artist name")
    duration: int = Field(..., description="Duration in seconds")
    created_at: datetime | None = Field(
        default=None, alias="createdAt", description="When the track was first stored"
    )

    @classmethod
    def from_entity(cls, track: Track) -> "TrackResponse":
        """Build the response from a domain track."""
        return cls(
            id=track.id.value,
            title=track.title,
            artist=track.artist,
            duration=track.duration,
            created_at=track.created_at,
        )
