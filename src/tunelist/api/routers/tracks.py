"""Track management endpoints."""

from fastapi import APIRouter, Depends, Response, status

from tunelist.api.dependencies import get_track_service
from tunelist.api.schemas import CreateTrackRequest, TrackResponse, UpdateTrackRequest
from tunelist.application.services import TrackService
from tunelist.domain.value_objects import TrackId

router = APIRouter()


@router.get("", response_model=list[TrackResponse])
async def list_tracks(
    track_service: TrackService = Depends(get_track_service),
) -> list[TrackResponse]:
    """List all tracks.

    Args:
        track_service: Track service

    Returns:
        All tracks, oldest first
    """
    tracks = await track_service.list_tracks()
    return [TrackResponse.from_entity(track) for track in tracks]


@router.get("/{track_id}", response_model=TrackResponse)
async def get_track(
    track_id: str,
    track_service: TrackService = Depends(get_track_service),
) -> TrackResponse:
    """Get a track by ID.

    Args:
        track_id: Track ID
        track_service: Track service

    Returns:
        The track
    """
    track = await track_service.get_track(TrackId.from_string(track_id))
    return TrackResponse.from_entity(track)


@router.post("", response_model=TrackResponse, status_code=status.HTTP_201_CREATED)
async def create_track(
    request: CreateTrackRequest,
    track_service: TrackService = Depends(get_track_service),
) -> TrackResponse:
    """Create a new track.

    Args:
        request: Track title, artist and duration
        track_service: Track service

    Returns:
        The created track
    """
    track = await track_service.create_track(
        request.title, request.artist, request.duration
    )
    return TrackResponse.from_entity(track)


@router.put("/{track_id}", response_model=TrackResponse)
async def update_track(
    track_id: str,
    request: UpdateTrackRequest,
    track_service: TrackService = Depends(get_track_service),
) -> TrackResponse:
    """Update a track's title, artist and (optionally) duration."""
    track = await track_service.update_track(
        TrackId.from_string(track_id), request.title, request.artist, request.duration
    )
    return TrackResponse.from_entity(track)


# Deleting a track also removes it from every playlist that contains it
@router.delete("/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_track(
    track_id: str,
    track_service: TrackService = Depends(get_track_service),
) -> Response:
    """Delete a track."""
    await track_service.delete_track(TrackId.from_string(track_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
