"""Playlist management endpoints."""

from fastapi import APIRouter, Depends, Response, status

from tunelist.api.dependencies import get_playlist_service
from tunelist.api.schemas import (
    AddTrackAtPositionRequest,
    AddTrackRequest,
    AddTracksRequest,
    CreatePlaylistRequest,
    PlaylistResponse,
    TrackResponse,
    UpdatePlaylistRequest,
)
from tunelist.application.services import PlaylistService
from tunelist.domain.value_objects import PlaylistId, TrackId

router = APIRouter()


@router.get("", response_model=list[PlaylistResponse])
async def list_playlists(
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> list[PlaylistResponse]:
    """List all playlists with their tracks.

    Args:
        playlist_service: Playlist service

    Returns:
        All playlists, oldest first
    """
    playlists = await playlist_service.list_playlists()
    return [PlaylistResponse.from_entity(playlist) for playlist in playlists]


@router.get("/{playlist_id}", response_model=PlaylistResponse)
async def get_playlist(
    playlist_id: str,
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> PlaylistResponse:
    """Get a playlist by ID.

    Args:
        playlist_id: Playlist ID
        playlist_service: Playlist service

    Returns:
        The playlist with tracks in playback order
    """
    playlist = await playlist_service.get_playlist(PlaylistId.from_string(playlist_id))
    return PlaylistResponse.from_entity(playlist)


@router.post("", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    request: CreatePlaylistRequest,
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> PlaylistResponse:
    """Create an empty playlist."""
    playlist = await playlist_service.create_playlist(request.name, request.is_public)
    return PlaylistResponse.from_entity(playlist)


# Hey future me, "version" in the body is optional. Clients that send it get a 409 when
# someone else changed the playlist since they read it; clients that don't still get a 409
# if a concurrent request commits between our read and our write.
@router.put("/{playlist_id}", response_model=PlaylistResponse)
async def update_playlist(
    playlist_id: str,
    request: UpdatePlaylistRequest,
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> PlaylistResponse:
    """Rename a playlist and/or change its visibility.

    Args:
        playlist_id: Playlist ID
        request: New name, visibility and optional expected version
        playlist_service: Playlist service

    Returns:
        The updated playlist
    """
    playlist = await playlist_service.update_playlist(
        PlaylistId.from_string(playlist_id),
        request.name,
        request.is_public,
        expected_version=request.version,
    )
    return PlaylistResponse.from_entity(playlist)


@router.delete("/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playlist(
    playlist_id: str,
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> Response:
    """Delete a playlist. The tracks it contained are kept."""
    await playlist_service.delete_playlist(PlaylistId.from_string(playlist_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{playlist_id}/tracks", response_model=list[TrackResponse])
async def get_playlist_tracks(
    playlist_id: str,
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> list[TrackResponse]:
    """Get the tracks of a playlist in playback order."""
    tracks = await playlist_service.get_playlist_tracks(PlaylistId.from_string(playlist_id))
    return [TrackResponse.from_entity(track) for track in tracks]


@router.post("/{playlist_id}/tracks", response_model=PlaylistResponse)
async def add_track(
    playlist_id: str,
    request: AddTrackRequest,
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> PlaylistResponse:
    """Append a track to the end of a playlist.

    Adding a track that's already in the playlist is a no-op.

    Args:
        playlist_id: Playlist ID
        request: Track to add
        playlist_service: Playlist service

    Returns:
        The updated playlist
    """
    playlist = await playlist_service.add_track(
        PlaylistId.from_string(playlist_id), TrackId.from_string(request.track_id)
    )
    return PlaylistResponse.from_entity(playlist)


@router.post("/{playlist_id}/tracks/position", response_model=PlaylistResponse)
async def add_track_at_position(
    playlist_id: str,
    request: AddTrackAtPositionRequest,
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> PlaylistResponse:
    """Insert a track at a 0-based position.

    Position must be between 0 and the current track count (inclusive).

    Args:
        playlist_id: Playlist ID
        request: Track to add and where
        playlist_service: Playlist service

    Returns:
        The updated playlist
    """
    playlist = await playlist_service.add_track_at_position(
        PlaylistId.from_string(playlist_id),
        TrackId.from_string(request.track_id),
        request.position,
    )
    return PlaylistResponse.from_entity(playlist)


# Listen, all-or-nothing: one unknown track id -> 404 and the playlist is untouched.
@router.post("/{playlist_id}/tracks/multiple", response_model=PlaylistResponse)
async def add_tracks(
    playlist_id: str,
    request: AddTracksRequest,
    playlist_service: PlaylistService = Depends(get_playlist_service),
) -> PlaylistResponse:
    """Add several tracks, appended or as one block at a position.

    Args:
        playlist_id: Playlist ID
        request: Track IDs in order, optional insert position
        playlist_service: Playlist service

    Returns:
        The updated playlist
    """
    playlist = await playlist_service.add_tracks(
        PlaylistId.from_string(playlist_id),
        [TrackId.from_string(track_id) for track_id in request.track_ids],
        request.position,
    )
    return PlaylistResponse.from_entity(playlist)
