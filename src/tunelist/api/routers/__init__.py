"""API router initialization."""

# Yo, this is the main API router! It gets mounted at /api in main.py, so the prefixes below
# turn into /api/tracks and /api/playlists. Health lives outside /api (see main.py).

from fastapi import APIRouter

from tunelist.api.routers import health, playlists, tracks

api_router = APIRouter()

api_router.include_router(tracks.router, prefix="/tracks", tags=["Tracks"])
api_router.include_router(playlists.router, prefix="/playlists", tags=["Playlists"])

__all__ = ["api_router", "health"]
