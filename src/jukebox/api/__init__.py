"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: The identity dependency is attached to api_router itself, so it
runs for every route, public ones included. A request that presents a
bad token fails even on /tracks; a request with no token goes through
anonymously. Playlist routes add the guard at include_router level, so
every handler in that router requires a logged-in user.
"""

from fastapi import APIRouter, Depends

from jukebox.api.auth import router as auth_router
from jukebox.api.health import router as health_router
from jukebox.api.playlists import router as playlists_router
from jukebox.api.tracks import router as tracks_router
from jukebox.auth.dependencies import get_current_user, get_current_user_optional

# All protected routers require a logged-in user
_auth = [Depends(get_current_user)]

api_router = APIRouter(dependencies=[Depends(get_current_user_optional)])

# Open routes — a token is optional
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(tracks_router, tags=["tracks"])

# Protected routes — require a valid bearer token
api_router.include_router(playlists_router, tags=["playlists"], dependencies=_auth)
