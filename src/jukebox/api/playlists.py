"""Playlist API routes. Every route here requires a logged-in user.

Learn: The guard is applied in api/__init__.py; handlers still ask for
get_current_user to receive the User, and FastAPI hands back the cached
value instead of checking the token again.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jukebox.auth.dependencies import get_current_user
from jukebox.db.engine import get_db
from jukebox.db.models import User
from jukebox.schemas.playlist import PlaylistCreate, PlaylistDetail, PlaylistRead
from jukebox.services.playlist_service import PlaylistService

router = APIRouter(prefix="/playlists")


def _svc(db: AsyncSession = Depends(get_db)) -> PlaylistService:
    return PlaylistService(db)


@router.get("", response_model=list[PlaylistRead])
async def list_playlists(
    user: User = Depends(get_current_user),
    svc: PlaylistService = Depends(_svc),
):
    """Playlists owned by the caller."""
    return await svc.list_playlists(user.id)


@router.post("", response_model=PlaylistRead, status_code=201)
async def create_playlist(
    body: PlaylistCreate,
    user: User = Depends(get_current_user),
    svc: PlaylistService = Depends(_svc),
):
    return await svc.create_playlist(
        owner_id=user.id,
        name=body.name,
        description=body.description,
        track_ids=body.track_ids,
    )


@router.get("/{playlist_id}", response_model=PlaylistDetail)
async def get_playlist(
    playlist_id: int,
    user: User = Depends(get_current_user),
    svc: PlaylistService = Depends(_svc),
):
    """A playlist with its tracks. 404 if missing, 403 if not yours."""
    return await svc.get_playlist(playlist_id, owner_id=user.id)
