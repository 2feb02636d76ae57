"""Track API routes — public, with a richer payload for logged-in users.

Learn: GET /tracks/:id only adds "playlists" when a user is attached,
and then only that user's playlists. Anonymous callers get the bare
track with no "playlists" key at all, so the route picks the response
schema itself instead of declaring one.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jukebox.auth.dependencies import get_current_user_optional
from jukebox.db.engine import get_db
from jukebox.db.models import User
from jukebox.schemas.playlist import PlaylistRead
from jukebox.schemas.track import TrackRead, TrackWithPlaylists
from jukebox.services.track_service import TrackService

router = APIRouter(prefix="/tracks")


def _svc(db: AsyncSession = Depends(get_db)) -> TrackService:
    return TrackService(db)


@router.get("", response_model=list[TrackRead])
async def list_tracks(svc: TrackService = Depends(_svc)):
    return await svc.list_tracks()


@router.get("/{track_id}", response_model=None)
async def get_track(
    track_id: int,
    user: Optional[User] = Depends(get_current_user_optional),
    svc: TrackService = Depends(_svc),
):
    track = await svc.get_track(track_id)
    if user is None:
        return TrackRead.model_validate(track)

    playlists = await svc.playlists_containing(track_id, owner_id=user.id)
    return TrackWithPlaylists(
        **TrackRead.model_validate(track).model_dump(),
        playlists=[PlaylistRead.model_validate(p) for p in playlists],
    )
