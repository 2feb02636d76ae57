"""Playlist service — ownership-scoped playlist access.

Learn: Every method takes the acting user's id. Listing filters by
owner; fetching by id checks the owner and refuses everyone else. The
route layer never compares owner ids itself.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jukebox.db.models import Playlist, Track, is_valid_id
from jukebox.errors import ForbiddenError, NotFoundError

logger = structlog.get_logger()


class PlaylistService:
    """Business logic for playlists."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_playlists(self, owner_id: int) -> list[Playlist]:
        result = await self.db.execute(
            select(Playlist)
            .where(Playlist.owner_id == owner_id)
            .order_by(Playlist.id)
        )
        return list(result.scalars().all())

    async def create_playlist(
        self,
        owner_id: int,
        name: str,
        description: str = "",
        track_ids: list[int] | None = None,
    ) -> Playlist:
        """Create a playlist owned by owner_id holding the given tracks.

        Every track id must exist; otherwise NotFoundError is raised and
        nothing is written.
        """
        tracks = await self._load_tracks(track_ids or [])
        playlist = Playlist(
            name=name,
            description=description,
            owner_id=owner_id,
            tracks=tracks,
        )
        self.db.add(playlist)
        await self.db.commit()

        logger.info(
            "playlist.created",
            playlist_id=playlist.id,
            owner_id=owner_id,
            tracks=len(tracks),
        )
        return playlist

    async def get_playlist(self, playlist_id: int, owner_id: int) -> Playlist:
        """Fetch a playlist with its tracks, if owner_id owns it."""
        if not is_valid_id(playlist_id):
            raise NotFoundError("Playlist not found.")

        result = await self.db.execute(
            select(Playlist)
            .where(Playlist.id == playlist_id)
            .options(selectinload(Playlist.tracks))
        )
        playlist = result.scalars().first()
        if playlist is None:
            raise NotFoundError("Playlist not found.")
        if playlist.owner_id != owner_id:
            raise ForbiddenError("You do not own this playlist.")
        return playlist

    async def _load_tracks(self, track_ids: list[int]) -> list[Track]:
        wanted = list(dict.fromkeys(track_ids))
        if not wanted:
            return []

        in_range = [i for i in wanted if is_valid_id(i)]
        tracks = []
        if in_range:
            result = await self.db.execute(
                select(Track).where(Track.id.in_(in_range)).order_by(Track.id)
            )
            tracks = list(result.scalars().all())

        missing = sorted(set(wanted) - {t.id for t in tracks})
        if missing:
            raise NotFoundError(
                "Track not found: " + ", ".join(str(i) for i in missing)
            )
        return tracks
