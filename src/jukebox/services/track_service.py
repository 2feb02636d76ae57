"""Track service — public track catalogue."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jukebox.db.models import Playlist, Track, is_valid_id
from jukebox.errors import NotFoundError


class TrackService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_tracks(self) -> list[Track]:
        result = await self.db.execute(select(Track).order_by(Track.id))
        return list(result.scalars().all())

    async def get_track(self, track_id: int) -> Track:
        track = await self.db.get(Track, track_id) if is_valid_id(track_id) else None
        if track is None:
            raise NotFoundError("Track not found.")
        return track

    async def playlists_containing(
        self, track_id: int, owner_id: int
    ) -> list[Playlist]:
        """The owner's playlists that include the track."""
        result = await self.db.execute(
            select(Playlist)
            .join(Playlist.tracks)
            .where(Track.id == track_id, Playlist.owner_id == owner_id)
            .order_by(Playlist.id)
        )
        return list(result.scalars().all())
