"""Pydantic schemas for tracks.

Learn: JSON uses camelCase (durationSeconds, createdAt) via the alias
generator; populate_by_name lets Python code keep using snake_case.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from jukebox.schemas.playlist import PlaylistRead


class TrackRead(BaseModel):
    id: int
    name: str
    artist: Optional[str] = None
    album: Optional[str] = None
    duration_seconds: Optional[int] = None
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class TrackWithPlaylists(TrackRead):
    """A track plus the caller's own playlists that contain it."""
    playlists: list[PlaylistRead] = []
