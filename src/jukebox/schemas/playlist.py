"""Pydantic schemas for playlists.

Learn: Separate "Create" schemas (input) from "Read" schemas (output).
PlaylistCreate accepts trackIds (or track_ids); the service checks that
every id names an existing track.
"""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_camel = {
    "from_attributes": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class PlaylistCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    track_ids: list[int] = Field(default_factory=list)

    model_config = _camel


class PlaylistRead(BaseModel):
    id: int
    name: str
    description: str
    owner_id: int
    created_at: datetime

    model_config = _camel


class PlaylistTrack(BaseModel):
    id: int
    name: str
    artist: str | None = None
    album: str | None = None
    duration_seconds: int | None = None

    model_config = _camel


class PlaylistDetail(PlaylistRead):
    """Playlist with its tracks."""
    tracks: list[PlaylistTrack] = []
