"""Jukebox — music tracks and user-owned playlists over a REST API.

Users register and log in to receive a JWT; playlists are private to
their owner, tracks are public.
"""

__version__ = "0.1.0"
