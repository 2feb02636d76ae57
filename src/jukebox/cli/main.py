"""Jukebox CLI — run the server, prepare the database, browse tracks.

Usage:
    jukebox serve                      # Run the API with uvicorn
    jukebox init-db                    # Create all tables (dev shortcut; use alembic in prod)
    jukebox seed --count 20            # Insert sample tracks into an empty catalogue
    jukebox tracks                     # List tracks from a running server
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import os
import sys
from typing import Optional

import click
import httpx
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from jukebox import __version__
from jukebox.config import settings

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = f"http://localhost:{settings.port}"

SAMPLE_ARTISTS = [
    ("Nina Simone", "Pastel Blues"),
    ("Miles Davis", "Kind of Blue"),
    ("Aretha Franklin", "Lady Soul"),
    ("Bill Evans", "Sunday at the Village Vanguard"),
    ("Fela Kuti", "Zombie"),
]


def _api_url() -> str:
    return os.environ.get("JUKEBOX_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(api_url: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Jukebox API."""
    return httpx.AsyncClient(base_url=api_url or _api_url(), timeout=30.0)


def _engine(database_url: Optional[str]) -> AsyncEngine:
    return create_async_engine(database_url or settings.database_url)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(
            str(row.get(k) if row.get(k) is not None else "—")[:w].ljust(w)
            for _, k, w in columns
        )
        click.echo(line)


def sample_tracks(count: int) -> list[dict]:
    """Deterministic sample catalogue: count tracks cycling through SAMPLE_ARTISTS."""
    tracks = []
    for i in range(1, count + 1):
        artist, album = SAMPLE_ARTISTS[(i - 1) % len(SAMPLE_ARTISTS)]
        tracks.append({
            "name": f"Track {i:02d}",
            "artist": artist,
            "album": album,
            "duration_seconds": 150 + (i * 37) % 240,
        })
    return tracks


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="jukebox")
def main():
    """Jukebox — music tracks and user-owned playlists."""


# ---------------------------------------------------------------------------
# jukebox serve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=settings.host, show_default=True)
@click.option("--port", default=settings.port, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Restart on code changes (development)")
def serve(host: str, port: int, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run("jukebox.main:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# jukebox init-db
# ---------------------------------------------------------------------------


@main.command("init-db")
@click.option("--database-url", help="Override JUKEBOX_DATABASE_URL")
def init_db(database_url: Optional[str]):
    """Create all tables that don't exist yet."""
    _run(_init_db_impl(database_url))
    click.secho("Schema ready.", fg="green")


async def _init_db_impl(database_url: Optional[str]):
    from jukebox.db.models import Base

    engine = _engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# jukebox seed
# ---------------------------------------------------------------------------


@main.command()
@click.option("--count", "-n", default=20, show_default=True, help="Tracks to create")
@click.option("--database-url", help="Override JUKEBOX_DATABASE_URL")
def seed(count: int, database_url: Optional[str]):
    """Fill an empty track catalogue with sample tracks."""
    created = _run(_seed_impl(count, database_url))
    if created:
        click.secho(f"Created {created} tracks.", fg="green")
    else:
        click.echo("Tracks already present, nothing to do.")


async def _seed_impl(count: int, database_url: Optional[str]) -> int:
    from jukebox.db.models import Track

    engine = _engine(database_url)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    try:
        async with session_factory() as session:
            existing = await session.scalar(select(func.count()).select_from(Track))
            if existing:
                return 0
            session.add_all(Track(**t) for t in sample_tracks(count))
            await session.commit()
            return count
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# jukebox tracks
# ---------------------------------------------------------------------------


@main.command()
@click.option("--api-url", help="API base URL (or set JUKEBOX_API_URL)")
def tracks(api_url: Optional[str]):
    """List the tracks a running server knows about."""
    _run(_tracks_impl(api_url))


async def _tracks_impl(api_url: Optional[str]):
    async with _client(api_url) as c:
        try:
            r = await c.get("/tracks")
            r.raise_for_status()
        except httpx.HTTPError as e:
            click.secho(f"Could not list tracks: {e}", fg="red", err=True)
            sys.exit(1)

        rows = r.json()
        if not rows:
            click.echo("No tracks found.")
            return

        _print_table(rows, [
            ("ID", "id", 5),
            ("Name", "name", 30),
            ("Artist", "artist", 20),
            ("Album", "album", 30),
        ])


if __name__ == "__main__":
    main()
