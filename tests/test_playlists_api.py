"""Playlist API tests — creation, listing, and owner-only access.

Pattern: test_<verb>_<noun>_<scenario>
"""

import pytest
from sqlalchemy import func, select

from jukebox.db.models import Playlist


# ═══════════════════════════════════════════════════════════
# Create
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_playlist(client, alice, tracks):
    track_ids = [tracks[0].id, tracks[1].id]
    r = await client.post(
        "/playlists",
        json={"name": "Mix", "description": "late night", "trackIds": track_ids},
        headers=alice,
    )
    assert r.status_code == 201
    data = r.json()
    assert data["name"] == "Mix"
    assert data["description"] == "late night"
    assert data["ownerId"] == 1
    assert "id" in data
    assert "createdAt" in data


@pytest.mark.asyncio
async def test_create_playlist_defaults(client, alice):
    """Description and tracks are optional."""
    r = await client.post("/playlists", json={"name": "Empty"}, headers=alice)
    assert r.status_code == 201
    assert r.json()["description"] == ""

    r = await client.get(f"/playlists/{r.json()['id']}", headers=alice)
    assert r.json()["tracks"] == []


@pytest.mark.asyncio
async def test_create_playlist_accepts_snake_case(client, alice, tracks):
    r = await client.post(
        "/playlists",
        json={"name": "Mix", "track_ids": [tracks[2].id]},
        headers=alice,
    )
    assert r.status_code == 201

    r = await client.get(f"/playlists/{r.json()['id']}", headers=alice)
    assert [t["id"] for t in r.json()["tracks"]] == [tracks[2].id]


@pytest.mark.asyncio
async def test_create_playlist_unknown_tracks(client, alice, tracks, db_session):
    """Unknown track ids → 404 naming them, and no playlist is written."""
    r = await client.post(
        "/playlists",
        json={"name": "Mix", "trackIds": [tracks[0].id, 98, 99]},
        headers=alice,
    )
    assert r.status_code == 404
    assert r.json() == {"message": "Track not found: 98, 99"}

    count = await db_session.scalar(select(func.count()).select_from(Playlist))
    assert count == 0


@pytest.mark.asyncio
async def test_create_playlist_duplicate_track_ids(client, alice, tracks):
    r = await client.post(
        "/playlists",
        json={"name": "Mix", "trackIds": [tracks[1].id, tracks[1].id]},
        headers=alice,
    )
    assert r.status_code == 201

    r = await client.get(f"/playlists/{r.json()['id']}", headers=alice)
    assert len(r.json()["tracks"]) == 1


@pytest.mark.asyncio
async def test_create_playlist_requires_name(client, alice):
    r = await client.post("/playlists", json={"description": "x"}, headers=alice)
    assert r.status_code == 422


# ═══════════════════════════════════════════════════════════
# List
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_list_playlists_only_own(client, alice, bob):
    await client.post("/playlists", json={"name": "A1"}, headers=alice)
    await client.post("/playlists", json={"name": "A2"}, headers=alice)
    await client.post("/playlists", json={"name": "B1"}, headers=bob)

    r = await client.get("/playlists", headers=alice)
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["A1", "A2"]

    r = await client.get("/playlists", headers=bob)
    assert [p["name"] for p in r.json()] == ["B1"]


# ═══════════════════════════════════════════════════════════
# Fetch by id
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_get_playlist_with_tracks(client, alice, tracks):
    r = await client.post(
        "/playlists",
        json={"name": "Mix", "trackIds": [tracks[1].id, tracks[0].id]},
        headers=alice,
    )
    playlist_id = r.json()["id"]

    r = await client.get(f"/playlists/{playlist_id}", headers=alice)
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == playlist_id
    assert [t["name"] for t in data["tracks"]] == ["So What", "Blue in Green"]
    assert data["tracks"][0]["durationSeconds"] == 562


@pytest.mark.asyncio
async def test_get_playlist_not_found(client, alice):
    r = await client.get("/playlists/12345", headers=alice)
    assert r.status_code == 404
    assert r.json() == {"message": "Playlist not found."}


@pytest.mark.asyncio
async def test_get_playlist_of_another_user(client, alice, bob, tracks):
    """403 and nothing else; no playlist data in the body."""
    r = await client.post(
        "/playlists", json={"name": "Secret", "trackIds": [tracks[0].id]}, headers=alice
    )
    playlist_id = r.json()["id"]

    r = await client.get(f"/playlists/{playlist_id}", headers=bob)
    assert r.status_code == 403
    assert r.json() == {"message": "You do not own this playlist."}


@pytest.mark.asyncio
async def test_get_playlist_bad_id(client, alice):
    r = await client.get("/playlists/abc", headers=alice)
    assert r.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize("playlist_id", [0, 2**31, 2**63])
async def test_get_playlist_out_of_range_id(client, alice, playlist_id):
    r = await client.get(f"/playlists/{playlist_id}", headers=alice)
    assert r.status_code == 404
    assert r.json() == {"message": "Playlist not found."}


@pytest.mark.asyncio
async def test_create_playlist_out_of_range_track_ids(client, alice, tracks, db_session):
    r = await client.post(
        "/playlists",
        json={"name": "x", "trackIds": [tracks[0].id, 2**63, -5]},
        headers=alice,
    )
    assert r.status_code == 404
    assert r.json() == {"message": f"Track not found: -5, {2**63}"}

    count = await db_session.scalar(select(func.count()).select_from(Playlist))
    assert count == 0
