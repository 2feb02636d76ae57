"""Tests for the request-id / access-log middleware."""

import pytest
from structlog.testing import capture_logs


@pytest.mark.asyncio
async def test_request_id_generated(client):
    """Each request gets a unique X-Request-ID header."""
    r1 = await client.get("/health")
    r2 = await client.get("/health")
    assert "X-Request-ID" in r1.headers
    assert "X-Request-ID" in r2.headers
    assert r1.headers["X-Request-ID"] != r2.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_propagated(client):
    """Incoming X-Request-ID is propagated through the response."""
    custom_id = "test-trace-12345"
    r = await client.get("/health", headers={"X-Request-ID": custom_id})
    assert r.headers["X-Request-ID"] == custom_id


@pytest.mark.asyncio
async def test_request_id_on_error_responses(client):
    r = await client.get("/nope", headers={"X-Request-ID": "trace-404"})
    assert r.status_code == 404
    assert r.headers["X-Request-ID"] == "trace-404"


@pytest.mark.asyncio
async def test_access_log_line(client):
    """One http.request entry per request, with status and timing."""
    with capture_logs() as logs:
        await client.get("/tracks")

    entries = [e for e in logs if e["event"] == "http.request"]
    assert len(entries) == 1
    entry = entries[0]
    assert entry["method"] == "GET"
    assert entry["path"] == "/tracks"
    assert entry["status"] == 200
    assert entry["duration_ms"] >= 0


@pytest.mark.asyncio
async def test_crashed_request_keeps_request_id_and_access_log(client, monkeypatch):
    """An unhandled exception still gets the header, the 500 body and one log line."""
    from jukebox.services.track_service import TrackService

    async def explode(self):
        raise RuntimeError("database on fire")

    monkeypatch.setattr(TrackService, "list_tracks", explode)

    with capture_logs() as logs:
        r = await client.get("/tracks", headers={"X-Request-ID": "trace-500"})

    assert r.status_code == 500
    assert r.json() == {"message": "Sorry, something broke :("}
    assert r.headers["X-Request-ID"] == "trace-500"

    events = [e["event"] for e in logs]
    assert events.count("request.crashed") == 1
    access = [e for e in logs if e["event"] == "http.request"]
    assert len(access) == 1
    assert access[0]["status"] == 500
