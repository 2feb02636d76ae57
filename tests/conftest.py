"""Test fixtures — a fresh database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own engine with the schema created from the models
   (SQLite in memory unless JUKEBOX_DATABASE_URL points elsewhere).
2. The app's get_db dependency is overridden to hand out that session,
   so routes and the identity dependency see the test's data.
3. After the test the schema is dropped and the engine disposed.

Environment defaults are set before importing jukebox: settings are read
once at import time.
"""

import os

os.environ.setdefault("JUKEBOX_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JUKEBOX_BCRYPT_ROUNDS", "4")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.engine import make_url  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from jukebox.config import settings  # noqa: E402
from jukebox.db.engine import get_db  # noqa: E402
from jukebox.db.models import Base, Track  # noqa: E402
from jukebox.main import app  # noqa: E402


TEST_DB_URL = settings.database_url


def _test_engine():
    if make_url(TEST_DB_URL).get_backend_name() == "sqlite":
        # One shared connection, or every session would see its own empty :memory: DB
        return create_async_engine(
            TEST_DB_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(TEST_DB_URL, echo=False)


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a freshly created schema."""
    engine = _test_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with the app's get_db pointed at the test session.

    Learn: Auth is NOT mocked. Tests register real users and send real
    bearer tokens, so the identity dependency and the guard run exactly
    as in production.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def signup(client):
    """Register users through the API; returns their Authorization headers."""
    async def _signup(username: str, password: str = "pw") -> dict:
        r = await client.post(
            "/register", json={"username": username, "password": password}
        )
        assert r.status_code == 201, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _signup


@pytest_asyncio.fixture()
async def alice(signup):
    return await signup("alice", "pw1")


@pytest_asyncio.fixture()
async def bob(signup):
    return await signup("bob", "pw2")


@pytest_asyncio.fixture()
async def tracks(db_session):
    """Three tracks in the catalogue."""
    rows = [
        Track(name="So What", artist="Miles Davis", album="Kind of Blue", duration_seconds=562),
        Track(name="Blue in Green", artist="Miles Davis", album="Kind of Blue"),
        Track(name="Feeling Good", artist="Nina Simone"),
    ]
    db_session.add_all(rows)
    await db_session.commit()
    return rows
