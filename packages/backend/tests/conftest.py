"""Test fixtures — a fresh in-memory database per test.

Each test gets its own SQLite engine (StaticPool, so every session sees
the same in-memory database) with the schema created from the models.
The app's get_db is overridden to hand out a new session per request,
just like production: one request, one unit of work.

Settings are pinned through env vars before anything from castline is
imported.
"""

import os

os.environ["CASTLINE_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CASTLINE_ENVIRONMENT"] = "test"
os.environ["CASTLINE_BCRYPT_ROUNDS"] = "4"  # fastest bcrypt work factor

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from castline.db.engine import get_db
from castline.db.models import Base
from castline.main import app

OPERATIONS_URL = "/api/v1/operations"
PASSWORD = "12345"


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """A session for tests that drive services directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client against the app, wired to the per-test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def call(client):
    """Run one operation: ``await call("login", {...}, token=...)`` → response JSON."""

    async def _call(operation: str, input: dict | None = None, token: str | None = None):
        headers = {"x-jwt": token} if token else {}
        r = await client.post(
            OPERATIONS_URL,
            json={"operation": operation, "input": input},
            headers=headers,
        )
        assert r.status_code == 200
        return r.json()

    return _call


@pytest.fixture
def signup(call):
    """Create an account and return a token for it."""

    async def _signup(email: str, role: str = "Host") -> str:
        created = await call(
            "createAccount", {"email": email, "password": PASSWORD, "role": role}
        )
        assert created["data"]["createAccount"]["ok"] is True
        login = await call("login", {"email": email, "password": PASSWORD})
        return login["data"]["login"]["token"]

    return _signup


@pytest_asyncio.fixture()
async def host_token(signup):
    return await signup("host@castline.fm", "Host")


@pytest_asyncio.fixture()
async def other_host_token(signup):
    return await signup("rival@castline.fm", "Host")


@pytest_asyncio.fixture()
async def listener_token(signup):
    return await signup("listener@castline.fm", "Listener")
