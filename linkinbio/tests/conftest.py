"""
Test configuration for the link-in-bio service.

Every test gets its own in-memory SQLite database (aiosqlite, one shared
connection via StaticPool, foreign keys ON so cascades behave like PostgreSQL)
and its own fakeredis server. get_db is overridden on the FastAPI app; no
live PostgreSQL or Redis is needed.

Seeded principals:
  alice  token-alice   (valid session)
  bob    token-bob     (valid session)
  carol  token-expired (session expired yesterday)
"""
from datetime import datetime, timedelta, timezone

import fakeredis
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from linkinbio.database import Base, build_engine, get_db
from linkinbio.main import app
from linkinbio.models import AuthSessionORM, UserORM

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    """Session factory bound to the test database, pre-seeded with users and sessions."""
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    now = datetime.now(timezone.utc)
    async with factory() as session:
        session.add_all([
            UserORM(id="user-alice", name="Alice", email="alice@example.com"),
            UserORM(id="user-bob", name="Bob", email="bob@example.com"),
            UserORM(id="user-carol", name="Carol", email="carol@example.com"),
        ])
        await session.flush()
        session.add_all([
            AuthSessionORM(id="s-alice", token="token-alice", user_id="user-alice",
                           expires_at=now + timedelta(days=1)),
            AuthSessionORM(id="s-bob", token="token-bob", user_id="user-bob",
                           expires_at=now + timedelta(days=1)),
            AuthSessionORM(id="s-carol", token="token-expired", user_id="user-carol",
                           expires_at=now - timedelta(days=1)),
        ])
        await session.commit()
    return factory


@pytest_asyncio.fixture
async def redis_client():
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def client(session_factory, redis_client):
    """Async httpx client using ASGI transport — no live server needed."""

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    app.state.redis = redis_client
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
