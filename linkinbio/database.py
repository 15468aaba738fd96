"""
database.py — SQLAlchemy 2.0 async engine, session factory and shared column types.

This module owns ALL database connection infrastructure.
Nothing else in the codebase creates engines or sessions directly; the test
suite builds its in-memory engine through build_engine() as well.

PostgreSQL (asyncpg) is the production store. A sqlite+aiosqlite URL works for
local runs and tests: build_engine() switches SQLite foreign keys on so the
ON DELETE CASCADE / SET NULL rules (profile → links, blocks, views) behave
the same on both.

Usage in routes (via dependency injection):
    from linkinbio.database import get_db
    async def my_route(db: AsyncSession = Depends(get_db)): ...
"""
import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import JSON, event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from linkinbio.config import settings

logger = logging.getLogger(__name__)

# socialLinks, block config, template config/colors: JSONB on PostgreSQL, JSON on SQLite
JSONType = JSON().with_variant(JSONB(), "postgresql")


# ---------------------------------------------------------------------------
# Declarative base: ALL ORM models inherit from this
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base.
    All ORM models in linkinbio/models/ inherit from Base.
    Defined here (not in models/) to prevent circular imports in alembic/env.py.
    """
    pass


# ---------------------------------------------------------------------------
# Engine factory
# ---------------------------------------------------------------------------
def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **engine_kwargs: Any) -> AsyncEngine:
    """
    Create the async engine for url.

    PostgreSQL gets the pool sized from settings and pre-ping. SQLite gets
    check_same_thread off and foreign keys on for every new connection.
    engine_kwargs override either (tests pass poolclass=StaticPool).
    """
    if url.startswith("sqlite"):
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        options.update(engine_kwargs)
        engine = create_async_engine(url, echo=settings.debug, **options)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    options = {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,    # Detect and discard stale connections before each use
    }
    options.update(engine_kwargs)
    return create_async_engine(url, echo=settings.debug, **options)


# ---------------------------------------------------------------------------
# Async engine: one per application lifetime
# ---------------------------------------------------------------------------
async_engine = build_engine(settings.database_url)

# ---------------------------------------------------------------------------
# Session factory: produces AsyncSession instances
# ---------------------------------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,   # Rows stay readable for the response after commit
)


# ---------------------------------------------------------------------------
# FastAPI dependency: one transaction per request
# ---------------------------------------------------------------------------
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield the request's AsyncSession; commit on success, roll back on any error.

    Every write issued while handling one request lands in a single
    transaction, so /links/reorder, /links/move and the studio draft commit
    are all-or-nothing.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as exc:
            await session.rollback()
            logger.debug("Request transaction rolled back: %s", type(exc).__name__)
            raise
