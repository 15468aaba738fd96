"""
Tests for database.py — engine factory behaviour on SQLite.
"""
import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from linkinbio.database import Base, build_engine
from linkinbio.models import LinkORM


@pytest.mark.asyncio
async def test_sqlite_engine_enforces_foreign_keys() -> None:
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        factory = async_sessionmaker(bind=engine, class_=AsyncSession)
        async with factory() as session:
            session.add(LinkORM(profile_id="no-such-profile", title="Orphan", url="https://example.com"))
            with pytest.raises(IntegrityError):
                await session.flush()
    finally:
        await engine.dispose()


def test_sqlite_engine_skips_server_pool_options() -> None:
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    assert isinstance(engine.sync_engine.pool, StaticPool)
    assert engine.dialect.name == "sqlite"
