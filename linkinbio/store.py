"""
store.py — Data access facade for the link-in-bio service.

Thin point operations over the relational store. Route handlers never call
db.add / db.execute directly; they go through these helpers.

Design principles:
  - All functions are async and accept an AsyncSession parameter
  - Writes use flush() (not commit()) — the get_db() dependency owns the transaction
  - Values arrive keyed by ORM column name (see validation.column_values)
  - Money strings are converted to Decimal for Numeric columns
  - Logs only table names, row ids and counts — never visitor data
"""
import logging
from decimal import Decimal
from typing import Any, Optional, Sequence, TypeVar

from sqlalchemy import Numeric, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from linkinbio.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def _to_columns(model: type, values: dict[str, Any]) -> dict[str, Any]:
    columns = model.__table__.columns
    prepared: dict[str, Any] = {}
    for key, value in values.items():
        if key not in columns:
            logger.debug("Dropping non-column key %s for %s", key, model.__tablename__)
            continue
        if isinstance(columns[key].type, Numeric) and isinstance(value, str):
            value = Decimal(value)
        prepared[key] = value
    return prepared


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

async def select_rows(db: AsyncSession, stmt: Select) -> list:
    """Run a SELECT and return the mapped rows as a list."""
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def select_one(db: AsyncSession, stmt: Select) -> Optional[Any]:
    """Run a SELECT expected to match at most one row. Returns None when nothing matches."""
    result = await db.execute(stmt)
    return result.scalars().first()


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

async def insert_row(db: AsyncSession, model: type[ModelT], values: dict[str, Any]) -> ModelT:
    """
    Insert one row and return it with server/default values populated.
    Uses flush() (not commit()) — caller / get_db() dependency handles commit.
    """
    orm = model(**_to_columns(model, values))
    db.add(orm)
    await db.flush()
    await db.refresh(orm)
    logger.info("Inserted %s id=%s", model.__tablename__, orm.id)
    return orm


async def update_row(db: AsyncSession, row: ModelT, values: dict[str, Any]) -> ModelT:
    """
    Apply column values to an already-loaded row. Last write wins: there is
    no version column, so concurrent updates simply overwrite each other.
    """
    model = type(row)
    for key, value in _to_columns(model, values).items():
        setattr(row, key, value)
    await db.flush()
    await db.refresh(row)
    logger.info("Updated %s id=%s fields=%d", model.__tablename__, row.id, len(values))
    return row


async def update_rows(db: AsyncSession, rows: Sequence[ModelT], values: Sequence[dict[str, Any]]) -> None:
    """Apply one values dict per row and flush once. Used for batch renumbering."""
    for row, row_values in zip(rows, values):
        for key, value in _to_columns(type(row), row_values).items():
            setattr(row, key, value)
    await db.flush()
    for row in rows:
        await db.refresh(row)
    logger.info("Updated %d rows in one flush", len(rows))


async def delete_where(db: AsyncSession, model: type, *criteria: Any) -> int:
    """
    Issue a single DELETE ... WHERE. Dependent rows are removed by the store's
    ON DELETE CASCADE constraints. Returns the number of rows removed.
    """
    result = await db.execute(delete(model).where(*criteria))
    logger.info("Deleted %s rows=%d", model.__tablename__, result.rowcount)
    return result.rowcount
