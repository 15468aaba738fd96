"""
models/columns.py — column factories shared by every ORM model.

All primary keys are 36-char UUID strings generated app-side; all timestamps
are timezone-aware UTC.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def uuid_pk():
    return mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
        comment="UUID row identifier",
    )


def created_at_column():
    return mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


def updated_at_column():
    return mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
