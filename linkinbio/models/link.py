"""
models/link.py — SQLAlchemy ORM for profile entries.

Tables: links, blocks
Both belong to a profile (ON DELETE CASCADE) and are displayed in ascending
sort_order. sort_order is not unique; ties are broken by created_at then id.
A block generalises a link with a type, a schedule window, a click limit and
an optional password gate.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkinbio.database import Base, JSONType
from linkinbio.models.columns import created_at_column, updated_at_column, uuid_pk


class LinkORM(Base):
    __tablename__ = "links"

    id: Mapped[str] = uuid_pk()
    profile_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()


class BlockORM(Base):
    """
    ORM model for a generalised content block.

    type:     link | product | affiliate | text | image | separator
    config:   presentation extras (icon, thumbnail, imageUrl, alt, text, buttonStyle).
    password: when set, the public page never exposes url for this block.
    """
    __tablename__ = "blocks"

    id: Mapped[str] = uuid_pk()
    profile_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="link")
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    product_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("digital_products.id", ondelete="SET NULL"),
        nullable=True,
    )
    affiliate_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("affiliates.id", ondelete="SET NULL"),
        nullable=True,
    )
    config: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    open_in_new_tab: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    scheduled_start: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    scheduled_end: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    click_limit: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    password: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()
