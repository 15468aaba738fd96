"""
models/template.py — SQLAlchemy ORM for the global design catalogue.

Tables: layout_templates, color_schemes
Neither is owned by a user; profiles reference them by id (ON DELETE SET NULL).
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkinbio.database import Base, JSONType
from linkinbio.models.columns import created_at_column, uuid_pk


class LayoutTemplateORM(Base):
    """config: {layout, headerStyle, buttonStyle, spacing}"""
    __tablename__ = "layout_templates"

    id: Mapped[str] = uuid_pk()
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    preview: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    config: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = created_at_column()


class ColorSchemeORM(Base):
    """colors: {primary, secondary, background, surface, text, textSecondary, accent, border}"""
    __tablename__ = "color_schemes"

    id: Mapped[str] = uuid_pk()
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    colors: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    preview: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = created_at_column()
