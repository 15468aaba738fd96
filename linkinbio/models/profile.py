"""
models/profile.py — SQLAlchemy ORM for public micro-site profiles.

Table: profiles
One row per micro-site. username is unique across the whole system because
it is the public URL segment (/{username}).
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkinbio.database import Base, JSONType
from linkinbio.models.columns import created_at_column, updated_at_column, uuid_pk


class ProfileORM(Base):
    """
    ORM model for a user's micro-site.

    layout_variant / scheme_variant / button_variant are stored as free strings
    and parsed into closed variants at render time (themes.py), so a stale or
    unknown value never breaks the public page.
    social_links: platform → URL map (instagram, tiktok, youtube, ...).
    """
    __tablename__ = "profiles"

    id: Mapped[str] = uuid_pk()
    user_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owner — the auth user who may mutate this profile",
    )
    username: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        comment="Public URL segment, unique system-wide",
    )
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    avatar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    background_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    layout_template_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("layout_templates.id", ondelete="SET NULL"),
        nullable=True,
    )
    color_scheme_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("color_schemes.id", ondelete="SET NULL"),
        nullable=True,
    )
    custom_css: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    layout_variant: Mapped[str] = mapped_column(String(32), nullable=False, default="default")
    scheme_variant: Mapped[str] = mapped_column(String(32), nullable=False, default="theme1")
    button_variant: Mapped[str] = mapped_column(String(32), nullable=False, default="default")

    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    seo_title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    seo_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    analytics_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    social_links: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)

    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()
