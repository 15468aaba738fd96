"""
models/product.py — SQLAlchemy ORM for the digital-product catalogue.

Tables: product_categories (global), digital_products (owned by user_id)
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkinbio.database import Base, JSONType
from linkinbio.models.columns import created_at_column, updated_at_column, uuid_pk


class ProductCategoryORM(Base):
    """Global product category. Listed only when is_active."""
    __tablename__ = "product_categories"

    id: Mapped[str] = uuid_pk()
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = created_at_column()


class ProductORM(Base):
    """
    ORM model for a digital product sold by a user.

    stock:        None means unlimited.
    files:        list of {name, url, size, type} delivered after purchase.
    total_sales / total_revenue are denormalised counters, never client-written.
    """
    __tablename__ = "digital_products"

    id: Mapped[str] = uuid_pk()
    user_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("product_categories.id", ondelete="SET NULL"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    short_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    thumbnail: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gallery: Mapped[Optional[list]] = mapped_column(JSONType, nullable=True)
    preview_files: Mapped[Optional[list]] = mapped_column(JSONType, nullable=True)

    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    original_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="IDR")

    files: Mapped[Optional[list]] = mapped_column(JSONType, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    stock: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    download_limit: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=5)

    seo_title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    seo_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    total_sales: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_revenue: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()
