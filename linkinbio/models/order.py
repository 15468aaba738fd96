"""
models/order.py — SQLAlchemy ORM for orders and their line items.

Tables: orders (owned via seller_id), order_items (owned via orders.seller_id)
Orders are recorded here only; payment processing happens elsewhere.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkinbio.database import Base
from linkinbio.models.columns import created_at_column, updated_at_column, uuid_pk


class OrderORM(Base):
    """
    status: pending | paid | failed | refunded
    customer_id is optional (guest checkout); seller_id is the owner.
    """
    __tablename__ = "orders"

    id: Mapped[str] = uuid_pk()
    order_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    customer_id: Mapped[Optional[str]] = mapped_column(
        Text,
        ForeignKey("user.id", ondelete="SET NULL"),
        nullable=True,
    )
    customer_email: Mapped[str] = mapped_column(Text, nullable=False)
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    customer_phone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    affiliate_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("affiliates.id", ondelete="SET NULL"),
        nullable=True,
    )
    seller_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    tax: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True, default=Decimal("0"))
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="IDR")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    payment_method: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_reference: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()


class OrderItemORM(Base):
    """Line item. product_name / product_price are snapshots taken at order time."""
    __tablename__ = "order_items"

    id: Mapped[str] = uuid_pk()
    order_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("digital_products.id", ondelete="CASCADE"),
        nullable=False,
    )
    product_name: Mapped[str] = mapped_column(Text, nullable=False)
    product_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    download_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    download_expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = created_at_column()
