"""
models/affiliate.py — SQLAlchemy ORM for the affiliate system.

Tables:
  affiliate_programs     one per product, owned via digital_products.user_id
  affiliates             a user enrolled in a program (unique affiliate_code)
  affiliate_commissions  commission earned on an order
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkinbio.database import Base
from linkinbio.models.columns import created_at_column, updated_at_column, uuid_pk


class AffiliateProgramORM(Base):
    """commission_type: percentage | fixed"""
    __tablename__ = "affiliate_programs"

    id: Mapped[str] = uuid_pk()
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("digital_products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    commission_type: Mapped[str] = mapped_column(String(16), nullable=False, default="percentage")
    commission_value: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    requires_approval: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    terms: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()


class AffiliateORM(Base):
    """status: pending | approved | rejected | suspended"""
    __tablename__ = "affiliates"

    id: Mapped[str] = uuid_pk()
    affiliate_program_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("affiliate_programs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    affiliate_user_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
    )
    affiliate_code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    total_clicks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_sales: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_commission: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()


class AffiliateCommissionORM(Base):
    """status: pending | approved | paid"""
    __tablename__ = "affiliate_commissions"

    id: Mapped[str] = uuid_pk()
    affiliate_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("affiliates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    sale_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    commission_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    commission_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = created_at_column()
