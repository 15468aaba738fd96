"""
models/subscription.py — SQLAlchemy ORM for platform plans.

Tables: subscription_plans (global catalogue), user_subscriptions (owned by user_id)
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkinbio.database import Base, JSONType
from linkinbio.models.columns import created_at_column, updated_at_column, uuid_pk


class SubscriptionPlanORM(Base):
    """
    interval: monthly | yearly
    features: {maxLinks, maxProducts, customDomain, analytics, customCSS, removeWatermark}
    """
    __tablename__ = "subscription_plans"

    id: Mapped[str] = uuid_pk()
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="IDR")
    interval: Mapped[str] = mapped_column(String(16), nullable=False)
    features: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = created_at_column()


class UserSubscriptionORM(Base):
    """status: active | canceled | expired | past_due"""
    __tablename__ = "user_subscriptions"

    id: Mapped[str] = uuid_pk()
    user_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    plan_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("subscription_plans.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payment_method: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_reference: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()
