"""
schemas.py — Subscription plan (read-only catalogue) and user subscription contracts.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from linkinbio.validation import ApiModel, ApiResponse, DateValue, MoneyOut


class SubscriptionStatus(str, Enum):
    active = "active"
    canceled = "canceled"
    expired = "expired"
    past_due = "past_due"


class SubscriptionCreate(ApiModel):
    plan_id: str
    status: SubscriptionStatus
    start_date: DateValue
    end_date: DateValue
    payment_method: Optional[str] = None
    payment_reference: Optional[str] = None

    @model_validator(mode="after")
    def _end_after_start(self) -> "SubscriptionCreate":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class SubscriptionUpdate(SubscriptionCreate):
    id: str


class SubscriptionPlanOut(ApiResponse):
    id: str
    name: str
    description: Optional[str] = None
    price: MoneyOut
    currency: str
    interval: str
    features: Optional[Dict[str, Any]] = None
    is_active: bool
    sort_order: int
    created_at: datetime


class UserSubscriptionOut(ApiResponse):
    id: str
    user_id: str
    plan_id: str
    status: str
    start_date: datetime
    end_date: datetime
    payment_method: Optional[str] = None
    payment_reference: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SubscriptionOverview(BaseModel):
    """GET /subscriptions body. Only the sections selected by ?type= are present."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    subscription_plans: Optional[List[SubscriptionPlanOut]] = None
    user_subscriptions: Optional[List[UserSubscriptionOut]] = None


__all__ = [
    "SubscriptionStatus",
    "SubscriptionCreate",
    "SubscriptionUpdate",
    "SubscriptionPlanOut",
    "UserSubscriptionOut",
    "SubscriptionOverview",
]
