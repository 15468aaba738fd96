"""
schemas.py — Affiliate program, affiliate and commission contracts.

AffiliateUpdate is deliberately narrow: a program owner may only move an
affiliate's status (and stamp approvedAt), never rewrite its code or user.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from linkinbio.validation import (
    ApiModel,
    ApiResponse,
    MoneyOut,
    OptionalDateValue,
    decimal_string,
)


# commission_value is Numeric(8, 2).
CommissionValue = decimal_string(8)


class CommissionType(str, Enum):
    percentage = "percentage"
    fixed = "fixed"


class AffiliateStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    suspended = "suspended"


# ---------------------------------------------------------------------------
# Programs
# ---------------------------------------------------------------------------

class AffiliateProgramCreate(ApiModel):
    product_id: str = Field(..., description="Product the program promotes. Must belong to the caller.")
    commission_type: CommissionType = CommissionType.percentage
    commission_value: CommissionValue
    is_active: bool = True
    requires_approval: bool = False
    description: Optional[str] = None
    terms: Optional[str] = None


class AffiliateProgramUpdate(AffiliateProgramCreate):
    id: str


class AffiliateProgramOut(ApiResponse):
    id: str
    product_id: str
    commission_type: str
    commission_value: MoneyOut
    is_active: bool
    requires_approval: bool
    description: Optional[str] = None
    terms: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Affiliates
# ---------------------------------------------------------------------------

class AffiliateCreate(ApiModel):
    affiliate_program_id: str
    affiliate_user_id: str
    affiliate_code: str = Field(..., min_length=1)
    status: AffiliateStatus = AffiliateStatus.pending


class AffiliateUpdate(ApiModel):
    id: str
    status: AffiliateStatus
    approved_at: OptionalDateValue = None


class AffiliateOut(ApiResponse):
    id: str
    affiliate_program_id: str
    affiliate_user_id: str
    affiliate_code: str
    status: str
    total_clicks: int
    total_sales: int
    total_commission: MoneyOut
    approved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class AffiliateCommissionOut(ApiResponse):
    id: str
    affiliate_id: str
    order_id: str
    sale_amount: MoneyOut
    commission_amount: MoneyOut
    commission_rate: MoneyOut
    status: str
    paid_at: Optional[datetime] = None
    created_at: datetime


class AffiliateOverview(BaseModel):
    """GET /affiliates body. Only the sections selected by ?type= are present."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    affiliate_programs: Optional[List[AffiliateProgramOut]] = None
    affiliates: Optional[List[AffiliateOut]] = None
    commissions: Optional[List[AffiliateCommissionOut]] = None


__all__ = [
    "CommissionType",
    "AffiliateStatus",
    "AffiliateProgramCreate",
    "AffiliateProgramUpdate",
    "AffiliateProgramOut",
    "AffiliateCreate",
    "AffiliateUpdate",
    "AffiliateOut",
    "AffiliateCommissionOut",
    "AffiliateOverview",
]
