"""
schemas.py — Order and order item contracts.

Orders are bookkeeping records only: status moves are written as sent, no
payment gateway is contacted.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import EmailStr, Field

from linkinbio.config import settings
from linkinbio.validation import (
    ApiModel,
    ApiResponse,
    DecimalString,
    MoneyOut,
    OptionalDateValue,
    OptionalMoneyOut,
)


class OrderStatus(str, Enum):
    pending = "pending"
    paid = "paid"
    failed = "failed"
    refunded = "refunded"


class OrderCreate(ApiModel):
    order_number: str = Field(..., min_length=1)
    customer_id: Optional[str] = None
    customer_email: EmailStr
    customer_name: str = Field(..., min_length=1)
    customer_phone: Optional[str] = None
    affiliate_id: Optional[str] = None
    subtotal: DecimalString
    tax: Optional[DecimalString] = None
    total: DecimalString
    currency: str = Field(default_factory=lambda: settings.default_currency)
    status: OrderStatus = OrderStatus.pending
    payment_method: Optional[str] = None
    payment_reference: Optional[str] = None
    paid_at: OptionalDateValue = None
    expires_at: OptionalDateValue = None


class OrderUpdate(OrderCreate):
    id: str


class OrderOut(ApiResponse):
    id: str
    order_number: str
    customer_id: Optional[str] = None
    customer_email: str
    customer_name: str
    customer_phone: Optional[str] = None
    affiliate_id: Optional[str] = None
    seller_id: str
    subtotal: MoneyOut
    tax: OptionalMoneyOut = None
    total: MoneyOut
    currency: str
    status: str
    payment_method: Optional[str] = None
    payment_reference: Optional[str] = None
    paid_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class OrderItemCreate(ApiModel):
    order_id: str
    product_id: str
    product_name: str = Field(..., min_length=1)
    product_price: DecimalString
    quantity: int = Field(default=1, gt=0)
    download_count: int = Field(default=0, ge=0)
    download_limit: int = Field(default=5, gt=0)
    download_expires_at: OptionalDateValue = None


class OrderItemUpdate(OrderItemCreate):
    id: str


class OrderItemOut(ApiResponse):
    id: str
    order_id: str
    product_id: str
    product_name: str
    product_price: MoneyOut
    quantity: int
    download_count: int
    download_limit: int
    download_expires_at: Optional[datetime] = None
    created_at: datetime


__all__ = [
    "OrderStatus",
    "OrderCreate",
    "OrderUpdate",
    "OrderOut",
    "OrderItemCreate",
    "OrderItemUpdate",
    "OrderItemOut",
]
