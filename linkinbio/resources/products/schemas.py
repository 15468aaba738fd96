"""
schemas.py — Digital product and product category contracts.

Money fields (price, originalPrice) accept "10", "10.5", "10.50", 10 or 10.5
and are stored as Numeric; responses always render two decimals ("10.50").
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from linkinbio.config import settings
from linkinbio.validation import (
    ApiModel,
    ApiResponse,
    DecimalString,
    MoneyOut,
    OptionalMoneyOut,
    OptionalUrlString,
    UrlString,
)


# ---------------------------------------------------------------------------
# Categories (global catalogue)
# ---------------------------------------------------------------------------

class ProductCategoryCreate(ApiModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: Optional[str] = None
    icon: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0


class ProductCategoryUpdate(ProductCategoryCreate):
    id: str


class ProductCategoryOut(ApiResponse):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    is_active: bool
    sort_order: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

class ProductFile(ApiModel):
    name: str
    url: UrlString
    size: int = Field(..., ge=0, description="Bytes")
    type: str


class ProductCreate(ApiModel):
    category_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: Optional[str] = None
    short_description: Optional[str] = None
    thumbnail: OptionalUrlString = None
    gallery: Optional[List[UrlString]] = None
    preview_files: Optional[List[UrlString]] = None
    price: DecimalString
    original_price: Optional[DecimalString] = None
    currency: str = Field(default_factory=lambda: settings.default_currency)
    files: Optional[List[ProductFile]] = None
    is_active: bool = True
    is_public: bool = True
    stock: Optional[int] = Field(default=None, gt=0, description="None means unlimited")
    download_limit: Optional[int] = Field(default=None, gt=0)
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None


class ProductUpdate(ProductCreate):
    id: str


class ProductOut(ApiResponse):
    id: str
    user_id: str
    category_id: Optional[str] = None
    name: str
    slug: str
    description: Optional[str] = None
    short_description: Optional[str] = None
    thumbnail: Optional[str] = None
    gallery: Optional[List[str]] = None
    preview_files: Optional[List[str]] = None
    price: MoneyOut
    original_price: OptionalMoneyOut = None
    currency: str
    files: Optional[List[dict]] = None
    is_active: bool
    is_public: bool
    stock: Optional[int] = None
    download_limit: Optional[int] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    total_sales: int
    total_revenue: MoneyOut
    created_at: datetime
    updated_at: datetime


__all__ = [
    "ProductCategoryCreate",
    "ProductCategoryUpdate",
    "ProductCategoryOut",
    "ProductFile",
    "ProductCreate",
    "ProductUpdate",
    "ProductOut",
]
