"""
schemas.py — Link request/response contracts.
"""
from datetime import datetime

from pydantic import Field

from linkinbio.validation import ApiModel, ApiResponse, UrlString


class LinkCreate(ApiModel):
    profile_id: str = Field(..., description="Owning profile. Must belong to the caller.")
    title: str = Field(..., min_length=1)
    url: UrlString
    is_active: bool = True
    sort_order: int = Field(default=0, description="Ascending display position; ties keep creation order.")


class LinkUpdate(LinkCreate):
    id: str


class LinkOut(ApiResponse):
    id: str
    profile_id: str
    title: str
    url: str
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


__all__ = ["LinkCreate", "LinkUpdate", "LinkOut"]
