"""
schemas.py — Analytics contracts.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from linkinbio.validation import ApiModel, ApiResponse


class LinkClickCreate(ApiModel):
    link_id: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    referer: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    device: Optional[str] = None
    browser: Optional[str] = None


class LinkClickOut(ApiResponse):
    id: str
    link_id: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    referer: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    device: Optional[str] = None
    browser: Optional[str] = None
    clicked_at: datetime


class ProfileViewOut(ApiResponse):
    id: str
    profile_id: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    referer: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    device: Optional[str] = None
    browser: Optional[str] = None
    viewed_at: datetime


class AnalyticsOverview(BaseModel):
    """GET /analytics body. Only the sections selected by ?type= are present."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    link_clicks: Optional[List[LinkClickOut]] = None
    profile_views: Optional[List[ProfileViewOut]] = None


__all__ = ["LinkClickCreate", "LinkClickOut", "ProfileViewOut", "AnalyticsOverview"]
