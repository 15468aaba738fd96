"""
Analytics HTTP routes — /api/link-in-bio/analytics

GET   ?type=link-clicks|profile-views|all&limit=N   newest first, caller's profiles only
POST                                                 record a link click (NO authentication)

Visitor IPs are hashed before storage, whether they arrive in the body or
are taken from the request.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.config import settings
from linkinbio.database import get_db
from linkinbio.errors import ResourceNotFound
from linkinbio.models import LinkClickORM, LinkORM, ProfileViewORM
from linkinbio.ownership import LINK_CLICK, PROFILE_VIEW, owned_select
from linkinbio.resources.analytics.schemas import (
    AnalyticsOverview,
    LinkClickCreate,
    LinkClickOut,
    ProfileViewOut,
)
from linkinbio.resources.analytics.tracking import (
    hash_ip,
    record_link_click,
    visitor_from_request,
)
from linkinbio.resources.common import API_PREFIX, require_type
from linkinbio.store import select_one, select_rows
from linkinbio.validation import column_values

router = APIRouter(prefix=API_PREFIX, tags=["analytics"])
logger = logging.getLogger(__name__)

VIEW_TYPES = ("link-clicks", "profile-views", "all")
MAX_LIMIT = 1000


@router.get("/analytics", response_model=AnalyticsOverview, response_model_exclude_none=True)
async def list_analytics(
    type: Optional[str] = Query(default="all", description="link-clicks | profile-views | all"),
    limit: Optional[int] = Query(default=None, ge=1, le=MAX_LIMIT),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    view = require_type(type or "all", VIEW_TYPES)
    limit = limit or settings.analytics_default_limit
    overview = AnalyticsOverview()

    if view in ("link-clicks", "all"):
        rows = await select_rows(
            db,
            owned_select(LINK_CLICK, user.id)
            .order_by(LinkClickORM.clicked_at.desc(), LinkClickORM.id)
            .limit(limit),
        )
        overview.link_clicks = [LinkClickOut.model_validate(row) for row in rows]

    if view in ("profile-views", "all"):
        rows = await select_rows(
            db,
            owned_select(PROFILE_VIEW, user.id)
            .order_by(ProfileViewORM.viewed_at.desc(), ProfileViewORM.id)
            .limit(limit),
        )
        overview.profile_views = [ProfileViewOut.model_validate(row) for row in rows]

    return overview


@router.post("/analytics", response_model=LinkClickOut)
async def record_click(
    payload: LinkClickCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    Public endpoint hit by visitors' browsers.

    Returns:
        200: the stored click (IP hashed)
        400: validation failure
        404: Link not found
    """
    link = await select_one(db, select(LinkORM).where(LinkORM.id == payload.link_id))
    if link is None:
        raise ResourceNotFound("Link")

    visitor = visitor_from_request(request)
    values = column_values(payload, exclude={"link_id"})
    if values.get("ip_address"):
        values["ip_address"] = hash_ip(values["ip_address"])
    return await record_link_click(db, link.id, {**visitor, **values})
