"""
Link HTTP routes — /api/link-in-bio/links

GET     /links[?profileId=]      links of the caller's profiles, in display order
POST    /links                   create under an owned profile
PUT     /links                   update an owned link (also the per-item reorder path)
DELETE  /links?id=               delete an owned link
POST    /links/reorder           renumber all links of a profile in one transaction
POST    /links/move              drag one link onto another's slot
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.database import get_db
from linkinbio.models import LinkORM
from linkinbio.ownership import LINK, PROFILE, owned_select, require_owned
from linkinbio.resources.common import API_PREFIX, deleted, require_id
from linkinbio.resources.links.schemas import LinkCreate, LinkOut, LinkUpdate
from linkinbio.resources.sorting import (
    MoveRequest,
    ReorderRequest,
    apply_explicit_order,
    apply_move,
    display_order,
)
from linkinbio.store import delete_where, insert_row, select_rows, update_row
from linkinbio.validation import column_values

router = APIRouter(prefix=API_PREFIX, tags=["links"])
logger = logging.getLogger(__name__)


@router.get("/links", response_model=List[LinkOut])
async def list_links(
    profile_id: Optional[str] = Query(default=None, alias="profileId"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    stmt = owned_select(LINK, user.id)
    if profile_id:
        stmt = stmt.where(LinkORM.profile_id == profile_id)
    stmt = stmt.order_by(LinkORM.profile_id, *display_order(LinkORM))
    return await select_rows(db, stmt)


@router.post("/links", response_model=LinkOut)
async def create_link(
    payload: LinkCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the created link
        400: validation failure
        404: Profile not found or unauthorized
    """
    await require_owned(db, PROFILE, payload.profile_id, user.id)
    return await insert_row(db, LinkORM, column_values(payload))


@router.put("/links", response_model=LinkOut)
async def update_link(
    payload: LinkUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the updated link
        404: Link not found or unauthorized (or target profile not owned)
    """
    link = await require_owned(db, LINK, payload.id, user.id)
    values = column_values(payload, partial=True, exclude={"id"})
    if values.get("profile_id", link.profile_id) != link.profile_id:
        await require_owned(db, PROFILE, values["profile_id"], user.id)
    return await update_row(db, link, values)


@router.delete("/links")
async def delete_link(
    id: Optional[str] = Query(default=None, description="Link id"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    link_id = require_id(id, "Link")
    await require_owned(db, LINK, link_id, user.id)
    await delete_where(db, LinkORM, LinkORM.id == link_id)
    return deleted("Link")


@router.post("/links/reorder", response_model=List[LinkOut])
async def reorder_links(
    payload: ReorderRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Apply a complete display order for one profile's links atomically.

    Returns:
        200: the links in their new order
        400: orderedIds is not exactly the profile's link ids
        404: Profile not found or unauthorized
    """
    await require_owned(db, PROFILE, payload.profile_id, user.id)
    return await apply_explicit_order(db, LinkORM, payload.profile_id, payload.ordered_ids)


@router.post("/links/move", response_model=List[LinkOut])
async def move_link(
    payload: MoveRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Drop activeId onto the slot of overId; links in between shift by one.

    Returns:
        200: the profile's links in their new order
        404: Profile / Link not found or unauthorized
    """
    await require_owned(db, PROFILE, payload.profile_id, user.id)
    return await apply_move(db, LinkORM, "Link", payload.profile_id, payload.active_id, payload.over_id)
