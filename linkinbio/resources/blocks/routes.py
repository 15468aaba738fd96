"""
Block HTTP routes — /api/link-in-bio/blocks

Same contract as links, plus reference checks: a product block must point at
one of the caller's products, an affiliate block at one of the caller's own
affiliate enrolments.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.database import get_db
from linkinbio.errors import VALIDATION_FAILED, PayloadInvalid
from linkinbio.models import BlockORM
from linkinbio.ownership import (
    AFFILIATE_ENROLMENT,
    BLOCK,
    PRODUCT,
    PROFILE,
    owned_select,
    require_owned,
)
from linkinbio.resources.blocks.schemas import (
    RULE_COLUMNS,
    BlockCreate,
    BlockOut,
    BlockUpdate,
    check_block_rules,
)
from linkinbio.resources.common import API_PREFIX, deleted, require_id
from linkinbio.resources.sorting import (
    MoveRequest,
    ReorderRequest,
    apply_explicit_order,
    apply_move,
    display_order,
)
from linkinbio.store import delete_where, insert_row, select_rows, update_row
from linkinbio.validation import column_values

router = APIRouter(prefix=API_PREFIX, tags=["blocks"])
logger = logging.getLogger(__name__)


async def _check_references(db: AsyncSession, values: dict, user_id: str) -> None:
    if values.get("profile_id"):
        await require_owned(db, PROFILE, values["profile_id"], user_id)
    if values.get("product_id"):
        await require_owned(db, PRODUCT, values["product_id"], user_id)
    if values.get("affiliate_id"):
        await require_owned(db, AFFILIATE_ENROLMENT, values["affiliate_id"], user_id)


@router.get("/blocks", response_model=List[BlockOut])
async def list_blocks(
    profile_id: Optional[str] = Query(default=None, alias="profileId"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    stmt = owned_select(BLOCK, user.id)
    if profile_id:
        stmt = stmt.where(BlockORM.profile_id == profile_id)
    stmt = stmt.order_by(BlockORM.profile_id, *display_order(BlockORM))
    return await select_rows(db, stmt)


@router.post("/blocks", response_model=BlockOut)
async def create_block(
    payload: BlockCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the created block
        400: validation failure (including type/reference rules)
        404: Profile / Product / Affiliate not found or unauthorized
    """
    values = column_values(payload)
    await _check_references(db, values, user.id)
    block = await insert_row(db, BlockORM, values)
    logger.info("Block created block_id=%s type=%s", block.id, block.type)
    return block


@router.put("/blocks", response_model=BlockOut)
async def update_block(
    payload: BlockUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    block = await require_owned(db, BLOCK, payload.id, user.id)
    values = column_values(payload, partial=True, exclude={"id"})
    merged = {column: getattr(block, column) for column in RULE_COLUMNS}
    merged.update(values)
    try:
        check_block_rules(merged)
    except ValueError as exc:
        raise PayloadInvalid(VALIDATION_FAILED, issues={"formErrors": [str(exc)], "fieldErrors": {}}) from None
    await _check_references(db, values, user.id)
    return await update_row(db, block, values)


@router.delete("/blocks")
async def delete_block(
    id: Optional[str] = Query(default=None, description="Block id"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    block_id = require_id(id, "Block")
    await require_owned(db, BLOCK, block_id, user.id)
    await delete_where(db, BlockORM, BlockORM.id == block_id)
    return deleted("Block")


@router.post("/blocks/reorder", response_model=List[BlockOut])
async def reorder_blocks(
    payload: ReorderRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    await require_owned(db, PROFILE, payload.profile_id, user.id)
    return await apply_explicit_order(db, BlockORM, payload.profile_id, payload.ordered_ids)


@router.post("/blocks/move", response_model=List[BlockOut])
async def move_block(
    payload: MoveRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    await require_owned(db, PROFILE, payload.profile_id, user.id)
    return await apply_move(db, BlockORM, "Block", payload.profile_id, payload.active_id, payload.over_id)
