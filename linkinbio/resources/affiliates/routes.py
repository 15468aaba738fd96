"""
Affiliate HTTP routes — /api/link-in-bio/affiliates

One path serves three resources, selected with ?type=:

  GET     ?type=programs|affiliates|commissions|all   (default all)
  POST    ?type=program|affiliate
  PUT     ?type=program|affiliate
  DELETE  ?type=program|affiliate&id=

Everything is scoped to programs on the caller's own products.
"""
import logging
from typing import Optional, Union

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.database import get_db
from linkinbio.models import AffiliateCommissionORM, AffiliateORM, AffiliateProgramORM
from linkinbio.ownership import (
    AFFILIATE,
    AFFILIATE_COMMISSION,
    AFFILIATE_PROGRAM,
    PRODUCT,
    owned_select,
    require_owned,
)
from linkinbio.resources.affiliates.schemas import (
    AffiliateCommissionOut,
    AffiliateCreate,
    AffiliateOut,
    AffiliateOverview,
    AffiliateProgramCreate,
    AffiliateProgramOut,
    AffiliateProgramUpdate,
    AffiliateUpdate,
)
from linkinbio.resources.common import (
    API_PREFIX,
    deleted,
    require_id,
    require_type,
    require_write_type,
    typed_body,
)
from linkinbio.store import delete_where, insert_row, select_rows, update_row
from linkinbio.validation import column_values

router = APIRouter(prefix=API_PREFIX, tags=["affiliates"])
logger = logging.getLogger(__name__)

VIEW_TYPES = ("programs", "affiliates", "commissions", "all")
WRITE_TYPES = ("program", "affiliate")

CreateBody = typed_body(AffiliateProgramCreate, AffiliateCreate)
UpdateBody = typed_body(AffiliateProgramUpdate, AffiliateUpdate)


@router.get("/affiliates", response_model=AffiliateOverview, response_model_exclude_none=True)
async def list_affiliate_data(
    type: Optional[str] = Query(default="all", description="programs | affiliates | commissions | all"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    view = require_type(type or "all", VIEW_TYPES)
    overview = AffiliateOverview()

    if view in ("programs", "all"):
        rows = await select_rows(
            db,
            owned_select(AFFILIATE_PROGRAM, user.id).order_by(AffiliateProgramORM.created_at),
        )
        overview.affiliate_programs = [AffiliateProgramOut.model_validate(row) for row in rows]

    if view in ("affiliates", "all"):
        rows = await select_rows(
            db,
            owned_select(AFFILIATE, user.id).order_by(AffiliateORM.created_at),
        )
        overview.affiliates = [AffiliateOut.model_validate(row) for row in rows]

    if view in ("commissions", "all"):
        rows = await select_rows(
            db,
            owned_select(AFFILIATE_COMMISSION, user.id).order_by(AffiliateCommissionORM.created_at.desc()),
        )
        overview.commissions = [AffiliateCommissionOut.model_validate(row) for row in rows]

    return overview


@router.post("/affiliates", response_model=Union[AffiliateProgramOut, AffiliateOut])
async def create_affiliate_data(
    type: Optional[str] = Query(default=None, description="program | affiliate"),
    body: CreateBody = Body(...),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the created program or affiliate
        400: missing/invalid ?type=, or validation failure
        404: Product / Affiliate program not found or unauthorized
    """
    kind = require_write_type(type, "Affiliate", WRITE_TYPES)

    if kind == "program":
        payload = AffiliateProgramCreate.model_validate(body)
        await require_owned(db, PRODUCT, payload.product_id, user.id)
        program = await insert_row(db, AffiliateProgramORM, column_values(payload))
        return AffiliateProgramOut.model_validate(program)

    payload = AffiliateCreate.model_validate(body)
    await require_owned(db, AFFILIATE_PROGRAM, payload.affiliate_program_id, user.id)
    affiliate = await insert_row(db, AffiliateORM, column_values(payload))
    logger.info("Affiliate enrolled affiliate_id=%s program_id=%s", affiliate.id, affiliate.affiliate_program_id)
    return AffiliateOut.model_validate(affiliate)


@router.put("/affiliates", response_model=Union[AffiliateProgramOut, AffiliateOut])
async def update_affiliate_data(
    type: Optional[str] = Query(default=None, description="program | affiliate"),
    body: UpdateBody = Body(...),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    kind = require_write_type(type, "Affiliate", WRITE_TYPES)

    if kind == "program":
        payload = AffiliateProgramUpdate.model_validate(body)
        program = await require_owned(db, AFFILIATE_PROGRAM, payload.id, user.id)
        values = column_values(payload, partial=True, exclude={"id"})
        if values.get("product_id", program.product_id) != program.product_id:
            await require_owned(db, PRODUCT, values["product_id"], user.id)
        program = await update_row(db, program, values)
        return AffiliateProgramOut.model_validate(program)

    payload = AffiliateUpdate.model_validate(body)
    affiliate = await require_owned(db, AFFILIATE, payload.id, user.id)
    affiliate = await update_row(db, affiliate, column_values(payload, partial=True, exclude={"id"}))
    logger.info("Affiliate status changed affiliate_id=%s status=%s", affiliate.id, affiliate.status)
    return AffiliateOut.model_validate(affiliate)


@router.delete("/affiliates")
async def delete_affiliate_data(
    type: Optional[str] = Query(default=None, description="program | affiliate"),
    id: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    kind = require_write_type(type, "Affiliate", WRITE_TYPES)

    if kind == "program":
        program_id = require_id(id, "Affiliate program")
        await require_owned(db, AFFILIATE_PROGRAM, program_id, user.id)
        await delete_where(db, AffiliateProgramORM, AffiliateProgramORM.id == program_id)
        return deleted("Affiliate program")

    affiliate_id = require_id(id, "Affiliate")
    await require_owned(db, AFFILIATE, affiliate_id, user.id)
    await delete_where(db, AffiliateORM, AffiliateORM.id == affiliate_id)
    return deleted("Affiliate")
