"""
Subscription HTTP routes — /api/link-in-bio/subscriptions

GET     ?type=plans|subscriptions|all    active plans and/or the caller's subscriptions
POST    ?type=subscription               subscribe the caller to a plan
PUT                                      update one of the caller's subscriptions
DELETE  ?id=                             delete one of the caller's subscriptions
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.database import get_db
from linkinbio.errors import ResourceNotFound
from linkinbio.models import SubscriptionPlanORM, UserSubscriptionORM
from linkinbio.ownership import SUBSCRIPTION, owned_select, require_owned
from linkinbio.resources.common import API_PREFIX, deleted, require_id, require_type, require_write_type
from linkinbio.resources.subscriptions.schemas import (
    SubscriptionCreate,
    SubscriptionOverview,
    SubscriptionPlanOut,
    SubscriptionUpdate,
    UserSubscriptionOut,
)
from linkinbio.store import delete_where, insert_row, select_one, select_rows, update_row
from linkinbio.validation import column_values

router = APIRouter(prefix=API_PREFIX, tags=["subscriptions"])
logger = logging.getLogger(__name__)

VIEW_TYPES = ("plans", "subscriptions", "all")


async def _require_plan(db: AsyncSession, plan_id: str) -> SubscriptionPlanORM:
    plan = await select_one(db, select(SubscriptionPlanORM).where(SubscriptionPlanORM.id == plan_id))
    if plan is None:
        raise ResourceNotFound("Subscription plan")
    return plan


@router.get("/subscriptions", response_model=SubscriptionOverview, response_model_exclude_none=True)
async def list_subscription_data(
    type: Optional[str] = Query(default="all", description="plans | subscriptions | all"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    view = require_type(type or "all", VIEW_TYPES)
    overview = SubscriptionOverview()

    if view in ("plans", "all"):
        rows = await select_rows(
            db,
            select(SubscriptionPlanORM)
            .where(SubscriptionPlanORM.is_active.is_(True))
            .order_by(SubscriptionPlanORM.sort_order, SubscriptionPlanORM.name),
        )
        overview.subscription_plans = [SubscriptionPlanOut.model_validate(row) for row in rows]

    if view in ("subscriptions", "all"):
        rows = await select_rows(
            db,
            owned_select(SUBSCRIPTION, user.id).order_by(UserSubscriptionORM.start_date.desc()),
        )
        overview.user_subscriptions = [UserSubscriptionOut.model_validate(row) for row in rows]

    return overview


@router.post("/subscriptions", response_model=UserSubscriptionOut)
async def create_subscription(
    payload: SubscriptionCreate,
    type: Optional[str] = Query(default=None, description="subscription"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the created subscription
        400: ?type= is not "subscription", or validation failure
        404: Subscription plan not found or unauthorized
    """
    require_write_type(type, "Subscription", ("subscription",))
    await _require_plan(db, payload.plan_id)
    values = column_values(payload)
    values["user_id"] = user.id
    subscription = await insert_row(db, UserSubscriptionORM, values)
    logger.info(
        "Subscription created subscription_id=%s user_id=%s status=%s",
        subscription.id, user.id, subscription.status,
    )
    return subscription


@router.put("/subscriptions", response_model=UserSubscriptionOut)
async def update_subscription(
    payload: SubscriptionUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    subscription = await require_owned(db, SUBSCRIPTION, payload.id, user.id)
    values = column_values(payload, partial=True, exclude={"id"})
    if values.get("plan_id", subscription.plan_id) != subscription.plan_id:
        await _require_plan(db, values["plan_id"])
    return await update_row(db, subscription, values)


@router.delete("/subscriptions")
async def delete_subscription(
    id: Optional[str] = Query(default=None, description="Subscription id"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    subscription_id = require_id(id, "Subscription")
    await require_owned(db, SUBSCRIPTION, subscription_id, user.id)
    await delete_where(db, UserSubscriptionORM, UserSubscriptionORM.id == subscription_id)
    return deleted("Subscription")
