"""
Order HTTP routes — /api/link-in-bio/orders and /api/link-in-bio/order-items

Orders are owned by their seller (orders.seller_id). Order items are owned
through their order. Creating an item requires owning both the order and the
product it snapshots.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.database import get_db
from linkinbio.models import OrderItemORM, OrderORM
from linkinbio.ownership import ORDER, ORDER_ITEM, PRODUCT, owned_select, require_owned
from linkinbio.resources.common import API_PREFIX, deleted, require_id
from linkinbio.resources.orders.schemas import (
    OrderCreate,
    OrderItemCreate,
    OrderItemOut,
    OrderItemUpdate,
    OrderOut,
    OrderUpdate,
)
from linkinbio.store import delete_where, insert_row, select_rows, update_row
from linkinbio.validation import column_values

router = APIRouter(prefix=API_PREFIX, tags=["orders"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

@router.get("/orders", response_model=List[OrderOut])
async def list_orders(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    stmt = owned_select(ORDER, user.id).order_by(OrderORM.created_at.desc(), OrderORM.id)
    return await select_rows(db, stmt)


@router.post("/orders", response_model=OrderOut)
async def create_order(
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Record an order where the caller is the seller.

    Returns:
        200: the created order
        400: validation failure, or duplicate orderNumber
    """
    values = column_values(payload)
    values["seller_id"] = user.id
    order = await insert_row(db, OrderORM, values)
    logger.info("Order recorded order_id=%s seller_id=%s status=%s", order.id, user.id, order.status)
    return order


@router.put("/orders", response_model=OrderOut)
async def update_order(
    payload: OrderUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    order = await require_owned(db, ORDER, payload.id, user.id)
    return await update_row(db, order, column_values(payload, partial=True, exclude={"id"}))


@router.delete("/orders")
async def delete_order(
    id: Optional[str] = Query(default=None, description="Order id"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    order_id = require_id(id, "Order")
    await require_owned(db, ORDER, order_id, user.id)
    await delete_where(db, OrderORM, OrderORM.id == order_id)
    return deleted("Order")


# ---------------------------------------------------------------------------
# Order items
# ---------------------------------------------------------------------------

@router.get("/order-items", response_model=List[OrderItemOut])
async def list_order_items(
    order_id: Optional[str] = Query(default=None, alias="orderId"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    stmt = owned_select(ORDER_ITEM, user.id)
    if order_id:
        stmt = stmt.where(OrderItemORM.order_id == order_id)
    stmt = stmt.order_by(OrderItemORM.created_at, OrderItemORM.id)
    return await select_rows(db, stmt)


@router.post("/order-items", response_model=OrderItemOut)
async def create_order_item(
    payload: OrderItemCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the created item
        404: Order / Product not found or unauthorized
    """
    await require_owned(db, ORDER, payload.order_id, user.id)
    await require_owned(db, PRODUCT, payload.product_id, user.id)
    return await insert_row(db, OrderItemORM, column_values(payload))


@router.put("/order-items", response_model=OrderItemOut)
async def update_order_item(
    payload: OrderItemUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    item = await require_owned(db, ORDER_ITEM, payload.id, user.id)
    values = column_values(payload, partial=True, exclude={"id"})
    if values.get("order_id", item.order_id) != item.order_id:
        await require_owned(db, ORDER, values["order_id"], user.id)
    if values.get("product_id", item.product_id) != item.product_id:
        await require_owned(db, PRODUCT, values["product_id"], user.id)
    return await update_row(db, item, values)


@router.delete("/order-items")
async def delete_order_item(
    id: Optional[str] = Query(default=None, description="Order item id"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    item_id = require_id(id, "Order item")
    await require_owned(db, ORDER_ITEM, item_id, user.id)
    await delete_where(db, OrderItemORM, OrderItemORM.id == item_id)
    return deleted("Order item")
