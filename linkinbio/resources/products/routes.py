"""
Product HTTP routes — /api/link-in-bio/products and /api/link-in-bio/product-categories

Products are owned directly (digital_products.user_id). Categories are a global
catalogue: any authenticated user may read the active ones and manage entries.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.database import get_db
from linkinbio.errors import ResourceNotFound
from linkinbio.models import ProductCategoryORM, ProductORM
from linkinbio.ownership import PRODUCT, owned_select, require_owned
from linkinbio.resources.common import API_PREFIX, deleted, require_id
from linkinbio.resources.products.schemas import (
    ProductCategoryCreate,
    ProductCategoryOut,
    ProductCategoryUpdate,
    ProductCreate,
    ProductOut,
    ProductUpdate,
)
from linkinbio.store import delete_where, insert_row, select_one, select_rows, update_row
from linkinbio.validation import column_values

router = APIRouter(prefix=API_PREFIX, tags=["products"])
logger = logging.getLogger(__name__)


async def _require_category(db: AsyncSession, category_id: Optional[str]) -> ProductCategoryORM:
    category = None
    if category_id:
        category = await select_one(
            db, select(ProductCategoryORM).where(ProductCategoryORM.id == category_id)
        )
    if category is None:
        raise ResourceNotFound("Product category")
    return category


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

@router.get("/products", response_model=List[ProductOut])
async def list_products(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    stmt = owned_select(PRODUCT, user.id).order_by(ProductORM.created_at.desc(), ProductORM.id)
    return await select_rows(db, stmt)


@router.post("/products", response_model=ProductOut)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the created product
        400: validation failure (price must have at most 2 decimals)
        404: Product category not found
    """
    values = column_values(payload)
    if values.get("category_id"):
        await _require_category(db, values["category_id"])
    values["user_id"] = user.id
    product = await insert_row(db, ProductORM, values)
    logger.info("Product created product_id=%s user_id=%s", product.id, user.id)
    return product


@router.put("/products", response_model=ProductOut)
async def update_product(
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    product = await require_owned(db, PRODUCT, payload.id, user.id)
    values = column_values(payload, partial=True, exclude={"id"})
    if values.get("category_id"):
        await _require_category(db, values["category_id"])
    return await update_row(db, product, values)


@router.delete("/products")
async def delete_product(
    id: Optional[str] = Query(default=None, description="Product id"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    product_id = require_id(id, "Product")
    await require_owned(db, PRODUCT, product_id, user.id)
    await delete_where(db, ProductORM, ProductORM.id == product_id)
    return deleted("Product")


# ---------------------------------------------------------------------------
# Product categories
# ---------------------------------------------------------------------------

@router.get("/product-categories", response_model=List[ProductCategoryOut])
async def list_product_categories(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Active categories only, in sort_order."""
    stmt = (
        select(ProductCategoryORM)
        .where(ProductCategoryORM.is_active.is_(True))
        .order_by(ProductCategoryORM.sort_order, ProductCategoryORM.name)
    )
    return await select_rows(db, stmt)


@router.post("/product-categories", response_model=ProductCategoryOut)
async def create_product_category(
    payload: ProductCategoryCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    category = await insert_row(db, ProductCategoryORM, column_values(payload))
    logger.info("Product category created category_id=%s by user_id=%s", category.id, user.id)
    return category


@router.put("/product-categories", response_model=ProductCategoryOut)
async def update_product_category(
    payload: ProductCategoryUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    category = await _require_category(db, payload.id)
    return await update_row(db, category, column_values(payload, partial=True, exclude={"id"}))


@router.delete("/product-categories")
async def delete_product_category(
    id: Optional[str] = Query(default=None, description="Category id"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    category_id = require_id(id, "Category")
    await _require_category(db, category_id)
    await delete_where(db, ProductCategoryORM, ProductCategoryORM.id == category_id)
    return deleted("Product category")
