"""
Template HTTP routes — /api/link-in-bio/templates

GET     ?type=layout|color|all       active layout templates and/or color schemes
POST    ?type=layout|color           add a catalogue entry
PUT     ?type=layout|color           update a catalogue entry
DELETE  ?type=layout|color&id=       remove a catalogue entry (profiles fall back via SET NULL)

The catalogue is global; any authenticated user may read it.
"""
import logging
from typing import Any, Optional, Union

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.database import get_db
from linkinbio.errors import ResourceNotFound
from linkinbio.models import ColorSchemeORM, LayoutTemplateORM
from linkinbio.resources.common import (
    API_PREFIX,
    deleted,
    require_id,
    require_type,
    require_write_type,
    typed_body,
)
from linkinbio.resources.templates.schemas import (
    ColorSchemeCreate,
    ColorSchemeOut,
    ColorSchemeUpdate,
    LayoutTemplateCreate,
    LayoutTemplateOut,
    LayoutTemplateUpdate,
    TemplateOverview,
)
from linkinbio.store import delete_where, insert_row, select_one, select_rows, update_row
from linkinbio.validation import column_values

router = APIRouter(prefix=API_PREFIX, tags=["templates"])
logger = logging.getLogger(__name__)

VIEW_TYPES = ("layout", "color", "all")
WRITE_TYPES = ("layout", "color")

# kind → (model, label, create schema, update schema, response schema)
_CATALOGUE = {
    "layout": (LayoutTemplateORM, "Layout template", LayoutTemplateCreate, LayoutTemplateUpdate, LayoutTemplateOut),
    "color": (ColorSchemeORM, "Color scheme", ColorSchemeCreate, ColorSchemeUpdate, ColorSchemeOut),
}

CreateBody = typed_body(LayoutTemplateCreate, ColorSchemeCreate)
UpdateBody = typed_body(LayoutTemplateUpdate, ColorSchemeUpdate)
EntryOut = Union[LayoutTemplateOut, ColorSchemeOut]


def _entry_response(out_schema: Any, entry: Any) -> JSONResponse:
    # Both entry shapes fit either schema; serialize with the one ?type= chose.
    return JSONResponse(out_schema.model_validate(entry).model_dump(mode="json", by_alias=True))


async def _require_entry(db: AsyncSession, model: Any, label: str, entry_id: str) -> Any:
    entry = await select_one(db, select(model).where(model.id == entry_id))
    if entry is None:
        raise ResourceNotFound(label)
    return entry


@router.get("/templates", response_model=TemplateOverview, response_model_exclude_none=True)
async def list_templates(
    type: Optional[str] = Query(default="all", description="layout | color | all"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    view = require_type(type or "all", VIEW_TYPES)
    overview = TemplateOverview()

    if view in ("layout", "all"):
        rows = await select_rows(
            db,
            select(LayoutTemplateORM)
            .where(LayoutTemplateORM.is_active.is_(True))
            .order_by(LayoutTemplateORM.sort_order, LayoutTemplateORM.name),
        )
        overview.layout_templates = [LayoutTemplateOut.model_validate(row) for row in rows]

    if view in ("color", "all"):
        rows = await select_rows(
            db,
            select(ColorSchemeORM)
            .where(ColorSchemeORM.is_active.is_(True))
            .order_by(ColorSchemeORM.sort_order, ColorSchemeORM.name),
        )
        overview.color_schemes = [ColorSchemeOut.model_validate(row) for row in rows]

    return overview


@router.post("/templates", response_model=EntryOut)
async def create_template(
    type: Optional[str] = Query(default=None, description="layout | color"),
    body: CreateBody = Body(...),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> JSONResponse:
    model, label, create_schema, _, out_schema = _CATALOGUE[require_write_type(type, "Template", WRITE_TYPES)]
    payload = create_schema.model_validate(body)
    entry = await insert_row(db, model, column_values(payload))
    logger.info("%s created id=%s by user_id=%s", label, entry.id, user.id)
    return _entry_response(out_schema, entry)


@router.put("/templates", response_model=EntryOut)
async def update_template(
    type: Optional[str] = Query(default=None, description="layout | color"),
    body: UpdateBody = Body(...),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> JSONResponse:
    model, label, _, update_schema, out_schema = _CATALOGUE[require_write_type(type, "Template", WRITE_TYPES)]
    payload = update_schema.model_validate(body)
    entry = await _require_entry(db, model, label, payload.id)
    entry = await update_row(db, entry, column_values(payload, partial=True, exclude={"id"}))
    return _entry_response(out_schema, entry)


@router.delete("/templates")
async def delete_template(
    type: Optional[str] = Query(default=None, description="layout | color"),
    id: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    model, label, _, _, _ = _CATALOGUE[require_write_type(type, "Template", WRITE_TYPES)]
    entry_id = require_id(id, "Template")
    await _require_entry(db, model, label, entry_id)
    await delete_where(db, model, model.id == entry_id)
    return deleted(label)
