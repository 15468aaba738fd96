"""
Server-side ordering for profile children (links, blocks).

display_order() is the single read-side ordering used everywhere a list of
links or blocks is returned, public page included.

apply_explicit_order() is the atomic counterpart of per-item sortOrder PUTs:
the whole renumbering is flushed inside the request transaction, so either
every row gets its new position or none does.

apply_move() is the drag gesture: one item dropped onto another's slot,
planned by plan_reorder() and written in the same all-or-nothing way.
"""
import logging
from typing import Any, List, Sequence

from pydantic import Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.errors import PayloadInvalid, ResourceNotFound
from linkinbio.store import select_rows, update_rows
from linkinbio.studio.ordering import plan_explicit_order, plan_reorder
from linkinbio.validation import ApiModel

logger = logging.getLogger(__name__)


class ReorderRequest(ApiModel):
    profile_id: str
    ordered_ids: List[str] = Field(..., description="Every child id of the profile, in the new display order.")


class MoveRequest(ApiModel):
    profile_id: str
    active_id: str = Field(..., description="The dragged item.")
    over_id: str = Field(..., description="The item whose slot it was dropped on.")


def display_order(model: Any) -> tuple:
    return (model.sort_order.asc(), model.created_at.asc(), model.id.asc())


async def apply_explicit_order(
    db: AsyncSession,
    model: Any,
    profile_id: str,
    ordered_ids: Sequence[str],
) -> list:
    """
    Set sort_order := position for the children of profile_id.

    The caller has already verified the profile belongs to the current user.

    Raises:
        PayloadInvalid: ordered_ids is not a permutation of the profile's children.
    """
    rows = await select_rows(
        db,
        select(model).where(model.profile_id == profile_id).order_by(*display_order(model)),
    )
    try:
        updates = plan_explicit_order(rows, ordered_ids)
    except ValueError as exc:
        raise PayloadInvalid(str(exc)) from None

    by_id = {row.id: row for row in rows}
    await update_rows(
        db,
        [by_id[row_id] for row_id, _ in updates],
        [{"sort_order": position} for _, position in updates],
    )
    logger.info(
        "Reordered %s profile_id=%s changed=%d",
        model.__tablename__, profile_id, len(updates),
    )
    return [by_id[row_id] for row_id in ordered_ids]


async def apply_move(
    db: AsyncSession,
    model: Any,
    label: str,
    profile_id: str,
    active_id: str,
    over_id: str,
) -> list:
    """
    Move active_id into the slot of over_id and renumber what shifted.

    The caller has already verified the profile belongs to the current user.

    Raises:
        ResourceNotFound: either id is not a child of profile_id.
    """
    rows = await select_rows(
        db,
        select(model).where(model.profile_id == profile_id).order_by(*display_order(model)),
    )
    known = {row.id for row in rows}
    if active_id not in known or over_id not in known:
        raise ResourceNotFound(label)

    moved, updates = plan_reorder(rows, active_id, over_id)
    by_id = {row.id: row for row in rows}
    await update_rows(
        db,
        [by_id[row_id] for row_id, _ in updates],
        [{"sort_order": position} for _, position in updates],
    )
    logger.info(
        "Moved %s id=%s over=%s profile_id=%s changed=%d",
        model.__tablename__, active_id, over_id, profile_id, len(updates),
    )
    return moved
