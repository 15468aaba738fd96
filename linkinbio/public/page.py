"""
page.py — public page resolution.

resolve_public_page(db, username) gathers everything the public renderer
needs in one pass. A missing profile and a private profile are the same
outcome (None) so the route cannot leak which usernames exist.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.models import BlockORM, LinkORM, ProductORM, ProfileORM
from linkinbio.resources.sorting import display_order
from linkinbio.store import select_one, select_rows
from linkinbio.themes import LayoutVariant
from linkinbio.validation import as_utc

logger = logging.getLogger(__name__)


@dataclass
class PublicPage:
    profile: ProfileORM
    links: List[LinkORM] = field(default_factory=list)
    blocks: List[BlockORM] = field(default_factory=list)
    products: List[ProductORM] = field(default_factory=list)

    @property
    def layout(self) -> LayoutVariant:
        return LayoutVariant.parse(self.profile.layout_variant)


def block_is_visible(block: BlockORM, now: datetime) -> bool:
    """Active, and now falls inside the (optionally open-ended) schedule window."""
    if not block.is_active:
        return False
    start = as_utc(block.scheduled_start)
    end = as_utc(block.scheduled_end)
    if start is not None and start > now:
        return False
    if end is not None and end < now:
        return False
    return True


async def resolve_public_page(
    db: AsyncSession,
    username: str,
    now: Optional[datetime] = None,
) -> Optional[PublicPage]:
    """
    Load a public profile with its visible entries.

    Returns None when the username is unknown or the profile is not public.
    Products are loaded only for the store layout.
    """
    profile = await select_one(db, select(ProfileORM).where(ProfileORM.username == username))
    if profile is None or not profile.is_public:
        return None

    now = now or datetime.now(timezone.utc)
    links = await select_rows(
        db,
        select(LinkORM)
        .where(LinkORM.profile_id == profile.id, LinkORM.is_active.is_(True))
        .order_by(*display_order(LinkORM)),
    )
    blocks = await select_rows(
        db,
        select(BlockORM)
        .where(BlockORM.profile_id == profile.id)
        .order_by(*display_order(BlockORM)),
    )
    page = PublicPage(
        profile=profile,
        links=links,
        blocks=[block for block in blocks if block_is_visible(block, now)],
    )

    if page.layout is LayoutVariant.store:
        page.products = await select_rows(
            db,
            select(ProductORM)
            .where(
                ProductORM.user_id == profile.user_id,
                ProductORM.is_active.is_(True),
                ProductORM.is_public.is_(True),
            )
            .order_by(ProductORM.created_at.desc(), ProductORM.id),
        )

    logger.debug(
        "Resolved public page username=%s links=%d blocks=%d products=%d",
        username, len(page.links), len(page.blocks), len(page.products),
    )
    return page
