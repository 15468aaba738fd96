"""
ownership.py — ownership-check layer.

Every owned resource declares an OwnershipChain: the join path from its table
back to the column holding the owning user id. Two operations are built on it:

  owned_select(chain, user_id)                       SELECT scoped to the caller, used by every list read
  require_owned(db, chain, resource_id, user_id)     the row, or ResourceNotFound

require_owned never distinguishes "absent" from "owned by someone else": both
raise ResourceNotFound with the same "<Label> not found or unauthorized" text.
Create operations call it on each referenced parent before inserting the child.
"""
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from linkinbio.errors import ResourceNotFound
from linkinbio.models import (
    AffiliateCommissionORM,
    AffiliateORM,
    AffiliateProgramORM,
    BlockORM,
    LinkClickORM,
    LinkORM,
    OrderItemORM,
    OrderORM,
    ProductORM,
    ProfileORM,
    ProfileViewORM,
    UserSubscriptionORM,
)
from linkinbio.store import select_one


@dataclass(frozen=True)
class OwnershipChain:
    """
    model:        the resource table
    label:        human name used in error messages ("Link", "Order item")
    owner_column: column compared against the current user id
    joins:        (target, onclause) pairs walked from model to owner_column's table
    """
    model: type
    label: str
    owner_column: Any
    joins: Tuple[Tuple[type, Any], ...] = field(default_factory=tuple)


PROFILE = OwnershipChain(ProfileORM, "Profile", ProfileORM.user_id)
LINK = OwnershipChain(
    LinkORM, "Link", ProfileORM.user_id,
    joins=((ProfileORM, LinkORM.profile_id == ProfileORM.id),),
)
BLOCK = OwnershipChain(
    BlockORM, "Block", ProfileORM.user_id,
    joins=((ProfileORM, BlockORM.profile_id == ProfileORM.id),),
)
PRODUCT = OwnershipChain(ProductORM, "Product", ProductORM.user_id)
ORDER = OwnershipChain(OrderORM, "Order", OrderORM.seller_id)
ORDER_ITEM = OwnershipChain(
    OrderItemORM, "Order item", OrderORM.seller_id,
    joins=((OrderORM, OrderItemORM.order_id == OrderORM.id),),
)
AFFILIATE_PROGRAM = OwnershipChain(
    AffiliateProgramORM, "Affiliate program", ProductORM.user_id,
    joins=((ProductORM, AffiliateProgramORM.product_id == ProductORM.id),),
)
AFFILIATE = OwnershipChain(
    AffiliateORM, "Affiliate", ProductORM.user_id,
    joins=(
        (AffiliateProgramORM, AffiliateORM.affiliate_program_id == AffiliateProgramORM.id),
        (ProductORM, AffiliateProgramORM.product_id == ProductORM.id),
    ),
)
AFFILIATE_COMMISSION = OwnershipChain(
    AffiliateCommissionORM, "Affiliate commission", ProductORM.user_id,
    joins=(
        (AffiliateORM, AffiliateCommissionORM.affiliate_id == AffiliateORM.id),
        (AffiliateProgramORM, AffiliateORM.affiliate_program_id == AffiliateProgramORM.id),
        (ProductORM, AffiliateProgramORM.product_id == ProductORM.id),
    ),
)
# The caller's own enrolment as an affiliate of someone else's program
# (referenced by affiliate blocks on the caller's profile).
AFFILIATE_ENROLMENT = OwnershipChain(AffiliateORM, "Affiliate", AffiliateORM.affiliate_user_id)
SUBSCRIPTION = OwnershipChain(UserSubscriptionORM, "Subscription", UserSubscriptionORM.user_id)
LINK_CLICK = OwnershipChain(
    LinkClickORM, "Link click", ProfileORM.user_id,
    joins=(
        (LinkORM, LinkClickORM.link_id == LinkORM.id),
        (ProfileORM, LinkORM.profile_id == ProfileORM.id),
    ),
)
PROFILE_VIEW = OwnershipChain(
    ProfileViewORM, "Profile view", ProfileORM.user_id,
    joins=((ProfileORM, ProfileViewORM.profile_id == ProfileORM.id),),
)


def owned_select(chain: OwnershipChain, user_id: str) -> Select:
    """SELECT of chain.model rows whose chain resolves to user_id."""
    stmt = select(chain.model)
    for target, onclause in chain.joins:
        stmt = stmt.join(target, onclause)
    return stmt.where(chain.owner_column == user_id)


async def find_owned(
    db: AsyncSession,
    chain: OwnershipChain,
    resource_id: Optional[str],
    user_id: str,
) -> Optional[Any]:
    """The row when it exists and belongs to user_id, else None."""
    if not resource_id:
        return None
    stmt = owned_select(chain, user_id).where(chain.model.id == resource_id)
    return await select_one(db, stmt)


async def require_owned(
    db: AsyncSession,
    chain: OwnershipChain,
    resource_id: Optional[str],
    user_id: str,
) -> Any:
    """
    Resolve a resource through its ownership chain.

    Raises:
        ResourceNotFound: absent, or owned by someone else (indistinguishable).
    """
    row = await find_owned(db, chain, resource_id, user_id)
    if row is None:
        raise ResourceNotFound(chain.label)
    return row
