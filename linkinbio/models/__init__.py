"""
models/__init__.py — imports all ORM models so Alembic's env.py
sees them via Base.metadata when generating migrations.

Import order follows FK dependencies: auth tables, design catalogue,
profiles, products, affiliates, then everything hanging off them.
"""
from linkinbio.models.user import AuthSessionORM, UserORM
from linkinbio.models.template import ColorSchemeORM, LayoutTemplateORM
from linkinbio.models.profile import ProfileORM
from linkinbio.models.product import ProductCategoryORM, ProductORM
from linkinbio.models.affiliate import (
    AffiliateCommissionORM,
    AffiliateORM,
    AffiliateProgramORM,
)
from linkinbio.models.link import BlockORM, LinkORM
from linkinbio.models.order import OrderItemORM, OrderORM
from linkinbio.models.subscription import SubscriptionPlanORM, UserSubscriptionORM
from linkinbio.models.analytics import LinkClickORM, ProfileViewORM

__all__ = [
    "UserORM",
    "AuthSessionORM",
    "LayoutTemplateORM",
    "ColorSchemeORM",
    "ProfileORM",
    "LinkORM",
    "BlockORM",
    "ProductCategoryORM",
    "ProductORM",
    "OrderORM",
    "OrderItemORM",
    "AffiliateProgramORM",
    "AffiliateORM",
    "AffiliateCommissionORM",
    "SubscriptionPlanORM",
    "UserSubscriptionORM",
    "LinkClickORM",
    "ProfileViewORM",
]
