"""
tracking.py — visitor analytics helpers shared by the click endpoint and the public page.

IP addresses are never stored or logged in clear: hash_ip() salts them with
settings.secret_key and keeps the SHA-256 hex digest, which still lets the
owner count unique visitors.
"""
import hashlib
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.config import settings
from linkinbio.models import LinkClickORM, ProfileViewORM
from linkinbio.store import insert_row

logger = logging.getLogger(__name__)


def hash_ip(ip_address: Optional[str]) -> Optional[str]:
    """Salted SHA-256 of an IP address; None stays None."""
    if not ip_address:
        return None
    salted = f"{settings.secret_key}:{ip_address.strip()}"
    return hashlib.sha256(salted.encode("utf-8")).hexdigest()


def client_ip(request: Request) -> Optional[str]:
    """First X-Forwarded-For hop when behind a proxy, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.client.host if request.client else None


def visitor_from_request(request: Request) -> Dict[str, Any]:
    """Visitor columns derivable from the request itself."""
    return {
        "ip_address": hash_ip(client_ip(request)),
        "user_agent": request.headers.get("user-agent"),
        "referer": request.headers.get("referer"),
    }


async def record_link_click(db: AsyncSession, link_id: str, visitor: Dict[str, Any]) -> LinkClickORM:
    click = await insert_row(db, LinkClickORM, {**visitor, "link_id": link_id})
    logger.info("Link click recorded link_id=%s", link_id)
    return click


async def record_profile_view(db: AsyncSession, profile_id: str, visitor: Dict[str, Any]) -> ProfileViewORM:
    view = await insert_row(db, ProfileViewORM, {**visitor, "profile_id": profile_id})
    logger.info("Profile view recorded profile_id=%s", profile_id)
    return view
