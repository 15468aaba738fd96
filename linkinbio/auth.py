"""
auth.py — current-user resolution against the external auth collaborator.

The auth service owns the `user` and `session` tables and issues the session
token. This module only reads them:

  1. token from `Authorization: Bearer <token>` or the session cookie
     (signed cookies carry "<token>.<signature>"; only the token part is looked up)
  2. session row with that token, not yet expired
  3. its user → CurrentUser

Any failure raises Unauthenticated, answered as 401 {"error": "Unauthorized"}.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, Request
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.config import settings
from linkinbio.database import get_db
from linkinbio.errors import Unauthenticated
from linkinbio.models import AuthSessionORM, UserORM
from linkinbio.validation import as_utc

logger = logging.getLogger(__name__)


class CurrentUser(BaseModel):
    id: str
    email: str
    name: str


def _extract_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization", "")
    if header.lower().startswith("bearer "):
        token = header[7:].strip()
        return token or None
    cookie = request.cookies.get(settings.session_cookie_name)
    if cookie:
        return cookie.split(".", 1)[0] or None
    return None


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """FastAPI dependency: the authenticated caller, or 401."""
    token = _extract_token(request)
    if token is None:
        raise Unauthenticated()

    result = await db.execute(
        select(AuthSessionORM, UserORM)
        .join(UserORM, UserORM.id == AuthSessionORM.user_id)
        .where(AuthSessionORM.token == token)
    )
    row = result.first()
    if row is None:
        raise Unauthenticated()

    session, user = row
    if as_utc(session.expires_at) <= datetime.now(timezone.utc):
        logger.info("Rejected expired session user_id=%s", user.id)
        raise Unauthenticated()

    return CurrentUser(id=user.id, email=user.email, name=user.name)
