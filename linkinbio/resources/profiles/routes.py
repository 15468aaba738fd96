"""
Profile HTTP routes — /api/link-in-bio/profiles

GET     /profiles                         profiles owned by the caller
POST    /profiles                         create (username unique system-wide)
PUT     /profiles                         update (ownership + username re-check)
DELETE  /profiles?id=                     delete, cascading to links and blocks
GET     /profiles/check-username          {available, username}, honouring excludeId
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.database import get_db
from linkinbio.errors import PayloadInvalid
from linkinbio.models import ProfileORM
from linkinbio.ownership import PROFILE, owned_select, require_owned
from linkinbio.resources.common import API_PREFIX, deleted, require_id
from linkinbio.resources.profiles.schemas import (
    ProfileCreate,
    ProfileOut,
    ProfileUpdate,
    UsernameAvailability,
)
from linkinbio.store import delete_where, insert_row, select_one, select_rows, update_row
from linkinbio.validation import column_values

router = APIRouter(prefix=API_PREFIX, tags=["profiles"])
logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Profile with this username already exists"


async def is_username_available(
    db: AsyncSession,
    username: str,
    exclude_id: Optional[str] = None,
) -> bool:
    """True when no profile other than exclude_id already uses username."""
    stmt = select(ProfileORM).where(ProfileORM.username == username)
    if exclude_id:
        stmt = stmt.where(ProfileORM.id != exclude_id)
    return await select_one(db, stmt) is None


@router.get("/profiles", response_model=List[ProfileOut])
async def list_profiles(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    stmt = owned_select(PROFILE, user.id).order_by(ProfileORM.created_at, ProfileORM.id)
    return await select_rows(db, stmt)


@router.post("/profiles", response_model=ProfileOut)
async def create_profile(
    payload: ProfileCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the created profile
        400: validation failure, or username already taken
    """
    if not await is_username_available(db, payload.username):
        raise PayloadInvalid(USERNAME_TAKEN)

    values = column_values(payload)
    values["user_id"] = user.id
    values.setdefault("display_name", payload.username)
    profile = await insert_row(db, ProfileORM, values)
    logger.info("Profile created profile_id=%s user_id=%s", profile.id, user.id)
    return profile


@router.put("/profiles", response_model=ProfileOut)
async def update_profile(
    payload: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the updated profile
        400: validation failure, or new username already taken
        404: Profile not found or unauthorized
    """
    profile = await require_owned(db, PROFILE, payload.id, user.id)
    values = column_values(payload, partial=True, exclude={"id"})
    if values.get("username", profile.username) != profile.username:
        if not await is_username_available(db, values["username"], exclude_id=profile.id):
            raise PayloadInvalid(USERNAME_TAKEN)
    return await update_row(db, profile, values)


@router.delete("/profiles")
async def delete_profile(
    id: Optional[str] = Query(default=None, description="Profile id"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    profile_id = require_id(id, "Profile")
    await require_owned(db, PROFILE, profile_id, user.id)
    await delete_where(db, ProfileORM, ProfileORM.id == profile_id)
    logger.info("Profile deleted profile_id=%s user_id=%s", profile_id, user.id)
    return deleted("Profile")


@router.get("/profiles/check-username", response_model=UsernameAvailability)
async def check_username(
    username: Optional[str] = Query(default=None),
    exclude_id: Optional[str] = Query(default=None, alias="excludeId"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: {available, username}
        400: username missing
    """
    if not username:
        raise PayloadInvalid("Username is required")
    available = await is_username_available(db, username, exclude_id=exclude_id)
    return UsernameAvailability(available=available, username=username)
