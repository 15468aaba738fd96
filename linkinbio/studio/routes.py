"""
Studio draft HTTP routes — /api/link-in-bio/studio/drafts/{profileId}

GET                  the caller's pending draft (empty draft when none is stored)
POST                 stage changes, merged into the pending draft
DELETE               discard the pending draft
POST  .../commit     apply the draft to the live profile and links, then clear it

Drafts live in Redis (app.state.redis), keyed by caller and profile.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.auth import CurrentUser, get_current_user
from linkinbio.cache import delete_draft, get_draft, set_draft
from linkinbio.database import get_db
from linkinbio.errors import ResourceNotFound
from linkinbio.ownership import PROFILE, require_owned
from linkinbio.resources.common import API_PREFIX, deleted
from linkinbio.resources.links.schemas import LinkOut
from linkinbio.resources.profiles.schemas import ProfileOut
from linkinbio.studio.draft import (
    DraftChanges,
    StudioDraft,
    apply_draft,
    check_draft_links,
    merge_drafts,
)

router = APIRouter(prefix=f"{API_PREFIX}/studio", tags=["studio"])
logger = logging.getLogger(__name__)


class CommitResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    profile: ProfileOut
    links: List[LinkOut]


async def _load_draft(request: Request, user_id: str, profile_id: str) -> StudioDraft:
    stored = await get_draft(request.app.state.redis, user_id, profile_id)
    if stored is None:
        return StudioDraft(profile_id=profile_id)
    return StudioDraft.from_cache(stored)


@router.get("/drafts/{profile_id}", response_model=StudioDraft)
async def read_draft(
    profile_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    await require_owned(db, PROFILE, profile_id, user.id)
    return await _load_draft(request, user.id, profile_id)


@router.post("/drafts/{profile_id}", response_model=StudioDraft)
async def stage_draft(
    profile_id: str,
    changes: DraftChanges,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: the merged draft
        400: validation failure
        404: Profile not found or unauthorized, or a link outside the profile
    """
    await require_owned(db, PROFILE, profile_id, user.id)
    await check_draft_links(db, profile_id, list(changes.links))
    draft = merge_drafts(await _load_draft(request, user.id, profile_id), changes)
    await set_draft(request.app.state.redis, user.id, profile_id, draft.to_cache())
    return draft


@router.delete("/drafts/{profile_id}")
async def discard_draft(
    profile_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    await require_owned(db, PROFILE, profile_id, user.id)
    await delete_draft(request.app.state.redis, user.id, profile_id)
    return deleted("Draft")


@router.post("/drafts/{profile_id}/commit", response_model=CommitResult)
async def commit_draft(
    profile_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Returns:
        200: {profile, links} after the draft was applied
        400: the draft renames the profile to a taken username
        404: no pending draft, or ownership no longer holds
    """
    stored = await get_draft(request.app.state.redis, user.id, profile_id)
    if stored is None:
        raise ResourceNotFound("Draft")
    profile, links = await apply_draft(db, user.id, StudioDraft.from_cache(stored))
    # Clear the draft only once the writes are durable.
    await db.commit()
    await delete_draft(request.app.state.redis, user.id, profile_id)
    logger.info("Draft committed profile_id=%s user_id=%s", profile_id, user.id)
    return CommitResult(
        profile=ProfileOut.model_validate(profile),
        links=[LinkOut.model_validate(link) for link in links],
    )
