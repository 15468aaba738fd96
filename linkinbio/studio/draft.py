"""
draft.py — studio edit buffer.

The studio editor stages profile and link edits without touching the live
page. A StudioDraft holds sparse patches: only the fields the owner changed.

  merge_drafts(current, incoming)   later values win per field
  apply_draft(db, user_id, draft)   write every patch in the caller's transaction

apply_draft re-checks ownership at commit time: the profile must belong to the
caller and every patched link must belong to that profile. Any failure raises
before the transaction commits, so a draft is applied completely or not at all.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field, computed_field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.errors import PayloadInvalid, ResourceNotFound
from linkinbio.models import LinkORM, ProfileORM
from linkinbio.ownership import PROFILE, require_owned
from linkinbio.resources.profiles.routes import USERNAME_TAKEN, is_username_available
from linkinbio.resources.profiles.schemas import SocialLinks
from linkinbio.store import select_rows, update_row, update_rows
from linkinbio.themes import ButtonVariant, LayoutVariant, SchemeVariant
from linkinbio.validation import ApiModel, OptionalUrlString, UrlString

logger = logging.getLogger(__name__)


class ProfilePatch(ApiModel):
    """Sparse profile edit. Fields left out are not changed."""
    username: Optional[str] = Field(default=None, min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    display_name: Optional[str] = Field(default=None, min_length=1)
    bio: Optional[str] = Field(default=None, max_length=1000)
    avatar: OptionalUrlString = None
    background_image: OptionalUrlString = None
    is_public: Optional[bool] = None
    analytics_enabled: Optional[bool] = None
    custom_css: Optional[str] = None
    social_links: Optional[SocialLinks] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    layout_variant: Optional[LayoutVariant] = None
    scheme_variant: Optional[SchemeVariant] = None
    button_variant: Optional[ButtonVariant] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class LinkPatch(ApiModel):
    """Sparse link edit."""
    title: Optional[str] = Field(default=None, min_length=1)
    url: Optional[UrlString] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class DraftChanges(ApiModel):
    """Body of POST /studio/drafts/{profileId}."""
    profile: ProfilePatch = Field(default_factory=ProfilePatch)
    links: Dict[str, LinkPatch] = Field(default_factory=dict)


class StudioDraft(DraftChanges):
    profile_id: str

    @computed_field
    @property
    def has_changes(self) -> bool:
        return bool(self.profile.changes()) or any(patch.changes() for patch in self.links.values())

    def to_cache(self) -> dict:
        """JSON-safe dict for Redis; unset patch fields stay absent."""
        return self.model_dump(mode="json", exclude_unset=True, exclude={"has_changes"})

    @classmethod
    def from_cache(cls, data: dict) -> "StudioDraft":
        return cls.model_validate(data)


def merge_drafts(current: StudioDraft, incoming: DraftChanges) -> StudioDraft:
    """Fold incoming patches into current. Per field, incoming wins."""
    links = {link_id: patch.changes() for link_id, patch in current.links.items()}
    for link_id, patch in incoming.links.items():
        links[link_id] = {**links.get(link_id, {}), **patch.changes()}
    return StudioDraft.model_validate({
        "profile_id": current.profile_id,
        "profile": {**current.profile.changes(), **incoming.profile.changes()},
        "links": links,
    })


def _writable(model: type, values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop nulls aimed at NOT NULL columns; the draft cannot clear those."""
    columns = model.__table__.columns
    return {
        key: value
        for key, value in values.items()
        if value is not None or (key in columns and columns[key].nullable)
    }


async def check_draft_links(db: AsyncSession, profile_id: str, link_ids: List[str]) -> List[LinkORM]:
    """
    Load the patched links, requiring each to belong to profile_id.

    Raises:
        ResourceNotFound: a link is absent or belongs to another profile.
    """
    if not link_ids:
        return []
    rows = await select_rows(
        db,
        select(LinkORM).where(LinkORM.id.in_(link_ids), LinkORM.profile_id == profile_id),
    )
    by_id = {row.id: row for row in rows}
    missing = [link_id for link_id in link_ids if link_id not in by_id]
    if missing:
        logger.info("Draft references foreign links profile_id=%s count=%d", profile_id, len(missing))
        raise ResourceNotFound("Link")
    return [by_id[link_id] for link_id in link_ids]


async def apply_draft(
    db: AsyncSession,
    user_id: str,
    draft: StudioDraft,
) -> Tuple[ProfileORM, List[LinkORM]]:
    """
    Write a draft to the live tables inside the current transaction.

    Returns:
        (profile, patched links in draft order)

    Raises:
        ResourceNotFound: profile not owned, or a link outside the profile
        PayloadInvalid:   the draft renames the profile to a taken username
    """
    profile = await require_owned(db, PROFILE, draft.profile_id, user_id)
    link_ids = list(draft.links)
    links = await check_draft_links(db, profile.id, link_ids)

    profile_values = _writable(ProfileORM, draft.profile.changes())
    new_username = profile_values.get("username", profile.username)
    if new_username != profile.username:
        if not await is_username_available(db, new_username, exclude_id=profile.id):
            raise PayloadInvalid(USERNAME_TAKEN)
    if profile_values:
        profile = await update_row(db, profile, profile_values)

    if links:
        link_values = [
            _writable(LinkORM, draft.links[link.id].changes())
            for link in links
        ]
        await update_rows(db, links, link_values)

    logger.info(
        "Draft applied profile_id=%s profile_fields=%d links=%d",
        profile.id, len(profile_values), len(links),
    )
    return profile, links


__all__ = [
    "ProfilePatch",
    "LinkPatch",
    "DraftChanges",
    "StudioDraft",
    "merge_drafts",
    "check_draft_links",
    "apply_draft",
]
