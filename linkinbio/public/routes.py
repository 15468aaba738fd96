"""
Public page route — GET /{username}

Server-rendered HTML, no authentication. Registered last in main.py so the
catch-all path never shadows /api/*.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from linkinbio.database import get_db
from linkinbio.public.page import resolve_public_page
from linkinbio.public.render import render_not_found, render_public_page
from linkinbio.resources.analytics.tracking import record_profile_view, visitor_from_request

router = APIRouter(tags=["public"])
logger = logging.getLogger(__name__)


@router.get("/{username}", response_class=HTMLResponse)
async def public_profile(
    username: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """
    Returns:
        200: the rendered profile page
        404: unknown or private profile (same page for both)
    """
    page = await resolve_public_page(db, username)
    if page is None:
        return HTMLResponse(content=render_not_found(), status_code=404)

    if page.profile.analytics_enabled:
        await record_profile_view(db, page.profile.id, visitor_from_request(request))

    return HTMLResponse(content=render_public_page(page), status_code=200)
