"""
cache.py — Redis layer for studio drafts.

Namespace conventions:
  draft:{user_id}:{profile_id}   → unsaved studio edits (StudioDraft JSON)   TTL settings.draft_ttl_seconds

Design:
  - Uses redis.asyncio (async client, part of redis-py 5.x)
  - Pool created once in lifespan, stored on app.state.redis
  - Helper functions take the client as a param — no module-level global state
  - Keys are scoped by user id so one owner can never read another's draft
  - Logs only ids (not draft values)
"""
import json
import logging
from typing import Optional

import redis.asyncio as aioredis

from linkinbio.config import settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# TTL / key prefix constants
# ---------------------------------------------------------------------------
DRAFT_TTL: int = settings.draft_ttl_seconds
DRAFT_PREFIX = "draft"


def make_draft_key(user_id: str, profile_id: str) -> str:
    """Build Redis key for a studio draft: draft:{user_id}:{profile_id}"""
    return f"{DRAFT_PREFIX}:{user_id}:{profile_id}"


# ---------------------------------------------------------------------------
# Pool factory: called once in lifespan
# ---------------------------------------------------------------------------

async def create_redis_pool() -> aioredis.Redis:
    """
    Create and return an async Redis connection pool.
    Verifies connectivity with PING before returning.
    """
    client = aioredis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )
    await client.ping()
    logger.info("Redis connection pool established at %s", settings.redis_url)
    return client


# ---------------------------------------------------------------------------
# Draft helpers
# ---------------------------------------------------------------------------

async def get_draft(
    client: aioredis.Redis, user_id: str, profile_id: str
) -> Optional[dict]:
    """Stored draft dict, or None if it expired or never existed."""
    raw = await client.get(make_draft_key(user_id, profile_id))
    if raw is None:
        return None
    return json.loads(raw)


async def set_draft(
    client: aioredis.Redis, user_id: str, profile_id: str, draft: dict
) -> None:
    """Overwrite the draft and reset its TTL."""
    await client.setex(make_draft_key(user_id, profile_id), DRAFT_TTL, json.dumps(draft))
    logger.info("Draft saved user_id=%s profile_id=%s ttl=%ds", user_id, profile_id, DRAFT_TTL)


async def delete_draft(
    client: aioredis.Redis, user_id: str, profile_id: str
) -> bool:
    """Discard the draft. Returns True when one existed."""
    removed = await client.delete(make_draft_key(user_id, profile_id))
    if removed:
        logger.info("Draft discarded user_id=%s profile_id=%s", user_id, profile_id)
    return bool(removed)
