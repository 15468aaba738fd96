"""
API tests for /api/link-in-bio/studio/drafts — Redis-backed edit buffer
(fakeredis) and the commit that applies it to the live profile.
"""
import pytest
from httpx import AsyncClient

from linkinbio.cache import make_draft_key
from linkinbio.studio.draft import DraftChanges, StudioDraft, merge_drafts
from linkinbio.tests.factories import ALICE, API, BOB, make_link, make_profile

STUDIO = f"{API}/studio/drafts"


# ---------------------------------------------------------------------------
# merge_drafts (pure)
# ---------------------------------------------------------------------------

def test_merge_drafts_incoming_wins_per_field() -> None:
    current = StudioDraft.model_validate({
        "profileId": "p1",
        "profile": {"bio": "old", "displayName": "Alice"},
        "links": {"l1": {"title": "Old", "isActive": False}},
    })
    incoming = DraftChanges.model_validate({
        "profile": {"bio": "new"},
        "links": {"l1": {"title": "New"}, "l2": {"sortOrder": 3}},
    })
    merged = merge_drafts(current, incoming)

    assert merged.profile.changes() == {"bio": "new", "display_name": "Alice"}
    assert merged.links["l1"].changes() == {"title": "New", "is_active": False}
    assert merged.links["l2"].changes() == {"sort_order": 3}
    assert merged.has_changes


def test_empty_draft_has_no_changes() -> None:
    draft = StudioDraft(profile_id="p1")
    assert not draft.has_changes
    assert draft.to_cache() == {"profile_id": "p1"}


def test_to_cache_round_trip_keeps_unset_fields_absent() -> None:
    draft = StudioDraft.model_validate({"profileId": "p1", "profile": {"isPublic": False}})
    restored = StudioDraft.from_cache(draft.to_cache())
    assert restored.profile.changes() == {"is_public": False}


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_read_draft_when_none_stored(client: AsyncClient) -> None:
    profile = await make_profile(client, ALICE, "alice")
    response = await client.get(f"{STUDIO}/{profile['id']}", headers=ALICE)
    assert response.status_code == 200
    assert response.json()["profileId"] == profile["id"]
    assert response.json()["hasChanges"] is False


@pytest.mark.asyncio
async def test_stage_merge_and_commit(client: AsyncClient, redis_client) -> None:
    profile = await make_profile(client, ALICE, "alice")
    link = await make_link(client, ALICE, profile["id"], "Shop")

    first = await client.post(
        f"{STUDIO}/{profile['id']}",
        json={"profile": {"bio": "Draft bio"}, "links": {link["id"]: {"title": "Store"}}},
        headers=ALICE,
    )
    assert first.status_code == 200, first.text
    second = await client.post(
        f"{STUDIO}/{profile['id']}",
        json={"profile": {"displayName": "Alice A."}, "links": {link["id"]: {"isActive": False}}},
        headers=ALICE,
    )
    staged = second.json()
    assert staged["hasChanges"] is True
    assert staged["profile"]["bio"] == "Draft bio"
    assert staged["profile"]["displayName"] == "Alice A."
    assert staged["links"][link["id"]]["title"] == "Store"
    assert staged["links"][link["id"]]["isActive"] is False
    assert await redis_client.exists(make_draft_key("user-alice", profile["id"])) == 1

    # Staged edits do not touch the live rows.
    live = await client.get(f"{API}/profiles", headers=ALICE)
    assert live.json()[0]["bio"] is None

    committed = await client.post(f"{STUDIO}/{profile['id']}/commit", headers=ALICE)
    assert committed.status_code == 200, committed.text
    result = committed.json()
    assert result["profile"]["bio"] == "Draft bio"
    assert result["profile"]["displayName"] == "Alice A."
    assert result["links"][0]["title"] == "Store"
    assert result["links"][0]["isActive"] is False

    assert await redis_client.exists(make_draft_key("user-alice", profile["id"])) == 0
    links = await client.get(f"{API}/links", headers=ALICE)
    assert links.json()[0]["title"] == "Store"


@pytest.mark.asyncio
async def test_commit_without_draft_is_404(client: AsyncClient) -> None:
    profile = await make_profile(client, ALICE, "alice")
    response = await client.post(f"{STUDIO}/{profile['id']}/commit", headers=ALICE)
    assert response.status_code == 404
    assert response.json() == {"error": "Draft not found or unauthorized"}


@pytest.mark.asyncio
async def test_drafts_are_owner_scoped(client: AsyncClient) -> None:
    profile = await make_profile(client, ALICE, "alice")
    await client.post(f"{STUDIO}/{profile['id']}", json={"profile": {"bio": "secret"}}, headers=ALICE)

    read = await client.get(f"{STUDIO}/{profile['id']}", headers=BOB)
    assert read.status_code == 404
    assert read.json() == {"error": "Profile not found or unauthorized"}

    commit = await client.post(f"{STUDIO}/{profile['id']}/commit", headers=BOB)
    assert commit.status_code == 404


@pytest.mark.asyncio
async def test_stage_rejects_link_of_another_profile(client: AsyncClient) -> None:
    profile = await make_profile(client, ALICE, "alice")
    other = await make_profile(client, ALICE, "alice.shop")
    stray = await make_link(client, ALICE, other["id"], "Stray")

    response = await client.post(
        f"{STUDIO}/{profile['id']}",
        json={"links": {stray["id"]: {"title": "Hijack"}}},
        headers=ALICE,
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Link not found or unauthorized"}


@pytest.mark.asyncio
async def test_stage_validates_patch_values(client: AsyncClient) -> None:
    profile = await make_profile(client, ALICE, "alice")
    response = await client.post(
        f"{STUDIO}/{profile['id']}",
        json={"profile": {"avatar": "not a url", "username": "ab"}},
        headers=ALICE,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


@pytest.mark.asyncio
async def test_commit_rename_to_taken_username_keeps_draft(client: AsyncClient, redis_client) -> None:
    await make_profile(client, BOB, "bob")
    profile = await make_profile(client, ALICE, "alice")
    await client.post(
        f"{STUDIO}/{profile['id']}",
        json={"profile": {"username": "bob", "bio": "renamed"}},
        headers=ALICE,
    )

    response = await client.post(f"{STUDIO}/{profile['id']}/commit", headers=ALICE)
    assert response.status_code == 400
    assert response.json() == {"error": "Profile with this username already exists"}

    live = await client.get(f"{API}/profiles", headers=ALICE)
    assert live.json()[0]["username"] == "alice"
    assert live.json()[0]["bio"] is None
    assert await redis_client.exists(make_draft_key("user-alice", profile["id"])) == 1


@pytest.mark.asyncio
async def test_discard_draft(client: AsyncClient, redis_client) -> None:
    profile = await make_profile(client, ALICE, "alice")
    await client.post(f"{STUDIO}/{profile['id']}", json={"profile": {"bio": "x"}}, headers=ALICE)

    response = await client.delete(f"{STUDIO}/{profile['id']}", headers=ALICE)
    assert response.json() == {"message": "Draft deleted successfully"}
    assert await redis_client.exists(make_draft_key("user-alice", profile["id"])) == 0

    after = await client.get(f"{STUDIO}/{profile['id']}", headers=ALICE)
    assert after.json()["hasChanges"] is False
