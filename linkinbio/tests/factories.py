"""
Request helpers shared by the API tests.

Each helper performs one authenticated POST, asserts it succeeded and
returns the JSON body, so tests can focus on the behaviour under test.
"""
from typing import Any, Dict

from httpx import AsyncClient

API = "/api/link-in-bio"

ALICE = {"Authorization": "Bearer token-alice"}
BOB = {"Authorization": "Bearer token-bob"}
EXPIRED = {"Authorization": "Bearer token-expired"}


async def _post(client: AsyncClient, path: str, headers: dict, body: Dict[str, Any]) -> dict:
    response = await client.post(f"{API}{path}", json=body, headers=headers)
    assert response.status_code == 200, f"POST {path} → {response.status_code}: {response.text}"
    return response.json()


async def make_profile(client: AsyncClient, headers: dict, username: str, **fields: Any) -> dict:
    return await _post(client, "/profiles", headers, {"username": username, **fields})


async def make_link(client: AsyncClient, headers: dict, profile_id: str, title: str, **fields: Any) -> dict:
    body = {"profileId": profile_id, "title": title, "url": f"https://example.com/{title.lower()}"}
    body.update(fields)
    return await _post(client, "/links", headers, body)


async def make_block(client: AsyncClient, headers: dict, profile_id: str, **fields: Any) -> dict:
    body = {"profileId": profile_id, "type": "link", "title": "Block", "url": "https://example.com/block"}
    body.update(fields)
    return await _post(client, "/blocks", headers, body)


async def make_product(client: AsyncClient, headers: dict, name: str = "Ebook", **fields: Any) -> dict:
    body = {"name": name, "slug": name.lower().replace(" ", "-"), "price": "50000"}
    body.update(fields)
    return await _post(client, "/products", headers, body)


async def make_order(client: AsyncClient, headers: dict, order_number: str = "ORD-1", **fields: Any) -> dict:
    body = {
        "orderNumber": order_number,
        "customerEmail": "buyer@example.com",
        "customerName": "Buyer",
        "subtotal": "50000",
        "total": "55000",
    }
    body.update(fields)
    return await _post(client, "/orders", headers, body)
