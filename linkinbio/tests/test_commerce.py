"""
API tests for the commerce resources: products, product categories, orders,
order items, affiliates, subscriptions and design templates.
"""
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient

from linkinbio.models import SubscriptionPlanORM
from linkinbio.tests.factories import (
    ALICE,
    API,
    BOB,
    make_order,
    make_product,
)

LAYOUT_CONFIG = {"layout": "grid", "headerStyle": "centered", "buttonStyle": "pill", "spacing": "normal"}
PALETTE = {
    "primary": "#000000",
    "secondary": "#333333",
    "background": "#ffffff",
    "surface": "#f5f5f5",
    "text": "#111111",
    "textSecondary": "#666666",
    "accent": "#ff0066",
    "border": "#e5e5e5",
}


@pytest_asyncio.fixture
async def pro_plan(session_factory) -> str:
    """Plans are a read-only catalogue through the API; seed one directly."""
    async with session_factory() as session:
        plan = SubscriptionPlanORM(
            name="Pro",
            price=Decimal("99000"),
            interval="monthly",
            features={"maxLinks": 100, "customCSS": True},
        )
        session.add(plan)
        await session.commit()
        return plan.id


# ---------------------------------------------------------------------------
# Products & categories
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_product_money_and_owner(client: AsyncClient) -> None:
    product = await make_product(client, ALICE, "Ebook", price="49999.5", originalPrice=75000)
    assert product["userId"] == "user-alice"
    assert product["price"] == "49999.50"
    assert product["originalPrice"] == "75000.00"
    assert product["currency"] == "IDR"


@pytest.mark.asyncio
async def test_product_price_with_three_decimals_rejected(client: AsyncClient) -> None:
    response = await client.post(
        f"{API}/products",
        json={"name": "Ebook", "slug": "ebook", "price": "10.123"},
        headers=ALICE,
    )
    assert response.status_code == 400
    assert "price" in response.json()["issues"]["fieldErrors"]


@pytest.mark.asyncio
async def test_amounts_too_large_for_their_columns_rejected(client: AsyncClient) -> None:
    response = await client.post(
        f"{API}/products",
        json={"name": "Ebook", "slug": "ebook", "price": "123456789012.00"},
        headers=ALICE,
    )
    assert response.status_code == 400
    assert response.json()["issues"]["fieldErrors"]["price"] == [
        "Must have at most 8 digits before the decimal point"
    ]

    order = await client.post(
        f"{API}/orders",
        json={
            "orderNumber": "ORD-9",
            "customerEmail": "buyer@example.com",
            "customerName": "Buyer",
            "subtotal": "1",
            "total": "1000000000",
        },
        headers=ALICE,
    )
    assert order.status_code == 400
    assert "total" in order.json()["issues"]["fieldErrors"]

    product = await make_product(client, ALICE)
    program = await client.post(
        f"{API}/affiliates",
        params={"type": "program"},
        json={"productId": product["id"], "commissionValue": "1000000"},
        headers=ALICE,
    )
    assert program.status_code == 400
    assert program.json()["issues"]["fieldErrors"]["commissionValue"] == [
        "Must have at most 6 digits before the decimal point"
    ]


@pytest.mark.asyncio
async def test_products_listed_newest_first_and_owner_scoped(client: AsyncClient) -> None:
    await make_product(client, ALICE, "Old")
    await make_product(client, ALICE, "New")
    await make_product(client, BOB, "Bobs")

    response = await client.get(f"{API}/products", headers=ALICE)
    assert [p["name"] for p in response.json()] == ["New", "Old"]


@pytest.mark.asyncio
async def test_product_with_unknown_category_is_404(client: AsyncClient) -> None:
    response = await client.post(
        f"{API}/products",
        json={"name": "Ebook", "slug": "ebook", "price": "1", "categoryId": "nope"},
        headers=ALICE,
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Product category not found or unauthorized"}


@pytest.mark.asyncio
async def test_categories_are_shared_and_active_only(client: AsyncClient) -> None:
    for name, slug, active, order in [("Zines", "zines", True, 1), ("Art", "art", True, 1),
                                      ("Hidden", "hidden", False, 0), ("Courses", "courses", True, 0)]:
        response = await client.post(
            f"{API}/product-categories",
            json={"name": name, "slug": slug, "isActive": active, "sortOrder": order},
            headers=ALICE,
        )
        assert response.status_code == 200

    listed = await client.get(f"{API}/product-categories", headers=BOB)
    assert [c["name"] for c in listed.json()] == ["Courses", "Art", "Zines"]

    category_id = listed.json()[0]["id"]
    product = await make_product(client, BOB, "Course", categoryId=category_id)
    assert product["categoryId"] == category_id


@pytest.mark.asyncio
async def test_category_update_and_delete(client: AsyncClient) -> None:
    created = await client.post(
        f"{API}/product-categories", json={"name": "Art", "slug": "art"}, headers=ALICE,
    )
    category = created.json()

    updated = await client.put(
        f"{API}/product-categories",
        json={"id": category["id"], "name": "Fine Art", "slug": "art"},
        headers=ALICE,
    )
    assert updated.json()["name"] == "Fine Art"

    missing_id = await client.delete(f"{API}/product-categories", headers=ALICE)
    assert missing_id.json() == {"error": "Category ID is required"}

    removed = await client.delete(f"{API}/product-categories", params={"id": category["id"]}, headers=ALICE)
    assert removed.json() == {"message": "Product category deleted successfully"}

    again = await client.delete(f"{API}/product-categories", params={"id": category["id"]}, headers=ALICE)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_category_slug_is_400(client: AsyncClient) -> None:
    await client.post(f"{API}/product-categories", json={"name": "Art", "slug": "art"}, headers=ALICE)
    response = await client.post(f"{API}/product-categories", json={"name": "Art 2", "slug": "art"}, headers=ALICE)
    assert response.status_code == 400
    assert response.json() == {"error": "Request conflicts with existing data"}


# ---------------------------------------------------------------------------
# Orders & order items
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_order_seller_is_caller(client: AsyncClient) -> None:
    order = await make_order(client, ALICE, sellerId="user-bob")
    assert order["sellerId"] == "user-alice"
    assert order["status"] == "pending"
    assert order["total"] == "55000.00"


@pytest.mark.asyncio
async def test_order_rejects_bad_email_and_status(client: AsyncClient) -> None:
    response = await client.post(
        f"{API}/orders",
        json={
            "orderNumber": "ORD-9",
            "customerEmail": "not-an-email",
            "customerName": "Buyer",
            "subtotal": "1",
            "total": "1",
            "status": "shipped",
        },
        headers=ALICE,
    )
    assert response.status_code == 400
    assert set(response.json()["issues"]["fieldErrors"]) == {"customerEmail", "status"}


@pytest.mark.asyncio
async def test_order_items_require_owned_order_and_product(client: AsyncClient) -> None:
    order = await make_order(client, ALICE)
    product = await make_product(client, ALICE)
    bobs_product = await make_product(client, BOB, "Bob Guide")

    foreign = await client.post(
        f"{API}/order-items",
        json={"orderId": order["id"], "productId": bobs_product["id"], "productName": "x", "productPrice": "1"},
        headers=ALICE,
    )
    assert foreign.status_code == 404
    assert foreign.json() == {"error": "Product not found or unauthorized"}

    item = await client.post(
        f"{API}/order-items",
        json={"orderId": order["id"], "productId": product["id"], "productName": "Ebook", "productPrice": "50000"},
        headers=ALICE,
    )
    assert item.status_code == 200
    assert item.json()["downloadLimit"] == 5
    assert item.json()["quantity"] == 1

    listed = await client.get(f"{API}/order-items", params={"orderId": order["id"]}, headers=ALICE)
    assert [i["id"] for i in listed.json()] == [item.json()["id"]]

    bob_view = await client.get(f"{API}/order-items", headers=BOB)
    assert bob_view.json() == []


@pytest.mark.asyncio
async def test_order_update_status(client: AsyncClient) -> None:
    order = await make_order(client, ALICE)
    response = await client.put(
        f"{API}/orders",
        json={**order, "status": "paid", "paidAt": "2026-03-01T10:00:00Z"},
        headers=ALICE,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "paid"


@pytest.mark.asyncio
async def test_delete_order_cascades_items(client: AsyncClient) -> None:
    order = await make_order(client, ALICE)
    product = await make_product(client, ALICE)
    await client.post(
        f"{API}/order-items",
        json={"orderId": order["id"], "productId": product["id"], "productName": "Ebook", "productPrice": "1"},
        headers=ALICE,
    )
    response = await client.delete(f"{API}/orders", params={"id": order["id"]}, headers=ALICE)
    assert response.json() == {"message": "Order deleted successfully"}
    assert (await client.get(f"{API}/order-items", headers=ALICE)).json() == []


# ---------------------------------------------------------------------------
# Affiliates
# ---------------------------------------------------------------------------

async def _program(client: AsyncClient, headers: dict, product_id: str) -> dict:
    response = await client.post(
        f"{API}/affiliates",
        params={"type": "program"},
        json={"productId": product_id, "commissionType": "fixed", "commissionValue": "5000"},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_affiliate_write_requires_type(client: AsyncClient) -> None:
    response = await client.post(f"{API}/affiliates", json={}, headers=ALICE)
    assert response.status_code == 400
    assert response.json() == {"error": "Affiliate type is required (program or affiliate)"}


@pytest.mark.asyncio
async def test_affiliate_view_rejects_unknown_type(client: AsyncClient) -> None:
    response = await client.get(f"{API}/affiliates", params={"type": "everything"}, headers=ALICE)
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid type")


@pytest.mark.asyncio
async def test_program_requires_owned_product(client: AsyncClient) -> None:
    bobs_product = await make_product(client, BOB, "Bob Guide")
    response = await client.post(
        f"{API}/affiliates",
        params={"type": "program"},
        json={"productId": bobs_product["id"], "commissionValue": "10"},
        headers=ALICE,
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found or unauthorized"}


@pytest.mark.asyncio
async def test_affiliate_overview_and_status_change(client: AsyncClient) -> None:
    product = await make_product(client, ALICE)
    program = await _program(client, ALICE, product["id"])
    assert program["commissionValue"] == "5000.00"

    enrolled = await client.post(
        f"{API}/affiliates",
        params={"type": "affiliate"},
        json={"affiliateProgramId": program["id"], "affiliateUserId": "user-bob", "affiliateCode": "BOB5"},
        headers=ALICE,
    )
    assert enrolled.status_code == 200
    assert enrolled.json()["status"] == "pending"

    approved = await client.put(
        f"{API}/affiliates",
        params={"type": "affiliate"},
        json={"id": enrolled.json()["id"], "status": "approved", "approvedAt": "2026-03-01T00:00:00Z"},
        headers=ALICE,
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    overview = await client.get(f"{API}/affiliates", headers=ALICE)
    body = overview.json()
    assert set(body) == {"affiliatePrograms", "affiliates", "commissions"}
    assert [p["id"] for p in body["affiliatePrograms"]] == [program["id"]]
    assert [a["affiliateCode"] for a in body["affiliates"]] == ["BOB5"]
    assert body["commissions"] == []

    only_programs = await client.get(f"{API}/affiliates", params={"type": "programs"}, headers=ALICE)
    assert set(only_programs.json()) == {"affiliatePrograms"}

    # The enrolled affiliate does not own the program.
    bob_view = await client.get(f"{API}/affiliates", headers=BOB)
    assert bob_view.json()["affiliatePrograms"] == []


@pytest.mark.asyncio
async def test_affiliate_code_unique(client: AsyncClient) -> None:
    product = await make_product(client, ALICE)
    program = await _program(client, ALICE, product["id"])
    body = {"affiliateProgramId": program["id"], "affiliateUserId": "user-bob", "affiliateCode": "DUP"}
    first = await client.post(f"{API}/affiliates", params={"type": "affiliate"}, json=body, headers=ALICE)
    second = await client.post(f"{API}/affiliates", params={"type": "affiliate"}, json=body, headers=ALICE)
    assert first.status_code == 200
    assert second.status_code == 400


@pytest.mark.asyncio
async def test_delete_program(client: AsyncClient) -> None:
    product = await make_product(client, ALICE)
    program = await _program(client, ALICE, product["id"])

    foreign = await client.delete(
        f"{API}/affiliates", params={"type": "program", "id": program["id"]}, headers=BOB,
    )
    assert foreign.status_code == 404

    response = await client.delete(
        f"{API}/affiliates", params={"type": "program", "id": program["id"]}, headers=ALICE,
    )
    assert response.json() == {"message": "Affiliate program deleted successfully"}


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_subscription_lifecycle(client: AsyncClient, pro_plan: str) -> None:
    body = {
        "planId": pro_plan,
        "status": "active",
        "startDate": "2026-01-01T00:00:00Z",
        "endDate": "2026-02-01T00:00:00Z",
    }
    no_type = await client.post(f"{API}/subscriptions", json=body, headers=ALICE)
    assert no_type.status_code == 400
    assert no_type.json() == {"error": "Subscription type is required (subscription)"}

    created = await client.post(f"{API}/subscriptions", params={"type": "subscription"}, json=body, headers=ALICE)
    assert created.status_code == 200
    assert created.json()["userId"] == "user-alice"

    overview = await client.get(f"{API}/subscriptions", headers=ALICE)
    body_out = overview.json()
    assert [p["name"] for p in body_out["subscriptionPlans"]] == ["Pro"]
    assert body_out["subscriptionPlans"][0]["price"] == "99000.00"
    assert [s["id"] for s in body_out["userSubscriptions"]] == [created.json()["id"]]

    bob_view = await client.get(f"{API}/subscriptions", params={"type": "subscriptions"}, headers=BOB)
    assert bob_view.json() == {"userSubscriptions": []}

    canceled = await client.put(
        f"{API}/subscriptions",
        json={**body, "id": created.json()["id"], "status": "canceled"},
        headers=ALICE,
    )
    assert canceled.json()["status"] == "canceled"

    removed = await client.delete(f"{API}/subscriptions", params={"id": created.json()["id"]}, headers=ALICE)
    assert removed.json() == {"message": "Subscription deleted successfully"}


@pytest.mark.asyncio
async def test_subscription_unknown_plan_is_404(client: AsyncClient) -> None:
    response = await client.post(
        f"{API}/subscriptions",
        params={"type": "subscription"},
        json={
            "planId": "nope",
            "status": "active",
            "startDate": "2026-01-01T00:00:00Z",
            "endDate": "2026-02-01T00:00:00Z",
        },
        headers=ALICE,
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Subscription plan not found or unauthorized"}


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_layout_template_and_color_scheme(client: AsyncClient) -> None:
    layout = await client.post(
        f"{API}/templates",
        params={"type": "layout"},
        json={"name": "Grid", "slug": "grid", "config": LAYOUT_CONFIG},
        headers=ALICE,
    )
    assert layout.status_code == 200, layout.text
    assert layout.json()["config"] == LAYOUT_CONFIG

    scheme = await client.post(
        f"{API}/templates",
        params={"type": "color"},
        json={"name": "Mono", "slug": "mono", "colors": PALETTE},
        headers=ALICE,
    )
    assert scheme.status_code == 200, scheme.text
    assert scheme.json()["colors"]["textSecondary"] == "#666666"

    overview = await client.get(f"{API}/templates", headers=BOB)
    assert [t["slug"] for t in overview.json()["layoutTemplates"]] == ["grid"]
    assert [c["slug"] for c in overview.json()["colorSchemes"]] == ["mono"]

    removed = await client.delete(
        f"{API}/templates", params={"type": "color", "id": scheme.json()["id"]}, headers=ALICE,
    )
    assert removed.json() == {"message": "Color scheme deleted successfully"}


@pytest.mark.asyncio
async def test_layout_template_rejects_unknown_structure(client: AsyncClient) -> None:
    response = await client.post(
        f"{API}/templates",
        params={"type": "layout"},
        json={"name": "Odd", "slug": "odd", "config": {**LAYOUT_CONFIG, "layout": "spiral"}},
        headers=ALICE,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"
    assert "config" in response.json()["issues"]["fieldErrors"]


@pytest.mark.asyncio
async def test_template_write_type_and_delete_id(client: AsyncClient) -> None:
    no_type = await client.post(f"{API}/templates", json={}, headers=ALICE)
    assert no_type.json() == {"error": "Template type is required (layout or color)"}

    no_id = await client.delete(f"{API}/templates", params={"type": "layout"}, headers=ALICE)
    assert no_id.json() == {"error": "Template ID is required"}
