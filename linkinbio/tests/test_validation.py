"""
Unit tests for the shared schema building blocks (validation.py, errors.py)
and the cross-field rules on request schemas.

No database, no HTTP: pure pydantic.
"""
from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from linkinbio.errors import flatten_errors
from linkinbio.resources.blocks.schemas import BlockCreate
from linkinbio.resources.links.schemas import LinkCreate
from linkinbio.resources.products.schemas import ProductCreate
from linkinbio.resources.profiles.schemas import ProfileCreate, ProfileUpdate
from linkinbio.resources.subscriptions.schemas import SubscriptionCreate
from linkinbio.validation import (
    ApiModel,
    DecimalString,
    MoneyOut,
    OptionalUrlString,
    UrlString,
    column_values,
)


class _Urls(ApiModel):
    required_url: UrlString
    optional_url: OptionalUrlString = None


class _Money(ApiModel):
    amount: DecimalString


class _Out(BaseModel):
    amount: MoneyOut


# ---------------------------------------------------------------------------
# URL strings
# ---------------------------------------------------------------------------

def test_url_string_keeps_original_text() -> None:
    model = _Urls.model_validate({"requiredUrl": "https://example.com"})
    # AnyUrl would append a trailing slash; the stored value must not change.
    assert model.required_url == "https://example.com"


def test_url_string_rejects_plain_text() -> None:
    with pytest.raises(ValidationError) as exc_info:
        _Urls.model_validate({"requiredUrl": "not a url"})
    issues = flatten_errors(exc_info.value.errors())
    assert issues["fieldErrors"]["requiredUrl"] == ["Must be a valid URL"]


@pytest.mark.parametrize("blank", ["", None])
def test_optional_url_blank_becomes_none(blank) -> None:
    model = _Urls.model_validate({"requiredUrl": "https://a.io", "optionalUrl": blank})
    assert model.optional_url is None


def test_optional_url_still_validates_non_blank() -> None:
    with pytest.raises(ValidationError):
        _Urls.model_validate({"requiredUrl": "https://a.io", "optionalUrl": "nope"})


@pytest.mark.parametrize("url", ["javascript:alert(1)", "data:text/html,hi", "ftp://files.example.com/a"])
def test_url_string_rejects_non_web_schemes(url) -> None:
    with pytest.raises(ValidationError):
        _Urls.model_validate({"requiredUrl": url})


def test_url_string_accepts_mailto() -> None:
    assert _Urls.model_validate({"requiredUrl": "mailto:hi@example.com"}).required_url == "mailto:hi@example.com"


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw, expected", [
    ("10", "10"),
    ("10.5", "10.5"),
    ("10.55", "10.55"),
    (10, "10"),
    (10.5, "10.5"),
    (10.0, "10"),
])
def test_decimal_string_accepts_up_to_two_places(raw, expected) -> None:
    assert _Money(amount=raw).amount == expected


@pytest.mark.parametrize("raw", ["10.555", "-1", "abc", "", True, "1e3"])
def test_decimal_string_rejects(raw) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _Money(amount=raw)
    assert "up to 2 decimal places" in str(exc_info.value)


def test_decimal_string_fits_numeric_10_2() -> None:
    assert _Money(amount="99999999.99").amount == "99999999.99"
    assert _Money(amount="0099999999").amount == "0099999999"
    with pytest.raises(ValidationError) as exc_info:
        _Money(amount="123456789012.00")
    issues = flatten_errors(exc_info.value.errors())
    assert issues["fieldErrors"]["amount"] == ["Must have at most 8 digits before the decimal point"]


def test_money_out_renders_two_places() -> None:
    assert _Out(amount=Decimal("50000")).amount == "50000.00"
    assert _Out(amount=Decimal("9.5")).amount == "9.50"
    assert _Out(amount=12).amount == "12.00"


# ---------------------------------------------------------------------------
# column_values
# ---------------------------------------------------------------------------

def test_column_values_create_omits_absent_optionals() -> None:
    payload = ProfileCreate.model_validate({"username": "alice"})
    values = column_values(payload)
    assert values["username"] == "alice"
    assert "bio" not in values
    assert values["is_public"] is True
    assert values["layout_variant"] == "default"


def test_column_values_partial_returns_only_sent_fields() -> None:
    payload = ProfileUpdate.model_validate({"id": "p1", "username": "alice", "bio": "hi"})
    values = column_values(payload, partial=True, exclude={"id"})
    assert values == {"username": "alice", "bio": "hi"}


def test_column_values_keeps_nested_camel_case() -> None:
    payload = BlockCreate.model_validate({
        "profileId": "p1",
        "type": "image",
        "config": {"imageUrl": "https://cdn.example.com/a.png", "buttonStyle": {"backgroundColor": "#fff"}},
    })
    values = column_values(payload)
    assert values["profile_id"] == "p1"
    assert values["config"]["imageUrl"] == "https://cdn.example.com/a.png"
    assert values["config"]["buttonStyle"]["backgroundColor"] == "#fff"


# ---------------------------------------------------------------------------
# flatten_errors
# ---------------------------------------------------------------------------

def test_flatten_errors_groups_by_top_level_field() -> None:
    with pytest.raises(ValidationError) as exc_info:
        LinkCreate.model_validate({"title": "", "url": "bad"})
    issues = flatten_errors(exc_info.value.errors())
    assert issues["formErrors"] == []
    assert set(issues["fieldErrors"]) == {"profileId", "title", "url"}


def test_flatten_errors_strips_request_section_and_value_error_prefix() -> None:
    errors = [
        {"loc": ("body",), "msg": "Value error, link blocks require url", "type": "value_error"},
        {"loc": ("query", "limit"), "msg": "Input should be greater than or equal to 1", "type": "greater_than_equal"},
    ]
    issues = flatten_errors(errors)
    assert issues == {
        "formErrors": ["link blocks require url"],
        "fieldErrors": {"limit": ["Input should be greater than or equal to 1"]},
    }


# ---------------------------------------------------------------------------
# Schema rules
# ---------------------------------------------------------------------------

def test_profile_username_min_length() -> None:
    with pytest.raises(ValidationError):
        ProfileCreate.model_validate({"username": "ab"})


def test_profile_social_links_keep_known_platforms_only() -> None:
    payload = ProfileCreate.model_validate({
        "username": "alice",
        "socialLinks": {
            "instagram": "https://instagram.com/alice",
            "myspace": "https://myspace.com/alice",
            "github": "",
        },
    })
    assert payload.social_links == {"instagram": "https://instagram.com/alice"}


def test_profile_unknown_keys_are_ignored() -> None:
    payload = ProfileCreate.model_validate({"username": "alice", "userId": "someone-else"})
    assert "user_id" not in column_values(payload)


@pytest.mark.parametrize("body, message", [
    ({"type": "link"}, "link blocks require url"),
    ({"type": "product"}, "product blocks require productId"),
    ({"type": "affiliate"}, "affiliate blocks require affiliateId"),
    (
        {
            "type": "text",
            "scheduledStart": "2026-01-02T00:00:00Z",
            "scheduledEnd": "2026-01-01T00:00:00Z",
        },
        "scheduledEnd must not be before scheduledStart",
    ),
])
def test_block_cross_field_rules(body, message) -> None:
    with pytest.raises(ValidationError) as exc_info:
        BlockCreate.model_validate({"profileId": "p1", **body})
    issues = flatten_errors(exc_info.value.errors())
    assert issues["formErrors"] == [message]


def test_block_text_needs_no_url() -> None:
    block = BlockCreate.model_validate({"profileId": "p1", "type": "text", "title": "Hello"})
    assert block.url is None


def test_block_click_limit_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        BlockCreate.model_validate({"profileId": "p1", "type": "text", "clickLimit": 0})


def test_product_defaults_currency_and_rejects_three_decimals() -> None:
    product = ProductCreate.model_validate({"name": "Ebook", "slug": "ebook", "price": "99.99"})
    assert product.currency == "IDR"
    with pytest.raises(ValidationError):
        ProductCreate.model_validate({"name": "Ebook", "slug": "ebook", "price": "99.999"})


def test_subscription_end_must_not_precede_start() -> None:
    with pytest.raises(ValidationError) as exc_info:
        SubscriptionCreate.model_validate({
            "planId": "plan",
            "status": "active",
            "startDate": "2026-02-01T00:00:00Z",
            "endDate": "2026-01-01T00:00:00Z",
        })
    assert "endDate must not be before startDate" in str(exc_info.value)


def test_subscription_accepts_epoch_dates() -> None:
    sub = SubscriptionCreate.model_validate({
        "planId": "plan",
        "status": "active",
        "startDate": 1767225600,
        "endDate": 1769904000,
    })
    assert sub.start_date.tzinfo is not None
    assert sub.end_date > sub.start_date
