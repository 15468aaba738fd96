"""
validation.py — shared Pydantic v2 building blocks for every request/response schema.

Defines:
  - ApiModel / ApiResponse   camelCase wire format, unknown input keys dropped
  - UrlString                absolute http(s)/mailto URL, original text preserved
  - OptionalUrlString        "" / null / missing → None, otherwise UrlString
  - DecimalString            money as canonical string, at most 2 fractional digits,
                             sized for a Numeric(10, 2) column (decimal_string() for others)
  - MoneyOut                 Decimal column value → "123.45"
  - DateValue                ISO string or epoch number → aware UTC datetime
  - column_values()          schema → dict keyed by ORM column name

Failures surface as pydantic ValidationError; main.py flattens them into
{"formErrors": [...], "fieldErrors": {...}} and answers 400.
"""
import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel, to_snake

_DECIMAL_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")
_DECIMAL_MESSAGE = "Must be a decimal number with up to 2 decimal places"
_SCALE = 2
_URL_ADAPTER = TypeAdapter(AnyUrl)
SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto"})
_CENTS = Decimal("0.01")


# ---------------------------------------------------------------------------
# Base models
# ---------------------------------------------------------------------------

class ApiModel(BaseModel):
    """Request body base: camelCase on the wire, snake_case in Python, extras ignored."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
        validate_default=True,
    )


class ApiResponse(ApiModel):
    """Response base: built straight from ORM rows."""
    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# URL strings
# ---------------------------------------------------------------------------

def check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        parsed = _URL_ADAPTER.validate_python(value)
    except ValidationError:
        raise ValueError("Must be a valid URL") from None
    if parsed.scheme not in SAFE_URL_SCHEMES:
        raise ValueError("URL must use http, https or mailto")
    return value


def _blank_to_none(value: Any) -> Any:
    if value is None or value == "":
        return None
    return value


UrlString = Annotated[str, AfterValidator(check_url)]
OptionalUrlString = Annotated[
    Optional[str],
    BeforeValidator(_blank_to_none),
    AfterValidator(check_url),
]


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------

def _number_to_text(value: Any) -> str:
    """Render a number the way a JSON client would print it (10 → "10", 10.5 → "10.5")."""
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def _coerce_decimal_string(value: Any) -> str:
    if isinstance(value, bool):
        raise ValueError(_DECIMAL_MESSAGE)
    if isinstance(value, (int, float, Decimal)):
        value = _number_to_text(value)
    if not isinstance(value, str) or not _DECIMAL_PATTERN.match(value):
        raise ValueError(_DECIMAL_MESSAGE)
    return value


def decimal_string(precision: int) -> Any:
    """DecimalString for a Numeric(precision, 2) column: the integer part must fit."""
    max_integer_digits = precision - _SCALE

    def _fits_column(value: str) -> str:
        if len(value.split(".")[0].lstrip("0")) > max_integer_digits:
            raise ValueError(f"Must have at most {max_integer_digits} digits before the decimal point")
        return value

    return Annotated[str, BeforeValidator(_coerce_decimal_string), AfterValidator(_fits_column)]


def _decimal_out(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format(value.quantize(_CENTS), "f")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format(Decimal(str(value)).quantize(_CENTS), "f")
    return value


DecimalString = decimal_string(10)
MoneyOut = Annotated[str, BeforeValidator(_decimal_out)]
OptionalMoneyOut = Annotated[Optional[str], BeforeValidator(_decimal_out)]


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def _assume_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


DateValue = Annotated[datetime, AfterValidator(_assume_utc)]
OptionalDateValue = Annotated[Optional[datetime], AfterValidator(_assume_utc)]


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalise a stored timestamp (naive on SQLite) to aware UTC for comparisons."""
    return _assume_utc(value)


# ---------------------------------------------------------------------------
# Schema → ORM column mapping
# ---------------------------------------------------------------------------

def column_values(
    payload: BaseModel,
    *,
    partial: bool = False,
    exclude: Optional[set] = None,
) -> dict[str, Any]:
    """
    Convert a validated request model into {column_name: value}.

    partial=False (create): absent optionals are omitted so column defaults apply.
    partial=True  (update): only fields the client actually sent are returned,
                            so repeating the same update is idempotent.
    Nested JSON values keep their camelCase keys; only top-level keys are snake_cased.
    """
    if partial:
        data = payload.model_dump(by_alias=True, exclude_unset=True)
    else:
        data = payload.model_dump(by_alias=True, exclude_none=True)
    skip = {to_camel(name) for name in (exclude or set())}
    return {to_snake(key): value for key, value in data.items() if key not in skip}


__all__ = [
    "ApiModel",
    "ApiResponse",
    "SAFE_URL_SCHEMES",
    "check_url",
    "UrlString",
    "OptionalUrlString",
    "DecimalString",
    "decimal_string",
    "MoneyOut",
    "OptionalMoneyOut",
    "DateValue",
    "OptionalDateValue",
    "as_utc",
    "column_values",
]
