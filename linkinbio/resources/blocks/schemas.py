"""
schemas.py — Block request/response contracts.

A block is a generalised profile entry. Cross-field rules (checked on the
whole object, reported under formErrors):
  - type=link      requires url
  - type=product   requires productId
  - type=affiliate requires affiliateId
  - scheduledEnd must not precede scheduledStart

BlockUpdate is partial, so it cannot judge those rules alone: PUT /blocks
runs check_block_rules() on the stored block merged with the sent fields.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field, model_validator

from linkinbio.validation import ApiModel, ApiResponse, OptionalDateValue, OptionalUrlString, as_utc

# type → (column that must be set, its wire name)
_REQUIRED_REFERENCE = {
    "link": ("url", "url"),
    "product": ("product_id", "productId"),
    "affiliate": ("affiliate_id", "affiliateId"),
}
RULE_COLUMNS = ("type", "url", "product_id", "affiliate_id", "scheduled_start", "scheduled_end")


def check_block_rules(values: Dict[str, Any]) -> None:
    """
    Type and schedule rules over snake_case column values.

    Raises:
        ValueError: the message is reported as a form error.
    """
    block_type = values.get("type")
    if block_type in _REQUIRED_REFERENCE:
        column, wire_name = _REQUIRED_REFERENCE[block_type]
        if not values.get(column):
            raise ValueError(f"{block_type} blocks require {wire_name}")
    start, end = as_utc(values.get("scheduled_start")), as_utc(values.get("scheduled_end"))
    if start and end and end < start:
        raise ValueError("scheduledEnd must not be before scheduledStart")


class BlockType(str, Enum):
    link = "link"
    product = "product"
    affiliate = "affiliate"
    text = "text"
    image = "image"
    separator = "separator"


class ButtonStyle(ApiModel):
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    border_radius: Optional[str] = None
    border: Optional[str] = None
    animation: Optional[str] = None


class BlockConfig(ApiModel):
    """Presentation extras. Unknown keys are kept for forward compatibility."""
    model_config = ConfigDict(extra="allow")

    icon: Optional[str] = None
    thumbnail: OptionalUrlString = None
    image_url: OptionalUrlString = None
    alt: Optional[str] = None
    text: Optional[str] = None
    button_style: Optional[ButtonStyle] = None


class BlockCreate(ApiModel):
    profile_id: str = Field(..., description="Owning profile. Must belong to the caller.")
    type: BlockType = BlockType.link
    title: Optional[str] = None
    url: OptionalUrlString = None
    description: Optional[str] = None
    product_id: Optional[str] = None
    affiliate_id: Optional[str] = None
    config: Optional[BlockConfig] = None
    is_active: bool = True
    open_in_new_tab: bool = True
    sort_order: int = 0
    scheduled_start: OptionalDateValue = None
    scheduled_end: OptionalDateValue = None
    click_limit: Optional[int] = Field(default=None, gt=0)
    password: Optional[str] = None

    @model_validator(mode="after")
    def _check_type_requirements(self) -> "BlockCreate":
        check_block_rules(self.model_dump(include=set(RULE_COLUMNS)))
        return self


class BlockUpdate(BlockCreate):
    id: str

    @model_validator(mode="after")
    def _check_type_requirements(self) -> "BlockUpdate":
        return self


class BlockOut(ApiResponse):
    id: str
    profile_id: str
    type: str
    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    product_id: Optional[str] = None
    affiliate_id: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    is_active: bool
    open_in_new_tab: bool
    sort_order: int
    scheduled_start: Optional[datetime] = None
    scheduled_end: Optional[datetime] = None
    click_limit: Optional[int] = None
    has_password: bool = False
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _hide_password(cls, data: Any) -> Any:
        # The owner sees that a gate exists, never the stored secret.
        if hasattr(data, "password"):
            values = {name: getattr(data, name, None) for name in cls.model_fields if name != "has_password"}
            values["has_password"] = bool(data.password)
            return values
        return data


__all__ = [
    "BlockType",
    "ButtonStyle",
    "BlockConfig",
    "BlockCreate",
    "BlockUpdate",
    "BlockOut",
    "check_block_rules",
]
