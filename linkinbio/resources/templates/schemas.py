"""
schemas.py — Layout template and color scheme contracts (global design catalogue).
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from linkinbio.validation import ApiModel, ApiResponse, OptionalUrlString


class LayoutStructure(str, Enum):
    single_column = "single-column"
    two_column = "two-column"
    grid = "grid"
    masonry = "masonry"


class HeaderStyle(str, Enum):
    minimal = "minimal"
    centered = "centered"
    full_width = "full-width"


class TemplateButtonStyle(str, Enum):
    rounded = "rounded"
    square = "square"
    pill = "pill"
    outlined = "outlined"


class Spacing(str, Enum):
    compact = "compact"
    normal = "normal"
    spacious = "spacious"


class LayoutConfig(ApiModel):
    layout: LayoutStructure
    header_style: HeaderStyle
    button_style: TemplateButtonStyle
    spacing: Spacing


class ColorPalette(ApiModel):
    primary: str
    secondary: str
    background: str
    surface: str
    text: str
    text_secondary: str
    accent: str
    border: str


class LayoutTemplateCreate(ApiModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: Optional[str] = None
    preview: OptionalUrlString = None
    config: LayoutConfig
    is_active: bool = True
    is_premium: bool = False
    sort_order: int = 0


class LayoutTemplateUpdate(LayoutTemplateCreate):
    id: str


class ColorSchemeCreate(ApiModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    colors: ColorPalette
    preview: OptionalUrlString = None
    is_active: bool = True
    is_premium: bool = False
    sort_order: int = 0


class ColorSchemeUpdate(ColorSchemeCreate):
    id: str


class LayoutTemplateOut(ApiResponse):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    preview: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    is_active: bool
    is_premium: bool
    sort_order: int
    created_at: datetime


class ColorSchemeOut(ApiResponse):
    id: str
    name: str
    slug: str
    colors: Optional[Dict[str, Any]] = None
    preview: Optional[str] = None
    is_active: bool
    is_premium: bool
    sort_order: int
    created_at: datetime


class TemplateOverview(BaseModel):
    """GET /templates body. Only the sections selected by ?type= are present."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    layout_templates: Optional[List[LayoutTemplateOut]] = None
    color_schemes: Optional[List[ColorSchemeOut]] = None


__all__ = [
    "LayoutConfig",
    "ColorPalette",
    "LayoutTemplateCreate",
    "LayoutTemplateUpdate",
    "ColorSchemeCreate",
    "ColorSchemeUpdate",
    "LayoutTemplateOut",
    "ColorSchemeOut",
    "TemplateOverview",
]
