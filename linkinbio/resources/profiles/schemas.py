"""
schemas.py — Profile request/response contracts.

ProfileCreate: username (min 3) is the only required field; displayName
falls back to the username. ProfileUpdate is ProfileCreate plus the target id.
socialLinks keeps only known platforms and drops blank values; each value
must be an http(s)/mailto URL (the email platform also takes a bare address).
"""
from datetime import datetime
from typing import Annotated, Any, Dict, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, EmailStr, Field, TypeAdapter, ValidationError

from linkinbio.themes import ButtonVariant, LayoutVariant, SchemeVariant
from linkinbio.validation import ApiModel, ApiResponse, OptionalUrlString, check_url

SOCIAL_PLATFORMS = (
    "instagram",
    "tiktok",
    "youtube",
    "twitter",
    "linkedin",
    "facebook",
    "telegram",
    "whatsapp",
    "email",
    "github",
)
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def _known_platforms_only(value: Any) -> Any:
    if not isinstance(value, dict):
        return value
    return {
        platform: link
        for platform, link in value.items()
        if platform in SOCIAL_PLATFORMS and link not in (None, "")
    }


def _check_social_urls(links: Dict[str, str]) -> Dict[str, str]:
    for platform, link in links.items():
        if platform == "email" and ":" not in link:
            try:
                _EMAIL_ADAPTER.validate_python(link)
            except ValidationError:
                raise ValueError("email: Must be a valid email address") from None
            continue
        try:
            check_url(link)
        except ValueError as exc:
            raise ValueError(f"{platform}: {exc}") from None
    return links


SocialLinks = Annotated[
    Dict[str, str],
    BeforeValidator(_known_platforms_only),
    AfterValidator(_check_social_urls),
]


class ProfileCreate(ApiModel):
    username: str = Field(
        ...,
        min_length=3,
        max_length=64,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Public URL segment. Unique across all profiles.",
    )
    display_name: Optional[str] = Field(default=None, min_length=1, description="Defaults to username.")
    bio: Optional[str] = Field(default=None, max_length=1000)
    avatar: OptionalUrlString = None
    background_image: OptionalUrlString = None
    is_public: bool = True
    analytics_enabled: bool = True
    layout_template_id: Optional[str] = None
    color_scheme_id: Optional[str] = None
    custom_css: Optional[str] = None
    social_links: Optional[SocialLinks] = Field(
        default=None,
        description="Platform → URL. Known platforms: " + ", ".join(SOCIAL_PLATFORMS),
    )
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    layout_variant: LayoutVariant = LayoutVariant.default
    scheme_variant: SchemeVariant = SchemeVariant.theme1
    button_variant: ButtonVariant = ButtonVariant.default


class ProfileUpdate(ProfileCreate):
    id: str


class ProfileOut(ApiResponse):
    id: str
    user_id: str
    username: str
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    background_image: Optional[str] = None
    layout_template_id: Optional[str] = None
    color_scheme_id: Optional[str] = None
    custom_css: Optional[str] = None
    is_public: bool
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    analytics_enabled: bool
    social_links: Optional[Dict[str, str]] = None
    layout_variant: str
    scheme_variant: str
    button_variant: str
    created_at: datetime
    updated_at: datetime


class UsernameAvailability(BaseModel):
    available: bool
    username: str


__all__ = [
    "SOCIAL_PLATFORMS",
    "ProfileCreate",
    "ProfileUpdate",
    "ProfileOut",
    "UsernameAvailability",
]
