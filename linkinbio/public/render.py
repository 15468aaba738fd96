"""
render.py — server-side HTML for public profile pages.

Two layouts, chosen by LayoutVariant.parse(profile.layout_variant):
  default   centred column: header, social icons, link buttons, blocks
  store     sidebar header + "Products & Links" grid with product cards

Every piece of user-supplied text goes through _e() before it reaches the
markup, and every href/src through _safe_href(): only http, https, mailto and
relative URLs survive and any other scheme becomes "#". Blocks with a
password are rendered as locked entries and their url is never written to
the page.
"""
import re
from html import escape
from typing import Any, Iterable, List

from linkinbio.models import BlockORM, LinkORM, ProductORM, ProfileORM
from linkinbio.public.page import PublicPage
from linkinbio.themes import ButtonVariant, LayoutVariant, get_theme
from linkinbio.validation import SAFE_URL_SCHEMES

DEFAULT_AVATAR = "/default-avatar.png"
_SCHEME_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9+.-]*):")

SOCIAL_LABELS = {
    "instagram": "Instagram",
    "tiktok": "TikTok",
    "youtube": "YouTube",
    "twitter": "Twitter",
    "linkedin": "LinkedIn",
    "facebook": "Facebook",
    "telegram": "Telegram",
    "whatsapp": "WhatsApp",
    "email": "Email",
    "github": "GitHub",
}


def _e(value: Any) -> str:
    return escape("" if value is None else str(value), quote=True)


def _safe_href(url: Any, fallback: str = "#") -> str:
    if not url:
        return fallback
    # Browsers ignore whitespace and control characters inside a scheme.
    compact = "".join(ch for ch in str(url) if ch > " " and ch != "\x7f")
    match = _SCHEME_PATTERN.match(compact)
    if match and match.group(1).lower() not in SAFE_URL_SCHEMES:
        return fallback
    return str(url)


def _css_url(url: str) -> str:
    return _safe_href(url, "").translate({ord(ch): f"%{ord(ch):02X}" for ch in "'\"()\\"})


def _button_class(variant: ButtonVariant, extra: str = "") -> str:
    return f"btn btn-{variant.value} {extra}".strip()


def _money(value: Any, currency: str) -> str:
    return f"{currency} {value:,.2f}" if value is not None else ""


# ---------------------------------------------------------------------------
# Fragments
# ---------------------------------------------------------------------------

def _head(profile: ProfileORM) -> str:
    theme = get_theme(profile.scheme_variant)
    title = profile.seo_title or f"{profile.display_name} (@{profile.username})"
    description = profile.seo_description or profile.bio or ""
    # Raw CSS; only a closing tag could break out of the style element.
    custom_css = ""
    if profile.custom_css:
        custom_css = "<style>" + profile.custom_css.replace("</", "<\\/") + "</style>"
    return (
        "<head>"
        '<meta charset="UTF-8" />'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0" />'
        f"<title>{_e(title)}</title>"
        f'<meta name="description" content="{_e(description)}" />'
        f'<link id="profile-theme" rel="stylesheet" href="/themes/{_e(theme.css_file)}" />'
        f"<style>:root {{ {theme.css_variables} }}</style>"
        f"{custom_css}"
        "</head>"
    )


def _header(profile: ProfileORM) -> str:
    parts = []
    if profile.background_image:
        parts.append(
            f'<div class="profile-cover" style="background-image: url(\'{_e(_css_url(profile.background_image))}\')"></div>'
        )
    parts.append(
        f'<img class="profile-avatar" src="{_e(_safe_href(profile.avatar, DEFAULT_AVATAR))}" '
        f'alt="{_e(profile.display_name)}" width="96" height="96" />'
    )
    parts.append(f'<h1 class="profile-name">{_e(profile.display_name)}</h1>')
    parts.append(f'<p class="profile-username">@{_e(profile.username)}</p>')
    if profile.bio:
        parts.append(f'<p class="profile-bio">{_e(profile.bio)}</p>')
    return "".join(parts)


def _social_links(profile: ProfileORM, with_labels: bool = False) -> str:
    links = profile.social_links or {}
    if not links:
        return ""
    items = []
    for platform, url in links.items():
        href = f"mailto:{url}" if platform == "email" and "@" in url and ":" not in url else url
        label = SOCIAL_LABELS.get(platform, platform)
        text = f"<span>{_e(label)}</span>" if with_labels else ""
        items.append(
            f'<a class="social social-{_e(platform)}" href="{_e(_safe_href(href))}" target="_blank" '
            f'rel="noopener noreferrer" aria-label="{_e(label)}">{text}</a>'
        )
    return f'<nav class="social-links">{"".join(items)}</nav>'


def _link_button(link: LinkORM, variant: ButtonVariant, extra: str = "") -> str:
    return (
        f'<a class="{_button_class(variant, extra)}" href="{_e(_safe_href(link.url))}" target="_blank" '
        f'rel="noopener noreferrer" data-link-id="{_e(link.id)}">'
        f'<span class="btn-title">{_e(link.title)}</span></a>'
    )


def _block(block: BlockORM, variant: ButtonVariant) -> str:
    cfg = block.config or {}
    if block.type == "separator":
        return '<hr class="block-separator" />'
    if block.type == "text":
        return f'<div class="block-text">{_e(cfg.get("text") or block.title)}</div>'
    if block.type == "image":
        src = cfg.get("imageUrl") or cfg.get("thumbnail")
        if not src:
            return ""
        return (
            f'<img class="block-image" src="{_e(_safe_href(src, ""))}" '
            f'alt="{_e(cfg.get("alt") or block.title or "image")}" />'
        )

    description = (
        f'<span class="btn-description">{_e(block.description)}</span>' if block.description else ""
    )
    if block.password:
        return (
            f'<div class="{_button_class(variant, "block-locked")}" data-block-id="{_e(block.id)}">'
            f'<span class="btn-title">{_e(block.title)}</span>{description}</div>'
        )

    style = cfg.get("buttonStyle") or {}
    inline = "; ".join(
        f"{prop}: {_e(style[key])}"
        for key, prop in (
            ("backgroundColor", "background-color"),
            ("textColor", "color"),
            ("borderRadius", "border-radius"),
        )
        if style.get(key)
    )
    style_attr = f' style="{inline}"' if inline else ""
    target = ' target="_blank" rel="noopener noreferrer"' if block.open_in_new_tab else ""
    thumbnail = (
        f'<img class="btn-thumb" src="{_e(_safe_href(cfg["thumbnail"], ""))}" alt="" width="20" height="20" />'
        if cfg.get("thumbnail") else ""
    )
    return (
        f'<a class="{_button_class(variant, "block-" + _e(block.type))}" '
        f'href="{_e(_safe_href(block.url))}"{target}{style_attr} data-block-id="{_e(block.id)}">'
        f'{thumbnail}<span class="btn-title">{_e(block.title)}</span>{description}</a>'
    )


def _product_card(product: ProductORM) -> str:
    image = (
        f'<img class="product-thumb" src="{_e(_safe_href(product.thumbnail, ""))}" alt="{_e(product.name)}" />'
        if product.thumbnail else ""
    )
    original = ""
    if product.original_price is not None and product.original_price > product.price:
        original = f'<s class="product-original-price">{_e(_money(product.original_price, product.currency))}</s>'
    summary = product.short_description or ""
    return (
        f'<article class="product-card" data-product-id="{_e(product.id)}">'
        f"{image}"
        f'<h3 class="product-name">{_e(product.name)}</h3>'
        f'<p class="product-summary">{_e(summary)}</p>'
        f'<p class="product-price">{_e(_money(product.price, product.currency))}{original}</p>'
        "</article>"
    )


def _join(fragments: Iterable[str]) -> str:
    return "".join(fragment for fragment in fragments if fragment)


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------

def _default_layout(page: PublicPage, variant: ButtonVariant) -> str:
    links = _join(_link_button(link, variant) for link in page.links)
    blocks = _join(_block(block, variant) for block in page.blocks)
    return (
        '<main class="layout-default">'
        f'<header class="profile-header">{_header(page.profile)}</header>'
        f"{_social_links(page.profile)}"
        f'<section class="profile-links">{links}</section>'
        f'<section class="profile-blocks">{blocks}</section>'
        "</main>"
    )


def _store_layout(page: PublicPage, variant: ButtonVariant) -> str:
    social = _social_links(page.profile, with_labels=True)
    connect = f'<div class="store-connect"><h3>Connect</h3>{social}</div>' if social else ""
    items: List[str] = [_product_card(product) for product in page.products]
    items.extend(_link_button(link, variant, "store-item") for link in page.links)
    items.extend(_block(block, variant) for block in page.blocks)
    grid = _join(items)
    if not grid:
        grid = (
            '<div class="store-empty"><h3>No products yet</h3>'
            "<p>This store is being set up. Check back soon!</p></div>"
        )
    return (
        '<main class="layout-store">'
        f'<aside class="store-sidebar">{_header(page.profile)}{connect}</aside>'
        '<section class="store-grid">'
        "<h2>Products &amp; Links</h2>"
        "<p>Explore all available items and links</p>"
        f"{grid}"
        "</section>"
        "</main>"
    )


def render_public_page(page: PublicPage) -> str:
    """Complete HTML document for a resolved public page."""
    variant = ButtonVariant.parse(page.profile.button_variant)
    if page.layout is LayoutVariant.store:
        body = _store_layout(page, variant)
    else:
        body = _default_layout(page, variant)
    theme = get_theme(page.profile.scheme_variant)
    return (
        '<!DOCTYPE html><html lang="en">'
        f"{_head(page.profile)}"
        f'<body class="theme-{_e(theme.id)}">{body}</body>'
        "</html>"
    )


def render_not_found() -> str:
    """The single 404 page shown for unknown and private profiles alike."""
    return (
        '<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8" />'
        "<title>Page not found</title></head>"
        '<body><main class="not-found"><h1>404</h1>'
        "<p>This page could not be found.</p>"
        '<a href="/">Go home</a></main></body></html>'
    )
