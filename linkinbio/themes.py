"""
themes.py — closed variant types for profile presentation.

A profile stores its layout / scheme / button choices as plain strings. They are
parsed here into closed types; parsing is total, so an unknown or missing value
always lands on the default arm instead of failing the public page:

  LayoutVariant.parse(None)         → LayoutVariant.default
  ButtonVariant.parse("sparkly")    → ButtonVariant.default
  get_theme("doesnotexist")         → AVAILABLE_THEMES[0]  (theme1)

To add a theme: append a ThemeConfig to AVAILABLE_THEMES, add its id to
SchemeVariant, and ship /themes/<css_file> with the asset bundle.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class LayoutVariant(str, Enum):
    default = "default"
    store = "store"

    @classmethod
    def parse(cls, value: Optional[str]) -> "LayoutVariant":
        try:
            return cls(value)
        except ValueError:
            return cls.default


class ButtonVariant(str, Enum):
    default = "default"
    destructive = "destructive"
    outline = "outline"
    secondary = "secondary"
    ghost = "ghost"
    link = "link"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ButtonVariant":
        try:
            return cls(value)
        except ValueError:
            return cls.default


class SchemeVariant(str, Enum):
    theme1 = "theme1"
    theme2 = "theme2"
    theme3 = "theme3"


@dataclass(frozen=True)
class ThemeConfig:
    id: str
    name: str
    description: str
    css_file: str
    primary: str
    background: str
    accent: str

    @property
    def css_variables(self) -> str:
        return (
            f"--theme-primary: {self.primary}; "
            f"--theme-background: {self.background}; "
            f"--theme-accent: {self.accent};"
        )


AVAILABLE_THEMES: Tuple[ThemeConfig, ...] = (
    ThemeConfig(
        id="theme1",
        name="Minimal Theme",
        description="Clean monospace design with subtle shadows",
        css_file="theme1.css",
        primary="#000000",
        background="#ffffff",
        accent="#f5f5f5",
    ),
    ThemeConfig(
        id="theme2",
        name="Modern Theme",
        description="Contemporary design with vibrant colors",
        css_file="theme2.css",
        primary="#6171f3",
        background="#f8fafe",
        accent="#e8f0fe",
    ),
    ThemeConfig(
        id="theme3",
        name="Neon Dark Theme",
        description="Dark theme with neon purple accents and modern styling",
        css_file="theme3.css",
        primary="#d946ef",
        background="#0f0f23",
        accent="#1e1e3a",
    ),
)


def get_theme(theme_id: Optional[str]) -> ThemeConfig:
    """Theme for theme_id; the first available theme when the id is unknown or missing."""
    for theme in AVAILABLE_THEMES:
        if theme.id == theme_id:
            return theme
    return AVAILABLE_THEMES[0]
