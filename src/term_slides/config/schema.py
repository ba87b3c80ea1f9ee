"""
Theme Schema for Terminal Slides

Pydantic models defining color themes.
Heading levels and accents resolve to named palette slots defined here.
"""

from typing import Dict, Tuple
from pydantic import BaseModel, Field, field_validator, model_validator
import re


HEX_COLOR = re.compile(r'^#?([0-9a-fA-F]{6})$')

# Palette slots, in heading-level order
PALETTE_SLOTS = ('green', 'teal', 'red', 'peach')


class RgbColor(BaseModel):
    """A 24-bit terminal color."""
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    @classmethod
    def from_hex(cls, value: str) -> "RgbColor":
        """Create from a hex string like '#a6e3a1' or 'a6e3a1'."""
        match = HEX_COLOR.match(value.strip())
        if not match:
            raise ValueError(f"Invalid hex color: {value!r}")
        digits = match.group(1)
        return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


class ThemeColors(BaseModel):
    """Palette slots plus the accent assignments for title and footer."""
    green: RgbColor = Field(description="Heading level 1")
    teal: RgbColor = Field(description="Heading level 2")
    red: RgbColor = Field(description="Heading level 3")
    peach: RgbColor = Field(description="Heading level 4")
    title_accent: str = Field("red", description="Slot used for the presentation title")
    footer_accent: str = Field("green", description="Slot used for the footer and progress bar")

    @field_validator(*PALETTE_SLOTS, mode='before')
    @classmethod
    def normalize_color(cls, v):
        """Accept hex strings and [r, g, b] triples."""
        if isinstance(v, str):
            return RgbColor.from_hex(v)
        if isinstance(v, (list, tuple)):
            if len(v) != 3:
                raise ValueError(f"Expected [r, g, b], got {v!r}")
            return RgbColor(r=v[0], g=v[1], b=v[2])
        return v

    @field_validator('title_accent', 'footer_accent')
    @classmethod
    def check_slot(cls, v: str) -> str:
        if v not in PALETTE_SLOTS:
            raise ValueError(f"Unknown palette slot: {v!r}. Use one of {', '.join(PALETTE_SLOTS)}")
        return v

    def slot(self, name: str) -> RgbColor:
        """Get the color assigned to a palette slot."""
        if name not in PALETTE_SLOTS:
            raise KeyError(name)
        return getattr(self, name)


class Theme(BaseModel):
    """A named color theme."""
    name: str = Field(description="Theme name used on the command line")
    colors: ThemeColors = Field(description="Palette and accent assignments")

    @model_validator(mode='before')
    @classmethod
    def flatten_colors(cls, data):
        """Allow slots at the top level: {name: x, green: ..., teal: ...}."""
        if isinstance(data, dict) and 'colors' not in data:
            data = dict(data)
            name = data.pop('name', None)
            data = {'name': name, 'colors': data}
        return data

    def heading_color(self, level: int) -> RgbColor:
        """Get the color for a heading level (1-4)."""
        if not 1 <= level <= len(PALETTE_SLOTS):
            raise ValueError(f"Heading level out of range: {level}")
        return self.colors.slot(PALETTE_SLOTS[level - 1])

    @property
    def title_color(self) -> RgbColor:
        return self.colors.slot(self.colors.title_accent)

    @property
    def footer_color(self) -> RgbColor:
        return self.colors.slot(self.colors.footer_accent)


def _theme(name: str, green: str, teal: str, red: str, peach: str) -> Theme:
    return Theme(name=name, colors=ThemeColors(green=green, teal=teal, red=red, peach=peach))


# Built-in themes (Catppuccin flavours)
DEFAULT_THEMES: Dict[str, Theme] = {
    'latte': _theme('latte', '#40a02b', '#179299', '#d20f39', '#fe640b'),
    'frappe': _theme('frappe', '#a6d189', '#81c8be', '#e78284', '#ef9f76'),
    'macchiato': _theme('macchiato', '#a6da95', '#8bd5ca', '#ed8796', '#f5a97f'),
    'mocha': _theme('mocha', '#a6e3a1', '#94e2d5', '#f38ba8', '#fab387'),
}

DEFAULT_THEME_NAME = 'mocha'
