"""Theme configuration for Terminal Slides."""

from .schema import (
    RgbColor,
    ThemeColors,
    Theme,
    PALETTE_SLOTS,
    DEFAULT_THEMES,
    DEFAULT_THEME_NAME,
)
from .loader import load_themes, save_themes, parse_themes, available_themes, get_theme

__all__ = [
    'RgbColor',
    'ThemeColors',
    'Theme',
    'PALETTE_SLOTS',
    'DEFAULT_THEMES',
    'DEFAULT_THEME_NAME',
    'load_themes',
    'save_themes',
    'parse_themes',
    'available_themes',
    'get_theme',
]
