"""
Theme Loader for Terminal Slides

Loads color themes from YAML or JSON files.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import yaml

from .schema import Theme, DEFAULT_THEMES

logger = logging.getLogger(__name__)


def load_themes(themes_path: Union[str, Path]) -> Dict[str, Theme]:
    """Load color themes from YAML or JSON file.

    Args:
        themes_path: Path to themes file (.yaml, .yml, or .json)

    Returns:
        Dict of theme name -> Theme

    Raises:
        FileNotFoundError: If themes file doesn't exist
        ValueError: If file format is unsupported or invalid
    """
    themes_path = Path(themes_path)

    if not themes_path.exists():
        raise FileNotFoundError(f"Themes file not found: {themes_path}")

    suffix = themes_path.suffix.lower()

    with open(themes_path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        elif suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported themes format: {suffix}. Use .yaml, .yml, or .json")

    themes = parse_themes(data)
    logger.debug("Loaded %d theme(s) from %s", len(themes), themes_path)
    return themes


def parse_themes(data) -> Dict[str, Theme]:
    """Parse theme data into Theme models.

    Accepts either a mapping of name -> colors, a list of theme objects,
    or either of those under a top-level 'themes' key.

    Args:
        data: Raw themes data

    Returns:
        Dict of theme name -> Theme
    """
    if isinstance(data, dict) and 'themes' in data:
        data = data['themes']

    themes = {}
    if isinstance(data, dict):
        for name, value in data.items():
            if isinstance(value, Theme):
                themes[name] = value
            elif isinstance(value, dict):
                # Handle {"mytheme": {"green": "#..."}} format
                themes[name] = Theme.model_validate({**value, 'name': name})
            else:
                raise ValueError(f"Invalid theme definition for {name!r}")
    elif isinstance(data, list):
        for value in data:
            theme = value if isinstance(value, Theme) else Theme.model_validate(value)
            themes[theme.name] = theme
    else:
        raise ValueError("Themes file must contain a mapping or a list of themes")

    return themes


def save_themes(themes: Iterable[Theme], output_path: Union[str, Path]) -> None:
    """Save themes to YAML or JSON file.

    Args:
        themes: Themes to save
        output_path: Path for output file
    """
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()

    data = {}
    for theme in themes:
        colors = theme.colors.model_dump()
        for slot, value in colors.items():
            if isinstance(value, dict):
                colors[slot] = theme.colors.slot(slot).to_hex()
        data[theme.name] = colors

    with open(output_path, 'w', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        elif suffix == '.json':
            json.dump(data, f, indent=2)
        else:
            raise ValueError(f"Unsupported themes format: {suffix}")


def available_themes(extra: Optional[Dict[str, Theme]] = None) -> Dict[str, Theme]:
    """Built-in themes, overridden and extended by any loaded ones."""
    themes = dict(DEFAULT_THEMES)
    if extra:
        themes.update(extra)
    return themes


def get_theme(name: str, themes: Optional[Dict[str, Theme]] = None) -> Theme:
    """Look up a theme by name.

    Raises:
        KeyError: If no theme has that name
    """
    themes = themes if themes is not None else DEFAULT_THEMES
    for key in (name, name.lower()):
        if key in themes:
            return themes[key]
    raise KeyError(f"Unknown theme {name!r}. Available themes: {', '.join(themes)}")
