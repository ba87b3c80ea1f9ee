"""
Presentation State

Holds the slides of a deck, the current position and the selected theme,
and parses markdown decks into that state.

Deck format:
- optional YAML front matter between '---' lines (title, author, theme)
- slides separated by lines containing only '---'
"""

import re
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field, model_validator

from .config import Theme, DEFAULT_THEMES, DEFAULT_THEME_NAME, get_theme

logger = logging.getLogger(__name__)

FRONT_MATTER = re.compile(r'\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)', re.DOTALL)
SLIDE_SEPARATOR = re.compile(r'^[ \t]*---[ \t]*$', re.MULTILINE)


class PresentationMetadata(BaseModel):
    """Deck-level information from the front matter."""
    title: Optional[str] = Field(None, description="Shown centered at the top of every slide")
    author: Optional[str] = Field(None, description="Deck author")
    theme: Optional[str] = Field(None, description="Preferred theme name")


class Presentation(BaseModel):
    """Slides plus the current slide index and theme selection."""
    slides: List[str] = Field(min_length=1, description="Raw text of each slide")
    current_slide: int = Field(0, description="0-based index of the slide on screen")
    metadata: PresentationMetadata = Field(default_factory=PresentationMetadata)
    themes: List[Theme] = Field(
        default_factory=lambda: list(DEFAULT_THEMES.values()),
        min_length=1,
        description="Themes cycled through with the theme key",
    )
    theme_index: int = Field(0, description="Index of the selected theme in themes")

    @model_validator(mode='after')
    def check_indices(self) -> "Presentation":
        if not 0 <= self.current_slide < len(self.slides):
            raise ValueError(
                f"current_slide {self.current_slide} out of range for {len(self.slides)} slides"
            )
        if not 0 <= self.theme_index < len(self.themes):
            raise ValueError(f"theme_index {self.theme_index} out of range")
        return self

    def total_slides(self) -> int:
        return len(self.slides)

    def current_slide_text(self) -> str:
        return self.slides[self.current_slide]

    def current_theme(self) -> Theme:
        return self.themes[self.theme_index]

    # Navigation clamps at both ends

    def go_to(self, index: int) -> bool:
        """Move to a slide; returns True if the index changed."""
        index = max(0, min(index, len(self.slides) - 1))
        changed = index != self.current_slide
        self.current_slide = index
        return changed

    def next_slide(self) -> bool:
        return self.go_to(self.current_slide + 1)

    def previous_slide(self) -> bool:
        return self.go_to(self.current_slide - 1)

    def first_slide(self) -> bool:
        return self.go_to(0)

    def last_slide(self) -> bool:
        return self.go_to(len(self.slides) - 1)

    def next_theme(self) -> Theme:
        """Select the following theme, wrapping around."""
        self.theme_index = (self.theme_index + 1) % len(self.themes)
        return self.current_theme()

    def select_theme(self, name: str) -> Theme:
        """Select a theme by name.

        Raises:
            KeyError: If no theme in the cycle has that name
        """
        theme = get_theme(name, {t.name: t for t in self.themes})
        self.theme_index = self.themes.index(theme)
        return theme


def parse_markdown(content: str) -> Tuple[Dict, List[str]]:
    """Split markdown into front matter and slide texts.

    Returns:
        (front matter dict, list of non-blank slide texts)
    """
    front_matter = {}
    match = FRONT_MATTER.match(content)
    if match:
        # A leading separator followed by a slide is not front matter
        try:
            loaded = yaml.safe_load(match.group(1))
        except yaml.YAMLError as e:
            logger.debug("Leading block is not YAML front matter: %s", e)
            loaded = None
        if isinstance(loaded, dict):
            front_matter = loaded
            content = content[match.end():]

    slides = [s for s in SLIDE_SEPARATOR.split(content) if s.strip()]
    return front_matter, slides


def load_presentation(
    md_path: Union[str, Path],
    theme: Optional[str] = None,
    themes: Optional[Dict[str, Theme]] = None,
    start: int = 0,
) -> Presentation:
    """Load a markdown deck.

    Args:
        md_path: Path to the markdown file
        theme: Theme name; overrides the front matter's theme
        themes: Available themes (built-in ones if None)
        start: 0-based slide to open on, clamped to the deck

    Returns:
        Presentation instance

    Raises:
        FileNotFoundError: If the deck doesn't exist
        ValueError: If the deck has no slides
        KeyError: If the theme is unknown
    """
    md_path = Path(md_path)
    if not md_path.exists():
        raise FileNotFoundError(f"Presentation not found: {md_path}")

    with open(md_path, 'r', encoding='utf-8') as f:
        content = f.read()

    front_matter, slides = parse_markdown(content)
    if not slides:
        raise ValueError(f"No slides found in {md_path}")

    metadata = PresentationMetadata(**{
        k: str(v) for k, v in front_matter.items()
        if k in PresentationMetadata.model_fields and v is not None
    })
    themes = themes if themes is not None else DEFAULT_THEMES
    presentation = Presentation(slides=slides, metadata=metadata, themes=list(themes.values()))
    presentation.go_to(start)

    theme = theme or metadata.theme
    if theme is None and DEFAULT_THEME_NAME in themes:
        theme = DEFAULT_THEME_NAME
    if theme is not None:
        presentation.select_theme(theme)

    logger.debug(
        "Loaded %s: %d slides, theme %s",
        md_path, presentation.total_slides(), presentation.current_theme().name,
    )
    return presentation
