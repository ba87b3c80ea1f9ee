"""
Line Classifier

Decides whether a slide line is a heading (levels 1-4, by the length of its
leading '#' run) or body text, and strips the heading marker.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from .config import RgbColor, Theme


class HeadingLevel(IntEnum):
    """Heading levels, in the order of the theme's palette slots."""
    H1 = 1
    H2 = 2
    H3 = 3
    H4 = 4

    @classmethod
    def from_prefix(cls, prefix: str) -> Optional["HeadingLevel"]:
        """Map a run of '#' characters to a level, or None if unrecognized."""
        if prefix and set(prefix) == {'#'} and len(prefix) <= len(cls):
            return cls(len(prefix))
        return None


@dataclass(frozen=True)
class LineStyle:
    """Display text for a line and the heading level it was classified as.

    A level of None means body text drawn in the terminal's default color.
    """
    text: str
    level: Optional[HeadingLevel] = None

    @property
    def is_heading(self) -> bool:
        return self.level is not None


def extract_prefix(line: str) -> Tuple[str, str]:
    """Split a line into its leading '#' run and the rest.

    Leading whitespace after the run is removed; trailing whitespace is kept.
    """
    rest = line.lstrip('#')
    prefix = line[:len(line) - len(rest)]
    if prefix:
        rest = rest.lstrip()
    return prefix, rest


def classify_line(line: str) -> LineStyle:
    """Classify one line of slide text.

    Lines with a run of 5 or more '#' are body text and keep their marker.
    """
    prefix, rest = extract_prefix(line)
    if not prefix:
        return LineStyle(line)

    level = HeadingLevel.from_prefix(prefix)
    if level is None:
        return LineStyle(line)
    return LineStyle(rest, level)


def line_color(style: LineStyle, theme: Theme) -> Optional[RgbColor]:
    """Resolve a classified line to a theme color, or None for the default color."""
    if style.level is None:
        return None
    return theme.heading_color(int(style.level))
