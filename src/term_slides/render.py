"""
Slide Renderer

Lays out one slide as a full-screen repaint: title at the top, body lines
from row 4 down, a centered slide counter on the second-to-last row and a
progress bar on the last row. Geometry is queried on every call, so
resizes between renders are picked up.
"""

import logging
from typing import List, Optional

from .classify import classify_line, line_color
from .config import RgbColor, Theme
from .terminal import (
    BOLD,
    FG_RESET,
    STYLE_RESET,
    TerminalSink,
    clear_all,
    fg,
    goto,
)

logger = logging.getLogger(__name__)

BODY_FIRST_ROW = 4
PROGRESS_BLOCK = '█'


# ============================================================
# LAYOUT ARITHMETIC
# ============================================================

def centered_padding(text_length: int, width: int) -> int:
    """Left padding that centers text; text wider than the screen gets none."""
    return max(0, (width - text_length) // 2)


def progress_length(current_slide: int, total_slides: int, width: int) -> int:
    """Number of filled progress bar cells for a 0-based slide index."""
    if total_slides <= 0:
        raise ValueError(f"Cannot compute progress of {total_slides} slides")
    # floor(ratio * width) without float rounding
    return min(width, (current_slide + 1) * width // total_slides)


def top_right_column(text_length: int, width: int) -> int:
    """Start column for right-aligned text, clamped to the first column."""
    return max(1, width - text_length)


def split_lines(text: str) -> List[str]:
    """Split on newlines only, dropping a trailing carriage return from each line."""
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def visible_body_lines(slide_text: str) -> List[str]:
    """Slide lines with the leading blank ones dropped."""
    lines = split_lines(slide_text)
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    return lines[start:]


# ============================================================
# RENDERING
# ============================================================

def render_slide(presentation, sink: TerminalSink, *, theme: Optional[Theme] = None) -> None:
    """Repaint the whole screen with the presentation's current slide.

    Uses the presentation's selected theme unless one is given. Everything
    is queued on the sink and flushed once at the end.

    Raises:
        ValueError: If the presentation has no slides or the index is out of range
    """
    total = presentation.total_slides()
    current = presentation.current_slide
    if total <= 0:
        raise ValueError("Cannot render a presentation with no slides")
    if not 0 <= current < total:
        raise ValueError(f"Slide index {current} out of range for {total} slides")

    if theme is None:
        theme = presentation.current_theme()
    width, height = sink.query_size()
    logger.debug("Rendering slide %d/%d at %dx%d", current + 1, total, width, height)

    sink.write(clear_all() + goto(1, 1))

    title = presentation.metadata.title
    if title:
        # The cursor was just sent home
        render_text_centered(title, sink, theme.title_color, width=width, row=1)

    for i, line in enumerate(visible_body_lines(presentation.current_slide_text())):
        style = classify_line(line)
        color = line_color(style, theme)
        sink.write(
            BOLD
            + goto(1, BODY_FIRST_ROW + i)
            + (fg(color) if color is not None else FG_RESET)
            + style.text
            + FG_RESET
            + STYLE_RESET
        )

    render_text_centered(
        f"{current + 1}/{total} slides",
        sink,
        theme.footer_color,
        width=width,
        row=height - 1,
    )
    render_progress_bar(current, total, sink, theme.footer_color, width=width, height=height)
    sink.flush()


def render_text_centered(
    text: str,
    sink: TerminalSink,
    color: RgbColor,
    width: Optional[int] = None,
    row: Optional[int] = None,
) -> None:
    """Write bold text centered on a row, the cursor's row if none is given."""
    if width is None:
        width, _ = sink.query_size()
    if row is None:
        _, row = sink.query_cursor()
    spaces = ' ' * centered_padding(len(text), width)
    sink.write(goto(1, row) + BOLD + fg(color) + spaces + text + FG_RESET + STYLE_RESET)


def render_progress_bar(
    current_slide: int,
    total_slides: int,
    sink: TerminalSink,
    color: RgbColor,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> None:
    """Draw the progress bar across the last row, blanking the unfilled part."""
    if width is None or height is None:
        width, height = sink.query_size()
    filled = progress_length(current_slide, total_slides, width)
    sink.write(goto(1, height) + fg(color) + PROGRESS_BLOCK * filled + FG_RESET)
    sink.write(' ' * (width - filled) + goto(1, height + 1))


def render_text_top_right(text: str, sink: TerminalSink, color: RgbColor) -> None:
    """Overlay text at the right end of the first row and flush it immediately."""
    width, _ = sink.query_size()
    sink.write(goto(top_right_column(len(text), width), 1) + fg(color) + text + FG_RESET)
    sink.flush()
