"""
Terminal Slides

Presents markdown slide decks full-screen in a terminal, with colored
headings, a slide counter and a progress bar.
"""

__version__ = "0.1.0"

from .config import (
    Theme,
    ThemeColors,
    RgbColor,
    DEFAULT_THEMES,
    load_themes,
    save_themes,
    get_theme,
)

from .classify import (
    HeadingLevel,
    LineStyle,
    classify_line,
    line_color,
)

from .presentation import (
    Presentation,
    PresentationMetadata,
    load_presentation,
    parse_markdown,
)

from .render import (
    render_slide,
    render_text_top_right,
)

from .terminal import (
    AnsiTerminal,
    TerminalError,
    TerminalSink,
)

__all__ = [
    # Config
    'Theme',
    'ThemeColors',
    'RgbColor',
    'DEFAULT_THEMES',
    'load_themes',
    'save_themes',
    'get_theme',
    # Classification
    'HeadingLevel',
    'LineStyle',
    'classify_line',
    'line_color',
    # Presentation
    'Presentation',
    'PresentationMetadata',
    'load_presentation',
    'parse_markdown',
    # Rendering
    'render_slide',
    'render_text_top_right',
    # Terminal
    'AnsiTerminal',
    'TerminalError',
    'TerminalSink',
]
