"""
Command Line Interface for Terminal Slides

Provides the term-slides entry point with commands:
- present: Show a markdown deck full-screen in the terminal
- check: Validate a deck and print its outline
- themes: List available color themes
"""

import sys
import logging
import argparse
import logging.handlers
from typing import Callable, Dict, Optional

from .classify import classify_line
from .config import available_themes, load_themes
from .presentation import Presentation, load_presentation
from .render import render_slide, render_text_top_right, visible_body_lines
from .terminal import AnsiTerminal, TerminalError

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


# ============================================================
# KEY BINDINGS
# ============================================================

def _next(presentation: Presentation, terminal) -> bool:
    presentation.next_slide()
    render_slide(presentation, terminal)
    return True


def _previous(presentation: Presentation, terminal) -> bool:
    presentation.previous_slide()
    render_slide(presentation, terminal)
    return True


def _first(presentation: Presentation, terminal) -> bool:
    presentation.first_slide()
    render_slide(presentation, terminal)
    return True


def _last(presentation: Presentation, terminal) -> bool:
    presentation.last_slide()
    render_slide(presentation, terminal)
    return True


def _theme(presentation: Presentation, terminal) -> bool:
    theme = presentation.next_theme()
    logger.debug("Theme switched to %s", theme.name)
    render_slide(presentation, terminal)
    render_text_top_right(theme.name, terminal, theme.footer_color)
    return True


def _redraw(presentation: Presentation, terminal) -> bool:
    render_slide(presentation, terminal)
    return True


def _quit(presentation: Presentation, terminal) -> bool:
    return False


KEY_BINDINGS: Dict[str, Callable[[Presentation, object], bool]] = {
    'l': _next, 'j': _next, 'right': _next, 'down': _next, 'space': _next, 'enter': _next,
    'h': _previous, 'k': _previous, 'left': _previous, 'up': _previous, 'backspace': _previous,
    'g': _first,
    'G': _last,
    't': _theme,
    'r': _redraw,
    'q': _quit, 'ctrl-c': _quit,
}


def run_presentation(presentation: Presentation, terminal) -> None:
    """Render the current slide, then handle keys until quit.

    Each key is fully handled, render included, before the next is read.
    """
    render_slide(presentation, terminal)
    while True:
        key = terminal.read_key()
        action = KEY_BINDINGS.get(key)
        if action is None:
            continue
        logger.debug("Key %r -> %s", key, action.__name__.lstrip('_'))
        if not action(presentation, terminal):
            break


# ============================================================
# COMMANDS
# ============================================================

def configure_logging(
    verbose: bool,
    log_file: Optional[str] = None,
    hold: bool = False,
) -> Optional[logging.Handler]:
    """Set up root logging for a command.

    With hold=True and no log file, records are kept in memory and the
    returned handler must be flushed once the screen is no longer in use.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, 'term_slides', False):
            root.removeHandler(handler)
            handler.close()

    if log_file:
        handler = logging.FileHandler(log_file, encoding='utf-8')
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.term_slides = True
        root.addHandler(handler)
        return None

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(LOG_FORMAT))
    if not hold:
        stream.term_slides = True
        root.addHandler(stream)
        return None

    held = logging.handlers.MemoryHandler(
        capacity=sys.maxsize, flushLevel=logging.CRITICAL + 1, target=stream, flushOnClose=True
    )
    held.term_slides = True
    root.addHandler(held)
    return held


def _load(args: argparse.Namespace, start: int = 0) -> Presentation:
    extra = load_themes(args.themes_file) if args.themes_file else None
    return load_presentation(
        args.input,
        theme=getattr(args, 'theme', None),
        themes=available_themes(extra),
        start=start,
    )


def _report_error(e: Exception, verbose: bool) -> int:
    message = e.args[0] if isinstance(e, KeyError) and e.args else e
    print(f"\nError: {message}", file=sys.stderr)
    if verbose:
        import traceback
        traceback.print_exc()
    return 1


def present_command(args: argparse.Namespace) -> int:
    """Execute present command."""
    held = configure_logging(args.verbose, args.log_file, hold=True)
    try:
        presentation = _load(args, start=args.start - 1)
        terminal = AnsiTerminal()
        with terminal.session():
            run_presentation(presentation, terminal)
        return 0

    except (FileNotFoundError, ValueError, KeyError, TerminalError, OSError) as e:
        return _report_error(e, args.verbose)

    finally:
        if held is not None:
            held.flush()


def check_command(args: argparse.Namespace) -> int:
    """Execute check command."""
    configure_logging(args.verbose)
    try:
        presentation = _load(args)
    except (FileNotFoundError, ValueError, KeyError, OSError) as e:
        return _report_error(e, args.verbose)

    print("=" * 60)
    print(presentation.metadata.title or "(No title)")
    print("=" * 60)
    print(f"Slides: {presentation.total_slides()}")
    print(f"Theme: {presentation.current_theme().name}")

    for i, text in enumerate(presentation.slides, 1):
        headings = [s for s in map(classify_line, visible_body_lines(text)) if s.is_heading]
        print(f"\n  Slide {i}")
        for style in headings:
            indent = "  " * int(style.level)
            print(f"  {indent}{style.text}")

    return 0


def themes_command(args: argparse.Namespace) -> int:
    """Execute themes command."""
    configure_logging(args.verbose)
    try:
        extra = load_themes(args.themes_file) if args.themes_file else None
    except (FileNotFoundError, ValueError, OSError) as e:
        return _report_error(e, args.verbose)

    for name, theme in available_themes(extra).items():
        colors = theme.colors
        slots = "  ".join(
            f"{slot}={colors.slot(slot).to_hex()}" for slot in ('green', 'teal', 'red', 'peach')
        )
        print(f"{name:<12} {slots}  title={colors.title_accent} footer={colors.footer_accent}")

    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Terminal Slides - Present markdown decks in the terminal',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s present talk.md --theme latte
  %(prog)s check talk.md
  %(prog)s themes --themes-file my-themes.yaml

Keys while presenting:
  l j right down space enter   next slide
  h k left up backspace        previous slide
  g / G                        first / last slide
  t                            next theme
  r                            redraw
  q                            quit
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Present command
    present_parser = subparsers.add_parser('present', help='Present a markdown deck')
    present_parser.add_argument('input', help='Markdown deck')
    present_parser.add_argument('--theme', help='Theme name (overrides the deck front matter)')
    present_parser.add_argument('--themes-file', help='Additional themes (YAML/JSON)')
    present_parser.add_argument('--start', type=int, default=1, help='1-based slide to start on')
    present_parser.add_argument('--log-file', help='Write log records to this file')
    present_parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed output')

    # Check command
    check_parser = subparsers.add_parser('check', help='Validate a deck and print its outline')
    check_parser.add_argument('input', help='Markdown deck')
    check_parser.add_argument('--theme', help='Theme name to validate')
    check_parser.add_argument('--themes-file', help='Additional themes (YAML/JSON)')
    check_parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed output')

    # Themes command
    themes_parser = subparsers.add_parser('themes', help='List available themes')
    themes_parser.add_argument('--themes-file', help='Additional themes (YAML/JSON)')
    themes_parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed output')

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == 'present':
        return present_command(args)
    elif args.command == 'check':
        return check_command(args)
    elif args.command == 'themes':
        return themes_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
