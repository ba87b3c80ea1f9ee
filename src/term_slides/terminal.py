"""
Terminal Output

ANSI control directives and the sink the renderer writes them to.
AnsiTerminal drives a real TTY; tests use any object with the same
write/flush/query_size/query_cursor methods.
"""

import os
import re
import sys
import tty
import select
import logging
import termios
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, TextIO, Tuple

from .config import RgbColor

logger = logging.getLogger(__name__)


# ============================================================
# CONTROL DIRECTIVES
# ============================================================

CSI = '\x1b['
CLEAR_ALL = CSI + '2J'
BOLD = CSI + '1m'
STYLE_RESET = CSI + '0m'
FG_RESET = CSI + '39m'
HIDE_CURSOR = CSI + '?25l'
SHOW_CURSOR = CSI + '?25h'
REQUEST_CURSOR_POSITION = CSI + '6n'

CURSOR_REPORT = re.compile(r'\x1b\[(\d+);(\d+)R')

# Seconds to wait for the terminal to answer a cursor position request
CURSOR_QUERY_TIMEOUT = 1.0

# Seconds to wait for the rest of an escape sequence after ESC
ESCAPE_TIMEOUT = 0.05


def goto(column: int, row: int) -> str:
    """Move the cursor to a 1-based column and row."""
    return f"{CSI}{row};{column}H"


def fg(color: RgbColor) -> str:
    """Set a 24-bit foreground color."""
    return f"{CSI}38;2;{color.r};{color.g};{color.b}m"


def clear_all() -> str:
    return CLEAR_ALL


class TerminalError(OSError):
    """The terminal could not be queried (not a TTY, no answer, ioctl failure)."""


class TerminalSink(Protocol):
    """Where rendered directives go."""

    def write(self, text: str) -> None:
        ...

    def flush(self) -> None:
        ...

    def query_size(self) -> Tuple[int, int]:
        """Return (width, height) in character cells."""
        ...

    def query_cursor(self) -> Tuple[int, int]:
        """Return the 1-based (column, row) of the cursor."""
        ...


# ============================================================
# REAL TERMINAL
# ============================================================

KEY_SEQUENCES = {
    '\x1b[A': 'up',
    '\x1b[B': 'down',
    '\x1b[C': 'right',
    '\x1b[D': 'left',
    '\x1bOA': 'up',
    '\x1bOB': 'down',
    '\x1bOC': 'right',
    '\x1bOD': 'left',
    '\r': 'enter',
    '\n': 'enter',
    '\x7f': 'backspace',
    '\x08': 'backspace',
    '\x03': 'ctrl-c',
    ' ': 'space',
}


class AnsiTerminal:
    """Sink backed by the process's controlling terminal.

    Output is buffered by the underlying text stream and only reaches the
    screen on flush().
    """

    def __init__(self, output: Optional[TextIO] = None, input_fd: Optional[int] = None):
        self.output = output if output is not None else sys.stdout
        self.input_fd = input_fd if input_fd is not None else sys.stdin.fileno()

    def write(self, text: str) -> None:
        self.output.write(text)

    def flush(self) -> None:
        self.output.flush()

    def query_size(self) -> Tuple[int, int]:
        try:
            size = os.get_terminal_size(self.output.fileno())
        except (OSError, ValueError) as e:
            raise TerminalError(f"Cannot query terminal size: {e}") from e
        return size.columns, size.lines

    def query_cursor(self) -> Tuple[int, int]:
        # Anything already queued must be on screen before the cursor is measured
        self.flush()
        try:
            with self.raw_mode():
                os.write(self.output.fileno(), REQUEST_CURSOR_POSITION.encode())
                response = self._read_until('R', CURSOR_QUERY_TIMEOUT)
        except (OSError, termios.error, ValueError) as e:
            raise TerminalError(f"Cannot query cursor position: {e}") from e

        match = CURSOR_REPORT.search(response)
        if not match:
            raise TerminalError(f"Unexpected cursor position report: {response!r}")
        row, column = int(match.group(1)), int(match.group(2))
        return column, row

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Put the input TTY in raw mode, restoring its previous mode on exit."""
        try:
            saved = termios.tcgetattr(self.input_fd)
        except termios.error as e:
            raise TerminalError(f"Input is not a terminal: {e}") from e
        tty.setraw(self.input_fd)
        try:
            yield
        finally:
            termios.tcsetattr(self.input_fd, termios.TCSADRAIN, saved)

    @contextmanager
    def session(self) -> Iterator["AnsiTerminal"]:
        """Raw mode with a hidden cursor; clears the screen on the way out."""
        with self.raw_mode():
            self.write(HIDE_CURSOR)
            self.flush()
            try:
                yield self
            finally:
                self.write(STYLE_RESET + CLEAR_ALL + goto(1, 1) + SHOW_CURSOR)
                self.flush()

    def read_key(self) -> str:
        """Block until a key is pressed and return its name.

        Printable keys are returned as themselves; arrows and control keys
        by the names in KEY_SEQUENCES.

        Raises:
            TerminalError: If the input has been closed
        """
        data = self._read_char()
        if data == '\x1b':
            # Escape sequences arrive in one burst; a lone escape does not
            data += self._read_escape_tail(ESCAPE_TIMEOUT)
        key = KEY_SEQUENCES.get(data, data)
        logger.debug("Key read: %r -> %s", data, key)
        return key

    def _read_byte(self) -> bytes:
        byte = os.read(self.input_fd, 1)
        if not byte:
            raise TerminalError("Terminal input closed")
        return byte

    def _read_char(self) -> str:
        """Read one UTF-8 encoded character."""
        data = self._read_byte()
        lead = data[0]
        if lead >= 0xf0:
            extra = 3
        elif lead >= 0xe0:
            extra = 2
        elif lead >= 0xc0:
            extra = 1
        else:
            extra = 0
        for _ in range(extra):
            data += self._read_byte()
        return data.decode('utf-8', errors='replace')

    def _ready(self, timeout: float) -> bool:
        return bool(select.select([self.input_fd], [], [], timeout)[0])

    def _read_escape_tail(self, timeout: float) -> str:
        """Read the rest of one escape sequence, stopping at its final byte."""
        if not self._ready(timeout):
            return ''
        tail = self._read_char()
        if tail not in ('[', 'O'):
            return tail
        while self._ready(timeout):
            char = self._read_char()
            tail += char
            if '@' <= char <= '~':
                break
        return tail

    def _read_until(self, terminator: str, timeout: float) -> str:
        response = ''
        while not response.endswith(terminator):
            if not self._ready(timeout):
                raise TerminalError("Terminal did not answer the cursor position request")
            response += self._read_char()
        return response
