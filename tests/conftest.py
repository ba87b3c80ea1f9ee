"""Shared fixtures: a terminal sink that records what is written."""

import re

import pytest

from term_slides.presentation import Presentation, PresentationMetadata


class FakeTerminal:
    """Captures writes and flushes instead of touching a real TTY."""

    def __init__(self, width=80, height=24, cursor=(1, 1), keys=()):
        self.width = width
        self.height = height
        self.cursor = cursor
        self.pending = []
        self.frames = []
        self.flushes = 0
        self.keys = list(keys)

    def write(self, text):
        self.pending.append(text)

    def flush(self):
        self.flushes += 1
        self.frames.append(''.join(self.pending))
        self.pending = []

    def query_size(self):
        return self.width, self.height

    def query_cursor(self):
        return self.cursor

    def read_key(self):
        return self.keys.pop(0)

    @property
    def output(self):
        return ''.join(self.frames) + ''.join(self.pending)

    def row_text(self, row, column=1):
        """Text written right after a cursor move to (column, row), styles removed."""
        marker = f"\x1b[{row};{column}H"
        start = self.output.rindex(marker) + len(marker)
        chunk = re.split(r'\x1b\[\d+;\d+H', self.output[start:])[0]
        return re.sub(r'\x1b\[[0-9;?]*[A-Za-z]', '', chunk)


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def make_presentation():
    def _make(slides, current=0, title="Demo"):
        return Presentation(
            slides=slides,
            current_slide=current,
            metadata=PresentationMetadata(title=title),
        )
    return _make
