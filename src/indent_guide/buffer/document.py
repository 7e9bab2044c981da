"""Line storage and the whitespace measurements the guide core relies on."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

WHITESPACE = " \t"


def is_blank(text: str) -> bool:
    """True for empty or whitespace-only lines."""

    return not text.strip(WHITESPACE)


def advance_column(column: int, char: str, tab_width: int) -> int:
    """Screen column reached after drawing ``char`` starting at ``column``."""

    if char == "\t":
        return (column // tab_width + 1) * tab_width
    return column + 1


def rendered_width(text: str, tab_width: int) -> int:
    column = 0
    for char in text:
        column = advance_column(column, char, tab_width)
    return column


def indentation_column(text: str, tab_width: int) -> int:
    """Screen column of the first non-whitespace character.

    For blank lines this is the width of the whitespace itself.
    """

    column = 0
    for char in text:
        if char not in WHITESPACE:
            break
        column = advance_column(column, char, tab_width)
    return column


@dataclass(slots=True)
class BufferDocument:
    """List-of-lines text storage with a version counter.

    Every mutation returns a new document with a bumped version so that
    deferred work can tell whether the text it was armed against is stale.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        lines = [line.removesuffix("\r") for line in text.split("\n")]
        return cls(_lines=lines, version=0)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def update_lines(
        self, start: int, end: int, new_lines: Iterable[str]
    ) -> "BufferDocument":
        """Return a document with ``[start:end]`` replaced by ``new_lines``."""

        lines = list(self._lines)
        lines[start:end] = list(new_lines)
        if not lines:
            lines = [""]
        return BufferDocument(_lines=lines, version=self.version + 1)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]
