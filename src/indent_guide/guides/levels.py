"""Back-boundary detection: the nearest shallower ancestor of a line."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from indent_guide.buffer import BufferAccessor, indentation_column, is_blank


@dataclass(frozen=True, slots=True)
class Level:
    """One indentation depth: the parent line and the guide column."""

    start_line: int
    column: int


def indentation_candidates(level: int, tab_width: int) -> tuple[str, ...]:
    """Whitespace prefixes rendering to any column in ``0 .. level - 1``.

    Built bottom-up: column ``c`` is reachable by ``c`` spaces, or by a tab
    followed by any prefix of column ``c - tab_width``.
    """

    by_column: list[list[str]] = []
    for column in range(max(level, 0)):
        forms = [" " * column]
        if column >= tab_width:
            forms.extend("\t" + prefix for prefix in by_column[column - tab_width])
        by_column.append(forms)
    return tuple(prefix for forms in by_column for prefix in forms)


_INDENT_PREFIX = re.compile(r"^(\t*)( *)[^ \t]")


def candidate_column(text: str, level: int, tab_width: int) -> Optional[int]:
    """Column of ``text``'s indentation if it is one of the candidates.

    A line qualifies when its indentation is tabs then spaces and renders
    shallower than ``level``; the result equals matching against
    ``indentation_candidates(level, tab_width)``.
    """

    match = _INDENT_PREFIX.match(text)
    if match is None:
        return None
    column = len(match.group(1)) * tab_width + len(match.group(2))
    return column if column < level else None


def _first_indent(buffer: BufferAccessor, rows: Iterable[int]) -> int:
    for row in rows:
        text = buffer.line_text(row)
        if not is_blank(text):
            return indentation_column(text, buffer.tab_width)
    return 0


def effective_column(buffer: BufferAccessor, line: int) -> int:
    """Indentation column of ``line``; blank lines adopt the deeper neighbour."""

    text = buffer.line_text(line)
    if not is_blank(text):
        return indentation_column(text, buffer.tab_width)
    following = _first_indent(buffer, range(line + 1, buffer.line_count))
    preceding = _first_indent(buffer, range(line - 1, -1, -1))
    return max(following, preceding)


def find_level_start(buffer: BufferAccessor, cursor_line: int) -> Optional[Level]:
    """Return the level enclosing ``cursor_line`` or ``None`` at top level."""

    if buffer.line_count == 0 or not 0 <= cursor_line < buffer.line_count:
        return None
    base = effective_column(buffer, cursor_line)
    if base == 0:
        return None

    for row in range(cursor_line - 1, -1, -1):
        column = candidate_column(buffer.line_text(row), base, buffer.tab_width)
        if column is not None:
            return Level(start_line=row, column=column)
    return None


__all__ = [
    "Level",
    "candidate_column",
    "effective_column",
    "find_level_start",
    "indentation_candidates",
]
