"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .state import Cursor, LineRange
from .sync import BufferValidationError


def ensure_tab_width(tab_width: int) -> int:
    if isinstance(tab_width, bool) or not isinstance(tab_width, int) or tab_width < 1:
        raise BufferValidationError(
            f"Tab width must be a positive int, got {tab_width!r}"
        )
    return tab_width


def ensure_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    if row < 0 or row >= document.line_count:
        raise BufferValidationError("Row out of range", cursor=cursor)
    line = document.get_line(row)
    if col < 0 or col > len(line):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


def ensure_viewport(document: BufferDocument, viewport: LineRange) -> LineRange:
    first, last = viewport
    if first < 0 or last < first or first >= document.line_count:
        raise BufferValidationError(f"Viewport {viewport!r} out of range")
    return (first, min(last, document.line_count - 1))
