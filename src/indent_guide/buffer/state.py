"""Cursor and viewport state tracked alongside a BufferDocument."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Cursor = Tuple[int, int]  # (row, column)
LineRange = Tuple[int, int]  # (first, last), both inclusive


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + visible window info for one view of a buffer.

    ``viewport`` of ``None`` means the whole buffer is visible.
    """

    cursor: Cursor = (0, 0)
    viewport: Optional[LineRange] = None
    context: str = "fundamental"

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def set_viewport(self, first: int, last: int) -> None:
        self.viewport = (first, last)

    def clear_viewport(self) -> None:
        self.viewport = None
