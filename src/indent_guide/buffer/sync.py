"""Boundary types between host editors and the guide core."""

from __future__ import annotations

from typing import Protocol

from .state import Cursor, LineRange


class BufferAccessor(Protocol):
    """Read-only view of a host buffer consumed by the guide core.

    Hosts validate ``tab_width >= 1`` before handing the buffer over.
    """

    @property
    def line_count(self) -> int: ...

    def line_text(self, index: int) -> str: ...

    @property
    def tab_width(self) -> int: ...

    @property
    def cursor_position(self) -> Cursor: ...

    @property
    def visible_line_range(self) -> LineRange: ...

    @property
    def version(self) -> int: ...

    @property
    def context(self) -> str: ...


class BufferValidationError(RuntimeError):
    """Raised when hosts provide out-of-range cursor, viewport or tab width."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
