"""In-memory buffer façade implementing the BufferAccessor protocol."""

from __future__ import annotations

from typing import Iterable, Optional

from indent_guide.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Cursor, LineRange
from .validation import ensure_cursor, ensure_tab_width, ensure_viewport


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        tab_width: int = 8,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self._tab_width = ensure_tab_width(tab_width)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        tab_width: int = 8,
        context: str = "fundamental",
    ) -> "Buffer":
        return cls(
            name=name,
            document=BufferDocument.from_text(text),
            state=BufferState(context=context),
            tab_width=tab_width,
        )

    @property
    def line_count(self) -> int:
        return self.document.line_count

    def line_text(self, index: int) -> str:
        return self.document.get_line(index)

    @property
    def tab_width(self) -> int:
        return self._tab_width

    @tab_width.setter
    def tab_width(self, value: int) -> None:
        self._tab_width = ensure_tab_width(value)

    @property
    def cursor_position(self) -> Cursor:
        return self.state.cursor

    @property
    def visible_line_range(self) -> LineRange:
        if self.state.viewport is None:
            return (0, self.line_count - 1)
        return ensure_viewport(self.document, self.state.viewport)

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def context(self) -> str:
        return self.state.context

    def set_cursor(self, row: int, col: int = 0) -> Cursor:
        cursor = ensure_cursor(self.document, (row, col))
        self.state.set_cursor(*cursor)
        return cursor

    def set_viewport(self, first: int, last: int) -> LineRange:
        viewport = ensure_viewport(self.document, (first, last))
        self.state.set_viewport(*viewport)
        return viewport

    def replace_lines(self, start: int, end: int, lines: Iterable[str]) -> int:
        """Replace lines ``[start:end]`` and return the new document version.

        The cursor is clamped back into the document afterwards.
        """

        with telemetry.span(
            name="buffer::replace_lines",
            component="buffer",
            metadata={"buffer": self.name, "start": start, "end": end},
        ):
            self.document = self.document.update_lines(start, end, lines)
            row, col = self.state.cursor
            row = min(row, self.document.line_count - 1)
            col = min(col, len(self.document.get_line(row)))
            self.state.set_cursor(row, col)
            if self.state.viewport is not None:
                first, last = self.state.viewport
                first = min(first, self.document.line_count - 1)
                self.state.set_viewport(first, max(first, last))
        return self.document.version
