"""Turn guide spans into per-line marks placed at exact screen columns."""

from __future__ import annotations

from bisect import bisect_right
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from indent_guide.buffer import BufferAccessor, advance_column

from .composer import GuideSpan
from .marks import Mark

Segment = Tuple[str, Optional[str]]  # (text, face or None for buffer content)


class LineRenderBuffer:
    """Accumulates guide glyphs for one line before any mark exists.

    Replacement cells are keyed by character offset; a tab owns one cell per
    screen column it spans, so several guides can land inside one tab.
    """

    def __init__(self, text: str, tab_width: int) -> None:
        self.text = text
        self.tab_width = tab_width
        self._starts: List[int] = []
        column = 0
        for char in text:
            self._starts.append(column)
            column = advance_column(column, char, tab_width)
        self.width = column
        self._cells: Dict[int, List[str]] = {}
        self._trailing: List[str] = []

    def _cell_span(self, offset: int) -> Tuple[int, int]:
        start = self._starts[offset]
        end = self._starts[offset + 1] if offset + 1 < len(self._starts) else self.width
        return start, end

    def place(self, column: int, glyph: str) -> None:
        if column >= self.width:
            position = column - self.width
            if position >= len(self._trailing):
                self._trailing.extend(" " * (position - len(self._trailing)))
                self._trailing.append(glyph)
            else:
                self._trailing[position] = glyph
            return

        offset = bisect_right(self._starts, column) - 1
        start, end = self._cell_span(offset)
        cells = self._cells.get(offset)
        if cells is None:
            cells = [" "] * (end - start)
            self._cells[offset] = cells
        cells[column - start] = glyph

    def marks(self, line: int, face: str) -> List[Mark]:
        result = [
            Mark(line=line, offset=offset, width=1, display="".join(cells), face=face)
            for offset, cells in sorted(self._cells.items())
        ]
        if self._trailing:
            result.append(
                Mark(
                    line=line,
                    offset=len(self.text),
                    width=0,
                    display="".join(self._trailing),
                    face=face,
                )
            )
        return result


class MarkRenderer:
    """Stateless span-to-mark conversion for one glyph and face."""

    def __init__(self, *, char: str = "|", face: str = "#535353") -> None:
        self.char = char
        self.face = face

    def render(self, buffer: BufferAccessor, spans: Iterable[GuideSpan]) -> List[Mark]:
        targets: Dict[int, Set[int]] = {}
        for span in spans:
            for line in span.lines():
                targets.setdefault(line, set()).add(span.column)

        marks: List[Mark] = []
        for line in sorted(targets):
            if line >= buffer.line_count:
                continue
            pending = LineRenderBuffer(buffer.line_text(line), buffer.tab_width)
            for column in sorted(targets[line]):
                pending.place(column, self.char)
            marks.extend(pending.marks(line, self.face))
        return marks


def display_segments(
    text: str, marks: Sequence[Mark], tab_width: int
) -> List[Segment]:
    """Split the displayed form of ``text`` into plain and decorated runs.

    Tabs are expanded to spaces; the buffer text itself is left untouched.
    """

    by_offset = {mark.offset: mark for mark in marks if not mark.trailing}
    segments: List[Segment] = []
    plain: List[str] = []
    column = 0
    for offset, char in enumerate(text):
        next_column = advance_column(column, char, tab_width)
        mark = by_offset.get(offset)
        if mark is not None:
            if plain:
                segments.append(("".join(plain), None))
                plain = []
            segments.append((mark.display, mark.face))
        else:
            plain.append(" " * (next_column - column) if char == "\t" else char)
        column = next_column
    if plain:
        segments.append(("".join(plain), None))
    segments.extend((mark.display, mark.face) for mark in marks if mark.trailing)
    return segments


def apply_marks(text: str, marks: Sequence[Mark], tab_width: int) -> str:
    return "".join(part for part, _ in display_segments(text, marks, tab_width))


__all__ = [
    "LineRenderBuffer",
    "MarkRenderer",
    "Segment",
    "apply_marks",
    "display_segments",
]
