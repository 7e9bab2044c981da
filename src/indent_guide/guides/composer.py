"""Expand the cursor's level (and optionally its ancestors) into guide spans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from indent_guide.buffer import BufferAccessor

from .extent import ExtentPolicy, find_extent
from .levels import find_level_start


@dataclass(frozen=True, slots=True)
class GuideSpan:
    """Closed line range over which one vertical guide is drawn."""

    start_line: int
    end_line: int
    column: int
    depth: int = 0

    def __post_init__(self) -> None:
        if self.start_line > self.end_line:
            raise ValueError(
                f"span start {self.start_line} is after end {self.end_line}"
            )
        if self.column < 0:
            raise ValueError("span column cannot be negative")

    def lines(self) -> Iterator[int]:
        return iter(range(self.start_line, self.end_line + 1))


def compose_spans(
    buffer: BufferAccessor,
    cursor_line: int,
    *,
    recursive: bool = False,
    threshold: int = -1,
    policy: ExtentPolicy = ExtentPolicy.ORDINARY,
) -> List[GuideSpan]:
    """Spans for the level around ``cursor_line``, innermost first.

    Guides never cover the level's own opening line and are clipped to the
    visible range. Levels at or below ``threshold`` are skipped.
    """

    visible_start, visible_end = buffer.visible_line_range
    spans: List[GuideSpan] = []
    level = find_level_start(buffer, cursor_line)
    depth = 0
    while level is not None and level.column > threshold:
        end = find_extent(
            buffer, level.start_line, level.column, visible_end, policy=policy
        )
        start = max(level.start_line + 1, visible_start)
        end = min(end, visible_end)
        if start <= end:
            spans.append(GuideSpan(start, end, level.column, depth))
        if not recursive or level.column == 0:
            break
        level = find_level_start(buffer, level.start_line)
        depth += 1
    return spans


__all__ = ["GuideSpan", "compose_spans"]
