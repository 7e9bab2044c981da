"""Forward-boundary detection: the last line still inside a level."""

from __future__ import annotations

from enum import Enum

from indent_guide.buffer import BufferAccessor, indentation_column, is_blank


class ExtentPolicy(str, Enum):
    """How a block ends once the scan reaches a dedented line."""

    ORDINARY = "ordinary"
    # Closing token sits at the end of the last content line (lisp family).
    TAIL_BRACE = "tail_brace"


def find_extent(
    buffer: BufferAccessor,
    start_line: int,
    column: int,
    visible_end: int,
    *,
    policy: ExtentPolicy = ExtentPolicy.ORDINARY,
) -> int:
    """Return the last line of the level opened at ``(start_line, column)``.

    The scan never passes ``visible_end``. Returns ``start_line`` when no
    line below it is in range.
    """

    tab_width = buffer.tab_width
    limit = min(buffer.line_count - 1, visible_end)
    if start_line >= limit:
        return start_line

    def deeper(text: str) -> bool:
        return indentation_column(text, tab_width) > column

    line = start_line + 1
    while line < limit:
        text = buffer.line_text(line)
        if not (is_blank(text) or deeper(text)):
            break
        line += 1

    stop_text = buffer.line_text(line)
    if not is_blank(stop_text) and deeper(stop_text):
        return line
    if line == limit and limit < buffer.line_count - 1 and is_blank(stop_text):
        # Viewport edge on a blank line: the block may continue below.
        return line

    if policy is ExtentPolicy.TAIL_BRACE:
        end = line if is_blank(stop_text) else line - 1
        while end > start_line and is_blank(buffer.line_text(end)):
            end -= 1
        return end
    return line - 1


__all__ = ["ExtentPolicy", "find_extent"]
