"""Buffer abstractions consumed by the guide core."""

from .buffer import Buffer
from .document import (
    BufferDocument,
    advance_column,
    indentation_column,
    is_blank,
    rendered_width,
)
from .state import BufferState, Cursor, LineRange
from .sync import BufferAccessor, BufferValidationError
from .validation import ensure_cursor, ensure_tab_width, ensure_viewport

__all__ = [
    "Buffer",
    "BufferAccessor",
    "BufferDocument",
    "BufferState",
    "BufferValidationError",
    "Cursor",
    "LineRange",
    "advance_column",
    "ensure_cursor",
    "ensure_tab_width",
    "ensure_viewport",
    "indentation_column",
    "is_blank",
    "rendered_width",
]
