"""Parser-free indentation guide computation and mark rendering."""

from .composer import GuideSpan, compose_spans
from .extent import ExtentPolicy, find_extent
from .levels import (
    Level,
    candidate_column,
    effective_column,
    find_level_start,
    indentation_candidates,
)
from .marks import InMemorySurface, Mark, MarkRegistry, MarkSurface
from .render import (
    LineRenderBuffer,
    MarkRenderer,
    Segment,
    apply_marks,
    display_segments,
)

__all__ = [
    "ExtentPolicy",
    "GuideSpan",
    "InMemorySurface",
    "Level",
    "LineRenderBuffer",
    "Mark",
    "MarkRegistry",
    "MarkRenderer",
    "MarkSurface",
    "Segment",
    "apply_marks",
    "candidate_column",
    "compose_spans",
    "display_segments",
    "effective_column",
    "find_extent",
    "find_level_start",
    "indentation_candidates",
]
