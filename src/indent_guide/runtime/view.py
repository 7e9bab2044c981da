"""Per-view owner of the guide render state."""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from indent_guide.buffer import BufferAccessor
from indent_guide.config import GuideConfig, load_config
from indent_guide.guides import (
    ExtentPolicy,
    GuideSpan,
    InMemorySurface,
    Mark,
    MarkRegistry,
    MarkRenderer,
    MarkSurface,
    Segment,
    compose_spans,
    display_segments,
)

from . import telemetry


def _never() -> bool:
    return False


class GuideView:
    """Binds one buffer view to its config, mark registry and host surface.

    ``render`` and ``clear`` are the only writers of the mark set.
    """

    def __init__(
        self,
        buffer: BufferAccessor,
        *,
        config: Optional[GuideConfig] = None,
        surface: Optional[MarkSurface] = None,
        popup_active: Callable[[], bool] = _never,
        name: str = "default",
    ) -> None:
        self.buffer = buffer
        self.config = config or load_config()
        self.registry = MarkRegistry(
            surface if surface is not None else InMemorySurface()
        )
        self.renderer = MarkRenderer(char=self.config.char, face=self.config.face)
        self.name = name
        self.enabled = True
        self._popup_active = popup_active
        self.logger = telemetry.get_logger("indent_guide.view")

    @property
    def active(self) -> bool:
        return self.enabled and not self.config.is_inhibited(self.buffer.context)

    @property
    def policy(self) -> ExtentPolicy:
        if self.config.is_tail_brace(self.buffer.context):
            return ExtentPolicy.TAIL_BRACE
        return ExtentPolicy.ORDINARY

    @property
    def marks(self) -> Tuple[Mark, ...]:
        return self.registry.marks

    def popup_active(self) -> bool:
        return bool(self._popup_active())

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False
        self.clear()

    def compute_spans(self) -> List[GuideSpan]:
        row, _ = self.buffer.cursor_position
        return compose_spans(
            self.buffer,
            row,
            recursive=self.config.recursive,
            threshold=self.config.threshold,
            policy=self.policy,
        )

    def render(self) -> Tuple[Mark, ...]:
        """Replace the current mark set with one computed for the cursor."""

        if not self.registry.is_empty:
            self.clear()
        if not self.active:
            return ()
        with telemetry.span(
            "guides::render",
            component="guides",
            metadata={"view": self.name, "cursor": self.buffer.cursor_position},
        ) as handle:
            spans = self.compute_spans()
            marks = self.renderer.render(self.buffer, spans)
            pass_id = self.registry.publish(marks)
            handle.add_metadata("spans", len(spans))
            handle.add_metadata("marks", len(marks))
        telemetry.record_event(
            "guides.render",
            data={"view": self.name, "pass": pass_id, "marks": len(marks)},
        )
        return self.registry.marks

    def clear(self) -> int:
        if self.registry.is_empty:
            return 0
        removed = self.registry.clear()
        telemetry.record_event(
            "guides.clear", data={"view": self.name, "removed": removed}
        )
        return removed

    def line_marks(self, line: int) -> List[Mark]:
        return [mark for mark in self.registry.marks if mark.line == line]

    def display_lines(self) -> List[Tuple[int, List[Segment]]]:
        """Visible lines as display segments with the current marks applied."""

        first, last = self.buffer.visible_line_range
        by_line: dict[int, List[Mark]] = {}
        for mark in self.registry.marks:
            by_line.setdefault(mark.line, []).append(mark)
        return [
            (
                row,
                display_segments(
                    self.buffer.line_text(row),
                    by_line.get(row, []),
                    self.buffer.tab_width,
                ),
            )
            for row in range(first, last + 1)
        ]


__all__ = ["GuideView"]
