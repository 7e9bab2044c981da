"""Textual adapter that drives a RenderScheduler from UI events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Tuple

from indent_guide.guides import Segment
from indent_guide.runtime import telemetry
from indent_guide.runtime.scheduler import RenderScheduler
from indent_guide.runtime.view import GuideView

DisplayLines = List[Tuple[int, List[Segment]]]


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_lines: Callable[[DisplayLines], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualGuideAdapter:
    """Routes cursor, scroll and edit events through the scheduler.

    The view must wrap an ``indent_guide.buffer.Buffer``; the adapter moves its
    cursor and viewport and edits its text.
    """

    def __init__(self, scheduler: RenderScheduler, hooks: TextualUIHooks) -> None:
        self.scheduler = scheduler
        self.hooks = hooks
        self.logger = telemetry.get_logger("indent_guide.adapters.textual")
        self._refresh()

    @property
    def view(self) -> GuideView:
        return self.scheduler.view

    def move_cursor(self, row: int, col: int = 0) -> None:
        buffer = self.view.buffer
        row = max(0, min(row, buffer.line_count - 1))
        col = max(0, min(col, len(buffer.line_text(row))))
        with self.scheduler.command():
            buffer.set_cursor(row, col)
            self._follow_cursor(row)
        self._after_command("cursor", row=row, col=col)

    def move_by(self, delta: int) -> None:
        row, col = self.view.buffer.cursor_position
        self.move_cursor(row + delta, col)

    def scroll_to(self, first: int, height: int) -> None:
        buffer = self.view.buffer
        first = max(0, min(first, buffer.line_count - 1))
        with self.scheduler.command():
            buffer.set_viewport(first, first + max(height, 1) - 1)
        self._after_command("scroll", first=first, height=height)

    def edit_lines(self, start: int, end: int, lines: Iterable[str]) -> None:
        with self.scheduler.command():
            version = self.view.buffer.replace_lines(start, end, lines)
        self._after_command("edit", start=start, end=end, version=version)

    def tick(self) -> bool:
        """Forward the host's idle tick; refresh the UI if guides were drawn."""

        drawn = self.scheduler.process_idle()
        if drawn:
            self._refresh()
            self._log_state("idle ->")
        return drawn

    def _follow_cursor(self, row: int) -> None:
        state = self.view.buffer.state
        if state.viewport is None:
            return
        first, last = state.viewport
        height = last - first + 1
        if row < first:
            self.view.buffer.set_viewport(row, row + height - 1)
        elif row > last:
            self.view.buffer.set_viewport(row - height + 1, row)

    def _after_command(self, label: str, **fields: object) -> None:
        self._refresh()
        self._log_state(f"{label} ->", **fields)

    def _refresh(self) -> None:
        self.hooks.update_lines(self.view.display_lines())
        self.hooks.update_status(self._status_text())

    def _status_text(self) -> str:
        row, col = self.view.buffer.cursor_position
        return (
            f"{self.view.buffer.context} | {row + 1}:{col + 1} | "
            f"{self.scheduler.state.value} | marks={len(self.view.marks)}"
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "state": self.scheduler.state.value,
            "cursor": self.view.buffer.cursor_position,
            "marks": len(self.view.marks),
            "version": self.view.buffer.version,
        }
        snapshot.update(fields)
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        line = " ".join(parts)
        try:
            self.hooks.log(line)
        except Exception as exc:
            self.logger.warning(f"log hook failed: {exc}")


__all__ = ["DisplayLines", "TextualGuideAdapter", "TextualUIHooks"]
