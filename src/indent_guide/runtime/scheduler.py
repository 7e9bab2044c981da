"""Debounced recompute/redraw cycle for one guide view."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional

from indent_guide.buffer import Cursor

from . import telemetry
from .view import GuideView


class SchedulerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RENDERED = "rendered"


@dataclass
class TimerHandle:
    deadline: float
    delay: float
    generation: int
    version: int
    cursor: Cursor


class RenderScheduler:
    """Clears guides before every command and re-renders once input settles.

    Hosts call ``pre_command``/``post_command`` (or use ``command()``) around
    each cursor or content change, and call ``process_idle`` from their event
    loop. Only one deferred render is tracked; arming replaces it.
    """

    def __init__(
        self,
        view: GuideView,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.view = view
        self.state = SchedulerState.IDLE
        self._clock = clock
        self._pending: Optional[TimerHandle] = None
        self._generation = 0
        self._in_command = False
        self.logger = telemetry.get_logger("indent_guide.scheduler")

    @property
    def pending(self) -> Optional[TimerHandle]:
        return self._pending

    @property
    def in_command(self) -> bool:
        return self._in_command

    def pre_command(self) -> None:
        self._in_command = True
        self.view.clear()
        self.state = SchedulerState.IDLE

    def post_command(self) -> None:
        self._in_command = False
        if not self._should_render():
            return
        delay = self.view.config.delay
        if not delay:
            self._render()
            return
        self.arm(delay)

    @contextmanager
    def command(self) -> Iterator[None]:
        self.pre_command()
        try:
            yield
        finally:
            self.post_command()

    def arm(self, delay: float) -> TimerHandle:
        self._generation += 1
        self._pending = TimerHandle(
            deadline=self._clock() + delay,
            delay=delay,
            generation=self._generation,
            version=self.view.buffer.version,
            cursor=self.view.buffer.cursor_position,
        )
        self.state = SchedulerState.PENDING
        telemetry.record_event(
            "scheduler.arm",
            data={
                "view": self.view.name,
                "generation": self._generation,
                "delay": delay,
            },
        )
        return self._pending

    def seconds_until_due(self, now: Optional[float] = None) -> Optional[float]:
        if self._pending is None:
            return None
        current = self._clock() if now is None else now
        return max(0.0, self._pending.deadline - current)

    def process_idle(self, now: Optional[float] = None) -> bool:
        """Fire the deferred render if it is due; return True if it drew."""

        if self._in_command or self._pending is None:
            return False
        current = self._clock() if now is None else now
        if self._pending.deadline > current:
            return False
        handle, self._pending = self._pending, None
        return self._fire(handle)

    def flush(self) -> bool:
        """Fire the deferred render now, ignoring its deadline."""

        if self._in_command or self._pending is None:
            return False
        handle, self._pending = self._pending, None
        return self._fire(handle)

    def _should_render(self) -> bool:
        return (
            self.view.active
            and self.view.registry.is_empty
            and not self.view.popup_active()
        )

    def _fire(self, handle: TimerHandle) -> bool:
        buffer = self.view.buffer
        reason = None
        if handle.generation != self._generation:
            reason = "stale_generation"
        elif (
            handle.version != buffer.version
            or handle.cursor != buffer.cursor_position
        ):
            reason = "view_changed"
        elif not self._should_render():
            reason = "not_needed"
        if reason is not None:
            self.state = (
                SchedulerState.RENDERED
                if not self.view.registry.is_empty
                else SchedulerState.IDLE
            )
            telemetry.record_event(
                "scheduler.skip",
                data={
                    "view": self.view.name,
                    "generation": handle.generation,
                    "reason": reason,
                },
            )
            return False
        with telemetry.span(
            "scheduler::fire",
            component="scheduler",
            metadata={"view": self.view.name, "generation": handle.generation},
        ):
            self._render()
        return True

    def _render(self) -> None:
        self.view.render()
        self.state = SchedulerState.RENDERED
        telemetry.record_event(
            "scheduler.fire",
            data={"view": self.view.name, "marks": len(self.view.marks)},
        )


__all__ = ["RenderScheduler", "SchedulerState", "TimerHandle"]
