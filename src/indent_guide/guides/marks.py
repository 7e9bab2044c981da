"""Mark records, the host decoration surface, and the per-view mark registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Protocol, Tuple


@dataclass(frozen=True, slots=True)
class Mark:
    """One styled decoration over a buffer line.

    ``width == 1`` replaces the character at ``offset``; ``width == 0`` is a
    trailing insertion after the last character of the line.
    """

    line: int
    offset: int
    width: int
    display: str
    face: str

    @property
    def trailing(self) -> bool:
        return self.width == 0


class MarkSurface(Protocol):
    """Host-side decoration storage."""

    def add_mark(self, mark: Mark) -> Hashable:
        """Create a decoration for ``mark`` and return its handle."""
        ...

    def remove_mark(self, handle: Hashable) -> None:
        """Delete the decoration behind ``handle``."""
        ...


class InMemorySurface:
    """Surface keeping decorations in a dict; used by tests and text hosts."""

    def __init__(self) -> None:
        self._marks: Dict[int, Mark] = {}
        self._counter = 0

    def add_mark(self, mark: Mark) -> int:
        self._counter += 1
        self._marks[self._counter] = mark
        return self._counter

    def remove_mark(self, handle: Hashable) -> None:
        self._marks.pop(handle, None)  # type: ignore[arg-type]

    @property
    def marks(self) -> Tuple[Mark, ...]:
        return tuple(sorted(self._marks.values(), key=lambda m: (m.line, m.offset)))

    def __len__(self) -> int:
        return len(self._marks)


class MarkRegistry:
    """Tracks the marks and surface handles of the current render pass."""

    def __init__(self, surface: MarkSurface) -> None:
        self.surface = surface
        self._pass_counter = 0
        self._active_pass: int | None = None
        self._handles: List[Hashable] = []
        self._marks: Tuple[Mark, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self._active_pass is None

    @property
    def active_pass(self) -> int | None:
        return self._active_pass

    @property
    def marks(self) -> Tuple[Mark, ...]:
        return self._marks

    def publish(self, marks: Iterable[Mark]) -> int:
        """Install a complete pass; the registry must be cleared first."""

        if self._active_pass is not None:
            raise RuntimeError(
                f"Render pass {self._active_pass} still active; clear it first"
            )
        staged = tuple(marks)
        handles: List[Hashable] = []
        try:
            for mark in staged:
                handles.append(self.surface.add_mark(mark))
        except Exception:
            for handle in handles:
                self.surface.remove_mark(handle)
            raise
        self._pass_counter += 1
        self._active_pass = self._pass_counter
        self._handles = handles
        self._marks = staged
        return self._active_pass

    def clear(self) -> int:
        """Remove every decoration of the active pass; return how many."""

        removed = len(self._handles)
        for handle in self._handles:
            self.surface.remove_mark(handle)
        self._handles = []
        self._marks = ()
        self._active_pass = None
        return removed


__all__ = ["InMemorySurface", "Mark", "MarkRegistry", "MarkSurface"]
