"""Executable Textual app that previews indent guides over a file."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use indent_guide.adapters.textual.app"
    ) from exc

from indent_guide.buffer import Buffer
from indent_guide.config import GuideConfig, load_config
from indent_guide.runtime import telemetry
from indent_guide.runtime.scheduler import RenderScheduler
from indent_guide.runtime.view import GuideView

from .controller import DisplayLines, TextualGuideAdapter, TextualUIHooks

CURSOR_STYLE = "reverse"

SUFFIX_CONTEXTS = {
    ".el": "emacs-lisp",
    ".lisp": "lisp",
    ".cl": "lisp",
    ".scm": "scheme",
    ".ss": "scheme",
    ".clj": "clojure",
    ".cljs": "clojure",
    ".rkt": "racket",
    ".hy": "hy",
    ".fnl": "fennel",
    ".py": "python",
}


class GuidePreviewApp(App[None]):
    """Read-only file viewer drawing indent guides around the cursor."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 1;
		overflow: hidden;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, buffer: Buffer, config: GuideConfig) -> None:
        super().__init__()
        self.buffer = buffer
        self.config = config
        self.adapter: TextualGuideAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        self._buffer_widget = Static("", id="buffer-view")
        yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        height = self._visible_height()
        self.buffer.set_viewport(0, height - 1)
        view = GuideView(self.buffer, config=self.config, name=self.buffer.name)
        scheduler = RenderScheduler(view)
        hooks = TextualUIHooks(
            update_lines=self._update_lines,
            update_status=self._update_status,
        )
        self.adapter = TextualGuideAdapter(scheduler, hooks)
        self.adapter.move_cursor(0)
        self.set_interval(0.05, self._tick)

    def _tick(self) -> None:
        if self.adapter:
            self.adapter.tick()

    def _visible_height(self) -> int:
        widget_height = self._buffer_widget.size.height if self._buffer_widget else 0
        return max(widget_height or self.size.height - 3, 1)

    def on_resize(self, event: events.Resize) -> None:
        if not self.adapter:
            return
        first = self.buffer.visible_line_range[0]
        self.adapter.scroll_to(first, self._visible_height())

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        height = self._visible_height()
        moves = {
            "up": -1,
            "k": -1,
            "down": 1,
            "j": 1,
            "pageup": -height,
            "pagedown": height,
        }
        if event.key in moves:
            self.adapter.move_by(moves[event.key])
            event.stop()
        elif event.key == "home":
            self.adapter.move_cursor(0)
            event.stop()
        elif event.key == "end":
            self.adapter.move_cursor(self.buffer.line_count - 1)
            event.stop()

    def _update_lines(self, lines: DisplayLines) -> None:
        if not self._buffer_widget:
            return
        cursor_row, _ = self.buffer.cursor_position
        rendered = Text()
        for index, (row, segments) in enumerate(lines):
            if index:
                rendered.append("\n")
            line = Text()
            for part, face in segments:
                line.append(part, style=face or "")
            if row == cursor_row:
                line.stylize(CURSOR_STYLE, 0, max(len(line), 1))
            rendered.append_text(line)
        self._buffer_widget.update(rendered)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Preview indent guides over a file.")
    parser.add_argument("path", type=Path, help="File to display")
    parser.add_argument(
        "--tab-width", type=int, default=8, help="Tab width (default: 8)"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Idle seconds before guides are drawn (default: draw immediately)",
    )
    parser.add_argument(
        "--recursive", action="store_true", help="Also draw enclosing levels"
    )
    parser.add_argument("--threshold", type=int, default=None, help="Minimum column")
    parser.add_argument(
        "--context",
        default=None,
        help="Buffer context name, e.g. 'python' or 'scheme' (default: file suffix)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="quiet")
    overrides: dict[str, object] = {}
    if args.delay is not None:
        overrides["delay"] = args.delay
    if args.recursive:
        overrides["recursive"] = True
    if args.threshold is not None:
        overrides["threshold"] = args.threshold
    config = load_config(overrides)
    context = args.context or SUFFIX_CONTEXTS.get(
        args.path.suffix.lower(), args.path.suffix.lstrip(".") or "fundamental"
    )
    buffer = Buffer.from_text(
        args.path.read_text(encoding="utf-8", errors="replace"),
        name=args.path.name,
        tab_width=args.tab_width,
        context=context,
    )
    GuidePreviewApp(buffer, config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
