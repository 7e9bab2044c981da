from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple

import pytest

from indent_guide.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, Any]] = []
        self.context: dict[str, str] = {}
        self.components: List[str] = []

    def debug_with(self, message: str, pairs: Any) -> None:
        self.calls.append(("debug", message, dict(pairs)))

    def error_with(self, message: str, pairs: Any) -> None:
        self.calls.append(("error", message, dict(pairs)))

    def warning(self, message: str) -> None:
        self.calls.append(("warning", message, None))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        del self.context[key]

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    @contextmanager
    def profile(self, _name: str) -> Iterator[None]:
        yield


def make_logger(
    monkeypatch: pytest.MonkeyPatch, name: str = "test"
) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setitem(telemetry._LOGGER_CACHE, name, logger)
    return logger


def test_record_event_emits_structured_pairs(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logger = make_logger(monkeypatch)

    telemetry.record_event("guides.clear", data={"removed": 3}, logger_name="test")

    assert logger.calls == [
        ("debug", "event::guides.clear", {"event": "guides.clear", "removed": "3"})
    ]


def test_record_event_falls_back_to_plain_method(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logger = make_logger(monkeypatch)

    telemetry.record_event("slow", level="warning", logger_name="test")

    assert logger.calls == [("warning", "event::slow {'event': 'slow'}", None)]


def test_unknown_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    make_logger(monkeypatch)

    with pytest.raises(ValueError):
        telemetry.record_event("x", level="shout", logger_name="test")


def test_span_reports_failure_and_restores_context(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logger = make_logger(monkeypatch)

    with pytest.raises(OSError):
        with telemetry.span(
            "guides::render",
            logger_name="test",
            component="guides",
            metadata={"view": "main"},
        ) as handle:
            assert logger.context == {"view": "main"}
            handle.add_metadata("spans", 2)
            raise OSError("surface gone")

    assert logger.context == {}
    assert logger.components == ["guides"]
    level, message, payload = logger.calls[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload == {
        "span": "guides::render",
        "reason": "surface gone",
        "view": "main",
        "spans": "2",
        "component": "guides",
    }


def test_configure_rejects_unknown_preset_and_mixed_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")
    assert set(telemetry.PRESETS) == {"quiet"}
