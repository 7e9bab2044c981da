"""Guide configuration and its environment-driven loader."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Iterable, Mapping, Optional

from indent_guide.runtime.telemetry import env

DEFAULT_INHIBITED_CONTEXTS: tuple[str, ...] = ("dired", "image", "hexl")

# Lisp dialects close blocks with a run of parens on the last content line.
DEFAULT_TAIL_BRACE_CONTEXTS: tuple[str, ...] = (
    "lisp",
    "emacs-lisp",
    "lisp-interaction",
    "scheme",
    "gauche",
    "clojure",
    "racket",
    "hy",
    "fennel",
)


class ConfigError(ValueError):
    """Raised for malformed guide configuration values."""

    def __init__(self, option: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid value {value!r} for '{option}': {reason}")
        self.option = option
        self.value = value


def _normalize_contexts(values: Iterable[str]) -> tuple[str, ...]:
    cleaned = (value.strip().lower() for value in values)
    return tuple(dict.fromkeys(value for value in cleaned if value))


@dataclass(frozen=True, slots=True)
class GuideConfig:
    """Options recognized by the guide view and scheduler."""

    char: str = "|"
    delay: Optional[float] = None
    threshold: int = -1
    recursive: bool = False
    inhibited_contexts: tuple[str, ...] = DEFAULT_INHIBITED_CONTEXTS
    tail_brace_contexts: tuple[str, ...] = DEFAULT_TAIL_BRACE_CONTEXTS
    face: str = "#535353"

    def __post_init__(self) -> None:
        if not isinstance(self.char, str) or len(self.char) != 1:
            raise ConfigError("char", self.char, "expected a single character")
        if self.delay is not None and self.delay < 0:
            raise ConfigError("delay", self.delay, "must be >= 0")
        object.__setattr__(
            self, "inhibited_contexts", _normalize_contexts(self.inhibited_contexts)
        )
        object.__setattr__(
            self, "tail_brace_contexts", _normalize_contexts(self.tail_brace_contexts)
        )

    @property
    def deferred(self) -> bool:
        return bool(self.delay)

    def is_inhibited(self, context: str) -> bool:
        return context.strip().lower() in self.inhibited_contexts

    def is_tail_brace(self, context: str) -> bool:
        return context.strip().lower() in self.tail_brace_contexts


def _parse_flag(option: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off", ""}:
        return False
    raise ConfigError(option, raw, "expected a boolean flag")


def _parse_delay(raw: str) -> Optional[float]:
    value = raw.strip().lower()
    if value in {"", "none", "off"}:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError("delay", raw, "expected seconds as a number") from exc


def _parse_int(option: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(option, raw, "expected an integer") from exc


def _parse_list(raw: str) -> tuple[str, ...]:
    return tuple(part for part in raw.split(","))


def _from_environment() -> dict[str, Any]:
    values: dict[str, Any] = {}
    raw = env("CHAR")
    if raw is not None:
        values["char"] = raw
    raw = env("DELAY")
    if raw is not None:
        values["delay"] = _parse_delay(raw)
    raw = env("THRESHOLD")
    if raw is not None:
        values["threshold"] = _parse_int("threshold", raw)
    raw = env("RECURSIVE")
    if raw is not None:
        values["recursive"] = _parse_flag("recursive", raw)
    raw = env("INHIBITED")
    if raw is not None:
        values["inhibited_contexts"] = _parse_list(raw)
    raw = env("TAIL_BRACE")
    if raw is not None:
        values["tail_brace_contexts"] = _parse_list(raw)
    raw = env("FACE")
    if raw is not None:
        values["face"] = raw
    return values


def load_config(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    base: Optional[GuideConfig] = None,
) -> GuideConfig:
    """Build a config from ``INDENT_GUIDE_*`` variables, then ``overrides``."""

    known = {item.name for item in fields(GuideConfig)}
    values = _from_environment()
    for key, value in (overrides or {}).items():
        if key not in known:
            raise ConfigError(key, value, "unknown option")
        values[key] = value
    return replace(base or GuideConfig(), **values)


__all__ = [
    "ConfigError",
    "DEFAULT_INHIBITED_CONTEXTS",
    "DEFAULT_TAIL_BRACE_CONTEXTS",
    "GuideConfig",
    "load_config",
]
