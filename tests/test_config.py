from __future__ import annotations

import pytest

from indent_guide.config import (
    DEFAULT_TAIL_BRACE_CONTEXTS,
    ConfigError,
    GuideConfig,
    load_config,
)

ENV_KEYS = (
    "CHAR",
    "DELAY",
    "THRESHOLD",
    "RECURSIVE",
    "INHIBITED",
    "TAIL_BRACE",
    "FACE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(f"INDENT_GUIDE_{key}", raising=False)


def test_defaults_always_draw_synchronously() -> None:
    config = load_config()

    assert config == GuideConfig()
    assert config.char == "|"
    assert config.delay is None
    assert config.deferred is False
    assert config.threshold == -1
    assert config.recursive is False
    assert config.tail_brace_contexts == DEFAULT_TAIL_BRACE_CONTEXTS


def test_environment_values_are_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INDENT_GUIDE_CHAR", ":")
    monkeypatch.setenv("INDENT_GUIDE_DELAY", "0.25")
    monkeypatch.setenv("INDENT_GUIDE_THRESHOLD", "3")
    monkeypatch.setenv("INDENT_GUIDE_RECURSIVE", "yes")
    monkeypatch.setenv("INDENT_GUIDE_INHIBITED", "Dired, org ,")
    monkeypatch.setenv("INDENT_GUIDE_TAIL_BRACE", "scheme")

    config = load_config()

    assert config.char == ":"
    assert config.delay == 0.25
    assert config.deferred is True
    assert config.threshold == 3
    assert config.recursive is True
    assert config.inhibited_contexts == ("dired", "org")
    assert config.tail_brace_contexts == ("scheme",)


def test_overrides_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INDENT_GUIDE_RECURSIVE", "on")

    config = load_config({"recursive": False, "delay": 1.5})

    assert config.recursive is False
    assert config.delay == 1.5


def test_delay_off_means_synchronous(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INDENT_GUIDE_DELAY", "off")

    assert load_config().delay is None


@pytest.mark.parametrize(
    ("key", "raw"),
    [
        ("DELAY", "soon"),
        ("THRESHOLD", "deep"),
        ("RECURSIVE", "maybe"),
        ("CHAR", "||"),
        ("DELAY", "-1"),
    ],
)
def test_bad_environment_values_raise(
    monkeypatch: pytest.MonkeyPatch, key: str, raw: str
) -> None:
    monkeypatch.setenv(f"INDENT_GUIDE_{key}", raw)

    with pytest.raises(ConfigError):
        load_config()


def test_unknown_override_is_rejected() -> None:
    with pytest.raises(ConfigError) as info:
        load_config({"colour": "red"})

    assert info.value.option == "colour"


def test_context_lookups_are_case_insensitive() -> None:
    config = GuideConfig()

    assert config.is_tail_brace("Emacs-Lisp")
    assert not config.is_tail_brace("python")
    assert config.is_inhibited(" DIRED ")
