from __future__ import annotations

import pytest

from indent_guide.buffer import Buffer
from indent_guide.guides import ExtentPolicy, find_extent

SCENARIO = "function f() {\n\tif (x) {\n\t\treturn 1;\n\t}\n}"

LISP = "\n".join(
    [
        "(defun f ()",
        "  (let ((x 1))",
        "    (foo x)",
        "    (bar x)))",
        "",
        "",
        "(defun g ()",
        "  nil)",
    ]
)


def make_buffer(text: str, *, tab_width: int = 8) -> Buffer:
    return Buffer.from_text(text, tab_width=tab_width)


def last_line(buffer: Buffer) -> int:
    return buffer.line_count - 1


def test_scenario_block_ends_before_closing_line() -> None:
    buffer = make_buffer(SCENARIO)

    assert find_extent(buffer, 1, 8, last_line(buffer)) == 2


@pytest.mark.parametrize("policy", list(ExtentPolicy))
def test_uniform_block_ends_on_its_last_line(policy: ExtentPolicy) -> None:
    body = [f"    line {n}" for n in range(5)]
    buffer = make_buffer("\n".join(["head:", *body, "tail"]))

    assert find_extent(buffer, 0, 0, last_line(buffer), policy=policy) == 5


@pytest.mark.parametrize("policy", list(ExtentPolicy))
def test_block_running_to_buffer_end(policy: ExtentPolicy) -> None:
    buffer = make_buffer("head:\n    a\n    b")

    assert find_extent(buffer, 0, 0, last_line(buffer), policy=policy) == 2


def test_scan_stops_at_visible_end_inside_block() -> None:
    buffer = make_buffer("head:\n    a\n    b\n    c\n    d\ntail")

    assert find_extent(buffer, 0, 0, 3) == 3


def test_blank_line_at_visible_edge_keeps_the_block_open() -> None:
    buffer = make_buffer("head:\n    a\n\n    b\ntail")

    assert find_extent(buffer, 0, 0, 2) == 2


def test_blank_lines_inside_block_do_not_truncate() -> None:
    buffer = make_buffer("def f():\n    a = 1\n\n    b = 2\nc = 3")

    assert find_extent(buffer, 0, 0, last_line(buffer)) == 3


def test_ordinary_block_keeps_trailing_blank_lines() -> None:
    buffer = make_buffer(LISP)

    assert find_extent(buffer, 0, 0, last_line(buffer)) == 5
    assert find_extent(buffer, 1, 2, last_line(buffer)) == 5


def test_tail_brace_block_trims_back_to_last_content_line() -> None:
    buffer = make_buffer(LISP)
    policy = ExtentPolicy.TAIL_BRACE

    assert find_extent(buffer, 0, 0, last_line(buffer), policy=policy) == 3
    assert find_extent(buffer, 1, 2, last_line(buffer), policy=policy) == 3


def test_tail_brace_at_buffer_end_with_trailing_blanks() -> None:
    buffer = make_buffer("(define (f)\n  (g))\n\n")

    result = find_extent(
        buffer, 0, 0, last_line(buffer), policy=ExtentPolicy.TAIL_BRACE
    )

    assert result == 1


def test_level_without_deeper_lines_is_empty() -> None:
    buffer = make_buffer("a\nb\nc")

    assert find_extent(buffer, 0, 0, last_line(buffer)) == 0
    assert find_extent(buffer, 2, 0, last_line(buffer)) == 2
