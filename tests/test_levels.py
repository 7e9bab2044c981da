from __future__ import annotations

import time

from indent_guide.buffer import Buffer
from indent_guide.guides import (
    Level,
    candidate_column,
    effective_column,
    find_level_start,
    indentation_candidates,
)

SCENARIO = "function f() {\n\tif (x) {\n\t\treturn 1;\n\t}\n}"


def make_buffer(text: str, *, tab_width: int = 8) -> Buffer:
    return Buffer.from_text(text, tab_width=tab_width)


def test_scenario_finds_tab_indented_parent() -> None:
    buffer = make_buffer(SCENARIO)

    assert find_level_start(buffer, 2) == Level(start_line=1, column=8)


def test_level_of_first_nested_line_is_top_level() -> None:
    buffer = make_buffer(SCENARIO)

    assert find_level_start(buffer, 1) == Level(start_line=0, column=0)
    assert find_level_start(buffer, 3) == Level(start_line=0, column=0)


def test_unindented_lines_have_no_level() -> None:
    buffer = make_buffer("a\n    b\nc\n\td\ne")

    for row in (0, 2, 4):
        assert find_level_start(buffer, row) is None


def test_indented_first_line_has_no_level() -> None:
    buffer = make_buffer("    orphan\n    sibling")

    assert find_level_start(buffer, 0) is None
    assert find_level_start(buffer, 1) is None


def test_tab_and_spaces_are_both_candidates_for_one_column() -> None:
    candidates = indentation_candidates(9, 8)

    assert "\t" in candidates
    assert " " * 8 in candidates
    assert candidate_column("\tfoo", 9, 8) == 8
    assert candidate_column("        foo", 9, 8) == 8
    assert candidate_column("\t\tfoo", 9, 8) is None


def test_mixed_parent_and_child_prefixes_match() -> None:
    spaces_child = make_buffer("\tparent\n                child")
    tab_child = make_buffer("        parent\n\t\tchild")

    assert find_level_start(spaces_child, 1) == Level(start_line=0, column=8)
    assert find_level_start(tab_child, 1) == Level(start_line=0, column=8)


def test_candidates_are_built_per_column() -> None:
    candidates = indentation_candidates(9, 4)

    column_eight = [c for c in candidates if c.replace("\t", " " * 4) == " " * 8]
    assert sorted(column_eight) == sorted(["        ", "\t    ", "\t\t"])
    assert indentation_candidates(0, 4) == ()


def test_blank_line_adopts_deeper_neighbour() -> None:
    buffer = make_buffer("def f():\n    a = 1\n\n        b = 2\nc = 3")

    assert effective_column(buffer, 2) == 8
    assert find_level_start(buffer, 2) == Level(start_line=1, column=4)


def test_blank_line_between_top_level_lines_has_no_level() -> None:
    buffer = make_buffer("a\n\nb")

    assert effective_column(buffer, 1) == 0
    assert find_level_start(buffer, 1) is None


def test_skips_blank_and_deeper_lines_while_searching_back() -> None:
    buffer = make_buffer("root:\n    child:\n\n        deep\n    cursor")

    assert find_level_start(buffer, 4) == Level(start_line=0, column=0)


def test_out_of_range_cursor_has_no_level() -> None:
    buffer = make_buffer("a\n    b")

    assert find_level_start(buffer, 5) is None
    assert find_level_start(buffer, -1) is None


def test_candidate_column_agrees_with_candidate_prefixes() -> None:
    candidates = set(indentation_candidates(13, 4))
    prefixes = ["\t" * k + " " * r for k in range(5) for r in range(14)]
    prefixes += ["  \t", " \t  "]

    for prefix in prefixes:
        expected = prefix.replace("\t", " " * 4).count(" ")
        column = candidate_column(prefix + "x", 13, 4)
        if prefix in candidates:
            assert column == expected
        else:
            assert column is None


def test_space_before_tab_prefix_is_not_a_candidate() -> None:
    assert candidate_column("  \tx", 20, 8) is None
    assert candidate_column("   ", 20, 8) is None


def test_deep_indentation_resolves_quickly() -> None:
    buffer = make_buffer("root\n" + " " * 200 + "x", tab_width=2)

    started = time.perf_counter()
    level = find_level_start(buffer, 1)
    elapsed = time.perf_counter() - started

    assert level == Level(start_line=0, column=0)
    assert elapsed < 0.5
