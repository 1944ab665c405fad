"""Tests for the console report renderer."""

from __future__ import annotations

import pytest

from scopecheck.config import ReportOptions
from scopecheck.context import TestTree
from scopecheck.outcome import Outcome
from scopecheck.reporting.console import (
    ANSI_DARK_GREEN,
    ANSI_GRAY,
    ANSI_GREEN,
    ANSI_ITALIC,
    ANSI_RED,
    ANSI_RESET,
    generate_report,
    stringify,
)
from scopecheck.tree import Segment, SourceLocation, Task

PLAIN = ReportOptions(color=False)


def _loc(line: int) -> SourceLocation:
    return SourceLocation("suite.py", line)


@pytest.fixture
def math_tree(tree) -> TestTree:
    """Segment "Math": a pass, a strict failure, then a skipped assertion."""
    with tree.section("Math"):
        tree.record_assertion("2 + 2 == 4", _loc(10), 2 + 2 == 4)
        tree.record_assertion("1 == 2", _loc(11), 1 == 2)
        tree.record_assertion("3 == 3", _loc(12), 3 == 3)
    return tree


def _two_passing_sections(tree: TestTree) -> TestTree:
    with tree.section("A"):
        tree.record_assertion("a", _loc(1), True)
    with tree.section("B"):
        tree.record_assertion("b", _loc(2), True)
    return tree


# --- tasks ---


def test_passed_task_line():
    task = Task.build("ok", _loc(3), True)
    assert stringify(task, 2, PLAIN) == "    ✓ ok"


def test_failed_task_line_includes_location():
    task = Task.build("bad", _loc(7), False)
    assert stringify(task, 1, PLAIN) == "  ✘ bad ( at file: suite.py, line: 7 )"


def test_not_run_task_line_has_no_location():
    task = Task.build("later", _loc(8))
    line = stringify(task, 0, PLAIN)
    assert line == "○ later"
    assert "suite.py" not in line


def test_task_at_negative_depth_renders_nothing():
    assert stringify(Task.build("x", _loc(1), False), -1, PLAIN) == ""


def test_task_colors():
    options = ReportOptions()
    assert stringify(Task.build("ok", _loc(1), True), 0, options) == (
        ANSI_GREEN + "✓ ok" + ANSI_RESET
    )
    assert stringify(Task.build("bad", _loc(1), False), 0, options) == (
        ANSI_RED + "✘ bad ( at file: suite.py, line: 1 )" + ANSI_RESET
    )
    assert stringify(Task.build("skip", _loc(1)), 0, options) == (
        ANSI_GRAY + "○ skip" + ANSI_RESET
    )


# --- segments ---


def test_math_scenario_report(math_tree):
    assert math_tree.generate_report() == (
        "Math: [some tests failed]\n"
        "  ✓ 2 + 2 == 4\n"
        "  ✘ 1 == 2 ( at file: suite.py, line: 11 )\n"
        "  ○ 3 == 3\n"
    )


def test_sibling_sections_are_separated_by_blank_line(tree):
    _two_passing_sections(tree)
    assert tree.generate_report() == (
        "A: [all tests passed]\n"
        "  ✓ a\n"
        "\n"
        "B: [all tests passed]\n"
        "  ✓ b\n"
    )


def test_tasks_on_root_render_without_indent(tree):
    tree.record_assertion("top", _loc(1), True)
    assert tree.generate_report() == "✓ top"


def test_nested_sections_indent_two_spaces_per_level(tree):
    with tree.section("outer"):
        tree.record_assertion("o", _loc(1), True)
        with tree.section("inner"):
            tree.record_assertion("i", _loc(2), True)

    assert tree.generate_report() == (
        "outer: [all tests passed]\n"
        "  ✓ o\n"
        "\n"
        "  inner: [all tests passed]\n"
        "    ✓ i\n"
        "\n"
    )


def test_not_run_segment_lists_its_skipped_tasks(tree):
    tree.record_assertion("fails", _loc(1), False)
    with tree.section("skipped"):
        tree.record_assertion("never", _loc(2), True)

    assert tree.generate_report() == (
        "✘ fails ( at file: suite.py, line: 1 )\n"
        "\n"
        "skipped\n"
        "  ○ never\n"
    )


def test_skipped_tasks_in_nested_section_after_failure_are_shown(tree):
    with tree.section("Math"):
        tree.record_assertion("fails", _loc(1), False)
        with tree.section("Sub"):
            tree.record_assertion("later", _loc(2), True)

    assert tree.generate_report() == (
        "Math: [some tests failed]\n"
        "  ✘ fails ( at file: suite.py, line: 1 )\n"
        "\n"
        "  Sub\n"
        "    ○ later\n"
        "\n"
    )


def test_not_run_segment_header_is_gray_name_only():
    segment = Segment.build("S")
    segment.add_task(Task.build("later", _loc(1)))
    header = stringify(segment, 0, ReportOptions()).splitlines()[0]
    assert header == ANSI_GRAY + "S" + ANSI_RESET


def test_not_run_segment_respects_detail_depth(tree):
    tree.set_options(ReportOptions(detail_depth=0, color=False))
    tree.record_assertion("fails", _loc(1), False)
    with tree.section("skipped"):
        tree.record_assertion("never", _loc(2), True)

    assert tree.generate_report() == (
        "✘ fails ( at file: suite.py, line: 1 )\n"
        "\n"
        "skipped\n"
    )


def test_segment_header_colors():
    segment = Segment.build("S")
    segment.add_task(Task.build("ok", _loc(1), True))
    header = stringify(segment, 0, ReportOptions(detail_depth=0)).splitlines()[0]
    assert header == (
        "S:" + ANSI_ITALIC + ANSI_DARK_GREEN + " [all tests passed]" + ANSI_RESET
        + ANSI_RESET
    )


def test_empty_root_report():
    assert generate_report(Segment.build(""), PLAIN) == ""
    assert generate_report(Segment.build("")) == ANSI_RESET


def test_report_is_repeatable_and_live(tree):
    tree.record_assertion("first", _loc(1), True)
    assert tree.generate_report() == tree.generate_report() == "✓ first"
    tree.record_assertion("second", _loc(2), True)
    assert tree.generate_report() == "✓ first\n✓ second"


def test_root_with_passing_and_empty_section_passes(tree):
    with tree.section("A"):
        tree.record_assertion("a", _loc(1), True)
    with tree.section("B"):
        with tree.section("C"):
            pass

    assert tree.outcome() is Outcome.PASSED
    assert tree.generate_report() == (
        "A: [all tests passed]\n"
        "  ✓ a\n"
        "\n"
        "B\n"
        "\n"
        "  C\n"
        "\n"
    )


# --- detail depth ---


def test_detail_depth_zero_collapses_passing_sections(tree):
    tree.set_options(ReportOptions(detail_depth=0, color=False))
    _two_passing_sections(tree)
    assert tree.generate_report() == (
        "A: [all tests passed]\n"
        "\n"
        "B: [all tests passed]\n"
    )


def test_detail_depth_zero_still_expands_failing_path(tree):
    tree.set_options(ReportOptions(detail_depth=0, color=False))
    with tree.section("ok"):
        tree.record_assertion("fine", _loc(1), True)
    with tree.section("broken"):
        with tree.section("deeper"):
            tree.record_assertion("bad", _loc(2), False)
        with tree.section("fine sibling"):
            tree.record_assertion("good", _loc(3), True)

    assert tree.generate_report() == (
        "ok: [all tests passed]\n"
        "\n"
        "broken: [some tests failed]\n"
        "\n"
        "  deeper: [some tests failed]\n"
        "    ✘ bad ( at file: suite.py, line: 2 )\n"
        "\n"
        "  fine sibling: [all tests passed]\n"
        "\n"
    )


def test_detail_depth_one_expands_first_level_only(tree):
    tree.set_options(ReportOptions(detail_depth=1, color=False))
    with tree.section("outer"):
        tree.record_assertion("o", _loc(1), True)
        with tree.section("inner"):
            tree.record_assertion("i", _loc(2), True)

    assert tree.generate_report() == (
        "outer: [all tests passed]\n"
        "  ✓ o\n"
        "\n"
        "  inner: [all tests passed]\n"
        "\n"
    )


def test_unlimited_detail_depth_expands_everything(tree):
    with tree.section("a"):
        with tree.section("b"):
            with tree.section("c"):
                tree.record_assertion("deep", _loc(1), True)

    assert "      ✓ deep" in tree.generate_report()


# --- failure diagnostics ---


def test_only_failed_tasks_show_source_location(math_tree):
    lines = math_tree.generate_report().splitlines()
    assert "line: 11" in lines[2]
    assert "suite.py" not in lines[1]
    assert "suite.py" not in lines[3]
