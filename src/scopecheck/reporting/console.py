"""Render a test tree as an indented, colorized text report."""

from __future__ import annotations

from typing import assert_never

from scopecheck.config import ReportOptions
from scopecheck.outcome import Outcome
from scopecheck.tree import Node, Segment, Task

CHECK_MARK = "✓"
CROSS_MARK = "✘"
CIRCLE_SYM = "○"

ANSI_RESET = "\x1b[0m"
ANSI_GRAY = "\x1b[38;5;246m"
ANSI_GREEN = "\x1b[38;5;42m"
ANSI_RED = "\x1b[38;5;196m"
ANSI_DARK_GREEN = "\x1b[38;5;28m"
ANSI_DARK_RED = "\x1b[38;5;160m"
ANSI_ITALIC = "\x1b[3m"

INDENT = "  "

_TASK_STYLE = {
    Outcome.PASSED: (ANSI_GREEN, CHECK_MARK),
    Outcome.FAILED: (ANSI_RED, CROSS_MARK),
    Outcome.NOT_RUN: (ANSI_GRAY, CIRCLE_SYM),
}

_SEGMENT_ANNOTATION = {
    Outcome.PASSED: (ANSI_ITALIC + ANSI_DARK_GREEN, " [all tests passed]"),
    Outcome.FAILED: (ANSI_ITALIC + ANSI_DARK_RED, " [some tests failed]"),
}


def _paint(sequence: str, options: ReportOptions) -> str:
    return sequence if options.color else ""


def stringify_task(task: Task, depth: int, options: ReportOptions) -> str:
    """One line for *task*; nothing at negative depth."""
    if depth < 0:
        return ""

    outcome = task.check()
    color, glyph = _TASK_STYLE[outcome]

    out = INDENT * depth + _paint(color, options) + glyph + " " + task.label
    if outcome is Outcome.FAILED:
        out += f" ( at file: {task.source.file_name}, line: {task.source.line} )"
    return out + _paint(ANSI_RESET, options)


def stringify_segment(segment: Segment, depth: int, options: ReportOptions) -> str:
    """Header line for *segment* followed by its expanded children.

    At negative depth the header is suppressed and only the children are
    rendered. A segment that has not run has a gray name without annotation.
    Children are shown when the segment failed or *depth* is within
    ``detail_depth``.
    """
    outcome = segment.check()

    out = INDENT * depth
    if outcome is Outcome.NOT_RUN:
        out += _paint(ANSI_GRAY, options) + segment.name
    else:
        style, annotation = _SEGMENT_ANNOTATION[outcome]
        out += segment.name + ":" + _paint(style, options) + annotation
    out += _paint(ANSI_RESET, options)
    if depth < 0:
        out = ""

    if outcome is Outcome.FAILED or options.expands(depth):
        for child in segment.children:
            match child:
                case Segment():
                    if not out.endswith("\n"):
                        out += "\n"
                    out += "\n" + stringify_segment(child, depth + 1, options) + "\n"
                case Task():
                    out += "\n" + stringify_task(child, depth + 1, options)
                case _:
                    assert_never(child)

    return out + _paint(ANSI_RESET, options)


def stringify(node: Node, depth: int, options: ReportOptions) -> str:
    match node:
        case Segment():
            return stringify_segment(node, depth, options)
        case Task():
            return stringify_task(node, depth, options)
        case _:
            assert_never(node)


def generate_report(root: Segment, options: ReportOptions | None = None) -> str:
    """Render the whole tree below *root*, without a line for the root itself."""
    report = stringify_segment(root, -1, options or ReportOptions())
    return report.lstrip("\n")
