from __future__ import annotations

from pathlib import Path

from junitparser import Failure, JUnitXml, Skipped, TestCase, TestSuite

from scopecheck.outcome import Outcome
from scopecheck.tree import Segment, iter_tasks

ROOT_SUITE_NAME = "(root)"
PATH_SEPARATOR = " / "


def _suite_name(path: tuple[str, ...]) -> str:
    return PATH_SEPARATOR.join(path) if path else ROOT_SUITE_NAME


def build_junit(root: Segment) -> JUnitXml:
    """Map the tree to JUnit XML.

    Every segment holding tasks directly becomes a suite named by its
    section path ("Parser / Numbers"); sections sharing a path share a suite.
    Each task becomes a test case: failed tasks carry a ``Failure`` with the
    source location, not-run tasks are ``Skipped``.
    """
    xml = JUnitXml()
    suites: dict[tuple[str, ...], TestSuite] = {}

    for path, task in iter_tasks(root):
        suite = suites.get(path)
        if suite is None:
            suite = suites[path] = TestSuite(_suite_name(path))

        case = TestCase(task.label)
        case.classname = _suite_name(path)
        outcome = task.check()
        if outcome is Outcome.FAILED:
            case.result = [
                Failure(f"at file: {task.source.file_name}, line: {task.source.line}")
            ]
        elif outcome is Outcome.NOT_RUN:
            case.result = [Skipped("not run: an earlier requirement failed")]
        suite.add_testcase(case)

    # Use append (not +=) so each suite keeps its own statistics
    for suite in suites.values():
        xml.append(suite)
    return xml


def write_junit(root: Segment, junit_path: Path) -> Path:
    """Write junit.xml for the tree below *root*, return path."""
    junit_path.parent.mkdir(parents=True, exist_ok=True)
    build_junit(root).write(str(junit_path), pretty=True)
    return junit_path
