"""Scope stack and recording entry points.

A ``TestTree`` owns a root segment and the stack of segments that are
currently open. New tasks and sections always attach to the top of the
stack, so recording calls never need an explicit segment argument.

The module-level functions operate on a default tree::

    from scopecheck import require, section, generate_report

    with section("Math"):
        require(2 + 2 == 4)
        require(1 == 2)
        require(3 == 3)   # recorded as not run

    print(generate_report())
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from scopecheck.config import ReportOptions
from scopecheck.errors import ContractViolation, ScopeUnderflowError
from scopecheck.outcome import Outcome
from scopecheck.reporting.console import generate_report as render_report
from scopecheck.tree import Segment, SourceLocation, Task

Condition = bool | Callable[[], Any] | None


class SegmentScope:
    """Guard returned by ``TestTree.section``.

    Entering pushes a new child segment onto the tree's stack; leaving pops
    it on every exit path. A scope can be entered once.
    """

    def __init__(self, tree: TestTree, name: str):
        self.tree = tree
        self.name = name
        self.segment: Segment | None = None

    def __enter__(self) -> Segment:
        if self.segment is not None:
            raise ContractViolation(f"Section {self.name!r} was already entered")
        self.segment = self.tree.push_scope(self.name)
        return self.segment

    def __exit__(self, exc_type, exc, tb) -> None:
        self.tree.pop_scope()


class TestTree:
    """Root segment, scope stack and report options for one test run."""

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        options: ReportOptions | None = None,
        logger: logging.Logger | None = None,
    ):
        self.root = Segment.build("")
        self._stack: list[Segment] = [self.root]
        self.options = options or ReportOptions()
        self.logger = logger or logging.getLogger("scopecheck")

    @property
    def current(self) -> Segment:
        return self._stack[-1]

    @property
    def depth(self) -> int:
        """Number of open sections (0 when only the root is on the stack)."""
        return len(self._stack) - 1

    def set_options(self, options: ReportOptions) -> None:
        self.options = options

    # -- Scopes ---------------------------------------------------------------

    def push_scope(self, name: str) -> Segment:
        segment = self.current.add_segment(Segment.build(name))
        self._stack.append(segment)
        self.logger.debug(
            f"Entered section '{name}' (depth {self.depth}, failed={segment.failed})"
        )
        return segment

    def pop_scope(self) -> Segment:
        if len(self._stack) <= 1:
            raise ScopeUnderflowError("Cannot leave the root segment")
        segment = self._stack.pop()
        self.logger.debug(f"Left section '{segment.name}' (depth {self.depth})")
        return segment

    def section(self, name: str) -> SegmentScope:
        return SegmentScope(self, name)

    # -- Recording ------------------------------------------------------------

    def record_assertion(
        self,
        label: str,
        source: SourceLocation,
        result: Condition = None,
        strict: bool = True,
    ) -> Task:
        """Record one assertion in the current segment.

        Once the segment has failed the assertion is recorded as not run and
        *result* is not evaluated. Otherwise a callable *result* is invoked
        exactly once. A false result marks the segment failed when *strict*.
        """
        segment = self.current

        if segment.did_fail():
            task = segment.add_task(Task.build(label, source))
            self.logger.debug(f"Skipped '{label}' at {source}")
            return task

        if callable(result):
            result = bool(result())
        elif result is not None:
            result = bool(result)

        if result is False and strict:
            segment.mark_failed()

        task = segment.add_task(Task.build(label, source, result))
        self.logger.debug(f"Recorded '{label}' at {source}: {task.outcome.value}")
        return task

    def require(
        self, condition: Condition, label: str | None = None, *, stacklevel: int = 1
    ) -> Task:
        """Strict assertion: a failure skips the rest of the current section."""
        source = SourceLocation.current(stacklevel + 1)
        if label is None:
            label = source.source_text()
        return self.record_assertion(label, source, condition, strict=True)

    def check(
        self, condition: Condition, label: str | None = None, *, stacklevel: int = 1
    ) -> Task:
        """Soft assertion: a failure is reported but later assertions still run."""
        source = SourceLocation.current(stacklevel + 1)
        if label is None:
            label = source.source_text()
        return self.record_assertion(label, source, condition, strict=False)

    # -- Results --------------------------------------------------------------

    def outcome(self) -> Outcome:
        return self.root.check()

    def generate_report(self) -> str:
        return render_report(self.root, self.options)

    def reset(self) -> None:
        self.root.clear()
        self._stack = [self.root]
        self.logger.debug("Reset test tree")


_tree = TestTree()


def get_tree() -> TestTree:
    """Return the default tree used by the module-level functions."""
    return _tree


def set_tree(tree: TestTree) -> TestTree:
    """Replace the default tree and return the previous one."""
    global _tree
    previous = _tree
    _tree = tree
    return previous


def set_options(options: ReportOptions) -> None:
    _tree.set_options(options)


def record_assertion(
    label: str, source: SourceLocation, result: Condition = None, strict: bool = True
) -> Task:
    return _tree.record_assertion(label, source, result, strict)


def require(condition: Condition, label: str | None = None) -> Task:
    return _tree.require(condition, label, stacklevel=2)


def check(condition: Condition, label: str | None = None) -> Task:
    return _tree.check(condition, label, stacklevel=2)


def section(name: str) -> SegmentScope:
    return _tree.section(name)


def generate_report() -> str:
    return _tree.generate_report()


def reset() -> None:
    _tree.reset()
