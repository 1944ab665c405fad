"""Tree model: tasks (recorded assertions) grouped under named segments."""

from __future__ import annotations

import linecache
import sys
from dataclasses import dataclass, field
from typing import Iterator, assert_never

from scopecheck.errors import InconsistentOutcomeError
from scopecheck.outcome import Outcome


@dataclass(frozen=True)
class SourceLocation:
    """Where an assertion was issued. Only shown for failed tasks."""

    file_name: str
    line: int

    @classmethod
    def current(cls, stacklevel: int = 1) -> SourceLocation:
        """Capture the location of a caller.

        ``stacklevel=1`` is the function calling ``current()``, ``2`` its
        caller, and so on, the same convention as ``warnings.warn``.
        """
        frame = sys._getframe(stacklevel)
        return cls(file_name=frame.f_code.co_filename, line=frame.f_lineno)

    def source_text(self) -> str:
        return linecache.getline(self.file_name, self.line).strip()

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line}"


@dataclass(frozen=True)
class Task:
    """A single recorded assertion. The outcome is fixed when it is built."""

    label: str
    source: SourceLocation
    outcome: Outcome = Outcome.NOT_RUN

    @classmethod
    def build(
        cls, label: str, source: SourceLocation, result: bool | None = None
    ) -> Task:
        if result is None:
            return cls(label=label, source=source)
        return cls(label=label, source=source, outcome=Outcome.from_result(result))

    def check(self) -> Outcome:
        return self.outcome


@dataclass(eq=False)
class Segment:
    """A named, ordered group of tasks and sub-segments.

    Attributes:
        name: Title of the segment. The root segment uses an empty name.
        children: Tasks and segments in insertion order (report order).
        failed: Sticky flag. Set when a strict assertion in this segment
            evaluates false, or copied from the parent when attached. While
            set, later assertions in this segment are recorded as not run.
    """

    name: str
    children: list[Node] = field(default_factory=list)
    failed: bool = False

    @classmethod
    def build(cls, name: str) -> Segment:
        return cls(name=name)

    def add_segment(self, segment: Segment) -> Segment:
        """Attach *segment* as a child, inheriting this segment's failed state."""
        segment.failed = self.failed
        self.children.append(segment)
        return segment

    def add_task(self, task: Task) -> Task:
        self.children.append(task)
        return task

    def mark_failed(self) -> None:
        self.failed = True

    def did_fail(self) -> bool:
        return self.failed

    def is_vacant(self) -> bool:
        """True when no task was recorded anywhere below this segment."""
        for child in self.children:
            match child:
                case Task():
                    return False
                case Segment():
                    if not child.is_vacant():
                        return False
                case _:
                    assert_never(child)
        return True

    def check(self) -> Outcome:
        """Aggregate the outcome of all children.

        A failure anywhere wins. Otherwise the segment passes when every
        child passed and is not run when every child was not run. Empty
        sub-segments are neutral next to passing siblings; any other mix of
        passed and not-run results cannot come from the recording API and
        raises ``InconsistentOutcomeError``.
        """
        if not self.children:
            return Outcome.NOT_RUN

        all_passed = True
        all_not_run = True
        only_vacant_not_run = True

        for child in self.children:
            outcome = child.check()
            if outcome is Outcome.FAILED:
                return Outcome.FAILED

            if outcome is Outcome.PASSED:
                all_not_run = False
                continue

            all_passed = False
            if not (isinstance(child, Segment) and child.is_vacant()):
                only_vacant_not_run = False

        if all_passed:
            return Outcome.PASSED
        if all_not_run:
            return Outcome.NOT_RUN
        if only_vacant_not_run:
            return Outcome.PASSED

        raise InconsistentOutcomeError(
            f"Segment {self.name!r} mixes passed and skipped assertions "
            "without any failure"
        )

    def clear(self) -> None:
        self.children.clear()
        self.failed = False


Node = Task | Segment


@dataclass
class OutcomeCounts:
    passed: int = 0
    failed: int = 0
    not_run: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.not_run

    def add(self, outcome: Outcome) -> None:
        if outcome is Outcome.PASSED:
            self.passed += 1
        elif outcome is Outcome.FAILED:
            self.failed += 1
        else:
            self.not_run += 1


def iter_tasks(
    segment: Segment, path: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], Task]]:
    """Yield ``(segment_path, task)`` pairs in report order.

    The path holds the names of the enclosing segments below *segment*.
    """
    for child in segment.children:
        match child:
            case Task():
                yield path, child
            case Segment():
                yield from iter_tasks(child, (*path, child.name))
            case _:
                assert_never(child)


def summarize(segment: Segment) -> OutcomeCounts:
    counts = OutcomeCounts()
    for _, task in iter_tasks(segment):
        counts.add(task.check())
    return counts
