"""In-process test tree with nested sections and a colorized report."""

from scopecheck.config import ReportOptions, load_options
from scopecheck.context import (
    SegmentScope,
    TestTree,
    check,
    generate_report,
    get_tree,
    record_assertion,
    require,
    reset,
    section,
    set_options,
    set_tree,
)
from scopecheck.errors import (
    ContractViolation,
    InconsistentOutcomeError,
    ScopeCheckError,
    ScopeUnderflowError,
)
from scopecheck.outcome import Outcome
from scopecheck.tree import Segment, SourceLocation, Task, iter_tasks, summarize

__all__ = [
    "ContractViolation",
    "InconsistentOutcomeError",
    "Outcome",
    "ReportOptions",
    "ScopeCheckError",
    "ScopeUnderflowError",
    "Segment",
    "SegmentScope",
    "SourceLocation",
    "Task",
    "TestTree",
    "check",
    "generate_report",
    "get_tree",
    "iter_tasks",
    "load_options",
    "record_assertion",
    "require",
    "reset",
    "section",
    "set_options",
    "set_tree",
    "summarize",
]
