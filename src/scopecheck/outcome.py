"""Tri-state result shared by tasks and segments."""

from enum import Enum


class Outcome(str, Enum):
    NOT_RUN = "not_run"
    FAILED = "failed"
    PASSED = "passed"

    @classmethod
    def from_result(cls, result: bool) -> "Outcome":
        return cls.PASSED if result else cls.FAILED
