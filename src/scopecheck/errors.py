"""Exceptions raised when the tree's own invariants are broken.

Failed assertions are never raised; they are recorded as outcomes and only
show up in the report.
"""


class ScopeCheckError(Exception):
    """Base class for scopecheck errors."""


class ContractViolation(ScopeCheckError, RuntimeError):
    """A caller bypassed the scope/recording API and broke a tree invariant."""


class ScopeUnderflowError(ContractViolation):
    """Raised when a scope exit would pop the root segment off the stack."""


class InconsistentOutcomeError(ContractViolation):
    """Raised when a segment mixes passed and skipped results with no failure."""
