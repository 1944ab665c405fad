"""Report renderers for a recorded test tree."""

from scopecheck.reporting.console import generate_report, stringify

__all__ = ["generate_report", "stringify"]
