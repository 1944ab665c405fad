from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, field_validator


class ReportOptions(BaseModel):
    """Display options for the report renderer.

    Attributes:
        detail_depth: How many nested levels are expanded below the root.
            ``-1`` expands everything. Failed segments are always expanded.
        color: Emit ANSI color sequences.
    """

    model_config = ConfigDict(extra="forbid")
    detail_depth: int = -1
    color: bool = True

    @field_validator("detail_depth")
    @classmethod
    def detail_depth_not_below_unlimited(cls, v: int) -> int:
        if v < -1:
            raise ValueError("detail_depth must be -1 (unlimited) or >= 0")
        return v

    def expands(self, depth: int) -> bool:
        """Whether a passing segment rendered at *depth* shows its children."""
        return self.detail_depth == -1 or depth < self.detail_depth


def load_options(path: Path) -> ReportOptions:
    """Load and validate report options from a YAML file.

    Options may sit at the top level or under a ``report`` key.
    """
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return ReportOptions()
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping of report options")
    if "report" in raw:
        raw = raw["report"] or {}

    return ReportOptions.model_validate(raw)
