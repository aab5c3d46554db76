"""
Plan use case — descriptor files → BuildPlan, optionally written to disk.

Ties together config loading, the planning pipeline and plan
persistence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from buildplan.core.config.loader import ConfigError, load_descriptors
from buildplan.core.errors import DescriptorError, DescriptorValidationError
from buildplan.core.models.plan import BuildPlan
from buildplan.core.persistence.plan_file import save_plan
from buildplan.core.services import plan_build

logger = logging.getLogger(__name__)


@dataclass
class PlanResult:
    """Result of the plan use case."""

    plan: BuildPlan | None = None
    sources: list[Path] = field(default_factory=list)
    violations: list[DescriptorError] = field(default_factory=list)
    output_path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.plan is not None and self.error is None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result
        if self.violations:
            result["violations"] = [v.to_dict() for v in self.violations]
            return result

        result["sources"] = [str(p) for p in self.sources]
        if self.plan is not None:
            result["plan"] = self.plan.to_dict()
        if self.output_path is not None:
            result["output"] = str(self.output_path)
        return result


def run_plan(
    paths: list[Path] | None = None,
    output: Path | None = None,
) -> PlanResult:
    """Build a plan from descriptor files.

    Args:
        paths: Descriptor files; auto-detected when empty.
        output: Optional file to write the serialized plan to.

    Returns:
        PlanResult with either a plan, the violations, or an error.
    """
    result = PlanResult()

    try:
        descriptors = load_descriptors(paths)
    except ConfigError as e:
        result.error = str(e)
        return result
    result.sources = descriptors.sources

    try:
        result.plan = plan_build(descriptors.records, descriptors.catalog)
    except DescriptorValidationError as e:
        result.violations = e.errors
        return result

    if output is not None:
        try:
            save_plan(result.plan, output)
        except OSError as e:
            result.error = f"Cannot write plan to {output}: {e}"
            return result
        result.output_path = output

    return result
