"""
Planning pipeline — Loader → Validator → Plan Emitter.

    from buildplan.core.services import plan_build

    plan = plan_build(records)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from buildplan.core.models.plan import BuildPlan
from buildplan.core.services.descriptor_loader import load_modules
from buildplan.core.services.graph_validator import ValidationReport, validate_graph
from buildplan.core.services.plan_emitter import emit_plan


def plan_build(
    records: Sequence[object],
    catalog: Mapping[str, str] | None = None,
) -> BuildPlan:
    """Load, validate and plan in one call.

    Raises:
        DescriptorValidationError: With every load or validation violation.
    """
    modules = load_modules(records, catalog)
    validate_graph(modules).raise_for_violations()
    return emit_plan(modules)


__all__ = [
    "ValidationReport",
    "emit_plan",
    "load_modules",
    "plan_build",
    "validate_graph",
]
