"""
Check use case — load descriptors and report every violation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from buildplan.core.config.loader import ConfigError, load_descriptors
from buildplan.core.errors import DescriptorError, DescriptorValidationError
from buildplan.core.models.module import Module
from buildplan.core.services.descriptor_loader import load_modules
from buildplan.core.services.graph_validator import validate_graph

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of descriptor validation."""

    valid: bool = False
    modules: dict[str, Module] = field(default_factory=dict)
    sources: list[Path] = field(default_factory=list)
    violations: list[DescriptorError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"valid": self.valid}
        if self.error:
            result["error"] = self.error
            return result
        result["sources"] = [str(p) for p in self.sources]
        result["module_count"] = len(self.modules)
        result["violations"] = [v.to_dict() for v in self.violations]
        result["warnings"] = self.warnings
        return result


def check_descriptors(paths: list[Path] | None = None) -> CheckResult:
    """Validate descriptor files without producing a plan.

    Args:
        paths: Descriptor files; auto-detected when empty.

    Returns:
        CheckResult listing every violation found.
    """
    result = CheckResult()

    try:
        descriptors = load_descriptors(paths)
    except ConfigError as e:
        result.error = str(e)
        return result
    result.sources = descriptors.sources

    try:
        modules = load_modules(descriptors.records, descriptors.catalog)
    except DescriptorValidationError as e:
        result.violations = e.errors
        return result
    result.modules = modules

    report = validate_graph(modules)
    result.violations = report.violations

    # Soft checks
    if not modules:
        result.warnings.append("No modules declared. The plan will be empty.")
    for name, module in modules.items():
        if module.test_suites and module.toolchain_floor is None:
            result.warnings.append(
                f"Module '{name}' declares test suites but no toolchain floor."
            )

    result.valid = report.ok
    logger.debug("Check finished: valid=%s, %d violation(s)", result.valid, len(result.violations))
    return result
