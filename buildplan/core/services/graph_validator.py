"""
Graph validator — integrity checks over a loaded module mapping.

Checks:
    - every internal dependency resolves to a declared module
    - the internal-edge graph is acyclic
    - test-suite names are unique within each module
    - aggregation reports aggregate a suite that an aggregated module declares

Validation is pure: it never mutates the modules and reports every
violation it finds instead of stopping at the first one.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field

from buildplan.core.domain.dag import find_cycles
from buildplan.core.errors import (
    CyclicDependencyError,
    DescriptorError,
    DescriptorValidationError,
    DuplicateTestSuiteError,
    UnresolvedDependencyError,
    UnresolvedReportSuiteError,
)
from buildplan.core.models.module import AGGREGATION_SCOPE, Module

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """Outcome of graph validation."""

    violations: list[DescriptorError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def raise_for_violations(self) -> None:
        """Raise ``DescriptorValidationError`` if anything was found."""
        if self.violations:
            raise DescriptorValidationError(self.violations)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "violations": [v.to_dict() for v in self.violations],
        }


def validate_graph(modules: Mapping[str, Module]) -> ValidationReport:
    """Run every integrity check over the module mapping.

    Args:
        modules: Module name → Module, as returned by the loader.

    Returns:
        ValidationReport; ``ok`` is True when no violations were found.
    """
    report = ValidationReport()
    report.violations.extend(_check_references(modules))
    report.violations.extend(_check_cycles(modules))
    report.violations.extend(_check_test_suites(modules))
    report.violations.extend(_check_reports(modules))

    if report.ok:
        logger.debug("Graph of %d modules is valid", len(modules))
    else:
        logger.info("Graph validation found %d violation(s)", len(report.violations))
    return report


def _check_references(modules: Mapping[str, Module]) -> list[DescriptorError]:
    errors: list[DescriptorError] = []
    for name in sorted(modules):
        for dep in modules[name].internal_dependencies:
            if dep.target not in modules:
                errors.append(UnresolvedDependencyError(name, dep.target, dep.scope))
    return errors


def _check_cycles(modules: Mapping[str, Module]) -> list[DescriptorError]:
    graph = {name: module.dependency_names() for name, module in modules.items()}
    return [CyclicDependencyError(cycle) for cycle in find_cycles(graph)]


def _check_test_suites(modules: Mapping[str, Module]) -> list[DescriptorError]:
    errors: list[DescriptorError] = []
    for name in sorted(modules):
        counts = Counter(s.name for s in modules[name].test_suites)
        for suite, count in counts.items():
            if count > 1:
                errors.append(DuplicateTestSuiteError(name, suite, count))
    return errors


def _check_reports(modules: Mapping[str, Module]) -> list[DescriptorError]:
    """Aggregation reports must point at a suite some aggregated module declares.

    The candidates are the owning module itself plus every module it
    depends on with the ``aggregation`` scope.
    """
    errors: list[DescriptorError] = []
    for name in sorted(modules):
        module = modules[name]
        for suite in module.test_suites:
            if not suite.is_aggregation_report or not suite.aggregates:
                continue
            candidates = [module] + [
                modules[d.target]
                for d in module.internal_dependencies
                if d.scope == AGGREGATION_SCOPE and d.target in modules
            ]
            if not any(
                s.name == suite.aggregates and not s.is_aggregation_report
                for m in candidates
                for s in m.test_suites
            ):
                errors.append(UnresolvedReportSuiteError(name, suite.name, suite.aggregates))
    return errors
