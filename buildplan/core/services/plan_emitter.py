"""
Plan emitter — validated module mapping → BuildPlan.

The build order comes from Kahn's algorithm with ties broken by
ascending module name. The toolchain floor is the highest floor any
module declares. Test suites are flattened module by module in build
order, each module's suites in declaration order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from buildplan.core.domain.dag import find_cycles, topological_order
from buildplan.core.domain.version import max_version
from buildplan.core.errors import CyclicDependencyError
from buildplan.core.models.module import Module
from buildplan.core.models.plan import BuildPlan, PlannedTestSuite

logger = logging.getLogger(__name__)


def emit_plan(modules: Mapping[str, Module]) -> BuildPlan:
    """Derive a fresh BuildPlan from a validated module mapping.

    Args:
        modules: Module name → Module that passed ``validate_graph``.

    Returns:
        A new BuildPlan.

    Raises:
        CyclicDependencyError: If the graph was not validated and some
            modules cannot be ordered.
    """
    graph = {name: module.dependency_names() for name, module in modules.items()}
    order, leftover = topological_order(graph)
    if leftover:
        # Leftover also holds modules merely downstream of a cycle
        stuck = {name: graph[name] for name in leftover}
        raise CyclicDependencyError(find_cycles(stuck)[0])

    ordered = [modules[name] for name in order]

    plan = BuildPlan(
        order=tuple(order),
        toolchain_floor=max_version(
            [m.toolchain_floor for m in ordered if m.toolchain_floor is not None]
        ),
        test_suites=tuple(_flatten_suites(ordered)),
        repositories=tuple(_union(r for m in ordered for r in m.repositories)),
        external_dependencies=tuple(
            sorted({d.target for m in ordered for d in m.external_dependencies})
        ),
    )
    logger.info(
        "Planned %d modules, %d test suites, toolchain floor %s",
        len(plan.order), len(plan.test_suites), plan.toolchain_floor or "-",
    )
    return plan


def _flatten_suites(ordered: Sequence[Module]) -> list[PlannedTestSuite]:
    return [
        PlannedTestSuite(
            module=module.name,
            name=suite.name,
            type=suite.type,
            engine=suite.engine,
        )
        for module in ordered
        for suite in module.test_suites
    ]


def _union(items) -> list[str]:
    """Deduplicate preserving first appearance."""
    return list(dict.fromkeys(items))
