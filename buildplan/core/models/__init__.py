"""
Domain models — Pydantic types for descriptors and plans.

All models are re-exported here for convenient access:

    from buildplan.core.models import Module, TestSuite, BuildPlan
"""

from buildplan.core.models.module import (
    AGGREGATION_REPORT,
    AGGREGATION_SCOPE,
    DEFAULT_SCOPE,
    DependencyReference,
    Module,
    TestSuite,
)
from buildplan.core.models.plan import BuildPlan, PlannedTestSuite

__all__ = [
    "AGGREGATION_REPORT",
    "AGGREGATION_SCOPE",
    # plan.py
    "BuildPlan",
    "DEFAULT_SCOPE",
    # module.py
    "DependencyReference",
    "Module",
    "PlannedTestSuite",
    "TestSuite",
]
