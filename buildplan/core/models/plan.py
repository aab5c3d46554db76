"""
Build plan model — the resolved, ordered execution artifact.

A plan is derived fresh from a validated module graph on every
planning run and never mutated; re-planning returns a new value.
It is handed to the external build-execution collaborator, so its
serialized form (``to_dict``) uses the camelCase keys of descriptor
files.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PlannedTestSuite(BaseModel):
    """A test suite scheduled to run, tagged with its owning module."""

    model_config = ConfigDict(frozen=True)

    module: str
    name: str
    type: str
    engine: str | None = None


class BuildPlan(BaseModel):
    """Module order, resolved toolchain floor and the suites to run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order: tuple[str, ...] = ()
    toolchain_floor: str | None = Field(default=None, alias="toolchainFloor")
    test_suites: tuple[PlannedTestSuite, ...] = Field(default=(), alias="testSuites")
    repositories: tuple[str, ...] = ()
    external_dependencies: tuple[str, ...] = Field(
        default=(), alias="externalDependencies"
    )

    def position(self, module: str) -> int:
        """Index of a module in the build order."""
        return self.order.index(module)

    def suites_for(self, module: str) -> list[PlannedTestSuite]:
        return [s for s in self.test_suites if s.module == module]

    def to_dict(self) -> dict:
        """Serializable mapping; absent optional values are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
