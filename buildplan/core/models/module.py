"""
Module model — one named unit of build configuration.

Modules are built once from descriptor records by the loader and are
immutable afterwards: every model here is frozen and collections are
tuples. Field aliases accept the camelCase keys used in descriptor
files (``toolchainFloor``, ``testSuites``) as well as snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

from buildplan.core.domain.version import parse_version

DEFAULT_SCOPE = "implementation"
AGGREGATION_SCOPE = "aggregation"
AGGREGATION_REPORT = "aggregation-report"


class DescriptorModel(BaseModel):
    """Shared config: frozen, alias-or-name population."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class DependencyReference(DescriptorModel):
    """A dependency of a module.

    Internal references name another module; external ones carry an
    opaque coordinate (``group:artifact:version``) that this system
    never resolves further.
    """

    target: str = Field(min_length=1)
    scope: str = DEFAULT_SCOPE
    external: StrictBool = False
    alias: str | None = None   # catalog alias the coordinate came from

    @property
    def is_internal(self) -> bool:
        return not self.external


class TestSuite(DescriptorModel):
    """A named, typed collection of tests owned by a module."""

    __test__ = False  # not a pytest class

    name: str = Field(min_length=1)
    type: str = "unit"
    engine: str | None = None
    aggregates: str | None = None   # aggregation-report: suite being aggregated

    @property
    def is_aggregation_report(self) -> bool:
        return self.type == AGGREGATION_REPORT


class Module(DescriptorModel):
    """A module with its plugins, dependencies, toolchain floor and suites."""

    name: str = Field(min_length=1)
    plugins: tuple[str, ...] = ()
    repositories: tuple[str, ...] = ()
    dependencies: tuple[DependencyReference, ...] = ()
    toolchain_floor: str | None = Field(default=None, alias="toolchainFloor")
    test_suites: tuple[TestSuite, ...] = Field(default=(), alias="testSuites")

    @field_validator("toolchain_floor", mode="before")
    @classmethod
    def _coerce_floor(cls, value: object) -> object:
        # YAML reads `toolchainFloor: 21` as an int; `1.10` as the float 1.1
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            raise ValueError(f"must be a quoted string, got the number {value!r}")
        return value

    @field_validator("toolchain_floor")
    @classmethod
    def _check_floor(cls, value: str | None) -> str | None:
        if value is not None:
            parse_version(value)
        return value

    @property
    def internal_dependencies(self) -> list[DependencyReference]:
        return [d for d in self.dependencies if d.is_internal]

    @property
    def external_dependencies(self) -> list[DependencyReference]:
        return [d for d in self.dependencies if d.external]

    def dependency_names(self) -> list[str]:
        """Internal dependency targets, in declaration order, deduplicated."""
        names: list[str] = []
        for dep in self.internal_dependencies:
            if dep.target not in names:
                names.append(dep.target)
        return names

    def get_test_suite(self, name: str) -> TestSuite | None:
        """Look up a test suite by name (first declaration wins)."""
        for suite in self.test_suites:
            if suite.name == name:
                return suite
        return None

    def has_plugin(self, plugin: str) -> bool:
        return plugin in self.plugins
