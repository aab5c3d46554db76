"""
Descriptor errors — the taxonomy of everything that can be wrong with
a set of module descriptors.

Each violation is its own exception type so callers can match on it,
but violations are never raised one at a time: the loader and the
validator collect every problem and hand back the complete list,
wrapped in ``DescriptorValidationError`` when raised.
"""

from __future__ import annotations


class DescriptorError(Exception):
    """Base class for a single descriptor violation."""

    kind = "descriptor"

    def __init__(self, message: str, *, module: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.module = module

    def to_dict(self) -> dict:
        result: dict = {"kind": self.kind, "message": self.message}
        if self.module is not None:
            result["module"] = self.module
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DescriptorError):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.module))


class MalformedRecordError(DescriptorError):
    """A record is not a mapping, lacks a name, or has an ill-typed field."""

    kind = "malformed_record"

    def __init__(
        self,
        index: int,
        field: str,
        reason: str,
        *,
        module: str | None = None,
    ) -> None:
        where = f"'{module}'" if module else f"#{index}"
        super().__init__(f"Record {where}: field '{field}' {reason}", module=module)
        self.index = index
        self.field = field
        self.reason = reason

    def to_dict(self) -> dict:
        return {**super().to_dict(), "index": self.index, "field": self.field}


class DuplicateModuleError(DescriptorError):
    """Two or more records declare the same module name."""

    kind = "duplicate_module"

    def __init__(self, name: str, indices: list[int]) -> None:
        positions = ", ".join(f"#{i}" for i in indices)
        super().__init__(
            f"Module '{name}' is declared more than once (records {positions})",
            module=name,
        )
        self.indices = list(indices)

    def to_dict(self) -> dict:
        return {**super().to_dict(), "indices": self.indices}


class UnresolvedDependencyError(DescriptorError):
    """A dependency points at a module (or catalog alias) that does not exist."""

    kind = "unresolved_dependency"

    def __init__(self, module: str, target: str, scope: str = "") -> None:
        scope_label = f" ({scope})" if scope else ""
        super().__init__(
            f"Module '{module}' depends on unknown target '{target}'{scope_label}",
            module=module,
        )
        self.target = target
        self.scope = scope

    def to_dict(self) -> dict:
        return {**super().to_dict(), "target": self.target, "scope": self.scope}


class CyclicDependencyError(DescriptorError):
    """The internal dependency graph contains a cycle."""

    kind = "cyclic_dependency"

    def __init__(self, cycle: list[str]) -> None:
        path = " -> ".join([*cycle, cycle[0]]) if cycle else ""
        super().__init__(
            f"Dependency cycle between {','.join(cycle)}: {path}",
            module=cycle[0] if cycle else None,
        )
        self.cycle = list(cycle)

    def to_dict(self) -> dict:
        return {**super().to_dict(), "cycle": self.cycle}


class DuplicateTestSuiteError(DescriptorError):
    """A module declares two test suites with the same name."""

    kind = "duplicate_test_suite"

    def __init__(self, module: str, suite: str, count: int = 2) -> None:
        super().__init__(
            f"Module '{module}' declares test suite '{suite}' {count} times",
            module=module,
        )
        self.suite = suite
        self.count = count

    def to_dict(self) -> dict:
        return {**super().to_dict(), "suite": self.suite}


class UnresolvedReportSuiteError(DescriptorError):
    """An aggregation report names a test suite no aggregated module declares."""

    kind = "unresolved_report_suite"

    def __init__(self, module: str, report: str, aggregates: str) -> None:
        super().__init__(
            f"Report '{report}' in module '{module}' aggregates test suite "
            f"'{aggregates}', which no aggregated module declares",
            module=module,
        )
        self.report = report
        self.aggregates = aggregates

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "report": self.report,
            "aggregates": self.aggregates,
        }


class DescriptorValidationError(Exception):
    """Raised with the complete list of violations found in one pass."""

    def __init__(self, errors: list[DescriptorError]) -> None:
        self.errors = list(errors)
        noun = "violation" if len(self.errors) == 1 else "violations"
        lines = [f"{len(self.errors)} descriptor {noun}:"]
        lines.extend(f"  - {e.message}" for e in self.errors)
        super().__init__("\n".join(lines))

    def of_kind(self, error_type: type[DescriptorError]) -> list[DescriptorError]:
        """Return the collected violations of one type."""
        return [e for e in self.errors if isinstance(e, error_type)]

    def to_dict(self) -> dict:
        return {"errors": [e.to_dict() for e in self.errors]}
