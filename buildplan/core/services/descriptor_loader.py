"""
Descriptor loader — raw descriptor records → module mapping.

Records are plain mappings (as parsed from YAML/JSON). Each one is
validated into a frozen ``Module``; dependency targets are classified
as internal module references or external coordinates on the way in.

Every problem in the batch is collected before anything is returned:
a batch with any malformed record or duplicate name raises
``DescriptorValidationError`` and never yields a partial mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from pydantic import ValidationError

from buildplan.core.errors import (
    DescriptorError,
    DescriptorValidationError,
    DuplicateModuleError,
    MalformedRecordError,
    UnresolvedDependencyError,
)
from buildplan.core.models.module import DEFAULT_SCOPE, Module

logger = logging.getLogger(__name__)

CATALOG_PREFIX = "libs."
PROJECT_PREFIX = ":"


def normalize_alias(alias: str) -> str:
    """Gradle-style alias normalization: ``spock-core`` → ``spock.core``."""
    return alias.replace("-", ".").replace("_", ".")


def classify_target(
    target: str,
    *,
    external: bool = False,
    catalog: Mapping[str, str] | None = None,
) -> tuple[str, bool, str | None]:
    """Decide whether a raw dependency target is internal or external.

    Rules, first match wins:
        1. ``external`` flag set          → external, target kept as-is
        2. ``:lib`` (project path)        → internal ``lib``
        3. ``libs.<alias>``               → external, resolved via catalog
        4. ``group:artifact[:version]``   → external
        5. anything else                  → internal module name

    Returns:
        ``(target, is_external, alias)``. ``alias`` is set only for
        catalog references; when the catalog lacks it, ``target`` stays
        the raw ``libs.`` string and the caller reports it.
    """
    if external:
        return target, True, None
    if target.startswith(PROJECT_PREFIX):
        return target[len(PROJECT_PREFIX):], False, None
    if target.startswith(CATALOG_PREFIX):
        alias = normalize_alias(target[len(CATALOG_PREFIX):])
        if catalog is not None and alias in catalog:
            return catalog[alias], True, alias
        return target, True, alias
    if ":" in target:
        return target, True, None
    return target, False, None


def load_modules(
    records: Sequence[object],
    catalog: Mapping[str, str] | None = None,
) -> dict[str, Module]:
    """Build the module mapping from raw descriptor records.

    Args:
        records: One mapping per module.
        catalog: Optional version catalog, alias → coordinate. When
            given, every ``libs.`` alias must be present in it.

    Returns:
        Mapping of module name → Module, in record order.

    Raises:
        DescriptorValidationError: With every ``MalformedRecordError``,
            ``DuplicateModuleError`` and unknown catalog alias found.
    """
    norm_catalog = (
        {normalize_alias(k): v for k, v in catalog.items()} if catalog is not None else None
    )
    errors: list[DescriptorError] = []
    modules: dict[str, Module] = {}

    # Duplicate names are reported once, with every record index
    indices_by_name: dict[str, list[int]] = {}
    for index, record in enumerate(records):
        name = _record_name(record)
        if name:
            indices_by_name.setdefault(name, []).append(index)
    duplicates = {n: idx for n, idx in indices_by_name.items() if len(idx) > 1}
    for name, idx in duplicates.items():
        errors.append(DuplicateModuleError(name, idx))

    for index, record in enumerate(records):
        module = _build_module(index, record, norm_catalog, errors)
        if module is None or module.name in duplicates:
            continue
        modules[module.name] = module
        logger.debug(
            "Loaded module '%s' (%d deps, %d suites)",
            module.name, len(module.dependencies), len(module.test_suites),
        )

    if errors:
        logger.info("Descriptor load failed with %d violation(s)", len(errors))
        raise DescriptorValidationError(errors)

    logger.info("Loaded %d modules", len(modules))
    return modules


def _record_name(record: object) -> str | None:
    if not isinstance(record, Mapping):
        return None
    name = record.get("name")
    if isinstance(name, str) and name.strip():
        return name
    return None


def _build_module(
    index: int,
    record: object,
    catalog: dict[str, str] | None,
    errors: list[DescriptorError],
) -> Module | None:
    """Validate one record; append problems to ``errors``."""
    if not isinstance(record, Mapping):
        errors.append(
            MalformedRecordError(
                index, "record", f"must be a mapping, got {type(record).__name__}"
            )
        )
        return None

    name = _record_name(record)
    if name is None:
        reason = "is required" if record.get("name") is None else "must be a non-empty string"
        errors.append(MalformedRecordError(index, "name", reason))
        return None

    data = dict(record)
    raw_deps = data.get("dependencies")
    if raw_deps is not None:
        if isinstance(raw_deps, (str, bytes)) or not isinstance(raw_deps, Sequence):
            errors.append(
                MalformedRecordError(index, "dependencies", "must be a list", module=name)
            )
            return None
        data["dependencies"] = [
            _classify_dependency(name, dep, catalog, errors) for dep in raw_deps
        ]

    try:
        return Module.model_validate(data)
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"]) or "record"
            errors.append(MalformedRecordError(index, field, err["msg"], module=name))
        return None


def _classify_dependency(
    module: str,
    dep: object,
    catalog: dict[str, str] | None,
    errors: list[DescriptorError],
) -> object:
    """Rewrite one raw dependency entry into DependencyReference fields.

    A bare string is shorthand for ``{target: <string>}``. Entries that
    are not understood are passed through for pydantic to reject.
    """
    if isinstance(dep, str):
        dep = {"target": dep}
    if not isinstance(dep, Mapping) or not isinstance(dep.get("target"), str):
        return dep
    if not isinstance(dep.get("external", False), bool):
        return dep

    target, external, alias = classify_target(
        dep["target"],
        external=dep.get("external", False),
        catalog=catalog,
    )
    scope = dep.get("scope", DEFAULT_SCOPE)
    if alias is not None and catalog is not None and alias not in catalog:
        errors.append(UnresolvedDependencyError(module, dep["target"], str(scope)))
    return {**dep, "target": target, "external": external, "alias": alias}
