"""
Configuration loader — reads descriptor files into raw records.

This is the file-facing entry point of the planner. It reads YAML
(or JSON, which YAML parses too), checks the document shape, and
returns the raw records plus the optional version catalog. Record
contents are validated later by the descriptor loader, which can
report every problem at once.

Accepted document shapes::

    modules:                 # mapping form, with optional catalog
      - name: lib
        ...
    catalog:
      guice: com.google.inject:guice:7.0.0
      spock-core:
        module: org.spockframework:spock-core
        version: {ref: spock}
    versions:               # targets of catalog version refs
      spock: 2.3-groovy-4.0

    - name: lib              # bare list of records
      ...

    name: lib                # a single record
    ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Default descriptor filenames, in lookup order
DESCRIPTOR_FILES = ("buildplan.yml", "buildplan.yaml", "buildplan.json")


class ConfigError(Exception):
    """Raised when a descriptor file is missing, unreadable or mis-shaped."""


@dataclass
class DescriptorSet:
    """Raw records gathered from one or more descriptor files."""

    records: list = field(default_factory=list)
    catalog: dict[str, str] | None = None
    sources: list[Path] = field(default_factory=list)

    def merge(self, other: DescriptorSet) -> None:
        """Append another set's records; catalogs merge, later files win."""
        self.records.extend(other.records)
        self.sources.extend(other.sources)
        if other.catalog is not None:
            self.catalog = {**(self.catalog or {}), **other.catalog}


def find_descriptor_file(start_dir: Path | None = None) -> Path | None:
    """Search for buildplan.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the descriptor file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        for filename in DESCRIPTOR_FILES:
            candidate = current / filename
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_descriptor_file(path: Path) -> DescriptorSet:
    """Load one descriptor file.

    Raises:
        ConfigError: If the file is missing, not valid YAML/JSON, or
            not one of the accepted document shapes.
    """
    if not path.is_file():
        raise ConfigError(f"Descriptor file not found: {path}")

    logger.debug("Loading descriptors from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = []

    catalog: dict[str, str] | None = None
    if isinstance(data, list):
        records = data
    elif isinstance(data, dict) and "modules" in data:
        records = data["modules"] or []
        if not isinstance(records, list):
            raise ConfigError(
                f"Expected 'modules' to be a list in {path}, got {type(records).__name__}"
            )
        if data.get("catalog") is not None:
            catalog = parse_catalog(data["catalog"], path, versions=data.get("versions"))
    elif isinstance(data, dict) and "name" in data:
        records = [data]
    else:
        raise ConfigError(
            f"Expected a list of modules or a 'modules:' mapping in {path}, "
            f"got {type(data).__name__}"
        )

    logger.info("Read %d descriptor records from %s", len(records), path)
    return DescriptorSet(records=list(records), catalog=catalog, sources=[path])


def load_descriptors(paths: list[Path] | None = None) -> DescriptorSet:
    """Load and combine descriptor files.

    Args:
        paths: Explicit files. If empty or None, searches upward for
            buildplan.yml.

    Raises:
        ConfigError: If no file is found or any file is invalid.
    """
    if not paths:
        found = find_descriptor_file()
        if found is None:
            raise ConfigError(
                f"No {DESCRIPTOR_FILES[0]} found. "
                "Pass descriptor files explicitly, or specify --config."
            )
        paths = [found]

    combined = DescriptorSet()
    for path in paths:
        combined.merge(load_descriptor_file(path))
    return combined


def parse_catalog(
    raw: object,
    path: Path | None = None,
    versions: object = None,
) -> dict[str, str]:
    """Normalize a version catalog into alias → coordinate strings.

    Entries may be a coordinate string, or a mapping with either
    ``module`` (``group:artifact``) or ``group`` + ``name``, plus an
    optional ``version``: a string, or ``{ref: <key>}`` naming an
    entry of the top-level ``versions`` table.
    """
    where = f" in {path}" if path else ""
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected 'catalog' to be a mapping{where}")

    catalog: dict[str, str] = {}
    for alias, entry in raw.items():
        if isinstance(entry, str):
            catalog[str(alias)] = entry
            continue
        if not isinstance(entry, dict):
            raise ConfigError(f"Catalog entry '{alias}' must be a string or mapping{where}")

        if entry.get("module"):
            coordinate = str(entry["module"])
        elif entry.get("group") and entry.get("name"):
            coordinate = f"{entry['group']}:{entry['name']}"
        else:
            raise ConfigError(
                f"Catalog entry '{alias}' needs 'module' or 'group' and 'name'{where}"
            )
        if entry.get("version") is not None:
            version = _catalog_version(alias, entry["version"], versions, where)
            coordinate = f"{coordinate}:{version}"
        catalog[str(alias)] = coordinate

    return catalog


def _catalog_version(alias: object, value: object, versions: object, where: str) -> str:
    """Resolve a catalog entry's version, following ``{ref: ...}`` into ``versions``."""
    if isinstance(value, dict) and set(value) == {"ref"}:
        ref = value["ref"]
        if not isinstance(versions, dict) or ref not in versions:
            raise ConfigError(
                f"Catalog entry '{alias}' refers to unknown version '{ref}'{where}"
            )
        value = versions[ref]
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        # A float has already lost its text (1.10 → 1.1)
        raise ConfigError(
            f"Catalog entry '{alias}' version must be a quoted string{where}"
        )
    return str(value)
