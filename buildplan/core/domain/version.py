"""
L1 Domain — toolchain version parsing and comparison (pure).

Toolchain floors are dotted numeric versions: ``17``, ``1.8``,
``21.0.1``. A leading ``v`` is tolerated. Comparison is component-wise
with missing components treated as zero, so ``21`` == ``21.0``.
"""

from __future__ import annotations

import re

_VERSION_RE = re.compile(r"^v?(\d+(?:\.\d+)*)$")


def parse_version(value: str) -> tuple[int, ...]:
    """Parse a dotted numeric version into a tuple of ints.

    Raises:
        ValueError: If ``value`` is not a dotted numeric version.
    """
    match = _VERSION_RE.match(value.strip())
    if not match:
        raise ValueError(f"not a numeric version: {value!r}")
    return tuple(int(x) for x in match.group(1).split("."))


def version_key(value: str) -> tuple[int, ...]:
    """Comparison key with trailing zero components stripped."""
    parts = list(parse_version(value))
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def max_version(versions: list[str]) -> str | None:
    """Return the highest version, or None for an empty list.

    On equal versions the first one wins, so ``["21", "21.0"]``
    resolves to ``"21"``.
    """
    best: str | None = None
    for v in versions:
        if best is None or version_key(v) > version_key(best):
            best = v
    return best
