"""
Plan file persistence — atomic write and read of a BuildPlan.

The plan is stored as JSON in the serialized shape handed to the
build-execution collaborator. Writes are atomic (write to temp file,
then rename) so a reader never sees a half-written plan.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from buildplan.core.models.plan import BuildPlan

logger = logging.getLogger(__name__)


def save_plan(plan: BuildPlan, path: Path) -> None:
    """Save a plan to a JSON file (atomic write).

    Args:
        plan: The plan to save.
        path: Target path; parent directories are created.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(plan.to_dict(), indent=2, ensure_ascii=False) + "\n"

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".plan_", suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp.replace(path)
        logger.debug("Plan saved to %s", path)
    except Exception as e:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to save plan to %s: %s", path, e)
        raise


def load_plan(path: Path) -> BuildPlan:
    """Load a plan previously written by ``save_plan``.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a valid plan document.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    return BuildPlan.model_validate(data)
