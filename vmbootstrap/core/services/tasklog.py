"""
Task-log scaffolding: writes the bundled task-log template to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from vmbootstrap.core.data import load_template

logger = logging.getLogger(__name__)

TASKLOG_TEMPLATE = "tasklog.md"
DEFAULT_TASKLOG_NAME = "TASKS.md"


def write_tasklog(path: Path, *, force: bool = False) -> Path:
    """Write the task-log template to ``path``.

    Raises:
        FileExistsError: ``path`` exists and ``force`` is False.
    """
    if path.exists() and not force:
        raise FileExistsError(f"{path} already exists (use --force to overwrite)")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(load_template(TASKLOG_TEMPLATE), encoding="utf-8")
    logger.info("Wrote task log template to %s", path)
    return path
