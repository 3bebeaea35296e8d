"""
Workspace creation and repository acquisition.

Each run gets its own directory named ``<prefix>_<date>_<time>_<pid>``
under the current directory. The repository is cloned into it; the
directory is never reused and never cleaned up, even on failure.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

from vmbootstrap.adapters.registry import AdapterRegistry
from vmbootstrap.core.errors import CloneError
from vmbootstrap.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


def workspace_name(
    prefix: str,
    now: datetime | None = None,
    pid: int | None = None,
) -> str:
    """Unique workspace directory name for this process.

    The pid keeps two runs started in the same second apart.
    """
    now = now or datetime.now()
    pid = pid if pid is not None else os.getpid()
    return f"{prefix}_{now:%Y%m%d_%H%M%S}_{pid}"


def create_workspace(
    base_dir: Path,
    prefix: str,
    *,
    now: datetime | None = None,
    pid: int | None = None,
) -> Path:
    """Create the workspace directory and return its absolute path."""
    path = (base_dir / workspace_name(prefix, now, pid)).resolve()
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Workspace directory: %s", path)
    return path


def repo_name_from_url(url: str) -> str:
    """Directory name ``git clone`` will create for ``url``.

    ``https://github.com/org/project.git`` → ``project``
    """
    name = url.rstrip("/").rsplit("/", 1)[-1]
    name = name.rsplit(":", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


def clone_repository(
    registry: AdapterRegistry,
    url: str,
    workspace: Path,
) -> tuple[Path, Receipt]:
    """Clone ``url`` inside ``workspace``.

    Returns:
        (repository directory, clone receipt).

    Raises:
        CloneError: git clone failed. The workspace is left as is.
    """
    receipt = registry.execute_action(
        Action(id="clone", name="Clone repository", adapter="git",
               params={"operation": "clone", "url": url}),
        working_dir=str(workspace),
    )
    if not receipt.ok:
        raise CloneError(f"Failed to clone repository: {receipt.error}")
    return workspace / repo_name_from_url(url), receipt
