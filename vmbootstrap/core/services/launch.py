"""
Interactive launch: hand the terminal over to the CLI tool.

``enter_directory`` moves the process into the cloned repository;
``launch_interactive`` then replaces the process, so nothing after it
runs.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable

from vmbootstrap.core.errors import LaunchError

logger = logging.getLogger(__name__)

ExecFn = Callable[[str, list[str]], Any]
ChdirFn = Callable[[Path], Any]


def enter_directory(path: Path, *, chdir: ChdirFn = os.chdir) -> None:
    """Make ``path`` the process working directory.

    Raises:
        LaunchError: The directory is missing or not accessible.
    """
    try:
        chdir(path)
    except OSError as e:
        raise LaunchError(f"Cannot enter {path}: {e}") from e
    logger.debug("Working directory: %s", path)


def launch_interactive(command: str, *, exec_fn: ExecFn = os.execvp) -> None:
    """Exec ``command`` with no arguments in the current directory.

    Raises:
        LaunchError: The executable is unusable.
    """
    logger.info("Launching %s", command)
    # exec discards Python's buffers
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        exec_fn(command, [command])
    except OSError as e:
        raise LaunchError(f"Failed to launch {command}: {e}") from e
