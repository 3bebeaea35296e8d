"""
Process runner: the single place adapters call ``subprocess.run``.

Install, update and clone commands inherit the terminal so the user
sees package manager progress and can answer a sudo prompt; version
probes capture their output instead.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Version probes are local and fast; installs and clones get no timeout.
PROBE_TIMEOUT = 10


@dataclass
class ProcessResult:
    """Exit status and (when captured) output of one command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def is_root() -> bool:
    """Whether the process already runs with euid 0."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def sudo_prefix(needs_sudo: bool, *, preserve_env: bool = False) -> list[str]:
    """``sudo`` argv prefix, or nothing when not needed or already root."""
    if not needs_sudo or is_root():
        return []
    return ["sudo", "-E"] if preserve_env else ["sudo"]


def run_process(
    cmd: list[str],
    *,
    cwd: str | None = None,
    capture: bool = True,
    timeout: int | None = None,
) -> ProcessResult:
    """Run one command and wait for it.

    Args:
        cmd: argv list.
        cwd: Working directory.
        capture: Capture stdout/stderr; otherwise they go to the terminal.
        timeout: Seconds before ``subprocess.TimeoutExpired``; None waits forever.

    Raises:
        FileNotFoundError: The executable does not exist.
        subprocess.TimeoutExpired: ``timeout`` elapsed.
    """
    logger.debug("Running: %s (cwd=%s, capture=%s)", cmd, cwd, capture)
    start = time.monotonic()
    result = subprocess.run(
        cmd,
        cwd=cwd,
        capture_output=capture,
        text=True,
        timeout=timeout,
    )
    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.debug("Exit %d after %dms: %s", result.returncode, elapsed_ms, cmd)
    return ProcessResult(
        returncode=result.returncode,
        stdout=(result.stdout or "") if capture else "",
        stderr=(result.stderr or "") if capture else "",
        elapsed_ms=elapsed_ms,
    )
