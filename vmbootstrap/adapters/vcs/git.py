"""
Git adapter: version probe and repository clone.

Uses the git CLI, never a library binding, so the clone behaves
exactly like the user typing ``git clone`` (credential helpers and
progress output included).
"""

from __future__ import annotations

import logging
import subprocess

from vmbootstrap.adapters.base import Adapter, ExecutionContext
from vmbootstrap.adapters.shell.command import PROBE_TIMEOUT, run_process
from vmbootstrap.core.models.action import Receipt

logger = logging.getLogger(__name__)


class GitAdapter(Adapter):
    """Git version control operations.

    Action params:
        operation (str): One of 'version', 'clone'.
        url (str): Remote URL (for 'clone').
        dest (str): Optional target directory name (for 'clone').
    """

    operations = {
        "version": (),
        "clone": ("url",),
    }

    @property
    def name(self) -> str:
        return "git"

    def describe_error(self, error: Exception) -> str:
        if isinstance(error, FileNotFoundError):
            return "git is not installed"
        if isinstance(error, subprocess.TimeoutExpired):
            return f"git --version timed out after {PROBE_TIMEOUT}s"
        return f"Git error: {error}"

    # ── Operations ──────────────────────────────────────────────

    def _op_version(self, ctx: ExecutionContext) -> Receipt:
        """Output is git's own line, e.g. ``git version 2.43.0``."""
        result = run_process(["git", "--version"], cwd=ctx.working_dir, timeout=PROBE_TIMEOUT)
        if result.ok:
            return self.succeeded(ctx, result.stdout.strip(), duration_ms=result.elapsed_ms)
        return self.failed(
            ctx,
            result.stderr.strip() or f"git --version exited with code {result.returncode}",
            duration_ms=result.elapsed_ms,
        )

    def _op_clone(self, ctx: ExecutionContext) -> Receipt:
        url = ctx.action.params["url"]
        cmd = ["git", "clone", url]
        if ctx.action.params.get("dest"):
            cmd.append(ctx.action.params["dest"])

        # no timeout: a clone takes as long as the network needs
        result = run_process(cmd, cwd=ctx.working_dir, capture=False)
        metadata = {"url": url, "cwd": ctx.working_dir, "return_code": result.returncode}
        if result.ok:
            return self.succeeded(ctx, duration_ms=result.elapsed_ms, metadata=metadata)
        return self.failed(
            ctx,
            f"git clone exited with code {result.returncode}",
            duration_ms=result.elapsed_ms,
            metadata=metadata,
        )
