"""
Node.js adapter: node/npm version probes and global npm installs.
"""

from __future__ import annotations

import logging
import subprocess

from vmbootstrap.adapters.base import Adapter, ExecutionContext
from vmbootstrap.adapters.shell.command import PROBE_TIMEOUT, run_process
from vmbootstrap.core.models.action import Receipt

logger = logging.getLogger(__name__)


class NodeAdapter(Adapter):
    """Node.js toolchain adapter.

    Action params:
        operation (str): One of 'version', 'npm_version', 'install_global'.
        package (str): npm package spec (for 'install_global').
    """

    operations = {
        "version": (),
        "npm_version": (),
        "install_global": ("package",),
    }

    @property
    def name(self) -> str:
        return "node"

    def describe_error(self, error: Exception) -> str:
        if isinstance(error, FileNotFoundError):
            return f"Not installed: {error.filename or error}"
        if isinstance(error, subprocess.TimeoutExpired):
            return f"Version probe timed out after {PROBE_TIMEOUT}s"
        return f"Node error: {error}"

    # ── Operations ──────────────────────────────────────────────

    def _op_version(self, ctx: ExecutionContext) -> Receipt:
        return self._probe(ctx, ["node", "-v"])

    def _op_npm_version(self, ctx: ExecutionContext) -> Receipt:
        return self._probe(ctx, ["npm", "-v"])

    def _op_install_global(self, ctx: ExecutionContext) -> Receipt:
        package = ctx.action.params["package"]
        result = run_process(
            ["npm", "install", "-g", package], cwd=ctx.working_dir, capture=False,
        )
        if result.ok:
            return self.succeeded(ctx, duration_ms=result.elapsed_ms, metadata={"package": package})
        return self.failed(
            ctx,
            f"npm install -g {package} exited with code {result.returncode}",
            duration_ms=result.elapsed_ms,
            metadata={"package": package, "return_code": result.returncode},
        )

    def _probe(self, ctx: ExecutionContext, cmd: list[str]) -> Receipt:
        """Run a ``-v`` probe; output is the raw version string (``v20.11.0``)."""
        result = run_process(cmd, cwd=ctx.working_dir, timeout=PROBE_TIMEOUT)
        if result.ok:
            return self.succeeded(ctx, result.stdout.strip(), duration_ms=result.elapsed_ms)
        return self.failed(
            ctx,
            result.stderr.strip() or f"{cmd[0]} exited with code {result.returncode}",
            duration_ms=result.elapsed_ms,
        )
