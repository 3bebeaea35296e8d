"""
Package manager adapter: update, install and repository setup.

Drives the one package manager the detector selected for this run.
Commands are built from the ``PackageManager`` model and prefixed with
``sudo`` when the manager needs root and we are not root already.
"""

from __future__ import annotations

import logging
import shlex

from vmbootstrap.adapters.base import Adapter, ExecutionContext
from vmbootstrap.adapters.shell.command import ProcessResult, run_process, sudo_prefix
from vmbootstrap.core.models.action import Receipt
from vmbootstrap.core.models.platform import PackageManager

logger = logging.getLogger(__name__)

# yum/dnf check-update: 100 = "updates are available", not an error
_CHECK_UPDATE_AVAILABLE = 100


class PackageManagerAdapter(Adapter):
    """System package operations through the selected package manager.

    Action params:
        operation (str): One of 'update', 'install', 'setup_repo'.
        packages (list[str]): Package names (for 'install').
        url (str): Setup script URL piped to bash (for 'setup_repo').
        preserve_env (bool): Run the setup script under ``sudo -E``.
    """

    operations = {
        "update": (),
        "install": ("packages",),
        "setup_repo": ("url",),
    }

    def __init__(self, package_manager: PackageManager):
        self._pm = package_manager

    @property
    def name(self) -> str:
        return "package"

    def describe_error(self, error: Exception) -> str:
        return f"{self._pm.name} error: {error}"

    # ── Operations ──────────────────────────────────────────────

    def _op_update(self, ctx: ExecutionContext) -> Receipt:
        cmd = sudo_prefix(self._pm.needs_sudo) + list(self._pm.update_cmd)
        result = run_process(cmd, cwd=ctx.working_dir, capture=False)

        if self._pm.update_may_fail and result.returncode == _CHECK_UPDATE_AVAILABLE:
            logger.debug("%s reported pending updates (exit 100)", shlex.join(cmd))
            return self.succeeded(
                ctx,
                duration_ms=result.elapsed_ms,
                metadata={"command": shlex.join(cmd), "return_code": result.returncode},
            )
        return self._finish(ctx, shlex.join(cmd), result)

    def _op_install(self, ctx: ExecutionContext) -> Receipt:
        packages = list(ctx.action.params["packages"])
        cmd = sudo_prefix(self._pm.needs_sudo) + self._pm.install_command(packages)
        result = run_process(cmd, cwd=ctx.working_dir, capture=False)
        return self._finish(ctx, shlex.join(cmd), result)

    def _op_setup_repo(self, ctx: ExecutionContext) -> Receipt:
        url = ctx.action.params["url"]
        preserve_env = bool(ctx.action.params.get("preserve_env", False))
        runner = sudo_prefix(self._pm.needs_sudo, preserve_env=preserve_env) + ["bash", "-"]
        pipeline = f"curl -fsSL {shlex.quote(url)} | {shlex.join(runner)}"
        # pipefail: a failed download must not hide behind bash's exit 0 on empty stdin
        result = run_process(
            ["bash", "-o", "pipefail", "-c", pipeline], cwd=ctx.working_dir, capture=False,
        )
        return self._finish(ctx, pipeline, result)

    def _finish(self, ctx: ExecutionContext, command: str, result: ProcessResult) -> Receipt:
        metadata = {"command": command, "return_code": result.returncode}
        if result.ok:
            return self.succeeded(ctx, duration_ms=result.elapsed_ms, metadata=metadata)
        return self.failed(
            ctx,
            f"{command} exited with code {result.returncode}",
            duration_ms=result.elapsed_ms,
            metadata=metadata,
        )
