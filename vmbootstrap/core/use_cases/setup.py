"""
Setup use case: the whole bootstrap, start to launch.

Flow:
    detect → update index → node → git → CLI tool → workspace → clone → launch

Every step either succeeds and the run continues, or raises a
``BootstrapError`` and the run stops there.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from vmbootstrap.adapters.languages.node import NodeAdapter
from vmbootstrap.adapters.registry import AdapterRegistry
from vmbootstrap.adapters.shell.package import PackageManagerAdapter
from vmbootstrap.adapters.vcs.git import GitAdapter
from vmbootstrap.core.models.action import Receipt
from vmbootstrap.core.models.platform import PackageManager, PlatformInfo
from vmbootstrap.core.models.settings import BootstrapSettings
from vmbootstrap.core.observability.reporter import StatusReporter
from vmbootstrap.core.services.installer import DependencyInstaller
from vmbootstrap.core.services.launch import (
    ChdirFn,
    ExecFn,
    enter_directory,
    launch_interactive,
)
from vmbootstrap.core.services.platform_detect import Which, detect_platform
from vmbootstrap.core.services.workspace import (
    clone_repository,
    create_workspace,
    workspace_name,
)

logger = logging.getLogger(__name__)


@dataclass
class SetupResult:
    """What a setup run did, up to (and including) the launch call."""

    platform: PlatformInfo | None = None
    node_version: str | None = None
    git_version: str | None = None
    cli_installed: bool = False
    installed: list[str] = field(default_factory=list)
    workspace: Path | None = None
    repo_dir: Path | None = None
    receipts: list[Receipt] = field(default_factory=list)
    launched: bool = False


def default_registry(package_manager: PackageManager) -> AdapterRegistry:
    """Registry wired with the real package, node and git adapters."""
    registry = AdapterRegistry()
    registry.register(PackageManagerAdapter(package_manager))
    registry.register(NodeAdapter())
    registry.register(GitAdapter())
    return registry


def run_setup(
    settings: BootstrapSettings,
    reporter: StatusReporter | None = None,
    *,
    registry: AdapterRegistry | None = None,
    platform_id: str | None = None,
    which: Which = shutil.which,
    base_dir: Path | None = None,
    exec_fn: ExecFn = os.execvp,
    chdir: ChdirFn = os.chdir,
    now: datetime | None = None,
    pid: int | None = None,
) -> SetupResult:
    """Run the bootstrap sequence.

    With the default ``exec_fn`` a successful run never returns: the
    process becomes the CLI tool. Tests inject ``exec_fn`` and get the
    ``SetupResult`` back.

    Args:
        settings: What to install, clone and launch.
        reporter: Status line sink (log-only if None).
        registry: Adapter registry; built for the detected package
            manager if None.
        platform_id: Host identifier override (default ``sys.platform``).
        which: PATH lookup used for every presence check.
        base_dir: Where the workspace is created (default cwd).
        exec_fn: Process replacement used for the launch.
        chdir: Directory change into the cloned repository.
        now: Timestamp for the workspace name.
        pid: Process id for the workspace name.

    Raises:
        BootstrapError: Any fatal step failure.
    """
    reporter = reporter or StatusReporter()
    result = SetupResult()

    platform = detect_platform(platform_id, which)
    result.platform = platform
    reporter.info(f"Detected OS: {platform.platform_id}")
    reporter.info(f"Package manager: {platform.package_manager.name}")

    if registry is None:
        registry = default_registry(platform.package_manager)

    base_dir = (base_dir or Path.cwd()).resolve()
    installer = DependencyInstaller(
        registry,
        platform.package_manager,
        settings,
        reporter,
        which=which,
        working_dir=str(base_dir),
    )

    installer.update_index()
    result.node_version = installer.ensure_node().version
    result.git_version = installer.ensure_git()
    result.cli_installed = installer.ensure_cli()
    result.installed = list(installer.installed)
    result.receipts.extend(installer.receipts)

    now = now or datetime.now()
    pid = pid if pid is not None else os.getpid()
    reporter.info(
        f"Creating workspace directory: {workspace_name(settings.workspace_prefix, now, pid)}"
    )
    workspace = create_workspace(base_dir, settings.workspace_prefix, now=now, pid=pid)
    result.workspace = workspace
    reporter.success(f"Created workspace: {workspace}")

    reporter.info(f"Cloning repository: {settings.repo_url}")
    repo_dir, receipt = clone_repository(registry, settings.repo_url, workspace)
    result.receipts.append(receipt)
    result.repo_dir = repo_dir
    reporter.success("Repository cloned successfully")

    enter_directory(repo_dir, chdir=chdir)
    reporter.success(f"Changed to repository directory: {repo_dir}")

    reporter.banner("Setup Complete!")
    reporter.success("All dependencies installed")
    reporter.success(f"Repository cloned to: {repo_dir}")
    reporter.info(f"Launching {settings.cli_label} interactive mode...")
    reporter.info(f"Type 'exit' or press Ctrl+C to quit {settings.cli_label}")

    launch_interactive(settings.cli_command, exec_fn=exec_fn)
    result.launched = True
    return result
