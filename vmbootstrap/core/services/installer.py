"""
Version-gated dependency installer.

For each dependency (Node.js runtime, git, the interactive CLI tool):
check presence, and for the runtime the major version; if unsatisfied
make exactly one install attempt, then re-check. A dependency that is
still unsatisfied after its install attempt aborts the run.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass

from vmbootstrap.adapters.registry import AdapterRegistry
from vmbootstrap.core.data.recipes import get_recipe
from vmbootstrap.core.errors import InstallError, VersionTooLowError
from vmbootstrap.core.models.action import Action, Receipt
from vmbootstrap.core.models.platform import PackageManager
from vmbootstrap.core.models.settings import BootstrapSettings
from vmbootstrap.core.observability.reporter import StatusReporter
from vmbootstrap.core.services.platform_detect import Which
from vmbootstrap.core.services.tool_version import (
    get_tool_version,
    meets_minimum,
    parse_major_version,
)

logger = logging.getLogger(__name__)


@dataclass
class RuntimeStatus:
    """Node.js as found on the host at one point in time."""

    present: bool = False
    version: str | None = None     # raw ``node -v`` output
    major: int | None = None
    satisfied: bool = False


class DependencyInstaller:
    """Ensures node/npm, git and the CLI tool are installed, in that order.

    Every install action is recorded in ``installed`` (tool ids, in the
    order attempted) and every receipt in ``receipts``.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        package_manager: PackageManager,
        settings: BootstrapSettings,
        reporter: StatusReporter | None = None,
        *,
        which: Which = shutil.which,
        working_dir: str = ".",
    ):
        self._registry = registry
        self._pm = package_manager
        self._settings = settings
        self._reporter = reporter or StatusReporter()
        self._which = which
        self._working_dir = working_dir
        self.installed: list[str] = []
        self.receipts: list[Receipt] = []

    # ── Package index ───────────────────────────────────────────

    def update_index(self) -> bool:
        """Refresh the package index. Failure only warns."""
        self._reporter.info("Updating package manager...")
        receipt = self._run(
            Action(id="update-index", adapter="package", params={"operation": "update"})
        )
        if not receipt.ok:
            self._reporter.warning(
                f"Package index update failed, continuing anyway: {receipt.error}"
            )
            return False
        return True

    # ── Node.js ─────────────────────────────────────────────────

    def check_node(self) -> RuntimeStatus:
        """Probe node and compare its major version against the minimum."""
        minimum = self._settings.min_node_version
        if not self._which("node"):
            return RuntimeStatus()

        version = get_tool_version(self._registry, "node", self._working_dir)
        major = parse_major_version(version)
        status = RuntimeStatus(
            present=True,
            version=version,
            major=major,
            satisfied=meets_minimum(major, minimum),
        )

        if status.satisfied:
            self._reporter.success(
                f"Node.js version {major} meets requirements (>={minimum})"
            )
        elif major is None:
            self._reporter.warning(
                f"Could not determine Node.js version from {version!r}"
            )
        else:
            self._reporter.warning(
                f"Node.js version {major} is below required version {minimum}"
            )
        return status

    def ensure_node(self) -> RuntimeStatus:
        """Make sure node and npm are present and node meets the minimum.

        Raises:
            InstallError: node or npm missing after the install attempt.
            VersionTooLowError: node still below the minimum after install.
        """
        self._reporter.info("Checking Node.js installation...")
        status = self.check_node()

        if status.satisfied and not self._which("npm"):
            self._reporter.warning("npm not found, reinstalling Node.js")

        if not status.satisfied or not self._which("npm"):
            self._install_system_tool("node")
            status = self.check_node()
            if not status.satisfied:
                raise VersionTooLowError(
                    "Node.js", status.major, self._settings.min_node_version,
                )

        npm_version = get_tool_version(self._registry, "npm", self._working_dir)
        self._reporter.info(f"Node.js version: {status.version}")
        self._reporter.info(f"npm version: {npm_version}")
        return status

    # ── Git ─────────────────────────────────────────────────────

    def ensure_git(self) -> str | None:
        """Make sure git is present; returns the ``git --version`` line.

        Raises:
            InstallError: git missing after the install attempt.
        """
        self._reporter.info("Checking git installation...")
        if self._which("git"):
            version = get_tool_version(self._registry, "git", self._working_dir)
            self._reporter.success(f"Git is already installed: {version}")
            return version

        self._install_system_tool("git")
        return get_tool_version(self._registry, "git", self._working_dir)

    # ── Interactive CLI tool ────────────────────────────────────

    def ensure_cli(self) -> bool:
        """Make sure the CLI binary is on PATH; True if it was installed now.

        Raises:
            InstallError: binary missing after ``npm install -g``.
        """
        label = self._settings.cli_label
        package = self._settings.cli_package
        command = self._settings.cli_command

        self._reporter.info(f"Checking {label} installation...")
        if self._which(command):
            self._reporter.success(f"{label} is already installed")
            return False

        self._reporter.info(f"Installing {label} globally...")
        self.installed.append("cli")
        receipt = self._run(
            Action(
                id="install-cli",
                name=f"Install {label}",
                adapter="node",
                params={"operation": "install_global", "package": package},
            )
        )

        if not receipt.ok or not self._which(command):
            raise InstallError(
                "cli",
                f"Failed to install {label}",
                hints=[f"Try running: npm install -g {package}"],
            )

        self._reporter.success(f"{label} installed successfully")
        return True

    # ── Helpers ─────────────────────────────────────────────────

    def _install_system_tool(self, tool: str) -> None:
        """One install attempt through the package manager, then a presence check."""
        recipe = get_recipe(tool)
        label = recipe["label"]
        pm_name = self._pm.name

        self._reporter.info(f"Installing {label}...")
        self.installed.append(tool)

        setup = recipe["setup_repo"].get(pm_name)
        if setup:
            receipt = self._run(
                Action(
                    id=f"setup-repo-{tool}",
                    name=f"Add {label} package repository",
                    adapter="package",
                    params={"operation": "setup_repo", **setup},
                )
            )
            if not receipt.ok:
                raise InstallError(tool, f"Failed to install {label}: {receipt.error}")

        receipt = self._run(
            Action(
                id=f"install-{tool}",
                name=f"Install {label}",
                adapter="package",
                params={"operation": "install", "packages": recipe["packages"][pm_name]},
            )
        )
        if not receipt.ok:
            raise InstallError(tool, f"Failed to install {label}: {receipt.error}")

        missing = [binary for binary in recipe["requires"] if not self._which(binary)]
        if missing:
            raise InstallError(
                tool,
                f"Failed to install {label} ({', '.join(missing)} not found on PATH)",
            )

        self._reporter.success(f"{label} installed successfully")

    def _run(self, action: Action) -> Receipt:
        receipt = self._registry.execute_action(action, working_dir=self._working_dir)
        self.receipts.append(receipt)
        logger.debug("%s → %s", action.id, receipt.status)
        return receipt
