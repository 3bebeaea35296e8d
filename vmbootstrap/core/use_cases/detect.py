"""
Detect use case: report the host without changing anything.

Shows the platform, the package manager the setup would use, and
whether each dependency is present and good enough.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field

from vmbootstrap.adapters.languages.node import NodeAdapter
from vmbootstrap.adapters.registry import AdapterRegistry
from vmbootstrap.adapters.vcs.git import GitAdapter
from vmbootstrap.core.errors import BootstrapError
from vmbootstrap.core.models.platform import PlatformInfo
from vmbootstrap.core.models.settings import BootstrapSettings
from vmbootstrap.core.services.platform_detect import Which, detect_platform
from vmbootstrap.core.services.tool_version import (
    get_tool_version,
    meets_minimum,
    parse_major_version,
)


@dataclass
class ToolStatus:
    """Presence and version of one dependency."""

    tool: str
    cli: str
    installed: bool = False
    version: str | None = None
    ok: bool = False

    def to_dict(self) -> dict:
        return {
            "tool": self.tool,
            "cli": self.cli,
            "installed": self.installed,
            "version": self.version,
            "ok": self.ok,
        }


@dataclass
class DetectResult:
    """Read-only snapshot of the host."""

    platform: PlatformInfo | None = None
    error: str | None = None
    tools: list[ToolStatus] = field(default_factory=list)

    @property
    def ready(self) -> bool:
        """Whether setup would skip every install step."""
        return self.error is None and all(t.ok for t in self.tools)

    def to_dict(self) -> dict:
        pm = self.platform.package_manager if self.platform else None
        return {
            "platform": self.platform.platform_id if self.platform else None,
            "family": self.platform.family if self.platform else None,
            "package_manager": pm.name if pm else None,
            "error": self.error,
            "ready": self.ready,
            "tools": [t.to_dict() for t in self.tools],
        }


def run_detect(
    settings: BootstrapSettings,
    *,
    registry: AdapterRegistry | None = None,
    platform_id: str | None = None,
    which: Which = shutil.which,
) -> DetectResult:
    """Probe the host. Never installs, never raises for host problems."""
    result = DetectResult()

    try:
        result.platform = detect_platform(platform_id, which)
    except BootstrapError as e:
        result.error = e.message

    if registry is None:
        registry = AdapterRegistry()
        registry.register(NodeAdapter())
        registry.register(GitAdapter())

    node = ToolStatus(tool="node", cli="node", installed=bool(which("node")))
    if node.installed:
        node.version = get_tool_version(registry, "node")
        node.ok = meets_minimum(parse_major_version(node.version), settings.min_node_version)

    npm = ToolStatus(tool="npm", cli="npm", installed=bool(which("npm")))
    if npm.installed:
        npm.version = get_tool_version(registry, "npm")
        npm.ok = True

    git = ToolStatus(tool="git", cli="git", installed=bool(which("git")))
    if git.installed:
        git.version = get_tool_version(registry, "git")
        git.ok = True

    cli_tool = ToolStatus(
        tool="cli",
        cli=settings.cli_command,
        installed=bool(which(settings.cli_command)),
    )
    cli_tool.ok = cli_tool.installed

    result.tools = [node, npm, git, cli_tool]
    return result
