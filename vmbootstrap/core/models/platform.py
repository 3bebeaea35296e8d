"""
Package manager model: the single host selection made per run.

The detector picks exactly one of these; every install and update
command for the rest of the run is built from it.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

PackageManagerName = Literal["apt", "yum", "dnf", "brew"]


class PackageManager(BaseModel):
    """A host package manager and the command lines it is driven with."""

    name: PackageManagerName
    probe: str                              # executable looked up on PATH
    update_cmd: list[str] = Field(default_factory=list)
    install_cmd: list[str] = Field(default_factory=list)
    needs_sudo: bool = True
    update_may_fail: bool = False           # yum/dnf check-update exits 100

    def install_command(self, packages: list[str]) -> list[str]:
        """Full install command line for the given packages (no sudo)."""
        return [*self.install_cmd, *packages]


class PlatformInfo(BaseModel):
    """Host identity as seen by the detector."""

    platform_id: str                        # sys.platform, e.g. "linux"
    family: Literal["linux", "darwin"]
    package_manager: PackageManager
