"""
Host platform and package manager detection.

Looks at the platform identifier (``sys.platform``) and probes PATH for
known package managers in a fixed priority order. Exactly one manager
is selected per run; anything else is fatal.
"""

from __future__ import annotations

import logging
import shutil
import sys
from typing import Callable

from vmbootstrap.core.errors import MissingPackageManagerError, UnsupportedPlatformError
from vmbootstrap.core.models.platform import PackageManager, PlatformInfo

logger = logging.getLogger(__name__)

Which = Callable[[str], str | None]

PACKAGE_MANAGERS: dict[str, PackageManager] = {
    "apt": PackageManager(
        name="apt",
        probe="apt-get",
        update_cmd=["apt-get", "update"],
        install_cmd=["apt-get", "install", "-y"],
    ),
    "yum": PackageManager(
        name="yum",
        probe="yum",
        update_cmd=["yum", "check-update"],
        install_cmd=["yum", "install", "-y"],
        update_may_fail=True,
    ),
    "dnf": PackageManager(
        name="dnf",
        probe="dnf",
        update_cmd=["dnf", "check-update"],
        install_cmd=["dnf", "install", "-y"],
        update_may_fail=True,
    ),
    "brew": PackageManager(
        name="brew",
        probe="brew",
        update_cmd=["brew", "update"],
        install_cmd=["brew", "install"],
        needs_sudo=False,
    ),
}

# First match wins.
LINUX_PRIORITY: tuple[str, ...] = ("apt", "yum", "dnf")
DARWIN_PRIORITY: tuple[str, ...] = ("brew",)


def platform_family(platform_id: str) -> str | None:
    """``"linux"`` / ``"darwin"`` for supported platform ids, else None."""
    if platform_id.startswith("linux"):
        return "linux"
    if platform_id.startswith("darwin"):
        return "darwin"
    return None


def detect_platform(
    platform_id: str | None = None,
    which: Which = shutil.which,
) -> PlatformInfo:
    """Identify the host and select its package manager.

    Args:
        platform_id: Host identifier; defaults to ``sys.platform``.
        which: PATH lookup, injectable for tests.

    Raises:
        UnsupportedPlatformError: Not Linux and not macOS.
        MissingPackageManagerError: No known package manager on PATH.
    """
    platform_id = platform_id if platform_id is not None else sys.platform
    family = platform_family(platform_id)

    if family is None:
        raise UnsupportedPlatformError(f"Unsupported operating system: {platform_id}")

    priority = LINUX_PRIORITY if family == "linux" else DARWIN_PRIORITY
    for name in priority:
        pm = PACKAGE_MANAGERS[name]
        if which(pm.probe):
            logger.debug("Selected package manager %s (probe %s)", name, pm.probe)
            return PlatformInfo(
                platform_id=platform_id,
                family=family,
                package_manager=pm.model_copy(deep=True),
            )
        logger.debug("Package manager probe not found: %s", pm.probe)

    if family == "darwin":
        raise MissingPackageManagerError(
            "Homebrew not found. Please install it from https://brew.sh"
        )
    raise MissingPackageManagerError(
        "No supported package manager found (apt, yum, or dnf)"
    )


def detect_package_manager(
    platform_id: str | None = None,
    which: Which = shutil.which,
) -> PackageManager:
    """Shortcut for ``detect_platform(...).package_manager``."""
    return detect_platform(platform_id, which).package_manager
