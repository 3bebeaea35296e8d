"""
Bootstrap error taxonomy.

Every error here is fatal for the run: services raise it, the CLI
prints it as an ``[ERROR]`` line and exits 1. Nothing is retried.
"""

from __future__ import annotations


class BootstrapError(Exception):
    """Base class for every fatal setup failure.

    ``hints`` are extra lines shown after the error message, e.g. the
    manual command the user can try.
    """

    def __init__(self, message: str, hints: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.hints = list(hints or [])


class UnsupportedPlatformError(BootstrapError):
    """Host is neither Linux nor macOS."""


class MissingPackageManagerError(BootstrapError):
    """No supported package manager found on a supported platform."""


class InstallError(BootstrapError):
    """An install attempt finished but the tool is still unavailable."""

    def __init__(self, tool: str, message: str, hints: list[str] | None = None):
        super().__init__(message, hints)
        self.tool = tool


class VersionTooLowError(BootstrapError):
    """The runtime is installed but still older than the required major."""

    def __init__(self, tool: str, found: int | None, required: int):
        found_label = str(found) if found is not None else "unknown"
        super().__init__(
            f"Failed to install {tool} with required version "
            f"(found {found_label}, need >={required})"
        )
        self.tool = tool
        self.found = found
        self.required = required


class CloneError(BootstrapError):
    """git clone of the workspace repository failed."""


class LaunchError(BootstrapError):
    """The interactive CLI could not be started."""
