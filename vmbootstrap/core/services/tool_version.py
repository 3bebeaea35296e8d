"""
Tool version probing and parsing.

Probes go through the adapter registry; parsing is pure string work
on whatever the tool printed.
"""

from __future__ import annotations

import logging
import re

from vmbootstrap.adapters.registry import AdapterRegistry
from vmbootstrap.core.models.action import Action

logger = logging.getLogger(__name__)

# tool → (adapter, operation) that prints its version
VERSION_PROBES: dict[str, tuple[str, str]] = {
    "node": ("node", "version"),        # v20.11.0
    "npm": ("node", "npm_version"),     # 10.2.4
    "git": ("git", "version"),          # git version 2.43.0
}

_MAJOR_RE = re.compile(r"^\s*v?(\d+)")


def parse_major_version(output: str | None) -> int | None:
    """Leading major number of a version string.

    ``"v20.11.0"`` → ``20``, ``"18"`` → ``18``, garbage → ``None``.
    """
    if not output:
        return None
    match = _MAJOR_RE.match(output)
    return int(match.group(1)) if match else None

def meets_minimum(major: int | None, minimum: int) -> bool:
    """Whether a parsed major version satisfies ``>= minimum``."""
    return major is not None and major >= minimum

def get_tool_version(
    registry: AdapterRegistry,
    tool: str,
    working_dir: str = ".",
) -> str | None:
    """Raw version output of ``tool``, or None if it can't be read.

    Returns the tool's own text unmodified (``v20.11.0``,
    ``git version 2.43.0``); callers parse it if they need to.
    """
    adapter, operation = VERSION_PROBES[tool]
    receipt = registry.execute_action(
        Action(id=f"version-{tool}", adapter=adapter, params={"operation": operation}),
        working_dir=working_dir,
    )
    if not receipt.ok:
        logger.debug("Version probe for %s failed: %s", tool, receipt.error)
        return None
    return receipt.output.strip() or None
