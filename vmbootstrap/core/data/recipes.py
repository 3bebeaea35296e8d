"""
Install recipes for the system-level dependencies.

One entry per tool the bootstrap may install through the host package
manager. The interactive CLI tool is not here: it comes from npm and
its package name lives in ``BootstrapSettings``.

Recipe fields:
    label       Display name used in status lines.
    requires    Every binary that must be on PATH after an install.
    packages    Package manager → package names to install.
    setup_repo  Package manager → vendor setup script run before the
                install (adds the vendor's package repository).
"""

from __future__ import annotations

NODESOURCE_DEB_SETUP = "https://deb.nodesource.com/setup_lts.x"
NODESOURCE_RPM_SETUP = "https://rpm.nodesource.com/setup_lts.x"

TOOL_RECIPES: dict[str, dict] = {
    "node": {
        "label": "Node.js",
        "requires": ["node", "npm"],
        "packages": {
            "apt": ["nodejs"],
            "yum": ["nodejs"],
            "dnf": ["nodejs"],
            "brew": ["node"],
        },
        "setup_repo": {
            # -E keeps the caller's proxy settings for the NodeSource script
            "apt": {"url": NODESOURCE_DEB_SETUP, "preserve_env": True},
            "yum": {"url": NODESOURCE_RPM_SETUP, "preserve_env": False},
            "dnf": {"url": NODESOURCE_RPM_SETUP, "preserve_env": False},
        },
    },
    "git": {
        "label": "Git",
        "requires": ["git"],
        "packages": {
            "apt": ["git"],
            "yum": ["git"],
            "dnf": ["git"],
            "brew": ["git"],
        },
        "setup_repo": {},
    },
}


def get_recipe(tool: str) -> dict:
    """Recipe for ``tool``; KeyError for tools the bootstrap doesn't install."""
    return TOOL_RECIPES[tool]
