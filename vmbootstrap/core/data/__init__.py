"""
Static data shipped with the package: install recipes and templates.

Usage::

    from vmbootstrap.core.data import load_template

    text = load_template("tasklog.md")
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent
_TEMPLATES_DIR = _DATA_DIR / "templates"


def load_template(name: str) -> str:
    """Read a bundled template by file name.

    Raises:
        FileNotFoundError: No template with that name is bundled.
    """
    path = _TEMPLATES_DIR / name
    if not path.is_file():
        raise FileNotFoundError(f"Template not found: {name}")
    logger.debug("Loading template %s", path)
    return path.read_text(encoding="utf-8")
