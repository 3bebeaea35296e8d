"""
Status reporter: the labeled progress lines of a setup run.

Services report progress through a ``StatusReporter`` instead of
printing. The base class only logs; the CLI swaps in a console
reporter that also writes colored ``[INFO]`` / ``[SUCCESS]`` /
``[WARNING]`` / ``[ERROR]`` lines.

Status lines are logged at INFO whatever their kind, so the default
WARNING console level never shows a line twice.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class StatusReporter:
    """Log-only reporter. Subclass and override ``emit`` to display."""

    def info(self, message: str) -> None:
        self._record("info", message)

    def success(self, message: str) -> None:
        self._record("success", message)

    def warning(self, message: str) -> None:
        self._record("warning", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def banner(self, title: str) -> None:
        """Section heading (setup start / setup complete)."""
        self._record("banner", title)

    def emit(self, kind: str, message: str) -> None:
        """Display hook; no-op here."""

    def _record(self, kind: str, message: str) -> None:
        logger.info("[%s] %s", kind.upper(), message)
        self.emit(kind, message)
