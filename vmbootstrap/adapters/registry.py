"""
Adapter registry: the one dispatch point for external commands.

Installer, workspace and version probes build Actions and hand them
here. The registry finds the adapter, validates, runs and stamps the
wall-clock duration on the receipt. It never raises.
"""

from __future__ import annotations

import logging
import time

from vmbootstrap.adapters.base import Adapter, ExecutionContext
from vmbootstrap.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters keyed by name, plus ``execute_action`` dispatch."""

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    def register(self, adapter: Adapter) -> None:
        """Add ``adapter``; an adapter with the same name is replaced."""
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter %r", adapter.name)
        self._adapters[adapter.name] = adapter

    def execute_action(self, action: Action, working_dir: str = ".") -> Receipt:
        """Run ``action`` through its adapter.

        Args:
            action: What to run.
            working_dir: Directory the command runs in.

        Returns:
            The adapter's receipt, or a failed one if the adapter is
            unknown, rejects the action, or raises.
        """
        started = time.monotonic()

        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return self._reject(action, f"No adapter registered for '{action.adapter}'")

        context = ExecutionContext(action=action, working_dir=working_dir)

        try:
            valid, reason = adapter.validate(context)
        except Exception as e:
            return self._reject(action, f"Validation error: {e}")
        if not valid:
            return self._reject(action, f"Validation failed: {reason}")

        logger.debug("Dispatching %s %s (cwd=%s)", action.label, action.params, working_dir)
        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised on %s: %s", action.adapter, action.id, e)
            receipt = Receipt.failure(
                adapter=action.adapter, action_id=action.id, error=f"Unexpected error: {e}",
            )

        receipt.duration_ms = int((time.monotonic() - started) * 1000)
        if receipt.failed:
            logger.debug("%s failed after %dms: %s", action.label, receipt.duration_ms, receipt.error)
        return receipt

    @staticmethod
    def _reject(action: Action, error: str) -> Receipt:
        logger.debug("%s rejected: %s", action.label, error)
        return Receipt.failure(adapter=action.adapter, action_id=action.id, error=error)
