"""
Adapter base: the protocol between setup steps and host tools.

Setup steps never call package managers, npm or git directly; they
hand an Action to the registry, which routes it to the adapter named
in ``action.adapter``.

A concrete adapter declares its ``operations`` (operation name →
params that operation requires) and implements one ``_op_<name>``
method per operation. Validation and dispatch come from the base.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel

from vmbootstrap.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """An action plus the directory its command runs in."""

    action: Action
    working_dir: str = "."

    @property
    def operation(self) -> str:
        return self.action.params.get("operation", "")


class Adapter(ABC):
    """One host tool driven through Actions.

    ``execute`` never raises. Whatever an ``_op_*`` method throws is
    turned into a failed Receipt via ``describe_error``.
    """

    operations: ClassVar[dict[str, tuple[str, ...]]] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key, matched against ``Action.adapter``."""

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Check the operation is known and its required params are set."""
        operation = context.operation
        if operation not in self.operations:
            valid = ", ".join(sorted(self.operations))
            return False, f"Unknown operation '{operation}'. Valid: {valid}"

        for param in self.operations[operation]:
            if not context.action.params.get(param):
                return False, f"Missing required param: '{param}' for {operation} operation"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        handler = getattr(self, f"_op_{context.operation}", None)
        if context.operation not in self.operations or handler is None:
            return self.failed(context, f"Unknown operation: {context.operation}")
        try:
            return handler(context)
        except Exception as e:
            return self.failed(context, self.describe_error(e))

    def describe_error(self, error: Exception) -> str:
        """Receipt error text for an exception raised by an operation."""
        return f"{self.name} error: {error}"

    # ── Receipt helpers ─────────────────────────────────────────

    def succeeded(self, context: ExecutionContext, output: str = "", **kwargs: Any) -> Receipt:
        return Receipt.success(
            adapter=self.name, action_id=context.action.id, output=output, **kwargs,
        )

    def failed(self, context: ExecutionContext, error: str, **kwargs: Any) -> Receipt:
        return Receipt.failure(
            adapter=self.name, action_id=context.action.id, error=error, **kwargs,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
