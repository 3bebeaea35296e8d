"""
Mock adapter: test double that stands in for any real adapter.

Returns success by default, can be told to fail or return custom
output per action ID, and can run a callback on every execution so a
test can simulate the host changing (e.g. ``node`` appearing on PATH
after an install).
"""

from __future__ import annotations

from typing import Callable

from vmbootstrap.adapters.base import Adapter, ExecutionContext
from vmbootstrap.core.models.action import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing."""

    def __init__(
        self,
        adapter_name: str = "mock",
        default_output: str = "[mock] executed",
        on_execute: Callable[[ExecutionContext], None] | None = None,
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._on_execute = on_execute
        self._responses: dict[str, Receipt] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_for(self, action_id: str) -> list[ExecutionContext]:
        """Execution contexts received for one action ID."""
        return [c for c in self._call_log if c.action.id == action_id]

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific action ID."""
        self._responses[action_id] = receipt

    def set_output(self, action_id: str, output: str) -> None:
        """Succeed with the given output for a specific action ID."""
        self._responses[action_id] = Receipt.success(
            adapter=self._name,
            action_id=action_id,
            output=output,
        )

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Configure a specific action to fail."""
        self._responses[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)
        if self._on_execute is not None:
            self._on_execute(context)

        if context.action.id in self._responses:
            return self._responses[context.action.id].model_copy()

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
