"""
Action and Receipt models: the contract between setup steps and adapters.

A setup step describes the external command it needs as an Action.
The adapter that owns that kind of command runs it and hands back a
Receipt. Adapters report failures in the Receipt, they never raise.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

ReceiptStatus = Literal["ok", "failed"]


class Action(BaseModel):
    """One external operation requested by a setup step.

    ``adapter`` names the adapter that runs it (``package``, ``node``
    or ``git``); ``params`` carries ``operation`` plus whatever that
    operation needs.
    """

    id: str                         # e.g. "install-node", "clone"
    name: str = ""
    adapter: str
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def label(self) -> str:
        """``adapter:id`` for log lines."""
        return f"{self.adapter}:{self.id}"


class Receipt(BaseModel):
    """Outcome of one adapter execution.

    ``output`` holds captured stdout for probes (``v20.11.0``) and is
    empty for commands that write straight to the terminal.
    ``metadata`` keeps the command line and return code when known.
    """

    adapter: str
    action_id: str
    status: ReceiptStatus = "ok"
    finished_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: int = 0
    output: str = ""
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs)
