"""
Shared test fixtures: a scripted host for setup runs.

``FakeHost`` stands in for the machine: a set of binaries on PATH,
mock adapters for the package manager, node and git, and recorders for
the final chdir/exec. Install actions put binaries on PATH the way a
real install would.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from vmbootstrap.adapters.base import ExecutionContext
from vmbootstrap.adapters.mock import MockAdapter
from vmbootstrap.adapters.registry import AdapterRegistry
from vmbootstrap.core.observability.reporter import StatusReporter


class RecordingReporter(StatusReporter):
    """Keeps every status line as a ``(kind, message)`` pair."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def emit(self, kind: str, message: str) -> None:
        self.lines.append((kind, message))

    def messages(self, kind: str) -> list[str]:
        return [m for k, m in self.lines if k == kind]


class FakeHost:
    """Scripted machine for setup and installer tests."""

    def __init__(
        self,
        binaries: set[str] | None = None,
        node_version: str = "v20.11.0",
        installed_node_version: str = "v20.11.0",
    ):
        self.binaries: set[str] = set(binaries or set())
        self.node_version = node_version
        self.installed_node_version = installed_node_version
        self.npm_version = "10.2.4"
        self.git_version = "git version 2.43.0"
        self.provides: dict[str, set[str]] = {
            "install-node": {"node", "npm"},
            "install-git": {"git"},
            "install-cli": {"claude"},
        }

        self.actions: list[str] = []
        self.exec_calls: list[tuple[str, list[str]]] = []
        self.chdir_calls: list[Path] = []

        self.package = MockAdapter("package", on_execute=self._on_execute)
        self.node = MockAdapter("node", on_execute=self._on_execute)
        self.git = MockAdapter("git", on_execute=self._on_execute)

        self.registry = AdapterRegistry()
        for adapter in (self.package, self.node, self.git):
            self.registry.register(adapter)

    # ── Host behaviour ──────────────────────────────────────────

    def which(self, name: str) -> str | None:
        return f"/usr/bin/{name}" if name in self.binaries else None

    def exec_fn(self, command: str, argv: list[str]) -> None:
        self.exec_calls.append((command, argv))

    def chdir(self, path: Path) -> None:
        self.chdir_calls.append(path)

    def _on_execute(self, ctx: ExecutionContext) -> None:
        action_id = ctx.action.id
        self.actions.append(action_id)

        self.binaries |= self.provides.get(action_id, set())
        if action_id == "install-node":
            self.node_version = self.installed_node_version

        self.node.set_output("version-node", self.node_version)
        self.node.set_output("version-npm", self.npm_version)
        self.git.set_output("version-git", self.git_version)

    # ── Helpers for assertions ──────────────────────────────────

    @property
    def install_steps(self) -> list[str]:
        return [a for a in self.actions if a.startswith("install-")]


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def bare_host() -> FakeHost:
    """Linux box with apt and nothing else."""
    return FakeHost(binaries={"apt-get"})


@pytest.fixture
def ready_host() -> FakeHost:
    """Linux box with apt, a recent node, npm, git and the CLI tool."""
    return FakeHost(binaries={"apt-get", "node", "npm", "git", "claude"})


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's VMB_* variables out of the tests."""
    for var in ("VMB_CONFIG", "VMB_LOG_LEVEL", "VMB_LOG_FILE", "VMB_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_host():
    """Factory for hosts with a custom starting state."""
    return FakeHost
