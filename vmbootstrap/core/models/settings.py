"""
Bootstrap settings: the compiled-in configuration of a setup run.

Every field has a default, so a run needs no config file at all.
A YAML file passed with ``--config`` can override individual fields.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_REPO_URL = "https://github.com/danielchae/backpack-test"
DEFAULT_MIN_NODE_VERSION = 18
DEFAULT_CLI_PACKAGE = "@anthropic-ai/claude-code"
DEFAULT_CLI_COMMAND = "claude"
DEFAULT_CLI_LABEL = "Claude Code"
DEFAULT_WORKSPACE_PREFIX = "claude_workspace"


class BootstrapSettings(BaseModel):
    """What to install, what to clone and what to launch."""

    repo_url: str = DEFAULT_REPO_URL
    min_node_version: int = Field(default=DEFAULT_MIN_NODE_VERSION, ge=1)
    cli_package: str = DEFAULT_CLI_PACKAGE
    cli_command: str = DEFAULT_CLI_COMMAND
    cli_label: str = DEFAULT_CLI_LABEL         # name used in status lines
    workspace_prefix: str = DEFAULT_WORKSPACE_PREFIX

    @field_validator("repo_url", "cli_package", "cli_command", "cli_label", "workspace_prefix")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()
