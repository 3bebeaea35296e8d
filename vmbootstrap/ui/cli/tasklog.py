"""
CLI command for the task-log template.

Thin wrapper over ``vmbootstrap.core.services.tasklog``.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from vmbootstrap.core.services.tasklog import DEFAULT_TASKLOG_NAME


@click.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path),
                default=DEFAULT_TASKLOG_NAME)
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def tasklog(path: Path, force: bool) -> None:
    """Write the task-log template (default: TASKS.md)."""
    from vmbootstrap.core.services.tasklog import write_tasklog

    try:
        written = write_tasklog(path, force=force)
    except FileExistsError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.secho(f"✅ Task log written to {written}", fg="green")
