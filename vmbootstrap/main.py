"""
vm-bootstrap: CLI entrypoint.

Usage:
    vmbootstrap                 # full setup, then launch the CLI tool
    vmbootstrap detect --json
    vmbootstrap tasklog NOTES.md
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from vmbootstrap import __version__
from vmbootstrap.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    LOG_LEVEL_ENV,
    resolve_level,
    setup_logging,
)

if TYPE_CHECKING:
    from vmbootstrap.core.models.settings import BootstrapSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="vmbootstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to a bootstrap YAML file (default: built-in settings).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """vm-bootstrap: set up this machine and start a coding session.

    Run without a command to perform the full setup.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get(LOG_LEVEL_ENV),
        ),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(setup)


def _load_settings_or_exit(ctx: click.Context) -> BootstrapSettings:
    """Load settings; print the config error and exit 1 on failure."""
    from vmbootstrap.core.config.loader import ConfigError, load_settings

    try:
        return load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        from vmbootstrap.ui.cli.output import ConsoleReporter

        ConsoleReporter().error(str(e))
        sys.exit(1)


@cli.command()
@click.pass_context
def setup(ctx: click.Context) -> None:
    """Install dependencies, clone the repository and launch the CLI tool."""
    from vmbootstrap.core.errors import BootstrapError
    from vmbootstrap.core.use_cases.setup import run_setup
    from vmbootstrap.ui.cli.output import ConsoleReporter

    settings = _load_settings_or_exit(ctx)
    reporter = ConsoleReporter()
    reporter.banner(f"{settings.cli_label} VM Setup")

    try:
        run_setup(settings, reporter)
    except BootstrapError as e:
        reporter.error(e.message)
        for hint in e.hints:
            reporter.error(hint)
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Show platform, package manager and dependency status (read-only)."""
    from vmbootstrap.core.use_cases.detect import run_detect

    settings = _load_settings_or_exit(ctx)
    result = run_detect(settings)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
    else:
        assert result.platform is not None  # set whenever error is None
        click.secho(f"\n🖥️  {result.platform.platform_id}", fg="cyan", bold=True)
        click.echo(f"   Package manager: {result.platform.package_manager.name}")

    click.echo()
    click.secho("   Dependencies:", fg="white", bold=True)
    for tool in result.tools:
        icon = "✅" if tool.ok else ("⚠️" if tool.installed else "❌")
        version = f" {tool.version}" if tool.version else ""
        click.echo(f"     {icon} {tool.cli}{version}")

    if result.tools and not result.ready and not result.error:
        click.echo()
        click.secho("   Run 'vmbootstrap setup' to install what is missing.", fg="yellow")
    click.echo()

    if result.error:
        sys.exit(1)


# ── Register sub-commands from vmbootstrap/ui/cli/ ────────────────

from vmbootstrap.ui.cli.tasklog import tasklog  # noqa: E402

cli.add_command(tasklog)


def main() -> None:
    """Console-script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
