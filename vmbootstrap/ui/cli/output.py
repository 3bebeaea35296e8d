"""
Console output for the CLI: colored, labeled status lines.
"""

from __future__ import annotations

import click

from vmbootstrap.core.observability.reporter import StatusReporter

BANNER_RULE = "=" * 35

_LABELS: dict[str, tuple[str, str]] = {
    "info": ("[INFO]", "blue"),
    "success": ("[SUCCESS]", "green"),
    "warning": ("[WARNING]", "yellow"),
    "error": ("[ERROR]", "red"),
}


class ConsoleReporter(StatusReporter):
    """Writes each status line to the terminal with a colored label."""

    def emit(self, kind: str, message: str) -> None:
        if kind == "banner":
            click.echo()
            click.echo(BANNER_RULE)
            click.echo(message)
            click.echo(BANNER_RULE)
            click.echo()
            return

        label, color = _LABELS.get(kind, ("[INFO]", "blue"))
        click.secho(label, fg=color, nl=False)
        click.echo(f" {message}")
