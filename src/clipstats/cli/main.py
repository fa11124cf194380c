"""
Main CLI entry point for clipstats.
"""

from __future__ import annotations

import asyncio
import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from clipstats import __version__
from clipstats.cli.commands.api import api_app
from clipstats.config.logging import configure_logging
from clipstats.config.settings import settings
from clipstats.exceptions import EXIT_CODE_INTERRUPTED, ExtractionError
from clipstats.models.enums import MetricField
from clipstats.models.metrics import ExtractionFailure, MetricResult
from clipstats.services.extraction import ExtractionService

console = Console()

app = typer.Typer(
    name="clipstats",
    help="Engagement metrics for short-form video pages",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(api_app, name="api", help="API server management commands")


def _result_table(result: MetricResult) -> Table:
    """Render a successful extraction as a rich table."""
    table = Table(title="Engagement metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_column("Shown as", style="dim")
    for field in MetricField:
        table.add_row(
            field.value, f"{result.count(field):,}", escape(result.raw[field])
        )
    return table


def _result_payload(result: MetricResult) -> dict[str, object]:
    """JSON payload matching the HTTP response body."""
    return {
        "likes": result.likes,
        "comments": result.comments,
        "favorites": result.favorites,
        "shares": result.shares,
        "raw": {field.value: result.raw[field] for field in MetricField},
    }


def _failure_payload(failure: ExtractionFailure) -> dict[str, object]:
    """JSON payload for a failed extraction."""
    return {
        "error": failure.message,
        "details": failure.details,
        "kind": failure.kind.value,
    }


@app.command()
def extract(
    url: str = typer.Argument(..., help="Video page URL to inspect"),
    as_json: bool = typer.Option(
        False, "--json", help="Print the result as JSON instead of a table"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Log each pipeline step to stderr"
    ),
) -> None:
    """
    Extract likes, comments, favorites and shares from a video page.

    Examples:
        clipstats extract https://www.tiktok.com/@user/video/7234567890
        clipstats extract https://www.tiktok.com/@user/video/7234567890 --json
    """
    configure_logging("DEBUG" if verbose else settings.log_level)

    service = ExtractionService(settings.extraction_config())
    if not as_json:
        console.print(f"[dim]Opening {escape(url)} ...[/dim]")

    try:
        outcome = asyncio.run(service.extract(url))
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted[/yellow]")
        raise typer.Exit(code=EXIT_CODE_INTERRUPTED)

    if isinstance(outcome, ExtractionFailure):
        error = ExtractionError(outcome)
        if as_json:
            console.print_json(json.dumps(_failure_payload(outcome)))
        else:
            console.print(
                Panel(
                    f"[red]{escape(outcome.message)}[/red]\n\n{escape(outcome.details)}",
                    title=f"Extraction failed ({outcome.kind.value})",
                    border_style="red",
                )
            )
        raise typer.Exit(code=error.exit_code)

    if as_json:
        console.print_json(json.dumps(_result_payload(outcome)))
    else:
        console.print(_result_table(outcome))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]clipstats[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
) -> None:
    """
    clipstats - Engagement metrics for short-form video pages.

    Opens a video page in a headless browser and reads its like, comment,
    favorite and share counters as integers.
    """
    if version:
        console.print(f"clipstats v{__version__}")
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        console.print("[yellow]Use 'clipstats --help' for available commands[/yellow]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
