# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

app = typer.Typer(
    name="scanpulse",
    help="Scan event aggregation for security dashboards",
    no_args_is_help=True,
)


class OutputFormat(StrEnum):
    CONSOLE = "console"
    JSON = "json"


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override SCANPULSE_LOG_LEVEL")
    ] = None,
) -> None:
    from scanpulse.core.config import get_settings
    from scanpulse.core.logging import setup_logging

    settings = get_settings()
    setup_logging(log_level or settings.log_level, settings.log_format)


@app.command()
def summary(
    snapshot: Annotated[
        Path | None,
        typer.Option(
            "--snapshot", "-s", help="Read upstream envelopes from a JSON snapshot file"
        ),
    ] = None,
    previous: Annotated[
        Path | None,
        typer.Option("--previous", "-p", help="JSON file with the previous window's metrics"),
    ] = None,
    fmt: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.CONSOLE,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (JSON format only)"),
    ] = None,
    feed_rows: Annotated[
        int, typer.Option("--feed-rows", help="Recent events to show")
    ] = 10,
) -> None:
    """Aggregate the three upstream sources and show the dashboard."""
    from scanpulse.core.exceptions import ConfigurationError
    from scanpulse.models.metrics import AggregatedMetrics
    from scanpulse.sdk import build_dashboard

    previous_metrics = None
    if previous is not None:
        try:
            previous_metrics = AggregatedMetrics.model_validate_json(
                previous.read_text(encoding="utf-8")
            )
        except (OSError, ValidationError) as exc:
            typer.echo(f"Error: cannot read previous metrics: {exc}", err=True)
            raise typer.Exit(code=2) from None

    try:
        dashboard = asyncio.run(build_dashboard(snapshot=snapshot, previous=previous_metrics))
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from None

    if fmt == OutputFormat.JSON:
        from scanpulse.cli.formatters.json_fmt import format_json

        text = format_json(dashboard)
        if output:
            output.write_text(text, encoding="utf-8")
            typer.echo(f"Dashboard written to {output}")
        else:
            typer.echo(text)
    else:
        from scanpulse.cli.formatters.console import format_dashboard

        format_dashboard(dashboard, feed_rows=feed_rows)

    if dashboard.result.no_data:
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """Start the scanpulse API server."""
    import uvicorn

    from scanpulse.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "scanpulse.api.app:create_app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from scanpulse import __version__

    typer.echo(f"scanpulse v{__version__}")
