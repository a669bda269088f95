# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output formatter for dashboards."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from scanpulse import __version__
from scanpulse.analytics.presentation import relative_time
from scanpulse.core.constants import MetricVariant, ScanStatus, TrendSign
from scanpulse.models.metrics import format_trend
from scanpulse.sdk import Dashboard

console = Console()

VARIANT_COLORS = {
    MetricVariant.DANGER: "bold red",
    MetricVariant.WARNING: "yellow",
    MetricVariant.DEFAULT: "white",
}

STATUS_COLORS = {
    ScanStatus.MALICIOUS: "bold red",
    ScanStatus.WARNING: "yellow",
    ScanStatus.CLEAN: "green",
}

TREND_COLORS = {
    TrendSign.UP: "green",
    TrendSign.DOWN: "red",
    TrendSign.FLAT: "dim",
    TrendSign.NO_PRIOR_DATA: "dim",
}


def format_dashboard(
    dashboard: Dashboard,
    *,
    feed_rows: int = 10,
    now: datetime | None = None,
    out: Console | None = None,
) -> None:
    """Print a dashboard to the console with Rich formatting."""
    out = out or console
    result = dashboard.result

    out.print()
    out.print(f"[bold]scanpulse v{__version__}[/bold] - Security Dashboard")
    out.print()

    if result.no_data:
        out.print(Panel("[bold red]No data: all upstream sources failed[/bold red]", style="red"))
        for failure in result.failures:
            out.print(f"  {failure.source}: {escape(failure.reason)}", style="dim")
        return

    if result.partial:
        lines = [f"{f.source}: {escape(f.reason)}" for f in result.failures]
        out.print(
            Panel(
                "[yellow]Partial data[/yellow]\n" + "\n".join(lines),
                style="yellow",
            )
        )
        out.print()

    # Metric cards
    metrics_table = Table(title="Metrics", title_justify="left")
    metrics_table.add_column("Metric")
    metrics_table.add_column("Value", justify="right")
    metrics_table.add_column("Trend", justify="right")
    for card in dashboard.cards:
        color = VARIANT_COLORS.get(card.variant, "white")
        trend = ""
        if card.trend_sign is not None:
            trend_color = TREND_COLORS[card.trend_sign]
            trend = f"[{trend_color}]{card.trend_label}[/{trend_color}]"
        metrics_table.add_row(f"[{color}]{card.label}[/{color}]", f"{card.value:,}", trend)
    out.print(metrics_table)
    out.print()

    # Threat analysis
    threat_table = Table(title="Threat Analysis", title_justify="left")
    threat_table.add_column("Category")
    threat_table.add_column("Label", style="dim")
    threat_table.add_column("Count", justify="right")
    for bar in result.threat_breakdown:
        threat_table.add_row(bar.name, bar.label, str(bar.value))
    out.print(threat_table)

    detections = dashboard.detection_trend
    trend_color = TREND_COLORS[detections.trend.sign]
    out.print(
        f"Detections: {detections.current_count:,} this period, "
        f"{detections.previous_count:,} previous "
        f"([{trend_color}]{format_trend(detections.trend.percent, detections.trend.sign)}"
        f"[/{trend_color}])"
    )
    out.print()

    # Recent activity
    if result.feed:
        feed_table = Table(title="Recent Activity", title_justify="left")
        feed_table.add_column("When", style="dim")
        feed_table.add_column("Type")
        feed_table.add_column("Source")
        feed_table.add_column("Status")
        feed_table.add_column("Details")
        for event in result.feed[:feed_rows]:
            color = STATUS_COLORS.get(event.status, "white")
            feed_table.add_row(
                relative_time(event.timestamp, now),
                event.type,
                event.source,
                f"[{color}]{event.status}[/{color}]",
                escape(event.details[:80]),
            )
        out.print(feed_table)
    else:
        out.print("[dim]No recent activity.[/dim]")

    if result.skipped_records:
        out.print(f"[dim]{result.skipped_records} malformed record(s) skipped[/dim]")
