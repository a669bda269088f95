# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Public SDK interface for embedding scanpulse in other tools.

Usage::

    from scanpulse import build_dashboard_sync

    # Live sources configured through SCANPULSE_* environment variables
    dashboard = build_dashboard_sync()
    print(dashboard.result.metrics, dashboard.result.partial)

    # From a snapshot file
    dashboard = await build_dashboard(snapshot="dashboard.json")
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from scanpulse.analytics.aggregator import aggregate
from scanpulse.analytics.presentation import present
from scanpulse.analytics.trends import PeriodComparison, compare_detection_periods
from scanpulse.core.config import Settings, get_settings
from scanpulse.ingestion.collector import collect
from scanpulse.ingestion.sources import (
    UpstreamSource,
    sources_from_settings,
    sources_from_snapshot,
)
from scanpulse.models.metrics import AggregatedMetrics, AggregationResult, DisplayMetric
from scanpulse.scanner.normalizer import Clock

logger = logging.getLogger("scanpulse.sdk")


@dataclass(frozen=True, slots=True)
class Dashboard:
    """Everything a dashboard page needs for one reporting window."""

    result: AggregationResult
    cards: list[DisplayMetric]
    detection_trend: PeriodComparison = field(default_factory=PeriodComparison)


def _resolve_sources(
    *,
    settings: Settings,
    snapshot: str | Path | None,
    sources: list[UpstreamSource] | None,
) -> list[UpstreamSource]:
    if sources is not None:
        return sources
    if snapshot is not None:
        return sources_from_snapshot(snapshot)
    return sources_from_settings(settings)


# ---------------------------------------------------------------------------
# Public async API
# ---------------------------------------------------------------------------


async def build_dashboard(
    *,
    settings: Settings | None = None,
    snapshot: str | Path | None = None,
    sources: list[UpstreamSource] | None = None,
    previous: AggregatedMetrics | None = None,
    clock: Clock | None = None,
) -> Dashboard:
    """Collect, aggregate and present one dashboard.

    Parameters
    ----------
    settings:
        Optional ``Settings`` override; falls back to ``get_settings()``.
        API keys and endpoints are read from here, never from globals.
    snapshot:
        Read envelopes from this JSON snapshot instead of live endpoints.
    sources:
        Explicit source list; overrides *snapshot* and *settings* URLs.
    previous:
        Metrics of the preceding window, used for trend percentages.
    clock:
        Timestamp provider for records without one.
    """
    settings = settings or get_settings()
    upstream = _resolve_sources(settings=settings, snapshot=snapshot, sources=sources)

    collected = await collect(upstream)
    result = aggregate(
        collected.responses,
        clock=clock,
        feed_limit=settings.feed_size or None,
        fetch_errors=collected.errors,
    )
    if result.partial:
        logger.warning(
            "Partial dashboard: %s unavailable",
            ", ".join(str(s) for s in result.missing_sources),
        )
    return Dashboard(
        result=result,
        cards=present(result.metrics, previous),
        detection_trend=compare_detection_periods(
            result.detection_rates,
            period_days=settings.trend_period_days,
            reference_time=clock() if clock else None,
        ),
    )


# ---------------------------------------------------------------------------
# Public sync API
# ---------------------------------------------------------------------------


def build_dashboard_sync(
    *,
    settings: Settings | None = None,
    snapshot: str | Path | None = None,
    sources: list[UpstreamSource] | None = None,
    previous: AggregatedMetrics | None = None,
    clock: Clock | None = None,
) -> Dashboard:
    """Blocking wrapper around :func:`build_dashboard`."""
    return asyncio.run(
        build_dashboard(
            settings=settings,
            snapshot=snapshot,
            sources=sources,
            previous=previous,
            clock=clock,
        )
    )
