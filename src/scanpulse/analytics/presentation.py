# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Turn aggregated metrics into display-ready metric cards."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from scanpulse.analytics.trends import compute_trend
from scanpulse.core.constants import MetricVariant
from scanpulse.models.event import parse_timestamp
from scanpulse.models.metrics import AggregatedMetrics, DisplayMetric


@dataclass(frozen=True, slots=True)
class _MetricSpec:
    field: str
    label: str
    variant: MetricVariant = MetricVariant.DEFAULT


# Card order on the dashboard.
METRIC_SPECS: tuple[_MetricSpec, ...] = (
    _MetricSpec("total_urls_scanned", "Web Resources Analyzed"),
    _MetricSpec("total_files_analyzed", "Files Scanned"),
    _MetricSpec("malicious_detections", "Security Threats", MetricVariant.DANGER),
    _MetricSpec("critical_cves", "Critical Issues", MetricVariant.WARNING),
)


def present(
    metrics: AggregatedMetrics,
    previous: AggregatedMetrics | None = None,
) -> list[DisplayMetric]:
    """Build one :class:`DisplayMetric` per counter.

    Trends are only computed when *previous* is given.  Variants are fixed
    per metric and do not depend on the trend direction.
    """
    cards: list[DisplayMetric] = []
    for spec in METRIC_SPECS:
        value: int = getattr(metrics, spec.field)
        trend = None
        sign = None
        if previous is not None:
            metric_trend = compute_trend(value, getattr(previous, spec.field))
            trend = metric_trend.percent
            sign = metric_trend.sign
        cards.append(
            DisplayMetric(
                key=spec.field,
                label=spec.label,
                value=value,
                variant=spec.variant,
                trend=trend,
                trend_sign=sign,
            )
        )
    return cards


def relative_time(timestamp: str, now: datetime | None = None) -> str:
    """Render how long ago *timestamp* was, for the activity feed."""
    current = now or datetime.now(UTC)
    if current.tzinfo is None:
        current = current.replace(tzinfo=UTC)
    seconds = int((current - parse_timestamp(timestamp)).total_seconds())

    if seconds < 60:
        return "Just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"
