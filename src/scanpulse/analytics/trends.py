# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Period-over-period trend arithmetic for dashboard metrics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from scanpulse.core.constants import TrendSign
from scanpulse.models.sources import DetectionRate


@dataclass(frozen=True, slots=True)
class MetricTrend:
    """Percentage change of one metric against the previous window.

    ``percent`` is ``None`` exactly when ``sign`` is ``NO_PRIOR_DATA``.
    """

    percent: float | None
    sign: TrendSign


def compute_trend(current: int, previous: int) -> MetricTrend:
    """Return ``(current - previous) / previous * 100`` rounded to 2 places.

    A zero previous value has no meaningful ratio and yields
    ``TrendSign.NO_PRIOR_DATA`` instead of ``inf`` or ``nan``.
    """
    if previous == 0:
        return MetricTrend(percent=None, sign=TrendSign.NO_PRIOR_DATA)

    percent = round(((current - previous) / previous) * 100, 2)
    if percent > 0:
        sign = TrendSign.UP
    elif percent < 0:
        sign = TrendSign.DOWN
    else:
        sign = TrendSign.FLAT
    return MetricTrend(percent=percent, sign=sign)


@dataclass(frozen=True, slots=True)
class PeriodComparison:
    """Detection totals for the current and the preceding period."""

    current_count: int = 0
    previous_count: int = 0
    trend: MetricTrend = MetricTrend(percent=None, sign=TrendSign.NO_PRIOR_DATA)


def compare_detection_periods(
    rates: list[DetectionRate],
    period_days: int = 7,
    reference_time: datetime | None = None,
) -> PeriodComparison:
    """Compare detections in the last *period_days* against the period before.

    Parameters
    ----------
    rates:
        Daily detection counts as reported by the reputation service.
    period_days:
        Length of each period in days (default 7 = weekly).
    reference_time:
        End of the current period.  Defaults to ``now(UTC)``.
    """
    now = reference_time or datetime.now(UTC)
    current_start = now - timedelta(days=period_days)
    previous_start = current_start - timedelta(days=period_days)

    current_count = 0
    previous_count = 0
    for rate in rates:
        when = rate.date if rate.date.tzinfo else rate.date.replace(tzinfo=UTC)
        if current_start <= when <= now:
            current_count += rate.detections
        elif previous_start <= when < current_start:
            previous_count += rate.detections

    return PeriodComparison(
        current_count=current_count,
        previous_count=previous_count,
        trend=compute_trend(current_count, previous_count),
    )
