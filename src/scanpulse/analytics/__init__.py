# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard analytics — aggregation, trends, presentation."""

from scanpulse.analytics.aggregator import aggregate, compute_metrics
from scanpulse.analytics.presentation import present, relative_time
from scanpulse.analytics.trends import MetricTrend, compute_trend

__all__ = [
    "MetricTrend",
    "aggregate",
    "compute_metrics",
    "compute_trend",
    "present",
    "relative_time",
]
