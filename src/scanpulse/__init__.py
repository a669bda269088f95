# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""scanpulse - Scan event aggregation for security dashboards."""

__version__ = "0.1.0"

from scanpulse.analytics.aggregator import aggregate
from scanpulse.analytics.presentation import present
from scanpulse.scanner.normalizer import normalize
from scanpulse.scanner.severity import classify
from scanpulse.sdk import Dashboard, build_dashboard, build_dashboard_sync

__all__ = [
    "Dashboard",
    "__version__",
    "aggregate",
    "build_dashboard",
    "build_dashboard_sync",
    "classify",
    "normalize",
    "present",
]
