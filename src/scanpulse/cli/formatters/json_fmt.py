# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""JSON output formatter."""

from __future__ import annotations

import json

from scanpulse.models.metrics import format_trend
from scanpulse.sdk import Dashboard


def format_json(dashboard: Dashboard) -> str:
    """Return the full dashboard as a formatted JSON string."""
    detections = dashboard.detection_trend
    data = {
        "result": dashboard.result.model_dump(mode="json", by_alias=True),
        "cards": [card.model_dump(mode="json") for card in dashboard.cards],
        "detectionTrend": {
            "currentCount": detections.current_count,
            "previousCount": detections.previous_count,
            "trend": detections.trend.percent,
            "trendSign": str(detections.trend.sign),
            "trendLabel": format_trend(detections.trend.percent, detections.trend.sign),
        },
    }
    return json.dumps(data, indent=2)
