# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Domain models for scanpulse."""

from scanpulse.models.event import ScanEvent
from scanpulse.models.metrics import (
    AggregatedMetrics,
    AggregationResult,
    DisplayMetric,
    SourceFailure,
    ThreatBar,
)
from scanpulse.models.sources import (
    EngineStats,
    MalwareDbResponse,
    MalwareSample,
    ReputationResponse,
    ReputationResult,
    SourceResponses,
    VulnerabilityRecord,
    VulnerabilityResponse,
)

__all__ = [
    "AggregatedMetrics",
    "AggregationResult",
    "DisplayMetric",
    "EngineStats",
    "MalwareDbResponse",
    "MalwareSample",
    "ReputationResponse",
    "ReputationResult",
    "ScanEvent",
    "SourceFailure",
    "SourceResponses",
    "ThreatBar",
    "VulnerabilityRecord",
    "VulnerabilityResponse",
]
