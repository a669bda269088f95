# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Upstream source collection."""

from scanpulse.ingestion.collector import CollectionResult, collect
from scanpulse.ingestion.sources import (
    HttpSummarySource,
    JsonSnapshotSource,
    UpstreamSource,
    sources_from_settings,
    sources_from_snapshot,
)

__all__ = [
    "CollectionResult",
    "HttpSummarySource",
    "JsonSnapshotSource",
    "UpstreamSource",
    "collect",
    "sources_from_settings",
    "sources_from_snapshot",
]
