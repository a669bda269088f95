# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Aggregated metrics, aggregation results, and display records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from scanpulse.core.constants import DataSource, MetricVariant, TrendSign
from scanpulse.models.event import ScanEvent
from scanpulse.models.sources import DetectionRate, SeverityDistribution, SignatureMatch


class AggregatedMetrics(BaseModel):
    """Dashboard counters for one reporting window."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    total_urls_scanned: int = Field(default=0, ge=0, alias="totalUrlsScanned")
    total_files_analyzed: int = Field(default=0, ge=0, alias="totalFilesAnalyzed")
    malicious_detections: int = Field(default=0, ge=0, alias="maliciousDetections")
    critical_cves: int = Field(default=0, ge=0, alias="criticalCVEs")


class SourceFailure(BaseModel):
    """Why a source contributed nothing to an aggregation."""

    model_config = ConfigDict(frozen=True)

    source: DataSource
    reason: str


class ThreatBar(BaseModel):
    """One bar of the threat analysis chart."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    value: int


class AggregationResult(BaseModel):
    """Output of :func:`scanpulse.analytics.aggregator.aggregate`."""

    metrics: AggregatedMetrics = Field(default_factory=AggregatedMetrics)
    feed: list[ScanEvent] = Field(default_factory=list)
    failures: list[SourceFailure] = Field(default_factory=list)
    skipped_records: int = 0
    threat_breakdown: list[ThreatBar] = Field(default_factory=list)
    severity_distribution: SeverityDistribution = Field(default_factory=SeverityDistribution)
    top_signatures: list[SignatureMatch] = Field(default_factory=list)
    detection_rates: list[DetectionRate] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def partial(self) -> bool:
        return bool(self.failures)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def no_data(self) -> bool:
        return len(self.failures) >= len(DataSource)

    @property
    def missing_sources(self) -> list[DataSource]:
        return [f.source for f in self.failures]


class DisplayMetric(BaseModel):
    """Display-ready record for one dashboard metric card."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    value: int
    variant: MetricVariant = MetricVariant.DEFAULT
    trend: float | None = None
    trend_sign: TrendSign | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def trend_label(self) -> str | None:
        if self.trend_sign is None:
            return None
        return format_trend(self.trend, self.trend_sign)


def format_trend(percent: float | None, sign: TrendSign) -> str:
    """Render a trend percentage as ``+12.5%``, ``-3%``, ``0%`` or ``no prior data``."""
    if sign == TrendSign.NO_PRIOR_DATA or percent is None:
        return "no prior data"
    if percent == 0:
        return "0%"
    # Fixed point so large changes never switch to exponent notation.
    text = f"{percent:+.2f}".rstrip("0").rstrip(".")
    return f"{text}%"
