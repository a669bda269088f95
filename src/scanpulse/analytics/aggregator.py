# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Aggregation engine — folds upstream envelopes into dashboard metrics and a feed."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ValidationError

from scanpulse.core.constants import SOURCE_ORDER, DataSource
from scanpulse.core.exceptions import NormalizationError
from scanpulse.models.event import ScanEvent
from scanpulse.models.metrics import (
    AggregatedMetrics,
    AggregationResult,
    SourceFailure,
    ThreatBar,
)
from scanpulse.models.sources import (
    RESPONSE_KEYS,
    DetectionRate,
    MalwareDbResponse,
    ReputationResponse,
    SeverityDistribution,
    SourceResponses,
    VulnerabilityResponse,
)
from scanpulse.scanner.normalizer import Clock, normalize

logger = logging.getLogger("scanpulse.analytics.aggregator")


@dataclass(frozen=True, slots=True)
class _Slot:
    """Where one source's envelope lives and how to read its recent records."""

    key: str
    model: type[BaseModel]
    records_attr: str


_SLOTS: dict[DataSource, _Slot] = {
    DataSource.VIRUSTOTAL: _Slot(
        RESPONSE_KEYS[DataSource.VIRUSTOTAL], ReputationResponse, "recent_scans"
    ),
    DataSource.NVD: _Slot(
        RESPONSE_KEYS[DataSource.NVD], VulnerabilityResponse, "recent_cves"
    ),
    DataSource.MALWARE_BAZAAR: _Slot(
        RESPONSE_KEYS[DataSource.MALWARE_BAZAAR], MalwareDbResponse, "recent_files"
    ),
}

_KEY_ALIASES = {"malwareDb": "malware_db"}


def aggregate(
    responses: SourceResponses | Mapping[str, object],
    *,
    clock: Clock | None = None,
    feed_limit: int | None = None,
    fetch_errors: Mapping[DataSource, str] | None = None,
) -> AggregationResult:
    """Fold the three upstream envelopes into an :class:`AggregationResult`.

    Counters come from the source-reported totals and distributions; the
    feed holds every normalizable recent record, newest first, with ties
    kept in source order (reputation, vulnerability, malware database).

    A missing or malformed envelope never raises: the source is zero-filled
    and listed in ``failures``.  Individual bad records are skipped and
    counted in ``skipped_records``.  *fetch_errors* supplies the reason
    for sources the fetch layer could not retrieve.
    """
    raw_by_key = _slot_values(responses)
    fetch_errors = fetch_errors or {}

    envelopes: dict[DataSource, BaseModel] = {}
    failures: list[SourceFailure] = []
    for source in SOURCE_ORDER:
        slot = _SLOTS[source]
        envelope, reason = _validate_envelope(raw_by_key.get(slot.key), slot.model)
        if envelope is None:
            if reason == "missing" and source in fetch_errors:
                reason = fetch_errors[source]
            logger.warning("Source %s unavailable: %s", source, reason)
            failures.append(SourceFailure(source=source, reason=reason or "missing"))
        else:
            envelopes[source] = envelope

    events: list[ScanEvent] = []
    skipped = 0
    for source in SOURCE_ORDER:
        envelope = envelopes.get(source)
        if envelope is None:
            continue
        for record in getattr(envelope, _SLOTS[source].records_attr):
            try:
                events.append(normalize(record, source, clock=clock))
            except (NormalizationError, ValidationError) as exc:
                skipped += 1
                logger.warning("Skipping %s record: %s", source, exc)

    # sorted() is stable with reverse=True, so equal timestamps keep input order.
    feed = sorted(events, key=lambda e: e.occurred_at, reverse=True)
    if feed_limit is not None:
        feed = feed[:feed_limit]

    reputation: ReputationResponse | None = envelopes.get(DataSource.VIRUSTOTAL)  # type: ignore[assignment]
    vulnerability: VulnerabilityResponse | None = envelopes.get(DataSource.NVD)  # type: ignore[assignment]
    malware_db: MalwareDbResponse | None = envelopes.get(DataSource.MALWARE_BAZAAR)  # type: ignore[assignment]

    metrics = compute_metrics(reputation, vulnerability, malware_db)

    result = AggregationResult(
        metrics=metrics,
        feed=feed,
        failures=failures,
        skipped_records=skipped,
        threat_breakdown=_threat_breakdown(reputation, malware_db, metrics),
        severity_distribution=(
            vulnerability.severity_distribution if vulnerability else SeverityDistribution()
        ),
        top_signatures=(
            sorted(malware_db.signature_matches, key=lambda s: (-s.count, s.signature))
            if malware_db
            else []
        ),
        detection_rates=(
            sorted(reputation.detection_rates, key=_rate_date) if reputation else []
        ),
    )

    if result.no_data:
        logger.error("All upstream sources failed; returning empty dashboard")
    else:
        logger.info(
            "Aggregated %d events from %d source(s), %d skipped",
            len(events),
            len(envelopes),
            skipped,
        )
    return result


# ---------------------------------------------------------------------------
# Counters
# ---------------------------------------------------------------------------


def compute_metrics(
    reputation: ReputationResponse | None,
    vulnerability: VulnerabilityResponse | None,
    malware_db: MalwareDbResponse | None,
) -> AggregatedMetrics:
    """Compute counters from envelope totals; missing sources count as zero."""
    urls = reputation.url_scans if reputation else 0
    files = (reputation.file_scans if reputation else 0) + (
        malware_db.total_files if malware_db else 0
    )
    malicious = (reputation.malware_detections if reputation else 0) + (
        malicious_file_count(malware_db) if malware_db else 0
    )
    critical = vulnerability.severity_distribution.critical if vulnerability else 0

    return AggregatedMetrics(
        total_urls_scanned=urls,
        total_files_analyzed=files,
        malicious_detections=malicious,
        critical_cves=critical,
    )


def malicious_file_count(malware_db: MalwareDbResponse) -> int:
    """Reported malicious file total, else the sum of signature matches."""
    if malware_db.malicious_files is not None:
        return malware_db.malicious_files
    return sum(match.count for match in malware_db.signature_matches)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _slot_values(responses: SourceResponses | Mapping[str, object]) -> dict[str, object]:
    if isinstance(responses, SourceResponses):
        return {
            "reputation": responses.reputation,
            "vulnerability": responses.vulnerability,
            "malware_db": responses.malware_db,
        }
    if isinstance(responses, Mapping):
        return {_KEY_ALIASES.get(k, k): v for k, v in responses.items()}
    raise TypeError(
        f"responses must be SourceResponses or a mapping, got {type(responses).__name__}"
    )


def _validate_envelope(
    value: object, model: type[BaseModel]
) -> tuple[BaseModel | None, str | None]:
    if value is None:
        return None, "missing"
    if isinstance(value, model):
        return value, None
    if isinstance(value, Mapping):
        try:
            return model.model_validate(value), None
        except ValidationError as exc:
            return None, f"malformed response ({exc.error_count()} validation error(s))"
    return None, f"malformed response (unexpected {type(value).__name__})"


def _threat_breakdown(
    reputation: ReputationResponse | None,
    malware_db: MalwareDbResponse | None,
    metrics: AggregatedMetrics,
) -> list[ThreatBar]:
    return [
        ThreatBar(
            name="Files",
            label="Detected Malware",
            value=reputation.malware_detections if reputation else 0,
        ),
        ThreatBar(
            name="Vulnerabilities",
            label="Critical Issues",
            value=metrics.critical_cves,
        ),
        ThreatBar(
            name="Signatures",
            label="Malicious Signatures",
            value=malicious_file_count(malware_db) if malware_db else 0,
        ),
    ]


def _rate_date(rate: DetectionRate) -> datetime:
    return rate.date if rate.date.tzinfo else rate.date.replace(tzinfo=UTC)
