# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Normalize raw per-source records into canonical ScanEvents.

Each upstream source has its own raw shape and its own status policy.
Both live in ``_RULES``, keyed by :class:`DataSource`, so the full mapping
can be read in one place.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ValidationError

from scanpulse.core.constants import DataSource, ScanStatus, ScanType, SeverityBand
from scanpulse.core.exceptions import SchemaMismatchError
from scanpulse.models.event import ScanEvent
from scanpulse.models.sources import (
    EngineStats,
    MalwareSample,
    ReputationResult,
    VulnerabilityRecord,
)
from scanpulse.scanner.severity import band_for_label, classify

logger = logging.getLogger("scanpulse.scanner.normalizer")

Clock = Callable[[], datetime]


def _now_utc() -> datetime:
    return datetime.now(UTC)


def _event_id(source: DataSource, native_id: str) -> str:
    digest = hashlib.sha256(f"{source}|{native_id}".encode()).hexdigest()
    return digest[:24]


def _timestamp(value: datetime | None, clock: Clock) -> tuple[str, bool]:
    defaulted = value is None
    dt = clock() if value is None else value
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.isoformat(), defaulted


# ---------------------------------------------------------------------------
# Status policies
# ---------------------------------------------------------------------------


def reputation_status(stats: EngineStats) -> ScanStatus:
    if stats.malicious > 0:
        return ScanStatus.MALICIOUS
    if stats.suspicious > 0:
        return ScanStatus.WARNING
    return ScanStatus.CLEAN


def malware_status(sample: MalwareSample) -> ScanStatus:
    # This source has no ambiguous tier.
    if sample.signature and sample.signature.strip():
        return ScanStatus.MALICIOUS
    return ScanStatus.CLEAN


def vulnerability_status(record: VulnerabilityRecord, band: SeverityBand) -> ScanStatus:
    """Disclosure severity, not infection state.

    ``malicious`` is reserved for entries flagged as actively exploited;
    high-impact disclosures are ``warning``.
    """
    if record.actively_exploited:
        return ScanStatus.MALICIOUS
    if band in (SeverityBand.CRITICAL, SeverityBand.HIGH):
        return ScanStatus.WARNING
    return ScanStatus.CLEAN


def vulnerability_band(record: VulnerabilityRecord) -> SeverityBand:
    """Band from the numeric score, falling back to the upstream label."""
    if record.base_score is None:
        label_band = band_for_label(record.base_severity)
        if label_band is not None:
            return label_band
    return classify(record.base_score).band


# ---------------------------------------------------------------------------
# Per-source builders
# ---------------------------------------------------------------------------


def _build_reputation(raw: ReputationResult, clock: Clock) -> ScanEvent:
    status = reputation_status(raw.stats)
    stats = raw.stats
    total = stats.harmless + stats.malicious + stats.suspicious + stats.undetected + stats.timeout
    if raw.details:
        details = raw.details
    elif status == ScanStatus.MALICIOUS:
        details = f"{stats.malicious} of {total} engines flagged {raw.target} as malicious"
    elif status == ScanStatus.WARNING:
        details = f"{stats.suspicious} of {total} engines flagged {raw.target} as suspicious"
    else:
        details = f"No security threats found for {raw.target}"

    timestamp, defaulted = _timestamp(raw.scan_date, clock)
    return ScanEvent(
        id=_event_id(DataSource.VIRUSTOTAL, raw.id),
        type=raw.scan_type,
        source=DataSource.VIRUSTOTAL,
        status=status,
        timestamp=timestamp,
        details=details,
        timestamp_defaulted=defaulted,
    )


def _build_vulnerability(raw: VulnerabilityRecord, clock: Clock) -> ScanEvent:
    band = vulnerability_band(raw)
    status = vulnerability_status(raw, band)
    details = f"{raw.cve_id} ({band} severity)"
    if raw.actively_exploited:
        details += ", actively exploited"
    if raw.description:
        details += f": {raw.description[:200]}"

    timestamp, defaulted = _timestamp(raw.published, clock)
    return ScanEvent(
        id=_event_id(DataSource.NVD, raw.cve_id),
        type=ScanType.CVE,
        source=DataSource.NVD,
        status=status,
        timestamp=timestamp,
        details=details,
        severity=band,
        timestamp_defaulted=defaulted,
    )


def _build_malware(raw: MalwareSample, clock: Clock) -> ScanEvent:
    status = malware_status(raw)
    name = raw.file_name or raw.sha256[:16]
    if status == ScanStatus.MALICIOUS:
        details = f"Matched signature {raw.signature} in {name}"
    else:
        details = f"No known signature matched {name}"

    timestamp, defaulted = _timestamp(raw.first_seen, clock)
    return ScanEvent(
        id=_event_id(DataSource.MALWARE_BAZAAR, raw.sha256.lower()),
        type=ScanType.FILE,
        source=DataSource.MALWARE_BAZAAR,
        status=status,
        timestamp=timestamp,
        details=details,
        timestamp_defaulted=defaulted,
    )


@dataclass(frozen=True, slots=True)
class _SourceRule:
    model: type[BaseModel]
    build: Callable[..., ScanEvent]


_RULES: dict[DataSource, _SourceRule] = {
    DataSource.VIRUSTOTAL: _SourceRule(ReputationResult, _build_reputation),
    DataSource.NVD: _SourceRule(VulnerabilityRecord, _build_vulnerability),
    DataSource.MALWARE_BAZAAR: _SourceRule(MalwareSample, _build_malware),
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize(
    raw: object,
    source: DataSource | str,
    *,
    clock: Clock | None = None,
) -> ScanEvent:
    """Convert one raw upstream record into a :class:`ScanEvent`.

    *raw* may be the source's record model or a mapping in that shape.
    Raises :class:`SchemaMismatchError` when *raw* does not match *source*.
    *clock* supplies the timestamp for records that carry none.
    """
    try:
        data_source = DataSource(source)
    except ValueError:
        raise SchemaMismatchError(f"Unknown data source: {source!r}", source=str(source)) from None

    rule = _RULES[data_source]

    if isinstance(raw, rule.model):
        record = raw
    elif isinstance(raw, BaseModel):
        raise SchemaMismatchError(
            f"{type(raw).__name__} cannot be normalized as {data_source} "
            f"(expected {rule.model.__name__})",
            source=data_source,
        )
    elif isinstance(raw, Mapping):
        try:
            record = rule.model.model_validate(raw)
        except ValidationError as exc:
            raise SchemaMismatchError(
                f"Record does not match {data_source} shape: "
                f"{exc.error_count()} validation error(s)",
                source=data_source,
            ) from exc
    else:
        raise SchemaMismatchError(
            f"Unsupported raw record type {type(raw).__name__} for {data_source}",
            source=data_source,
        )

    return rule.build(record, clock or _now_utc)
