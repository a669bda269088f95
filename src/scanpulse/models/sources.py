# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Raw upstream record shapes and per-source response envelopes.

Upstream APIs speak camelCase; every model accepts either the alias or the
Python field name.  Recent-record lists on the envelopes are kept raw so
that a single bad record can be skipped during aggregation without
rejecting the whole envelope.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scanpulse.core.constants import DataSource, ScanType

_CONFIG = ConfigDict(populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# Raw per-record shapes
# ---------------------------------------------------------------------------


class EngineStats(BaseModel):
    """Per-verdict engine counts reported by the reputation service."""

    model_config = _CONFIG

    harmless: int = Field(default=0, ge=0)
    malicious: int = Field(default=0, ge=0)
    suspicious: int = Field(default=0, ge=0)
    undetected: int = Field(default=0, ge=0)
    timeout: int = Field(default=0, ge=0)


class ReputationResult(BaseModel):
    """One URL or file analysis from the reputation service."""

    model_config = _CONFIG

    id: str = Field(min_length=1)
    target: str
    scan_type: ScanType = Field(default=ScanType.URL, alias="scanType")
    stats: EngineStats
    scan_date: datetime | None = Field(default=None, alias="scanDate")
    details: str | None = None

    @field_validator("scan_type")
    @classmethod
    def _url_or_file(cls, v: ScanType) -> ScanType:
        if v == ScanType.CVE:
            raise ValueError("reputation results are URL or FILE scans")
        return v


class VulnerabilityRecord(BaseModel):
    """One CVE entry from the vulnerability database."""

    model_config = _CONFIG

    cve_id: str = Field(alias="cveId", pattern=r"^CVE-\d{4}-\d{4,}$")
    published: datetime | None = None
    base_score: Any = Field(default=None, alias="baseScore")
    base_severity: str | None = Field(default=None, alias="baseSeverity")
    description: str = ""
    actively_exploited: bool = Field(default=False, alias="activelyExploited")


class MalwareSample(BaseModel):
    """One sample from the malware-sample database."""

    model_config = _CONFIG

    sha256: str = Field(pattern=r"^[A-Fa-f0-9]{64}$")
    file_name: str | None = Field(default=None, alias="fileName")
    signature: str | None = None
    first_seen: datetime | None = Field(default=None, alias="firstSeen")
    tags: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


class DetectionRate(BaseModel):
    model_config = _CONFIG

    date: datetime
    detections: int = Field(ge=0)


class SeverityDistribution(BaseModel):
    model_config = _CONFIG

    low: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    high: int = Field(default=0, ge=0)
    critical: int = Field(default=0, ge=0)


class SignatureMatch(BaseModel):
    model_config = _CONFIG

    signature: str
    count: int = Field(ge=0)


class ReputationResponse(BaseModel):
    """Summary returned by the reputation service."""

    model_config = _CONFIG

    url_scans: int = Field(ge=0, alias="urlScans")
    file_scans: int = Field(default=0, ge=0, alias="fileScans")
    malware_detections: int = Field(default=0, ge=0, alias="malwareDetections")
    recent_scans: list[Any] = Field(default_factory=list, alias="recentScans")
    detection_rates: list[DetectionRate] = Field(default_factory=list, alias="detectionRates")


class VulnerabilityResponse(BaseModel):
    """Summary returned by the vulnerability database."""

    model_config = _CONFIG

    total_cves: int = Field(default=0, ge=0, alias="totalCVEs")
    critical_cves: int = Field(default=0, ge=0, alias="criticalCVEs")
    recent_cves: list[Any] = Field(default_factory=list, alias="recentCVEs")
    severity_distribution: SeverityDistribution = Field(alias="severityDistribution")


class MalwareDbResponse(BaseModel):
    """Summary returned by the malware-sample database."""

    model_config = _CONFIG

    total_files: int = Field(ge=0, alias="totalFiles")
    malicious_files: int | None = Field(default=None, ge=0, alias="maliciousFiles")
    recent_files: list[Any] = Field(default_factory=list, alias="recentFiles")
    signature_matches: list[SignatureMatch] = Field(default_factory=list, alias="signatureMatches")


class SourceResponses(BaseModel):
    """The three upstream envelopes for one reporting window.

    Each slot may be ``None`` (source missing) or a raw mapping that has
    not been validated yet; the aggregator decides what is usable.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    reputation: Any = None
    vulnerability: Any = None
    malware_db: Any = Field(default=None, alias="malwareDb")


# Field of SourceResponses that holds each source's envelope.
RESPONSE_KEYS: dict[DataSource, str] = {
    DataSource.VIRUSTOTAL: "reputation",
    DataSource.NVD: "vulnerability",
    DataSource.MALWARE_BAZAAR: "malware_db",
}
