# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations, severity thresholds, and source pairing constants."""

from enum import StrEnum


class ScanType(StrEnum):
    URL = "URL"
    FILE = "FILE"
    CVE = "CVE"


class ScanStatus(StrEnum):
    CLEAN = "clean"
    MALICIOUS = "malicious"
    WARNING = "warning"


class DataSource(StrEnum):
    VIRUSTOTAL = "VirusTotal"
    NVD = "NVD"
    MALWARE_BAZAAR = "MalwareBazaar"


class SeverityBand(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MetricVariant(StrEnum):
    DEFAULT = "default"
    WARNING = "warning"
    DANGER = "danger"


class TrendSign(StrEnum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"
    NO_PRIOR_DATA = "no_prior_data"


# Lower bounds are inclusive; anything below MEDIUM is LOW.
SEVERITY_THRESHOLDS: list[tuple[float, SeverityBand]] = [
    (9.0, SeverityBand.CRITICAL),
    (7.0, SeverityBand.HIGH),
    (4.0, SeverityBand.MEDIUM),
]

SCORE_MIN = 0.0
SCORE_MAX = 10.0

BAND_COLORS: dict[SeverityBand, str] = {
    SeverityBand.CRITICAL: "red",
    SeverityBand.HIGH: "orange",
    SeverityBand.MEDIUM: "yellow",
    SeverityBand.LOW: "blue",
}

BAND_ORDER: dict[SeverityBand, int] = {
    SeverityBand.CRITICAL: 3,
    SeverityBand.HIGH: 2,
    SeverityBand.MEDIUM: 1,
    SeverityBand.LOW: 0,
}

SOURCE_SCAN_TYPES: dict[DataSource, frozenset[ScanType]] = {
    DataSource.VIRUSTOTAL: frozenset({ScanType.URL, ScanType.FILE}),
    DataSource.NVD: frozenset({ScanType.CVE}),
    DataSource.MALWARE_BAZAAR: frozenset({ScanType.FILE}),
}

# Feed tie-break order when timestamps are equal.
SOURCE_ORDER: tuple[DataSource, ...] = (
    DataSource.VIRUSTOTAL,
    DataSource.NVD,
    DataSource.MALWARE_BAZAAR,
)
