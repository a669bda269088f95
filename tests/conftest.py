# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

FIXED_NOW = datetime(2026, 2, 20, 14, 30, 0, tzinfo=UTC)

SHA_A = "a" * 64
SHA_B = "b" * 64


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep SCANPULSE_* variables and any local .env out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("SCANPULSE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def reputation_envelope() -> dict[str, Any]:
    return {
        "urlScans": 100,
        "malwareDetections": 7,
        "recentScans": [
            {
                "id": "u-1",
                "target": "http://evil.example/payload",
                "scanType": "URL",
                "stats": {"harmless": 60, "malicious": 5, "suspicious": 1, "undetected": 4},
                "scanDate": "2026-02-20T14:00:00Z",
            },
            {
                "id": "u-2",
                "target": "https://docs.example.org",
                "stats": {"harmless": 70, "malicious": 0, "suspicious": 0, "undetected": 0},
                "scanDate": "2026-02-20T12:00:00Z",
            },
        ],
        "detectionRates": [
            {"date": "2026-02-19T00:00:00Z", "detections": 4},
            {"date": "2026-02-18T00:00:00Z", "detections": 3},
        ],
    }


@pytest.fixture
def vulnerability_envelope() -> dict[str, Any]:
    return {
        "totalCVEs": 38,
        "criticalCVEs": 3,
        "severityDistribution": {"critical": 3, "high": 10, "medium": 20, "low": 5},
        "recentCVEs": [
            {
                "cveId": "CVE-2026-0001",
                "published": "2026-02-20T13:00:00Z",
                "baseScore": 9.8,
                "description": "Remote code execution in example daemon",
            },
        ],
    }


@pytest.fixture
def malware_envelope() -> dict[str, Any]:
    return {
        "totalFiles": 50,
        "maliciousFiles": 12,
        "recentFiles": [
            {
                "sha256": SHA_A,
                "fileName": "invoice.exe",
                "signature": "AgentTesla",
                "firstSeen": "2026-02-20T13:30:00Z",
            },
        ],
        "signatureMatches": [
            {"signature": "Trojan", "count": 5},
            {"signature": "Ransomware", "count": 7},
        ],
    }


@pytest.fixture
def envelopes(reputation_envelope, vulnerability_envelope, malware_envelope) -> dict[str, Any]:
    return {
        "reputation": reputation_envelope,
        "vulnerability": vulnerability_envelope,
        "malware_db": malware_envelope,
    }


@pytest.fixture
def snapshot_file(
    tmp_path: Path, reputation_envelope, vulnerability_envelope, malware_envelope
) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps(
            {
                "virusTotal": reputation_envelope,
                "nvd": vulnerability_envelope,
                "malwareBazaar": malware_envelope,
            }
        ),
        encoding="utf-8",
    )
    return path
