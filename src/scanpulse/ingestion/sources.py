# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Upstream source adapters that fetch raw response envelopes.

Provides a base ``UpstreamSource`` class and concrete implementations for
HTTP summary endpoints and JSON snapshot files.  Sources return the raw
JSON mapping; validation is left to the aggregator so that a malformed
envelope degrades to a partial result instead of an exception here.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import httpx

from scanpulse import __version__
from scanpulse.core.config import Settings
from scanpulse.core.constants import DataSource
from scanpulse.core.exceptions import ConfigurationError, FetchError

logger = logging.getLogger("scanpulse.ingestion.sources")

_USER_AGENT = f"scanpulse/{__version__}"

# Header each upstream expects its API key in.
API_KEY_HEADERS: dict[DataSource, str] = {
    DataSource.VIRUSTOTAL: "x-apikey",
    DataSource.NVD: "apiKey",
    DataSource.MALWARE_BAZAAR: "Auth-Key",
}

# Key used for each source inside a snapshot file.
SNAPSHOT_KEYS: dict[DataSource, str] = {
    DataSource.VIRUSTOTAL: "virusTotal",
    DataSource.NVD: "nvd",
    DataSource.MALWARE_BAZAAR: "malwareBazaar",
}


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


class UpstreamSource(ABC):
    """Base class for upstream intelligence sources."""

    source: DataSource
    timeout: float = 10.0

    @property
    def name(self) -> str:
        return str(self.source)

    @abstractmethod
    async def fetch(self) -> dict[str, Any]:
        """Fetch this source's response envelope as a raw mapping."""


# ---------------------------------------------------------------------------
# HTTP summary source
# ---------------------------------------------------------------------------


class HttpSummarySource(UpstreamSource):
    """GET a JSON summary envelope from an HTTP endpoint.

    Parameters
    ----------
    source:
        Which upstream this endpoint speaks for.
    url:
        Summary endpoint URL.
    api_key:
        Sent in the source's key header when non-empty.
    timeout:
        Per-source timeout in seconds, enforced by the collector and by
        the HTTP client.
    """

    def __init__(
        self,
        source: DataSource,
        url: str,
        api_key: str = "",
        timeout: float = 10.0,
    ) -> None:
        self.source = source
        self.url = url
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": _USER_AGENT, "Accept": "application/json"}
        if self.api_key:
            headers[API_KEY_HEADERS[self.source]] = self.api_key
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers=self._headers(),
        )

    async def fetch(self) -> dict[str, Any]:
        async with self._client() as client:
            try:
                resp = await client.get(self.url)
            except httpx.HTTPError as exc:
                raise FetchError(f"{self.source}: {exc}") from exc

        if not resp.is_success:
            msg = f"{self.source}: HTTP {resp.status_code}"
            if resp.status_code == 429:
                msg = f"{msg} (rate limit exceeded)"
            raise FetchError(msg, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise FetchError(f"{self.source}: response is not JSON") from exc
        if not isinstance(data, dict):
            raise FetchError(f"{self.source}: expected a JSON object")
        return data


# ---------------------------------------------------------------------------
# JSON snapshot source
# ---------------------------------------------------------------------------


class JsonSnapshotSource(UpstreamSource):
    """Read one source's envelope from a dashboard snapshot file.

    A snapshot holds all three envelopes under the keys in
    ``SNAPSHOT_KEYS``; a missing key means the source is unavailable.
    """

    def __init__(self, path: str | Path, source: DataSource) -> None:
        self._path = Path(path)
        self.source = source

    async def fetch(self) -> dict[str, Any]:
        try:
            snapshot = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise FetchError(f"{self.source}: cannot read snapshot {self._path}: {exc}") from exc

        envelope = snapshot.get(SNAPSHOT_KEYS[self.source]) if isinstance(snapshot, dict) else None
        if envelope is None:
            raise FetchError(f"{self.source}: not present in snapshot {self._path.name}")
        return envelope


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def sources_from_settings(settings: Settings) -> list[UpstreamSource]:
    """Build HTTP sources for every upstream with a configured URL."""
    configured = [
        (DataSource.VIRUSTOTAL, settings.virustotal_url, settings.virustotal_api_key, settings.virustotal_timeout),
        (DataSource.NVD, settings.nvd_url, settings.nvd_api_key, settings.nvd_timeout),
        (DataSource.MALWARE_BAZAAR, settings.malwarebazaar_url, settings.malwarebazaar_api_key, settings.malwarebazaar_timeout),
    ]
    sources: list[UpstreamSource] = [
        HttpSummarySource(source, url, api_key=key, timeout=timeout)
        for source, url, key, timeout in configured
        if url
    ]
    if not sources:
        raise ConfigurationError(
            "No upstream source URLs configured; set SCANPULSE_VIRUSTOTAL_URL, "
            "SCANPULSE_NVD_URL or SCANPULSE_MALWAREBAZAAR_URL"
        )
    return sources


def sources_from_snapshot(path: str | Path) -> list[UpstreamSource]:
    """Build one snapshot source per upstream for the file at *path*."""
    return [JsonSnapshotSource(path, source) for source in SNAPSHOT_KEYS]
