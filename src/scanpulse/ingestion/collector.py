# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Concurrent collection of upstream envelopes with per-source timeouts."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from scanpulse.core.constants import DataSource
from scanpulse.ingestion.sources import UpstreamSource
from scanpulse.models.sources import RESPONSE_KEYS, SourceResponses

logger = logging.getLogger("scanpulse.ingestion.collector")


@dataclass(slots=True)
class CollectionResult:
    """Envelopes that arrived plus the reason for each source that did not."""

    responses: SourceResponses
    errors: dict[DataSource, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> list[DataSource]:
        return [
            source
            for source, key in RESPONSE_KEYS.items()
            if getattr(self.responses, key) is not None
        ]


async def _fetch_one(
    source: UpstreamSource,
) -> tuple[DataSource, dict[str, Any] | None, str | None]:
    try:
        envelope = await asyncio.wait_for(source.fetch(), timeout=source.timeout)
    except TimeoutError:
        reason = f"timed out after {source.timeout}s"
        logger.warning("Source %s %s", source.name, reason)
        return source.source, None, reason
    except Exception as exc:
        logger.error("Source %s failed: %s", source.name, exc)
        return source.source, None, str(exc)
    logger.info("Fetched %s", source.name)
    return source.source, envelope, None


async def collect(sources: list[UpstreamSource]) -> CollectionResult:
    """Fetch every source concurrently; failures never cancel the others.

    Each fetch runs under its own ``source.timeout``.  There are no retries.
    """
    outcomes = await asyncio.gather(*(_fetch_one(s) for s in sources))

    slots: dict[str, Any] = {}
    errors: dict[DataSource, str] = {}
    for data_source, envelope, reason in outcomes:
        if envelope is not None:
            slots[RESPONSE_KEYS[data_source]] = envelope
        else:
            errors[data_source] = reason or "unavailable"

    for data_source in RESPONSE_KEYS:
        if data_source not in errors and RESPONSE_KEYS[data_source] not in slots:
            errors[data_source] = "not configured"

    return CollectionResult(responses=SourceResponses(**slots), errors=errors)
