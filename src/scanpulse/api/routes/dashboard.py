# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard API endpoints — aggregate posted envelopes or live sources."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from scanpulse.analytics.aggregator import aggregate
from scanpulse.analytics.presentation import present
from scanpulse.core.config import get_settings
from scanpulse.core.exceptions import ConfigurationError
from scanpulse.models.metrics import AggregatedMetrics, AggregationResult, DisplayMetric
from scanpulse.sdk import build_dashboard

logger = logging.getLogger("scanpulse.api.dashboard")

router = APIRouter()


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class AggregateRequest(BaseModel):
    """Upstream envelopes for one window; omitted sources count as failed."""

    model_config = ConfigDict(populate_by_name=True)

    reputation: dict[str, Any] | None = None
    vulnerability: dict[str, Any] | None = None
    malware_db: dict[str, Any] | None = Field(default=None, alias="malwareDb")
    previous: AggregatedMetrics | None = None


class DashboardResponse(BaseModel):
    result: AggregationResult
    cards: list[DisplayMetric]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/dashboard/aggregate", response_model=DashboardResponse)
async def aggregate_dashboard(body: AggregateRequest) -> DashboardResponse:
    """Aggregate envelopes supplied in the request body."""
    settings = get_settings()
    result = aggregate(
        {
            "reputation": body.reputation,
            "vulnerability": body.vulnerability,
            "malware_db": body.malware_db,
        },
        feed_limit=settings.feed_size or None,
    )
    return DashboardResponse(result=result, cards=present(result.metrics, body.previous))


@router.get("/dashboard", response_model=DashboardResponse)
async def live_dashboard() -> DashboardResponse:
    """Collect from the configured upstream sources and aggregate."""
    try:
        dashboard = await build_dashboard(settings=get_settings())
    except ConfigurationError as exc:
        logger.error("Live dashboard unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return DashboardResponse(result=dashboard.result, cards=dashboard.cards)
