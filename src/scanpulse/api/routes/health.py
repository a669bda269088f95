# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from scanpulse import __version__
from scanpulse.core.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class ReadyResponse(BaseModel):
    status: str
    configured_sources: list[str]


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", service="scanpulse", version=__version__)


@router.get("/ready", response_model=ReadyResponse)
async def ready() -> ReadyResponse:
    settings = get_settings()
    configured = [
        name
        for name, url in (
            ("VirusTotal", settings.virustotal_url),
            ("NVD", settings.nvd_url),
            ("MalwareBazaar", settings.malwarebazaar_url),
        )
        if url
    ]
    return ReadyResponse(
        status="ready" if configured else "not_ready",
        configured_sources=configured,
    )
