# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Canonical scan event model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from scanpulse.core.constants import (
    SOURCE_SCAN_TYPES,
    DataSource,
    ScanStatus,
    ScanType,
    SeverityBand,
)


class ScanEvent(BaseModel):
    """A source-agnostic record of one scan or detection occurrence."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable digest of source and upstream identifier")
    type: ScanType
    source: DataSource
    status: ScanStatus
    timestamp: str = Field(description="ISO-8601 time the event occurred")
    details: str = ""
    severity: SeverityBand | None = None
    timestamp_defaulted: bool = False

    @field_validator("timestamp")
    @classmethod
    def _check_timestamp(cls, v: str) -> str:
        parse_timestamp(v)
        return v

    @model_validator(mode="after")
    def _check_source_pairing(self) -> ScanEvent:
        allowed = SOURCE_SCAN_TYPES[self.source]
        if self.type not in allowed:
            raise ValueError(
                f"{self.source} cannot produce {self.type} events "
                f"(allowed: {', '.join(sorted(allowed))})"
            )
        return self

    @property
    def occurred_at(self) -> datetime:
        """Parsed timestamp; naive values are treated as UTC."""
        return parse_timestamp(self.timestamp)


def parse_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt
