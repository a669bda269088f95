# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Severity band classification for numeric scores."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from scanpulse.core.constants import (
    BAND_COLORS,
    SCORE_MAX,
    SCORE_MIN,
    SEVERITY_THRESHOLDS,
    SeverityBand,
)
from scanpulse.core.exceptions import InvalidScoreError

logger = logging.getLogger("scanpulse.scanner.severity")

_LABEL_BANDS: dict[str, SeverityBand] = {
    "CRITICAL": SeverityBand.CRITICAL,
    "HIGH": SeverityBand.HIGH,
    "MEDIUM": SeverityBand.MEDIUM,
    "MODERATE": SeverityBand.MEDIUM,
    "LOW": SeverityBand.LOW,
    "NONE": SeverityBand.LOW,
}


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying a score.

    ``score`` is the clamped value actually used for banding; ``diagnostic``
    is set when the input had to be clamped or was not a number.
    """

    band: SeverityBand
    color_token: str
    score: float
    diagnostic: str | None = None

    @property
    def is_critical(self) -> bool:
        return self.band == SeverityBand.CRITICAL


def _coerce_score(value: object) -> float:
    """Convert *value* to a finite-or-infinite float, or raise InvalidScoreError."""
    if isinstance(value, bool) or value is None:
        raise InvalidScoreError(f"Score {value!r} is not numeric", value=value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidScoreError(f"Score {value!r} is not numeric", value=value) from None
    elif isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            # Integers past the float range; the clamp below bounds them.
            number = math.inf if value > 0 else -math.inf
    else:
        raise InvalidScoreError(
            f"Score of type {type(value).__name__} is not numeric", value=value
        )
    if math.isnan(number):
        raise InvalidScoreError("Score is NaN", value=value)
    return number


def _band_for(score: float) -> SeverityBand:
    for lower_bound, band in SEVERITY_THRESHOLDS:
        if score >= lower_bound:
            return band
    return SeverityBand.LOW


def classify(score: object) -> Classification:
    """Map a score on the 0.0-10.0 scale to a severity band.

    Out-of-range numbers are clamped to the nearest boundary.  Values that
    are not numbers at all land in the ``low`` band.  Neither case raises;
    both are reported through ``Classification.diagnostic``.
    """
    try:
        number = _coerce_score(score)
    except InvalidScoreError as exc:
        logger.warning("Invalid severity score, classifying as low: %s", exc)
        band = SeverityBand.LOW
        return Classification(
            band=band, color_token=BAND_COLORS[band], score=SCORE_MIN, diagnostic=str(exc)
        )

    diagnostic = None
    clamped = min(max(number, SCORE_MIN), SCORE_MAX)
    if clamped != number:
        diagnostic = f"Score {number} outside {SCORE_MIN}-{SCORE_MAX}, clamped to {clamped}"
        logger.debug(diagnostic)

    band = _band_for(clamped)
    return Classification(
        band=band, color_token=BAND_COLORS[band], score=clamped, diagnostic=diagnostic
    )


def band_for_label(label: str | None) -> SeverityBand | None:
    """Map an upstream severity label such as ``"HIGH"`` to a band."""
    if not label:
        return None
    return _LABEL_BANDS.get(label.strip().upper())
