# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for scanpulse."""


class ScanPulseError(Exception):
    """Base exception for all scanpulse errors."""


class ConfigurationError(ScanPulseError):
    """Invalid or missing configuration."""


class NormalizationError(ScanPulseError):
    """A raw upstream record could not be turned into a ScanEvent."""


class SchemaMismatchError(NormalizationError):
    """Raw record shape does not match the declared data source."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class InvalidScoreError(ScanPulseError):
    """Severity score is not a representable number."""

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class FetchError(ScanPulseError):
    """Failed to fetch an upstream source response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
