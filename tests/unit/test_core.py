# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for core settings, logging, and the exception hierarchy."""

from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from scanpulse.core.config import Settings, get_settings
from scanpulse.core.exceptions import (
    ConfigurationError,
    FetchError,
    InvalidScoreError,
    NormalizationError,
    ScanPulseError,
    SchemaMismatchError,
)
from scanpulse.core.logging import (
    JsonFormatter,
    TextFormatter,
    redact_sensitive,
    request_id_var,
    setup_logging,
)

# ===========================================================================
# config.py tests
# ===========================================================================


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.virustotal_url == ""
        assert settings.nvd_timeout == 15.0
        assert settings.feed_size == 50
        assert settings.api_port == 8000
        assert settings.log_format == "json"

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCANPULSE_NVD_URL", "https://nvd.example/summary")
        monkeypatch.setenv("SCANPULSE_FEED_SIZE", "10")
        settings = get_settings()
        assert settings.nvd_url == "https://nvd.example/summary"
        assert settings.feed_size == 10

    def test_dotenv_file(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("SCANPULSE_VIRUSTOTAL_TIMEOUT=3.5\n", encoding="utf-8")
        assert Settings().virustotal_timeout == 3.5

    def test_cors_origins_comma_separated(self) -> None:
        settings = Settings(_env_file=None, cors_origins="https://a.test, https://b.test,")
        assert settings.cors_origins == ["https://a.test", "https://b.test"]

    def test_negative_feed_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, feed_size=-1)

    def test_trend_period_must_be_positive(self) -> None:
        assert Settings(_env_file=None).trend_period_days == 7
        with pytest.raises(ValidationError):
            Settings(_env_file=None, trend_period_days=0)


# ===========================================================================
# exceptions.py tests
# ===========================================================================


class TestExceptions:
    def test_hierarchy(self) -> None:
        assert issubclass(SchemaMismatchError, NormalizationError)
        for exc_type in (ConfigurationError, NormalizationError, InvalidScoreError, FetchError):
            assert issubclass(exc_type, ScanPulseError)

    def test_carried_context(self) -> None:
        assert SchemaMismatchError("bad", source="NVD").source == "NVD"
        assert InvalidScoreError("bad", value="x").value == "x"
        assert FetchError("down", status_code=503).status_code == 503


# ===========================================================================
# logging.py tests
# ===========================================================================


VT_KEY = "0123456789abcdef" * 4


class TestRedactSensitive:
    def test_no_sensitive_data(self) -> None:
        text = "Aggregated 4 events from 3 source(s)"
        assert redact_sensitive(text) == text

    def test_redacts_reputation_key(self) -> None:
        result = redact_sensitive(f"using key {VT_KEY}")
        assert "01234567[REDACTED]" in result
        assert VT_KEY not in result

    def test_redacts_uuid_key(self) -> None:
        result = redact_sensitive("apiKey 12345678-abcd-ef01-2345-6789abcdef01 rejected")
        assert "12345678[REDACTED]" in result
        assert "6789abcdef01" not in result

    def test_redacts_header_value(self) -> None:
        result = redact_sensitive("headers={'Auth-Key': 'supersecretvalue'}")
        assert "[REDACTED]" in result
        assert "secretvalue" not in result

    def test_empty_string(self) -> None:
        assert redact_sensitive("") == ""


class TestFormatters:
    def _record(self, msg: str) -> logging.LogRecord:
        return logging.LogRecord(
            name="scanpulse.test",
            level=logging.WARNING,
            pathname="test.py",
            lineno=1,
            msg=msg,
            args=None,
            exc_info=None,
        )

    def test_json_formatter(self) -> None:
        parsed = json.loads(JsonFormatter().format(self._record("hello")))
        assert parsed["level"] == "WARNING"
        assert parsed["logger"] == "scanpulse.test"
        assert parsed["message"] == "hello"

    def test_json_formatter_redacts(self) -> None:
        parsed = json.loads(JsonFormatter().format(self._record(f"key {VT_KEY}")))
        assert VT_KEY not in parsed["message"]

    def test_text_formatter_redacts(self) -> None:
        output = TextFormatter("%(message)s").format(self._record(f"key {VT_KEY}"))
        assert output == "key 01234567[REDACTED]"

    def test_json_formatter_request_id_from_context(self) -> None:
        token = request_id_var.set("req-42")
        try:
            parsed = json.loads(JsonFormatter().format(self._record("hello")))
        finally:
            request_id_var.reset(token)
        assert parsed["request_id"] == "req-42"

    def test_json_formatter_request_id_from_record(self) -> None:
        record = self._record("hello")
        record.request_id = "req-7"
        assert json.loads(JsonFormatter().format(record))["request_id"] == "req-7"

    def test_json_formatter_without_request_id(self) -> None:
        assert "request_id" not in json.loads(JsonFormatter().format(self._record("hi")))


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _restore_logger(self):
        logger = logging.getLogger("scanpulse")
        level, handlers = logger.level, list(logger.handlers)
        yield
        logger.setLevel(level)
        logger.handlers[:] = handlers

    def test_configures_scanpulse_logger(self) -> None:
        setup_logging("DEBUG", "text")
        logger = logging.getLogger("scanpulse")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, TextFormatter)

    def test_idempotent(self) -> None:
        setup_logging()
        setup_logging()
        logger = logging.getLogger("scanpulse")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging("chatty")
        assert logging.getLogger("scanpulse").level == logging.INFO
