# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for CLI commands — summary, version."""

from __future__ import annotations

import json
import logging

import pytest
from typer.testing import CliRunner

from scanpulse import __version__
from scanpulse.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_logger():
    """The CLI callback rebinds the scanpulse handler to the runner's stderr."""
    logger = logging.getLogger("scanpulse")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


# ---------------------------------------------------------------------------
# summary
# ---------------------------------------------------------------------------


class TestSummary:
    def test_console_output(self, snapshot_file) -> None:
        result = runner.invoke(app, ["--log-level", "ERROR", "summary", "-s", str(snapshot_file)])
        assert result.exit_code == 0, result.output
        assert "Security Dashboard" in result.output
        assert "Web Resources Analyzed" in result.output
        assert "Threat Analysis" in result.output
        assert "Recent Activity" in result.output
        assert "Partial data" not in result.output

    def test_json_output(self, snapshot_file) -> None:
        result = runner.invoke(
            app, ["--log-level", "ERROR", "summary", "-s", str(snapshot_file), "-f", "json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["result"]["metrics"] == {
            "totalUrlsScanned": 100,
            "totalFilesAnalyzed": 50,
            "maliciousDetections": 19,
            "criticalCVEs": 3,
        }
        assert data["result"]["partial"] is False
        assert [c["label"] for c in data["cards"]][0] == "Web Resources Analyzed"

    def test_json_written_to_file(self, snapshot_file, tmp_path) -> None:
        out = tmp_path / "dash.json"
        result = runner.invoke(
            app,
            ["--log-level", "ERROR", "summary", "-s", str(snapshot_file), "-f", "json", "-o", str(out)],
        )
        assert result.exit_code == 0
        assert "Dashboard written to" in result.output
        assert len(json.loads(out.read_text())["result"]["feed"]) == 4

    def test_previous_metrics_give_trends(self, snapshot_file, tmp_path) -> None:
        prev = tmp_path / "prev.json"
        prev.write_text(json.dumps({"totalUrlsScanned": 80, "criticalCVEs": 0}))
        result = runner.invoke(
            app,
            ["--log-level", "ERROR", "summary", "-s", str(snapshot_file), "-p", str(prev), "-f", "json"],
        )
        assert result.exit_code == 0
        cards = {c["key"]: c for c in json.loads(result.stdout)["cards"]}
        assert cards["total_urls_scanned"]["trend_label"] == "+25%"
        assert cards["critical_cves"]["trend_label"] == "no prior data"

    def test_bad_previous_file(self, snapshot_file, tmp_path) -> None:
        prev = tmp_path / "prev.json"
        prev.write_text("{not json")
        result = runner.invoke(app, ["summary", "-s", str(snapshot_file), "-p", str(prev)])
        assert result.exit_code == 2

    def test_partial_snapshot_warns(self, tmp_path, reputation_envelope) -> None:
        snap = tmp_path / "partial.json"
        snap.write_text(json.dumps({"virusTotal": reputation_envelope}))
        result = runner.invoke(app, ["--log-level", "ERROR", "summary", "-s", str(snap)])
        assert result.exit_code == 0
        assert "Partial data" in result.output

    def test_all_sources_failed_exit_1(self, tmp_path) -> None:
        snap = tmp_path / "empty.json"
        snap.write_text("{}")
        result = runner.invoke(app, ["--log-level", "CRITICAL", "summary", "-s", str(snap)])
        assert result.exit_code == 1
        assert "No data" in result.output

    def test_no_sources_configured_exit_2(self) -> None:
        result = runner.invoke(app, ["summary"])
        assert result.exit_code == 2
        assert "No upstream source URLs configured" in result.output


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


class TestVersion:
    def test_prints_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"scanpulse v{__version__}" in result.output
