"""Tests for telemetry extraction and the synthetic fallback."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from dashsync.telemetry.extractor import (
    SOURCE_EXTRACTED,
    SOURCE_SYNTHETIC,
    SubprocessTelemetryExtractor,
    TelemetryExtractionError,
    TelemetryLoader,
    parse_telemetry_csv,
)
from dashsync.telemetry.models import TelemetrySample, TelemetrySeries

CSV = "timestamp,speed,gear\n100.0,10,D\n100.5,12,D\n"


@pytest.fixture
def media_dir(tmp_path):
    (tmp_path / "front.mp4").write_bytes(b"\x00")
    return tmp_path


# ---------------------------------------------------------------------------
# CSV parsing
# ---------------------------------------------------------------------------


def test_parse_csv_rows():
    series = parse_telemetry_csv(CSV)
    assert len(series) == 2
    assert series[1].timestamp == 100.5
    assert series[1].speed == "12"


def test_parse_csv_without_timestamp_column():
    with pytest.raises(TelemetryExtractionError):
        parse_telemetry_csv("speed,gear\n10,D\n")


def test_parse_csv_bad_timestamp():
    with pytest.raises(TelemetryExtractionError, match="line 2"):
        parse_telemetry_csv("timestamp,speed\nabc,10\n")


# ---------------------------------------------------------------------------
# SubprocessTelemetryExtractor
# ---------------------------------------------------------------------------


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_extractor_appends_path_to_command():
    with patch("dashsync.telemetry.extractor.subprocess.run", return_value=_completed(stdout=CSV)) as run:
        series = SubprocessTelemetryExtractor(["sei-extract", "--csv"]).extract("/m/front.mp4")
    assert run.call_args.args[0] == ["sei-extract", "--csv", "/m/front.mp4"]
    assert len(series) == 2


def test_extractor_nonzero_exit_raises():
    proc = _completed(returncode=2, stderr="warming up\nno SEI stream found")
    with patch("dashsync.telemetry.extractor.subprocess.run", return_value=proc):
        with pytest.raises(TelemetryExtractionError, match="no SEI stream found"):
            SubprocessTelemetryExtractor(["x"]).extract("a.mp4")


def test_extractor_missing_binary_raises():
    with patch("dashsync.telemetry.extractor.subprocess.run", side_effect=FileNotFoundError()):
        with pytest.raises(TelemetryExtractionError, match="not found"):
            SubprocessTelemetryExtractor(["nope"]).extract("a.mp4")


def test_extractor_requires_command():
    with pytest.raises(ValueError):
        SubprocessTelemetryExtractor([])


# ---------------------------------------------------------------------------
# TelemetryLoader fallback
# ---------------------------------------------------------------------------


def test_loader_uses_extractor_output(media_dir):
    extractor = MagicMock()
    extractor.extract.return_value = TelemetrySeries([TelemetrySample(timestamp=5.0)])
    result = TelemetryLoader(media_dir, extractor).load("front.mp4")
    assert result.source == SOURCE_EXTRACTED
    assert len(result.series) == 1
    extractor.extract.assert_called_once_with(str((media_dir / "front.mp4").resolve()))


def test_loader_missing_file_falls_back(media_dir):
    extractor = MagicMock()
    result = TelemetryLoader(media_dir, extractor).load("missing.mp4")
    assert result.source == SOURCE_SYNTHETIC
    assert len(result.series) == 601
    extractor.extract.assert_not_called()


def test_loader_rejects_path_outside_media_dir(media_dir, tmp_path_factory):
    outside = tmp_path_factory.mktemp("elsewhere") / "secret.mp4"
    outside.write_bytes(b"\x00")
    extractor = MagicMock()
    result = TelemetryLoader(media_dir, extractor).load(f"../{outside.parent.name}/secret.mp4")
    assert result.source == SOURCE_SYNTHETIC
    extractor.extract.assert_not_called()


def test_loader_extractor_failure_falls_back(media_dir):
    extractor = MagicMock()
    extractor.extract.side_effect = TelemetryExtractionError("boom")
    result = TelemetryLoader(media_dir, extractor).load("front.mp4")
    assert result.source == SOURCE_SYNTHETIC


def test_loader_empty_extraction_falls_back(media_dir):
    extractor = MagicMock()
    extractor.extract.return_value = TelemetrySeries()
    result = TelemetryLoader(media_dir, extractor).load("front.mp4")
    assert result.source == SOURCE_SYNTHETIC


def test_loader_without_extractor_is_synthetic(media_dir):
    result = TelemetryLoader(media_dir).load("front.mp4")
    assert result.source == SOURCE_SYNTHETIC
