"""Tests for TelemetrySeries nearest-sample lookup and time alignment."""

from __future__ import annotations

import random

import pytest

from dashsync.telemetry.models import TelemetrySample, TelemetrySeries, nearest_sample


def _series(*timestamps: float) -> TelemetrySeries:
    return TelemetrySeries(
        TelemetrySample(timestamp=t, speed=str(i)) for i, t in enumerate(timestamps)
    )


# ---------------------------------------------------------------------------
# nearest_sample (linear scan)
# ---------------------------------------------------------------------------


def test_nearest_empty_returns_none():
    assert nearest_sample([], 12.0) is None
    assert TelemetrySeries().nearest(12.0) is None


def test_nearest_picks_closer_sample():
    series = TelemetrySeries([
        TelemetrySample(timestamp=100, speed="10"),
        TelemetrySample(timestamp=102, speed="20"),
        TelemetrySample(timestamp=105, speed="30"),
    ])
    assert series.nearest(103).speed == "20"
    assert nearest_sample(series.samples, 103).speed == "20"


def test_nearest_tie_prefers_earlier_sample():
    samples = [TelemetrySample(timestamp=1.0, speed="a"), TelemetrySample(timestamp=3.0, speed="b")]
    assert nearest_sample(samples, 2.0).speed == "a"
    assert TelemetrySeries(samples).nearest(2.0).speed == "a"


def test_nearest_duplicate_timestamps_first_wins():
    samples = [
        TelemetrySample(timestamp=1.0, speed="first"),
        TelemetrySample(timestamp=1.0, speed="second"),
        TelemetrySample(timestamp=5.0, speed="last"),
    ]
    assert TelemetrySeries(samples).nearest(1.2).speed == "first"
    assert TelemetrySeries(samples).nearest(-3.0).speed == "first"


def test_nearest_before_and_after_range():
    series = _series(10.0, 11.0, 12.0)
    assert series.nearest(-100.0).timestamp == 10.0
    assert series.nearest(1e9).timestamp == 12.0


def test_nearest_duplicate_last_timestamp_first_wins():
    samples = [
        TelemetrySample(timestamp=1.0, speed="a"),
        TelemetrySample(timestamp=2.0, speed="b"),
        TelemetrySample(timestamp=2.0, speed="c"),
    ]
    assert TelemetrySeries(samples).nearest(9.0).speed == "b"


def test_unsorted_series_uses_linear_scan():
    samples = [
        TelemetrySample(timestamp=5.0, speed="a"),
        TelemetrySample(timestamp=1.0, speed="b"),
        TelemetrySample(timestamp=3.0, speed="c"),
    ]
    assert TelemetrySeries(samples).nearest(2.0).speed == "b"


def test_indexed_lookup_matches_linear_scan():
    rng = random.Random(7)
    timestamps = sorted(round(rng.uniform(0, 50), 1) for _ in range(200))
    series = _series(*timestamps)
    for _ in range(300):
        target = round(rng.uniform(-5, 55), 2)
        assert series.nearest(target) is nearest_sample(series.samples, target)


def test_nearest_result_is_minimal_distance():
    series = _series(0.0, 0.4, 0.9, 2.5, 2.6)
    for target in (0.2, 0.65, 1.7, 2.55, 3.0):
        best = series.nearest(target)
        assert all(abs(best.timestamp - target) <= abs(s.timestamp - target) for s in series)


# ---------------------------------------------------------------------------
# lookup target
# ---------------------------------------------------------------------------


def test_lookup_target_adds_origin_time_and_front_offset():
    series = _series(50.0, 60.0, 70.0)
    assert series.lookup_target(10.0, 0.0) == pytest.approx(60.0)
    assert series.lookup_target(10.0, -2.5) == pytest.approx(57.5)


def test_lookup_target_empty_series_is_none():
    assert TelemetrySeries().lookup_target(3.0, 0.0) is None
    assert TelemetrySeries().sample_at(3.0, 0.0) is None


def test_sample_at_relative_and_absolute_series_agree():
    relative = _series(0.0, 0.1, 0.2, 0.3)
    absolute = _series(1_700_000_000.0, 1_700_000_000.1, 1_700_000_000.2, 1_700_000_000.3)
    assert relative.sample_at(0.2, 0.0).speed == absolute.sample_at(0.2, 0.0).speed == "2"


# ---------------------------------------------------------------------------
# TelemetrySample dict conversion
# ---------------------------------------------------------------------------


def test_sample_from_dict_keeps_values_verbatim():
    sample = TelemetrySample.from_dict(
        {"timestamp": "12.5", "speed": "42", "gear": "D", "autopilot": "off", "brake": ""}
    )
    assert sample.timestamp == 12.5
    assert sample.speed == "42"
    assert sample.brake is None
    assert sample.extra == {"autopilot": "off"}


def test_sample_from_dict_requires_timestamp():
    with pytest.raises(ValueError):
        TelemetrySample.from_dict({"speed": "10"})


@pytest.mark.parametrize("bad", [None, "soon", [1]])
def test_sample_from_dict_non_numeric_timestamp_is_value_error(bad):
    with pytest.raises(ValueError, match="non-numeric"):
        TelemetrySample.from_dict({"timestamp": bad})


def test_sample_to_dict_omits_missing_fields():
    d = TelemetrySample(timestamp=1.0, speed=30.0).to_dict()
    assert d == {"timestamp": 1.0, "speed": 30.0}
