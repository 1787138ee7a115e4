"""Tests for the synthetic telemetry fallback."""

from __future__ import annotations

import pytest

from dashsync.telemetry.synthetic import generate_synthetic_series, synthetic_speed


def test_default_series_length_and_spacing():
    series = generate_synthetic_series()
    assert len(series) == 601
    assert series[0].timestamp == 0.0
    assert series[1].timestamp == pytest.approx(0.1)
    assert series[600].timestamp == pytest.approx(60.0)


def test_ramp_up_reaches_cruise_at_sample_50():
    assert synthetic_speed(0) == 0.0
    assert synthetic_speed(25) == pytest.approx(32.5)
    assert synthetic_speed(50) == pytest.approx(65.0)


def test_cruise_stays_between_65_and_70():
    speeds = [synthetic_speed(i) for i in range(50, 401)]
    assert min(speeds) >= 65.0 - 1e-9
    assert max(speeds) <= 70.0 + 1e-9


def test_ramp_down_ends_at_zero():
    assert synthetic_speed(500) < synthetic_speed(450) < synthetic_speed(401)
    assert synthetic_speed(600) == 0.0
    assert generate_synthetic_series()[600].speed == 0.0


def test_series_is_deterministic():
    a = generate_synthetic_series(start=10.0)
    b = generate_synthetic_series(start=10.0)
    assert a.samples == b.samples


def test_start_offsets_timestamps():
    series = generate_synthetic_series(start=1000.0, count=3)
    assert [s.timestamp for s in series] == pytest.approx([1000.0, 1000.1, 1000.2])


def test_gear_and_brake_follow_the_drive():
    series = generate_synthetic_series()
    assert series[0].gear == "P"
    assert series[200].gear == "D"
    assert series[200].brake is False
    assert series[500].brake is True
