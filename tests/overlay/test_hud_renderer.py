"""Tests for HudRenderer — data formatting only, no display required."""

from __future__ import annotations

import pytest

from dashsync.overlay.renderer import HudRenderer
from dashsync.telemetry.models import TelemetrySample


@pytest.fixture
def hud():
    return HudRenderer()


def test_missing_sample_renders_defaults(hud):
    out = hud.render(None)
    assert out["speed"] == 0
    assert out["gear"] == "P"
    assert out["brake"] is False
    assert out["accelerator"] == 0
    assert out["power"] == 0.0


def test_numeric_strings_are_parsed(hud):
    sample = TelemetrySample(
        timestamp=1.0, speed="67.4", gear="D", accelerator="42.6", power="18.04",
        latitude="37.7749", longitude="-122.4194",
    )
    out = hud.render(sample)
    assert out["speed"] == 67
    assert out["gear"] == "D"
    assert out["accelerator"] == 43
    assert out["power"] == 18.0
    assert out["latitude"] == pytest.approx(37.7749)
    assert out["longitude"] == pytest.approx(-122.4194)


def test_unparsable_values_fall_back_to_zero(hud):
    out = hud.render(TelemetrySample(timestamp=0.0, speed="fast", power="nan"))
    assert out["speed"] == 0
    assert out["power"] == 0.0


def test_accelerator_is_clamped(hud):
    assert hud.render(TelemetrySample(timestamp=0.0, accelerator=140))["accelerator"] == 100
    assert hud.render(TelemetrySample(timestamp=0.0, accelerator=-3))["accelerator"] == 0


@pytest.mark.parametrize("value,expected", [
    (True, True),
    ("true", True),
    ("1", True),
    ("false", False),
    ("0", False),
    (None, False),
])
def test_brake_truthiness(hud, value, expected):
    assert hud.render(TelemetrySample(timestamp=0.0, brake=value))["brake"] is expected


def test_empty_gear_renders_park(hud):
    assert hud.render(TelemetrySample(timestamp=0.0, gear=""))["gear"] == "P"


def test_caption_includes_brake(hud):
    sample = TelemetrySample(timestamp=0.0, speed=30, gear="D", power=5, brake=True)
    assert hud.caption(sample) == "30 MPH  GEAR D  5.0 kW  BRAKE"


def test_caption_without_sample(hud):
    assert hud.caption(None) == "0 MPH  GEAR P  0.0 kW"
