"""Synthetic telemetry — a deterministic drive used when a video cannot be read.

Shape (sample index ``i``, spacing 0.1 s):
  - 0..50    : speed ramps linearly 0 → 65 mph, accelerator pressed
  - 50..400  : cruise between 65 and 70 mph
  - 400..600 : speed ramps linearly back to 0, brake pressed
"""

from __future__ import annotations

import math

from dashsync.telemetry.models import TelemetrySample, TelemetrySeries

RAMP_UP_END = 50
CRUISE_END = 400
RAMP_DOWN_END = 600
CRUISE_MPH = 65.0
CRUISE_SWING_MPH = 5.0

_BASE_LAT = 37.3948
_BASE_LON = -122.1503
_HEADING_RAD = math.radians(30.0)
_MPH_TO_MPS = 0.44704
_METRES_PER_DEG_LAT = 111_320.0


def synthetic_speed(i: int) -> float:
    """Speed in mph at sample *i*."""
    if i <= 0:
        return 0.0
    if i <= RAMP_UP_END:
        return CRUISE_MPH * i / RAMP_UP_END
    if i <= CRUISE_END:
        # slow swell within [65, 70], starting at 65
        phase = (i - RAMP_UP_END) / (CRUISE_END - RAMP_UP_END)
        return CRUISE_MPH + CRUISE_SWING_MPH * math.sin(math.pi * phase) ** 2
    if i < RAMP_DOWN_END:
        start = synthetic_speed(CRUISE_END)
        return start * (RAMP_DOWN_END - i) / (RAMP_DOWN_END - CRUISE_END)
    return 0.0


def generate_synthetic_series(
    start: float = 0.0,
    count: int = RAMP_DOWN_END + 1,
    spacing: float = 0.1,
) -> TelemetrySeries:
    """Return *count* samples starting at timestamp *start*.

    Two calls with the same arguments return equal series.
    """
    samples = []
    distance_m = 0.0
    prev_speed = 0.0
    for i in range(count):
        speed = synthetic_speed(i)
        distance_m += speed * _MPH_TO_MPS * spacing
        north = distance_m * math.cos(_HEADING_RAD)
        east = distance_m * math.sin(_HEADING_RAD)
        lat = _BASE_LAT + north / _METRES_PER_DEG_LAT
        lon = _BASE_LON + east / (_METRES_PER_DEG_LAT * math.cos(math.radians(_BASE_LAT)))

        braking = CRUISE_END < i <= RAMP_DOWN_END
        if i <= RAMP_UP_END and i > 0:
            accelerator = 60
        elif RAMP_UP_END < i <= CRUISE_END:
            accelerator = 20
        else:
            accelerator = 0
        # crude demand model: kW from acceleration plus rolling load
        accel_mps2 = (speed - prev_speed) * _MPH_TO_MPS / spacing
        power_kw = round(1.8 * accel_mps2 * speed * _MPH_TO_MPS + 0.25 * speed, 1)
        prev_speed = speed

        samples.append(
            TelemetrySample(
                timestamp=round(start + i * spacing, 6),
                speed=round(speed, 2),
                gear="P" if speed == 0.0 else "D",
                latitude=round(lat, 7),
                longitude=round(lon, 7),
                brake=braking,
                accelerator=accelerator,
                power=power_kw,
            )
        )
    return TelemetrySeries(samples)
