"""HUD rendering — data formatting for the telemetry heads-up display."""

from __future__ import annotations

import math

from dashsync.telemetry.models import TelemetrySample

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _to_float(value, default: float = 0.0) -> float:
    if value is None:
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


class HudRenderer:
    """Formats a :class:`TelemetrySample` for display.

    A missing sample, or a sample with missing/unparsable fields, renders as
    zero values and gear ``"P"``.  All methods are pure — safe to call from
    any thread.
    """

    def render(self, sample: TelemetrySample | None) -> dict:
        """Return a display-ready dict.

        Returns
        -------
        dict with keys:
            ``speed``        – integer mph
            ``gear``         – gear string (``"P"`` when unknown)
            ``brake``        – bool
            ``accelerator``  – integer percentage 0–100
            ``power``        – float kW, one decimal
            ``latitude``     – float
            ``longitude``    – float
            ``turn_signal``  – str or None
        """
        if sample is None:
            return {
                "speed": 0,
                "gear": "P",
                "brake": False,
                "accelerator": 0,
                "power": 0.0,
                "latitude": 0.0,
                "longitude": 0.0,
                "turn_signal": None,
            }
        gear = sample.gear
        return {
            "speed": round(_to_float(sample.speed)),
            "gear": str(gear) if gear not in (None, "") else "P",
            "brake": _to_bool(sample.brake),
            "accelerator": max(0, min(100, round(_to_float(sample.accelerator)))),
            "power": round(_to_float(sample.power), 1),
            "latitude": _to_float(sample.latitude),
            "longitude": _to_float(sample.longitude),
            "turn_signal": None if sample.turn_signal is None else str(sample.turn_signal),
        }

    def caption(self, sample: TelemetrySample | None) -> str:
        """One-line summary used as the burned-in overlay text.

        >>> HudRenderer().caption(None)
        '0 MPH  GEAR P  0.0 kW'
        """
        hud = self.render(sample)
        text = f"{hud['speed']} MPH  GEAR {hud['gear']}  {hud['power']:.1f} kW"
        if hud["brake"]:
            text += "  BRAKE"
        return text
