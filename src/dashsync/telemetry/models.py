"""Telemetry data models and nearest-sample lookup."""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

Scalar = float | int | str | bool | None

_KNOWN_FIELDS = (
    "speed",
    "gear",
    "latitude",
    "longitude",
    "brake",
    "accelerator",
    "power",
    "turn_signal",
)


@dataclass(frozen=True)
class TelemetrySample:
    """One recorded instant of vehicle data.

    Values are kept exactly as the extractor reported them (often strings);
    the HUD renderer is responsible for turning them into numbers.
    """

    timestamp: float
    """Absolute seconds.  Need not start at 0."""

    speed: Scalar = None
    gear: Scalar = None
    latitude: Scalar = None
    longitude: Scalar = None
    brake: Scalar = None
    accelerator: Scalar = None
    power: Scalar = None
    turn_signal: Scalar = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)
    """Any additional columns reported by the extractor."""

    def to_dict(self) -> dict:
        d: dict[str, Any] = dict(self.extra)
        d["timestamp"] = self.timestamp
        for name in _KNOWN_FIELDS:
            value = getattr(self, name)
            if value is not None:
                d[name] = value
        return d

    @classmethod
    def from_dict(cls, d: dict) -> TelemetrySample:
        """Build a sample from a row dict; ``timestamp`` is required."""
        if "timestamp" not in d:
            raise ValueError("telemetry row has no 'timestamp'")
        known = {name: _blank_to_none(d.get(name)) for name in _KNOWN_FIELDS}
        extra = {
            k: v for k, v in d.items() if k != "timestamp" and k not in _KNOWN_FIELDS
        }
        try:
            timestamp = float(d["timestamp"])
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"telemetry row has a non-numeric 'timestamp': {d['timestamp']!r}"
            ) from exc
        return cls(timestamp=timestamp, extra=extra, **known)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def nearest_sample(
    samples: Sequence[TelemetrySample], target: float
) -> TelemetrySample | None:
    """Return the sample whose timestamp is closest to *target*.

    Linear scan.  On a tie the earlier sample wins: a later candidate only
    replaces the current best if it is strictly closer.  Returns ``None`` for
    an empty sequence.
    """
    best: TelemetrySample | None = None
    best_dist = 0.0
    for sample in samples:
        dist = abs(sample.timestamp - target)
        if best is None or dist < best_dist:
            best = sample
            best_dist = dist
    return best


class TelemetrySeries:
    """Immutable, ordered telemetry for one video.

    When timestamps are non-decreasing (the normal case) lookups go through a
    ``bisect`` index; otherwise they fall back to :func:`nearest_sample`.
    Both paths return the same sample, including on ties.
    """

    def __init__(self, samples: Iterable[TelemetrySample] = ()) -> None:
        self._samples: tuple[TelemetrySample, ...] = tuple(samples)
        self._timestamps = [s.timestamp for s in self._samples]
        self._sorted = all(
            a <= b for a, b in zip(self._timestamps, self._timestamps[1:])
        )

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self):
        return iter(self._samples)

    def __getitem__(self, idx: int) -> TelemetrySample:
        return self._samples[idx]

    def __bool__(self) -> bool:
        return bool(self._samples)

    @property
    def samples(self) -> tuple[TelemetrySample, ...]:
        return self._samples

    @property
    def origin(self) -> float | None:
        """Timestamp of the first sample — logical time 0 of the front feed."""
        return self._samples[0].timestamp if self._samples else None

    def nearest(self, target: float) -> TelemetrySample | None:
        if not self._samples:
            return None
        if not self._sorted:
            return nearest_sample(self._samples, target)

        ts = self._timestamps
        right = bisect.bisect_left(ts, target)
        if right == 0:
            return self._samples[0]
        if right == len(ts):
            # first occurrence of the last timestamp value
            return self._samples[bisect.bisect_left(ts, ts[-1])]

        # leftmost sample sharing the value just below target
        left = bisect.bisect_left(ts, ts[right - 1])
        if abs(ts[left] - target) <= abs(ts[right] - target):
            return self._samples[left]
        return self._samples[right]

    def lookup_target(self, current_time: float, front_offset: float) -> float | None:
        """Absolute timestamp that corresponds to logical *current_time*.

        ``origin + current_time + front_offset``.  The front feed's offset is
        used because the telemetry is recorded by the front camera.
        """
        if not self._samples:
            return None
        return self._samples[0].timestamp + current_time + front_offset

    def sample_at(self, current_time: float, front_offset: float) -> TelemetrySample | None:
        target = self.lookup_target(current_time, front_offset)
        if target is None:
            return None
        return self.nearest(target)
