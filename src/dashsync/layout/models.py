"""Layout data models — camera views, per-feed poses and the persisted layout blob."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real


class LayoutError(ValueError):
    """Raised when a layout record is malformed or a setter receives a bad value."""


class CameraView(str, Enum):
    """The four fixed dashcam feeds."""

    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: str | CameraView) -> CameraView:
        """Return the view named *value*; raise :class:`LayoutError` if unknown."""
        try:
            return cls(value)
        except ValueError as exc:
            raise LayoutError(f"Unknown camera view: {value!r}") from exc


Vector3 = tuple[float, float, float]


def _number(value, what: str) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, Real):
        raise LayoutError(f"{what} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise LayoutError(f"{what} must be finite, got {value!r}")
    return float(value)


def _vector3(value, what: str) -> Vector3:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise LayoutError(f"{what} must be a list of 3 numbers, got {value!r}")
    x, y, z = (_number(v, what) for v in value)
    return (x, y, z)


@dataclass
class FeedPose:
    """Where one video plane sits around the vehicle."""

    scale: float = 1.0
    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Vector3 = (0.0, 0.0, 0.0)
    """Euler angles in radians."""

    def to_dict(self) -> dict:
        return {
            "scale": self.scale,
            "position": list(self.position),
            "rotation": list(self.rotation),
        }

    @classmethod
    def from_dict(cls, d: dict, view: str = "pose") -> FeedPose:
        if not isinstance(d, dict):
            raise LayoutError(f"{view} must be an object, got {d!r}")
        try:
            return cls(
                scale=_number(d["scale"], f"{view}.scale"),
                position=_vector3(d["position"], f"{view}.position"),
                rotation=_vector3(d["rotation"], f"{view}.rotation"),
            )
        except KeyError as exc:
            raise LayoutError(f"{view} is missing field {exc.args[0]!r}") from exc


def zero_offsets() -> dict[CameraView, float]:
    return {view: 0.0 for view in CameraView}


@dataclass
class LayoutConfig:
    """Poses for all four views plus per-feed sync offsets.

    This is the unit persisted per project.  :meth:`to_dict` produces the
    wire shape stored in the database::

        {"front": {"scale": 1, "position": [x, y, z], "rotation": [x, y, z]},
         "back": {...}, "left": {...}, "right": {...},
         "syncOffsets": {"front": 0, "back": 0, "left": 0, "right": 0}}
    """

    poses: dict[CameraView, FeedPose]
    offsets: dict[CameraView, float] = field(default_factory=zero_offsets)

    def __post_init__(self) -> None:
        missing = [v.value for v in CameraView if v not in self.poses]
        if missing:
            raise LayoutError(f"Layout is missing poses for: {', '.join(missing)}")
        for view in CameraView:
            self.offsets.setdefault(view, 0.0)

    def to_dict(self) -> dict:
        d: dict = {view.value: self.poses[view].to_dict() for view in CameraView}
        d["syncOffsets"] = {view.value: self.offsets[view] for view in CameraView}
        return d

    @classmethod
    def from_dict(cls, d: dict) -> LayoutConfig:
        """Parse the wire shape.  All four poses are required.

        A record without ``syncOffsets`` (written before offsets existed)
        loads with every offset at 0.
        """
        if not isinstance(d, dict):
            raise LayoutError(f"Layout must be an object, got {type(d).__name__}")
        poses: dict[CameraView, FeedPose] = {}
        for view in CameraView:
            if d.get(view.value) is None:
                raise LayoutError(f"Layout is missing pose for {view.value!r}")
            poses[view] = FeedPose.from_dict(d[view.value], view.value)

        raw_offsets = d.get("syncOffsets") or {}
        if not isinstance(raw_offsets, dict):
            raise LayoutError("syncOffsets must be an object")
        offsets = {
            view: _number(raw_offsets.get(view.value, 0.0), f"syncOffsets.{view.value}")
            for view in CameraView
        }
        return cls(poses=poses, offsets=offsets)

    @classmethod
    def default(cls) -> LayoutConfig:
        """Planes facing inward on a 5 m ring around the vehicle."""
        return cls(
            poses={
                CameraView.FRONT: FeedPose(1.0, (0.0, 0.0, -5.0), (0.0, 0.0, 0.0)),
                CameraView.BACK: FeedPose(1.0, (0.0, 0.0, 5.0), (0.0, math.pi, 0.0)),
                CameraView.LEFT: FeedPose(1.0, (-5.0, 0.0, 0.0), (0.0, math.pi / 2, 0.0)),
                CameraView.RIGHT: FeedPose(1.0, (5.0, 0.0, 0.0), (0.0, -math.pi / 2, 0.0)),
            }
        )
