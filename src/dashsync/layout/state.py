"""LayoutState — the single writable copy of poses and sync offsets for a session."""

from __future__ import annotations

import copy
import math
import threading

from dashsync.layout.models import (
    CameraView,
    FeedPose,
    LayoutConfig,
    LayoutError,
    _number,
    _vector3,
)

_POSE_FIELDS = ("scale", "position", "rotation")


class LayoutState:
    """Mutable layout record with targeted setters.

    Rendering and persistence read from this object; calibration UI writes
    to it.  Values are only type-checked: a negative scale or a rotation of
    ten turns is accepted as-is.

    Parameters
    ----------
    config:
        Initial layout.  Defaults to :meth:`LayoutConfig.default`.
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self._lock = threading.Lock()
        self._poses: dict[CameraView, FeedPose] = {}
        self._offsets: dict[CameraView, float] = {}
        self.load_config(config or LayoutConfig.default())

    # ------------------------------------------------------------------
    # Poses
    # ------------------------------------------------------------------

    def pose(self, view: CameraView) -> FeedPose:
        """Return a copy of the pose for *view*."""
        with self._lock:
            return copy.copy(self._poses[CameraView.parse(view)])

    def set_pose(self, view: CameraView, field: str, value) -> None:
        """Replace one pose field (``scale``, ``position`` or ``rotation``)."""
        view = CameraView.parse(view)
        if field not in _POSE_FIELDS:
            raise LayoutError(f"Unknown pose field: {field!r}")
        if field == "scale":
            checked = _number(value, f"{view.value}.scale")
        else:
            checked = _vector3(value, f"{view.value}.{field}")
        with self._lock:
            setattr(self._poses[view], field, checked)

    def set_position(self, view: CameraView, axis: int, value: float) -> None:
        position = list(self.pose(view).position)
        position[axis] = value
        self.set_pose(view, "position", position)

    def set_rotation_degrees(self, view: CameraView, axis: int, degrees: float) -> None:
        """Set one rotation axis from a UI value in degrees (stored in radians)."""
        rotation = list(self.pose(view).rotation)
        rotation[axis] = math.radians(_number(degrees, "rotation"))
        self.set_pose(view, "rotation", rotation)

    def rotation_degrees(self, view: CameraView) -> tuple[float, float, float]:
        x, y, z = self.pose(view).rotation
        return (math.degrees(x), math.degrees(y), math.degrees(z))

    # ------------------------------------------------------------------
    # Offsets
    # ------------------------------------------------------------------

    def offset(self, view: CameraView) -> float:
        with self._lock:
            return self._offsets[CameraView.parse(view)]

    def set_offset(self, view: CameraView, seconds: float) -> None:
        view = CameraView.parse(view)
        value = _number(seconds, f"syncOffsets.{view.value}")
        with self._lock:
            self._offsets[view] = value

    def offsets_snapshot(self) -> dict[CameraView, float]:
        """Return a consistent copy of all four offsets."""
        with self._lock:
            return dict(self._offsets)

    # ------------------------------------------------------------------
    # Persistence boundary
    # ------------------------------------------------------------------

    def to_config(self) -> LayoutConfig:
        with self._lock:
            return LayoutConfig(
                poses={v: copy.copy(p) for v, p in self._poses.items()},
                offsets=dict(self._offsets),
            )

    def load_config(self, config: LayoutConfig) -> None:
        with self._lock:
            self._poses = {v: copy.copy(config.poses[v]) for v in CameraView}
            self._offsets = {v: float(config.offsets.get(v, 0.0)) for v in CameraView}
