"""Spatial layout of the four camera feeds.

Public API
----------
CameraView    - closed enumeration of the four feeds
FeedPose      - scale / position / rotation (radians) of one video plane
LayoutConfig  - all four poses plus sync offsets; the persisted unit
LayoutState   - mutable session copy with targeted setters
LayoutError   - raised on malformed layouts or bad setter values
"""

from dashsync.layout.models import CameraView, FeedPose, LayoutConfig, LayoutError
from dashsync.layout.state import LayoutState

__all__ = [
    "CameraView",
    "FeedPose",
    "LayoutConfig",
    "LayoutError",
    "LayoutState",
]
