"""Synchronized multi-feed playback.

Public API
----------
FeedClockDriver     - drift-correcting driver for one feed
TimelineController  - shared logical clock
PeriodicTicker      - background cadence for the timeline
ViewingSession      - one open project wired end to end
VirtualMediaSource  - in-memory media element
MediaPlaybackError  - raised by media sources that refuse to play
"""

from dashsync.playback.clock_driver import DRIFT_THRESHOLD, FeedClockDriver, FeedState
from dashsync.playback.media import MediaPlaybackError, VirtualMediaSource
from dashsync.playback.session import RenderSink, ViewingSession
from dashsync.playback.ticker import PeriodicTicker
from dashsync.playback.timeline import PlaybackClock, TimelineController

__all__ = [
    "DRIFT_THRESHOLD",
    "FeedClockDriver",
    "FeedState",
    "MediaPlaybackError",
    "PeriodicTicker",
    "PlaybackClock",
    "RenderSink",
    "TimelineController",
    "ViewingSession",
    "VirtualMediaSource",
]
