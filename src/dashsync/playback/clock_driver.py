"""FeedClockDriver — keeps one media source locked to the shared logical clock."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from dashsync.layout.models import CameraView
from dashsync.playback.media import MediaPlaybackError

_logger = logging.getLogger(__name__)

DRIFT_THRESHOLD = 0.3  # seconds; below this a feed is considered in sync


class FeedState(Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


LoadedCallback = Callable[[CameraView, float, float], None]


class FeedClockDriver:
    """Drift-correcting wrapper around one feed's media source.

    Media elements free-run once playing, so every :meth:`tick` compares the
    element's position with ``logical_time + offset`` and hard-seeks when
    they differ by more than *drift_threshold*.  An unloaded feed is a valid
    "no signal" state; it simply ignores ticks.

    Parameters
    ----------
    view:
        Which feed this driver owns.
    drift_threshold:
        Tolerated divergence in seconds before a corrective seek.
    """

    def __init__(self, view: CameraView, drift_threshold: float = DRIFT_THRESHOLD) -> None:
        self.view = view
        self.drift_threshold = drift_threshold
        self._source = None
        self._state = FeedState.UNLOADED
        self._playing = False
        self._duration = 0.0
        self._aspect_ratio = 0.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is FeedState.LOADED

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def aspect_ratio(self) -> float:
        return self._aspect_ratio

    def bind(self, source, on_loaded: LoadedCallback | None = None) -> None:
        """Attach *source*; becomes LOADED when the source reports readiness.

        *on_loaded* receives ``(view, duration, aspect_ratio)``.  A readiness
        report from a source that has since been unbound is ignored.
        """
        if self._source is not None:
            self.unbind()
        self._source = source
        self._state = FeedState.LOADING

        def _ready(duration: float, aspect_ratio: float) -> None:
            if self._source is not source:
                return
            self._duration = max(float(duration), 0.0)
            self._aspect_ratio = float(aspect_ratio)
            self._state = FeedState.LOADED
            _logger.info("%s feed loaded (%.1fs)", self.view.value, self._duration)
            if on_loaded is not None:
                on_loaded(self.view, self._duration, self._aspect_ratio)

        source.on_ready(_ready)

    def set_playing(self, playing: bool) -> None:
        """Start or stop the media.  Rejected playback is logged, not raised."""
        if not self.is_loaded or playing == self._playing:
            return
        if playing:
            try:
                self._source.play()
            except MediaPlaybackError as exc:
                _logger.warning("%s feed refused to play: %s", self.view.value, exc)
                return
        else:
            self._source.pause()
        self._playing = playing

    def tick(self, logical_time: float, offset: float) -> float | None:
        """Resync the media if it drifted; return the seek target or None."""
        if not self.is_loaded:
            return None
        target = min(max(logical_time + offset, 0.0), self._duration)
        if abs(self._source.position - target) > self.drift_threshold:
            self._source.seek(target)
            return target
        return None

    def unbind(self) -> None:
        """Stop and release the media immediately."""
        source, self._source = self._source, None
        if source is not None:
            if self._playing:
                source.pause()
            source.release()
            _logger.info("%s feed ejected", self.view.value)
        self._state = FeedState.UNLOADED
        self._playing = False
        self._duration = 0.0
        self._aspect_ratio = 0.0
