"""TimelineController — the single logical clock every feed follows."""

from __future__ import annotations

import math
import threading
from collections.abc import Callable
from dataclasses import dataclass

from dashsync.layout.models import CameraView
from dashsync.playback.clock_driver import FeedClockDriver

TICK_SECONDS = 0.1
SKIP_SECONDS = 5.0

OffsetsProvider = Callable[[], dict[CameraView, float]]
TimeListener = Callable[[float], None]


@dataclass(frozen=True)
class PlaybackClock:
    """Point-in-time copy of the timeline state."""

    is_playing: bool
    current_time: float
    duration: float


class TimelineController:
    """Advances logical time and pushes it to every registered feed driver.

    All mutations (ticks, seeks, play/pause, duration changes) and the
    dispatch to drivers happen under one lock, so within a dispatch every
    driver sees the same ``current_time`` and the same offsets snapshot.
    Once :meth:`pause` returns no further tick-driven dispatch happens.

    Reaching the end of the timeline stops playback and rewinds to 0.

    Parameters
    ----------
    offsets:
        Callable returning a consistent ``{view: seconds}`` snapshot.
    ticker_factory:
        ``factory(callback, interval)`` returning an object with
        ``start()``/``stop()``.  A fresh ticker is made on every :meth:`play`,
        and a callback from a ticker stopped since is ignored.  When omitted
        the caller drives :meth:`tick`.
    step:
        Logical seconds added per tick; also the ticker interval.
    """

    def __init__(
        self,
        offsets: OffsetsProvider | None = None,
        ticker_factory=None,
        step: float = TICK_SECONDS,
    ) -> None:
        self._lock = threading.RLock()
        self._offsets = offsets or (lambda: {v: 0.0 for v in CameraView})
        self._step = step
        self._running = False
        self._current_time = 0.0
        self._duration = 0.0
        self._drivers: dict[CameraView, FeedClockDriver] = {}
        self._listeners: list[TimeListener] = []
        self._ticker_factory = ticker_factory
        self._ticker = None
        self._generation = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_playing(self) -> bool:
        return self._running

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def lock(self) -> threading.RLock:
        """Hold this to change feeds without racing a tick dispatch."""
        return self._lock

    def snapshot(self) -> PlaybackClock:
        with self._lock:
            return PlaybackClock(self._running, self._current_time, self._duration)

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def register(self, view: CameraView, driver: FeedClockDriver) -> None:
        with self._lock:
            self._drivers[view] = driver

    def unregister(self, view: CameraView) -> None:
        with self._lock:
            self._drivers.pop(view, None)

    def add_listener(self, listener: TimeListener) -> None:
        """Call *listener(current_time)* after every dispatch."""
        with self._lock:
            self._listeners.append(listener)

    def set_duration(self, duration: float) -> None:
        with self._lock:
            self._duration = max(float(duration), 0.0)
            if self._current_time > self._duration:
                self._current_time = self._duration
                self._dispatch()

    def extend_duration(self, duration: float) -> None:
        """Grow the duration to *duration* if it is longer than the current one."""
        with self._lock:
            if duration > self._duration:
                self._duration = float(duration)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def play(self) -> None:
        """Start advancing.  Allowed before any feed reports a duration."""
        with self._lock:
            if self._running:
                return
            self._running = True
            for driver in self._drivers.values():
                driver.set_playing(True)
            self._dispatch()
            if self._ticker_factory is not None:
                generation = self._generation
                self._ticker = self._ticker_factory(
                    lambda: self._ticker_tick(generation), self._step
                )
                self._ticker.start()

    def pause(self) -> None:
        with self._lock:
            if self._running:
                self._halt()

    def seek(self, t: float) -> None:
        """Jump to *t* (clamped to ``[0, duration]``).  Does not pause."""
        if not math.isfinite(t):
            raise ValueError(f"seek time must be finite, got {t!r}")
        with self._lock:
            self._current_time = min(max(float(t), 0.0), self._duration)
            self._dispatch()

    def scrub(self, t: float) -> None:
        """Manual scrub from a slider: pause, then seek."""
        self.pause()
        self.seek(t)

    def skip(self, delta: float = SKIP_SECONDS) -> None:
        with self._lock:
            self.seek(self._current_time + delta)

    def tick(self) -> None:
        """Advance one step; at the end of the timeline stop and rewind to 0."""
        with self._lock:
            if not self._running:
                return
            if self._duration <= 0:
                # nothing loaded yet; stay running until a feed reports a length
                return
            self._current_time = round(self._current_time + self._step, 9)
            if self._current_time >= self._duration:
                self._halt()
                self._current_time = 0.0
            self._dispatch()

    def refresh(self) -> None:
        """Re-run drift correction at the current time (render-frame cadence)."""
        with self._lock:
            self._dispatch()

    def close(self) -> None:
        """Pause and wait for the ticker thread to exit."""
        with self._lock:
            ticker = self._ticker
        self.pause()
        if ticker is not None:
            ticker.stop()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _halt(self) -> None:
        # the ticker thread may be blocked on our lock; signal it, never join here
        self._running = False
        self._generation += 1
        if self._ticker is not None:
            self._ticker.stop(wait=False)
        for driver in self._drivers.values():
            driver.set_playing(False)

    def _ticker_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.tick()

    def _dispatch(self) -> None:
        t = self._current_time
        offsets = self._offsets()
        for view, driver in self._drivers.items():
            driver.tick(t, offsets.get(view, 0.0))
        for listener in self._listeners:
            listener(t)
