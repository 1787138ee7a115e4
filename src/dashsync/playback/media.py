"""Media source contract and an in-memory media element.

A media source is whatever actually decodes a feed (a browser ``<video>``,
a decoder process, ...).  The clock driver only needs this surface:

    duration, aspect_ratio, position   -- read-only floats
    seek(t)                            -- jump to *t* seconds
    play() / pause()                   -- play() may raise MediaPlaybackError
    on_ready(callback)                 -- callback(duration, aspect_ratio) once
                                          metadata is known
    release()                          -- free decoder resources
"""

from __future__ import annotations

import time
from collections.abc import Callable


class MediaPlaybackError(Exception):
    """Raised when a media source refuses to start (e.g. autoplay policy)."""


ReadyCallback = Callable[[float, float], None]


class VirtualMediaSource:
    """Media element that advances its position from a clock while playing.

    Used by the headless CLI and by tests.  Readiness is reported
    immediately on :meth:`on_ready` unless ``deferred=True``, in which case
    :meth:`announce_ready` must be called.

    Parameters
    ----------
    duration:
        Natural length in seconds.
    aspect_ratio:
        Width / height.
    rate:
        Playback speed relative to real time; values other than 1.0 model a
        drifting decoder.
    clock:
        Monotonic time function, injectable for tests.
    """

    def __init__(
        self,
        duration: float,
        aspect_ratio: float = 16 / 9,
        rate: float = 1.0,
        deferred: bool = False,
        clock: Callable[[], float] = time.monotonic,
        refuse_play: bool = False,
    ) -> None:
        self.duration = duration
        self.aspect_ratio = aspect_ratio
        self.rate = rate
        self.refuse_play = refuse_play
        self.released = False
        self.seeks: list[float] = []
        self._clock = clock
        self._deferred = deferred
        self._ready = not deferred
        self._callbacks: list[ReadyCallback] = []
        self._base_position = 0.0
        self._playing_since: float | None = None

    @property
    def is_playing(self) -> bool:
        return self._playing_since is not None

    @property
    def position(self) -> float:
        pos = self._base_position
        if self._playing_since is not None:
            pos += (self._clock() - self._playing_since) * self.rate
        return min(max(pos, 0.0), self.duration)

    def seek(self, t: float) -> None:
        self.seeks.append(t)
        self._base_position = t
        if self._playing_since is not None:
            self._playing_since = self._clock()

    def play(self) -> None:
        if self.refuse_play:
            raise MediaPlaybackError("playback was not allowed")
        if self._playing_since is None:
            self._playing_since = self._clock()

    def pause(self) -> None:
        if self._playing_since is not None:
            self._base_position = self.position
            self._playing_since = None

    def on_ready(self, callback: ReadyCallback) -> None:
        if self._ready:
            callback(self.duration, self.aspect_ratio)
        else:
            self._callbacks.append(callback)

    def announce_ready(self) -> None:
        self._ready = True
        callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb(self.duration, self.aspect_ratio)

    def release(self) -> None:
        self.pause()
        self.released = True
        self._callbacks.clear()
