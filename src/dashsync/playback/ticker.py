"""PeriodicTicker — calls a function on a fixed cadence from a background thread."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class PeriodicTicker:
    """Invokes *callback* every *interval* seconds until stopped.

    Waiting between calls is an ``Event.wait`` so :meth:`stop` interrupts it
    immediately.  :meth:`stop` may be called from inside *callback*.

    Parameters
    ----------
    callback:
        Zero-argument function.
    interval:
        Seconds between calls.
    """

    def __init__(self, callback: Callable[[], None], interval: float = 0.1) -> None:
        self._callback = callback
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), daemon=True, name="TimelineTicker"
        )
        self._thread.start()

    def stop(self, wait: bool = True) -> None:
        """Signal the thread to stop.

        With *wait* the thread is joined, unless ``stop`` is running on the
        ticker thread itself.
        """
        self._stop_event.set()
        thread = self._thread
        if wait and thread is not None and thread is not threading.current_thread():
            thread.join(timeout=2.0)

    def _run(self, stop_event: threading.Event) -> None:
        next_at = time.monotonic() + self._interval
        while not stop_event.wait(max(next_at - time.monotonic(), 0.0)):
            self._callback()
            next_at += self._interval
