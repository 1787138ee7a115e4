"""ViewingSession — one open project: layout, timeline, four feeds and telemetry."""

from __future__ import annotations

from typing import Protocol

from dashsync.export.request import ExportRequest, build_export_request
from dashsync.layout.models import CameraView, FeedPose, LayoutConfig
from dashsync.layout.state import LayoutState
from dashsync.playback.clock_driver import DRIFT_THRESHOLD, FeedClockDriver
from dashsync.playback.timeline import TimelineController
from dashsync.telemetry.models import TelemetrySample, TelemetrySeries


class RenderSink(Protocol):
    """What the 3D scene needs from a session each frame."""

    def update_pose(self, view: CameraView, pose: FeedPose) -> None: ...

    def update_feed(self, view: CameraView, loaded: bool) -> None: ...


class ViewingSession:
    """Wires a :class:`LayoutState`, a :class:`TimelineController` and one
    :class:`FeedClockDriver` per view.

    The timeline duration is the longest loaded feed.  The HUD sample is
    recomputed after every timeline dispatch using the front feed's offset,
    whichever view is selected.  Feed changes take the timeline lock so they
    never interleave with a tick.

    Parameters
    ----------
    layout:
        Initial layout (e.g. from a stored project).
    ticker_factory:
        Passed to :class:`TimelineController`; ``None`` for manual ticking.
    drift_threshold:
        Passed to every :class:`FeedClockDriver`.
    """

    def __init__(
        self,
        layout: LayoutConfig | None = None,
        ticker_factory=None,
        drift_threshold: float = DRIFT_THRESHOLD,
    ) -> None:
        self.layout = LayoutState(layout)
        self.timeline = TimelineController(
            offsets=self.layout.offsets_snapshot, ticker_factory=ticker_factory
        )
        self.drivers = {view: FeedClockDriver(view, drift_threshold) for view in CameraView}
        for view, driver in self.drivers.items():
            self.timeline.register(view, driver)
        self._telemetry = TelemetrySeries()
        self._hud_sample: TelemetrySample | None = None
        self.timeline.add_listener(self._on_time)

    # ------------------------------------------------------------------
    # Feeds
    # ------------------------------------------------------------------

    def load_feed(self, view: CameraView, source) -> None:
        """Bind *source* to *view*; the timeline grows when it reports its length."""
        view = CameraView.parse(view)
        with self.timeline.lock:
            self.drivers[view].bind(source, on_loaded=self._on_feed_loaded)

    def eject_feed(self, view: CameraView) -> None:
        view = CameraView.parse(view)
        with self.timeline.lock:
            self.drivers[view].unbind()
            durations = [d.duration for d in self.drivers.values() if d.is_loaded]
            self.timeline.set_duration(max(durations, default=0.0))

    def loaded_views(self) -> list[CameraView]:
        return [v for v, d in self.drivers.items() if d.is_loaded]

    # ------------------------------------------------------------------
    # Calibration
    # ------------------------------------------------------------------

    def set_offset(self, view: CameraView, seconds: float) -> None:
        """Change one feed's sync offset and resync immediately."""
        self.layout.set_offset(view, seconds)
        self.timeline.refresh()

    def layout_config(self) -> LayoutConfig:
        return self.layout.to_config()

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------

    @property
    def telemetry(self) -> TelemetrySeries:
        return self._telemetry

    def load_telemetry(self, series: TelemetrySeries) -> None:
        """Replace the session's telemetry (never merged with the previous one)."""
        with self.timeline.lock:
            self._telemetry = series
            self._on_time(self.timeline.current_time)

    def lookup_target(self) -> float | None:
        return self._telemetry.lookup_target(
            self.timeline.current_time, self.layout.offset(CameraView.FRONT)
        )

    def hud_sample(self) -> TelemetrySample | None:
        return self._hud_sample

    def export_request(self, view: CameraView, filename: str) -> ExportRequest:
        return build_export_request(view, filename, self._hud_sample)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_frame(self, sink: RenderSink) -> None:
        """Push poses and feed status to *sink* and run drift correction."""
        for view in CameraView:
            sink.update_pose(view, self.layout.pose(view))
            sink.update_feed(view, self.drivers[view].is_loaded)
        self.timeline.refresh()

    def close(self) -> None:
        self.timeline.close()
        with self.timeline.lock:
            for driver in self.drivers.values():
                driver.unbind()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _on_feed_loaded(self, view: CameraView, duration: float, aspect_ratio: float) -> None:
        with self.timeline.lock:
            self.timeline.extend_duration(duration)
            if self.timeline.is_playing:
                self.drivers[view].set_playing(True)
            self.timeline.refresh()

    def _on_time(self, current_time: float) -> None:
        self._hud_sample = self._telemetry.sample_at(
            current_time, self.layout.offset(CameraView.FRONT)
        )
