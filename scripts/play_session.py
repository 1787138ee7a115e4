"""Headless synchronized playback of a stored project.

Each feed is modelled by an in-memory media element sized from ffprobe, so
drift correction and the telemetry HUD can be watched without a renderer.
Press Ctrl+C to quit.

Usage:
    uv run python scripts/play_session.py --project 1 --front front.mp4 --back back.mp4
    uv run python scripts/play_session.py --front front.mp4 --drift 1.02
    uv run python scripts/play_session.py --duration 30           # no files, synthetic only
"""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
import time

from dotenv import load_dotenv

load_dotenv()

from dashsync.export.ffmpeg import ExportError, probe_duration  # noqa: E402
from dashsync.layout.models import CameraView  # noqa: E402
from dashsync.overlay.renderer import HudRenderer  # noqa: E402
from dashsync.playback.media import VirtualMediaSource  # noqa: E402
from dashsync.playback.session import ViewingSession  # noqa: E402
from dashsync.playback.ticker import PeriodicTicker  # noqa: E402
from dashsync.projects.models import ProjectNotFoundError  # noqa: E402
from dashsync.projects.service import ProjectService  # noqa: E402
from dashsync.projects.storage import ProjectStorage  # noqa: E402
from dashsync.telemetry.extractor import (  # noqa: E402
    SubprocessTelemetryExtractor,
    TelemetryLoader,
)


def _load_layout(db: str, project_id: int | None):
    if project_id is None:
        return None
    storage = ProjectStorage(db)
    try:
        project = ProjectService(storage).get(project_id)
    finally:
        storage.close()
    print(f"Loaded project {project.id}: {project.name}")
    return project.layout_config


def main() -> None:
    ap = argparse.ArgumentParser(description="Dashcam Sync — headless playback")
    ap.add_argument("--db", default=os.environ.get("DASHSYNC_DB", "projects.db"))
    ap.add_argument("--project", type=int, default=None, help="Project id to load")
    for view in CameraView:
        ap.add_argument(f"--{view.value}", default=None, help=f"{view.value} video file")
    ap.add_argument("--duration", type=float, default=60.0,
                    help="Feed length when a file cannot be probed")
    ap.add_argument("--drift", type=float, default=1.0,
                    help="Playback rate of the back/left/right feeds (1.0 = no drift)")
    ap.add_argument("--ffprobe", default="ffprobe")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        layout = _load_layout(args.db, args.project)
    except ProjectNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    session = ViewingSession(layout, ticker_factory=PeriodicTicker)

    for view in CameraView:
        path = getattr(args, view.value)
        if path is None and view is not CameraView.FRONT:
            continue
        duration = args.duration
        if path is not None:
            try:
                duration = probe_duration(path, args.ffprobe)
            except ExportError as exc:
                print(f"WARNING: {exc}; using {duration:.0f}s", file=sys.stderr)
        rate = 1.0 if view is CameraView.FRONT else args.drift
        session.load_feed(view, VirtualMediaSource(duration, rate=rate))

    cmd = shlex.split(os.environ.get("DASHSYNC_EXTRACTOR_CMD", ""))
    front = args.front or ""
    media_dir = os.path.dirname(os.path.abspath(front)) if front else "."
    loader = TelemetryLoader(media_dir, SubprocessTelemetryExtractor(cmd) if cmd else None)
    result = loader.load(os.path.basename(front))
    session.load_telemetry(result.series)
    print(f"Telemetry: {len(result.series)} samples ({result.source})")

    hud = HudRenderer()
    session.timeline.play()
    print("Playing. Press Ctrl+C to stop.", flush=True)
    try:
        while session.timeline.is_playing:
            clock = session.timeline.snapshot()
            line = hud.caption(session.hud_sample())
            print(f"  {clock.current_time:6.1f}s / {clock.duration:.1f}s  {line}", flush=True)
            time.sleep(1.0)
    except KeyboardInterrupt:
        pass
    finally:
        session.close()
        print("\nPlayback stopped.")


if __name__ == "__main__":
    main()
