"""MediaService — telemetry extraction and clip export for the Web API."""

from __future__ import annotations

import os
import shlex

from dashsync.export.ffmpeg import ExportResult, FfmpegExporter
from dashsync.export.request import build_export_request
from dashsync.layout.models import CameraView
from dashsync.telemetry.extractor import (
    SubprocessTelemetryExtractor,
    TelemetryLoader,
    TelemetryLoadResult,
)
from dashsync.telemetry.models import TelemetrySample
from dashsync.web.schemas import ExportBody


class MediaService:
    """Wraps the two external collaborators behind the HTTP endpoints.

    Parameters
    ----------
    media_dir:
        Directory uploaded/recorded videos live in.
    export_dir:
        Directory exported clips are written to.
    extractor_cmd:
        Extractor program plus leading arguments; empty means every load
        uses synthetic telemetry.
    ffmpeg_bin:
        ffmpeg executable.
    """

    def __init__(
        self,
        media_dir: str,
        export_dir: str,
        extractor_cmd: list[str] | None = None,
        ffmpeg_bin: str = "ffmpeg",
    ) -> None:
        extractor = SubprocessTelemetryExtractor(extractor_cmd) if extractor_cmd else None
        self._loader = TelemetryLoader(media_dir, extractor)
        self._exporter = FfmpegExporter(media_dir, export_dir, ffmpeg_bin=ffmpeg_bin)

    @classmethod
    def from_env(cls) -> MediaService:
        """Build from ``DASHSYNC_*`` environment variables."""
        return cls(
            media_dir=os.environ.get("DASHSYNC_MEDIA_DIR", "media"),
            export_dir=os.environ.get("DASHSYNC_EXPORT_DIR", "exports"),
            extractor_cmd=shlex.split(os.environ.get("DASHSYNC_EXTRACTOR_CMD", "")),
            ffmpeg_bin=os.environ.get("DASHSYNC_FFMPEG", "ffmpeg"),
        )

    def load_telemetry(self, filename: str) -> TelemetryLoadResult:
        return self._loader.load(filename)

    def export(self, body: ExportBody) -> ExportResult:
        """Build the export request from *body* and run it.

        Raises
        ------
        ExportError
            Propagated from the exporter.
        """
        sample = TelemetrySample.from_dict(body.telemetry[0]) if body.telemetry else None
        request = build_export_request(CameraView(body.view), body.filename, sample)
        return self._exporter.export(request)
