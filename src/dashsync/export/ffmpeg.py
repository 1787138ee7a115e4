"""ffmpeg collaborator — burns a telemetry caption into a short clip.

The exporter trims the first ``clip_seconds`` of the selected feed and, when
the request carries a telemetry sample, draws a one-line caption with
``drawtext``.  Failures are surfaced as :class:`ExportError`; there is no
fallback because the clip is a user-facing artifact.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import uuid
from dataclasses import dataclass
from pathlib import Path

from dashsync.export.request import ExportRequest
from dashsync.overlay.renderer import HudRenderer

_logger = logging.getLogger(__name__)

_TAIL_LINES = 5


class ExportError(Exception):
    """Raised when a clip cannot be produced; the message is user-facing."""


@dataclass
class ExportResult:
    url: str
    path: Path


def escape_drawtext(text: str) -> str:
    """Escape *text* for use inside a single-quoted drawtext ``text=`` value."""
    out = text.replace("\\", "\\\\")
    for ch in ("'", ":", "%", ","):
        out = out.replace(ch, "\\" + ch)
    return out


def probe_duration(path: str | Path, ffprobe_bin: str = "ffprobe") -> float:
    """Return the container duration of *path* in seconds."""
    cmd = [
        ffprobe_bin,
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        str(path),
    ]
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as exc:
        raise ExportError(f"ffprobe not found: {ffprobe_bin}") from exc
    if proc.returncode != 0:
        raise ExportError(f"ffprobe failed for {path}: {proc.stderr.strip()}")
    try:
        return float(proc.stdout.strip())
    except ValueError as exc:
        raise ExportError(f"ffprobe returned no duration for {path}") from exc


class FfmpegExporter:
    """Produces overlay clips under *output_dir* and returns their URLs.

    Parameters
    ----------
    media_dir:
        Directory the request's ``filename`` is resolved against.
    output_dir:
        Where clips are written; created on demand.
    ffmpeg_bin:
        ffmpeg executable name or path.
    clip_seconds:
        Length of the exported clip.
    url_prefix:
        Public URL path under which *output_dir* is served.
    """

    def __init__(
        self,
        media_dir: str | Path,
        output_dir: str | Path,
        ffmpeg_bin: str = "ffmpeg",
        clip_seconds: float = 10.0,
        url_prefix: str = "/exports",
    ) -> None:
        self._media_dir = Path(media_dir)
        self._output_dir = Path(output_dir)
        self._ffmpeg = ffmpeg_bin
        self._clip_seconds = clip_seconds
        self._url_prefix = url_prefix.rstrip("/")
        self._hud = HudRenderer()

    def build_command(self, source: Path, output: Path, request: ExportRequest) -> list[str]:
        cmd = [self._ffmpeg, "-y", "-i", str(source), "-t", f"{self._clip_seconds:g}"]
        if request.telemetry:
            caption = escape_drawtext(self._hud.caption(request.telemetry[0]))
            cmd += [
                "-vf",
                (
                    f"drawtext=text='{caption}':x=24:y=h-th-24:fontsize=36"
                    ":fontcolor=white:box=1:boxcolor=black@0.5:boxborderw=8"
                ),
            ]
        cmd += ["-c:v", "libx264", "-preset", "veryfast", "-an", str(output)]
        return cmd

    def export(self, request: ExportRequest) -> ExportResult:
        """Render the clip for *request*.

        Raises
        ------
        ExportError
            If the source is not accessible, ffmpeg is missing, or ffmpeg
            exits nonzero.
        """
        source = self._resolve(request.filename)
        if shutil.which(self._ffmpeg) is None:
            raise ExportError(f"ffmpeg not found: {self._ffmpeg}")

        self._output_dir.mkdir(parents=True, exist_ok=True)
        name = f"{request.view.value}_{source.stem}_{uuid.uuid4().hex[:8]}.mp4"
        output = self._output_dir / name
        cmd = self.build_command(source, output, request)

        _logger.info("Exporting %s clip from %s", request.view.value, source.name)
        proc = subprocess.run(cmd, capture_output=True, text=True)
        if proc.returncode != 0:
            tail = "\n".join((proc.stderr or "").strip().splitlines()[-_TAIL_LINES:])
            msg = f"ffmpeg export failed (code {proc.returncode})."
            if tail:
                msg += f"\n{tail}"
            raise ExportError(msg)

        return ExportResult(url=f"{self._url_prefix}/{name}", path=output)

    def _resolve(self, filename: str) -> Path:
        root = self._media_dir.resolve()
        candidate = (root / filename).resolve()
        if not filename or not candidate.is_relative_to(root) or not candidate.is_file():
            raise ExportError(f"Source video not found: {filename!r}")
        return candidate
