"""Telemetry extraction — runs an external extractor and falls back to synthetic data.

The extractor is any program that takes a video path as its last argument
and prints a CSV table to stdout with at least a ``timestamp`` column.  How it
decodes the container is its own business.
"""

from __future__ import annotations

import csv
import io
import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from dashsync.telemetry.models import TelemetrySample, TelemetrySeries
from dashsync.telemetry.synthetic import generate_synthetic_series

_logger = logging.getLogger(__name__)

SOURCE_EXTRACTED = "extracted"
SOURCE_SYNTHETIC = "synthetic"


class TelemetryExtractionError(Exception):
    """Raised when the extractor cannot produce a series for a file."""


def parse_telemetry_csv(text: str) -> TelemetrySeries:
    """Parse extractor CSV output into a :class:`TelemetrySeries`.

    Raises
    ------
    TelemetryExtractionError
        If there is no ``timestamp`` column or a timestamp is not a number.
    """
    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames is None or "timestamp" not in reader.fieldnames:
        raise TelemetryExtractionError("extractor output has no 'timestamp' column")
    samples = []
    for lineno, row in enumerate(reader, start=2):
        try:
            samples.append(TelemetrySample.from_dict(row))
        except (TypeError, ValueError) as exc:
            raise TelemetryExtractionError(
                f"bad telemetry row at line {lineno}: {exc}"
            ) from exc
    return TelemetrySeries(samples)


class SubprocessTelemetryExtractor:
    """Runs ``command + [path]`` and parses its CSV stdout.

    Parameters
    ----------
    command:
        Program and leading arguments, e.g. ``["sei-extract", "--csv"]``.
    timeout:
        Seconds before the process is killed.
    """

    def __init__(self, command: Sequence[str], timeout: float = 60.0) -> None:
        if not command:
            raise ValueError("extractor command must not be empty")
        self._command = list(command)
        self._timeout = timeout

    def extract(self, path: str) -> TelemetrySeries:
        cmd = [*self._command, path]
        try:
            proc = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self._timeout
            )
        except FileNotFoundError as exc:
            raise TelemetryExtractionError(f"extractor not found: {cmd[0]!r}") from exc
        except subprocess.TimeoutExpired as exc:
            raise TelemetryExtractionError(
                f"extractor timed out after {self._timeout:.0f}s"
            ) from exc

        if proc.returncode != 0:
            detail = (proc.stderr or "").strip().splitlines()[-1:] or ["no output"]
            raise TelemetryExtractionError(
                f"extractor exited with code {proc.returncode}: {detail[0]}"
            )
        return parse_telemetry_csv(proc.stdout)


@dataclass
class TelemetryLoadResult:
    series: TelemetrySeries
    source: str
    """``"extracted"`` or ``"synthetic"``."""


class TelemetryLoader:
    """Resolves a filename under *media_dir* and extracts its telemetry.

    Any failure (unresolvable file, no extractor configured, extractor error,
    empty output) yields the synthetic series instead.  :meth:`load` never
    raises for those cases.

    Parameters
    ----------
    media_dir:
        Directory the server can read videos from.
    extractor:
        Object with ``extract(path) -> TelemetrySeries``; ``None`` disables
        extraction.
    """

    def __init__(self, media_dir: str | Path, extractor=None) -> None:
        self._media_dir = Path(media_dir)
        self._extractor = extractor

    def resolve(self, filename: str) -> Path | None:
        """Return the file path for *filename* inside the media dir, or None."""
        if not filename:
            return None
        root = self._media_dir.resolve()
        candidate = (root / filename).resolve()
        if not candidate.is_relative_to(root) or not candidate.is_file():
            return None
        return candidate

    def load(self, filename: str) -> TelemetryLoadResult:
        path = self.resolve(filename)
        if path is None:
            _logger.info("Telemetry source %r not accessible; using synthetic data", filename)
            return self._synthetic()
        if self._extractor is None:
            _logger.info("No telemetry extractor configured; using synthetic data")
            return self._synthetic()

        try:
            series = self._extractor.extract(str(path))
        except TelemetryExtractionError as exc:
            _logger.warning("Telemetry extraction failed for %s: %s", path.name, exc)
            return self._synthetic()

        if not series:
            _logger.warning("Extractor returned no samples for %s", path.name)
            return self._synthetic()

        _logger.info("Extracted %d telemetry samples from %s", len(series), path.name)
        return TelemetryLoadResult(series=series, source=SOURCE_EXTRACTED)

    @staticmethod
    def _synthetic() -> TelemetryLoadResult:
        return TelemetryLoadResult(series=generate_synthetic_series(), source=SOURCE_SYNTHETIC)
