"""Export request builder — what gets sent to the transcoder."""

from __future__ import annotations

from dataclasses import dataclass, field

from dashsync.layout.models import CameraView
from dashsync.telemetry.models import TelemetrySample


@dataclass(frozen=True)
class ExportRequest:
    view: CameraView
    filename: str
    telemetry: tuple[TelemetrySample, ...] = field(default_factory=tuple)
    """Zero or one sample; empty means "no overlay text"."""

    def to_dict(self) -> dict:
        return {
            "view": self.view.value,
            "filename": self.filename,
            "telemetry": [s.to_dict() for s in self.telemetry],
        }


def build_export_request(
    view: CameraView, filename: str, sample: TelemetrySample | None
) -> ExportRequest:
    """Pack the selected view, its source file and the current HUD sample.

    No placeholder telemetry is invented when *sample* is None.
    """
    return ExportRequest(
        view=CameraView.parse(view),
        filename=filename,
        telemetry=(sample,) if sample is not None else (),
    )
