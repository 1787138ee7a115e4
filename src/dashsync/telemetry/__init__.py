"""Dashcam telemetry: samples, time alignment and extraction.

Public API
----------
TelemetrySample              - one recorded instant of vehicle data
TelemetrySeries              - ordered samples for one video, nearest-sample lookup
nearest_sample               - linear-scan nearest lookup (left-biased ties)
generate_synthetic_series    - deterministic fallback drive
SubprocessTelemetryExtractor - runs an external extractor, parses CSV output
TelemetryLoader              - resolve + extract, falling back to synthetic data
TelemetryExtractionError     - raised by extractors
"""

from dashsync.telemetry.extractor import (
    SubprocessTelemetryExtractor,
    TelemetryExtractionError,
    TelemetryLoader,
    TelemetryLoadResult,
)
from dashsync.telemetry.models import TelemetrySample, TelemetrySeries, nearest_sample
from dashsync.telemetry.synthetic import generate_synthetic_series

__all__ = [
    "SubprocessTelemetryExtractor",
    "TelemetryExtractionError",
    "TelemetryLoadResult",
    "TelemetryLoader",
    "TelemetrySample",
    "TelemetrySeries",
    "generate_synthetic_series",
    "nearest_sample",
]
