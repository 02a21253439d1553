"""Postprocessing: recorded series and test reports."""

from pyshearbox.postprocess.series import (
    SamplePoint,
    FailureEnvelopePoint,
    SeriesRecorder,
)
from pyshearbox.postprocess.report import ReportAggregator

__all__ = [
    "SamplePoint",
    "FailureEnvelopePoint",
    "SeriesRecorder",
    "ReportAggregator",
]
