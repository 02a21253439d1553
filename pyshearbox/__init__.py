"""
pyshearbox: simulator of the geotechnical direct-shear test.

Subpackages
-----------
materials
    Soil categories, presets and the constitutive response.
apparatus
    Test configuration, run state and the test runner.
time
    Fixed time stepping and tick scheduling.
postprocess
    Recorded series and test reports.
visualization
    Stress curves, failure envelope and apparatus schematic.
"""

from pyshearbox import (
    materials,
    apparatus,
    time,
    postprocess,
    visualization,
)
from pyshearbox.apparatus import TestConfig, TestRunner, Phase, RunState
from pyshearbox.materials import SoilCategory, Saturation, SoilParameters
from pyshearbox.postprocess import SeriesRecorder, ReportAggregator

__version__ = "0.1.0"

__all__ = [
    "materials",
    "apparatus",
    "time",
    "postprocess",
    "visualization",
    "TestConfig",
    "TestRunner",
    "Phase",
    "RunState",
    "SoilCategory",
    "Saturation",
    "SoilParameters",
    "SeriesRecorder",
    "ReportAggregator",
]
