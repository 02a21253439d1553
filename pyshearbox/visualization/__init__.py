"""Visualization: stress curves, failure envelope and apparatus schematic."""

from pyshearbox.visualization.plot2d import (
    plot_shear_curve,
    plot_vertical_strain,
    plot_failure_envelope,
)
from pyshearbox.visualization.apparatus import draw_apparatus

__all__ = [
    "plot_shear_curve",
    "plot_vertical_strain",
    "plot_failure_envelope",
    "draw_apparatus",
]
