"""2-D plotting utilities.

Functions
---------
plot_shear_curve
    Shear stress against horizontal displacement.
plot_vertical_strain
    Vertical movement against horizontal displacement.
plot_failure_envelope
    Mohr-Coulomb line with the recorded failure points.
"""

from __future__ import annotations

from typing import Any

from pyshearbox.postprocess.report import ReportAggregator
from pyshearbox.postprocess.series import SeriesRecorder


def plot_shear_curve(
    recorder: SeriesRecorder,
    ax: Any = None,
    x_max: float = 12.0,
    y_max: float | None = None,
    title: str = "",
) -> Any:
    """Plot the recorded stress-displacement curve.

    Args:
        recorder: Recorder holding the samples.
        ax: Matplotlib axes (creates new figure if None).
        x_max: Upper displacement limit (mm); extended to keep the latest
            sample 2 mm from the edge.
        y_max: Upper stress limit (kPa).  Autoscaled if None.
        title: Plot title.

    Returns:
        Matplotlib axes.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 4))

    d, tau, _ = recorder.as_arrays()
    ax.plot(d, tau, "-", color="#005792", linewidth=2, label="Shear stress (kPa)")
    if len(d):
        ax.fill_between(d, tau, color="#005792", alpha=0.1)

    right = max(x_max, float(d[-1]) + 2.0) if len(d) else x_max
    ax.set_xlim(0.0, right)
    if y_max is not None:
        ax.set_ylim(0.0, y_max)
    else:
        ax.set_ylim(bottom=0.0)
    ax.set_xlabel("Horizontal displacement (mm)")
    ax.set_ylabel("Shear stress (kPa)")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left")
    return ax


def plot_vertical_strain(
    recorder: SeriesRecorder,
    ax: Any = None,
    title: str = "",
) -> Any:
    """Plot vertical movement against horizontal displacement.

    Args:
        recorder: Recorder holding the samples.
        ax: Matplotlib axes (creates new figure if None).
        title: Plot title.

    Returns:
        Matplotlib axes.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 3))

    d, _, dv = recorder.as_arrays()
    ax.plot(d, dv, "-", color="#e67e22", linewidth=2)
    ax.axhline(0.0, color="k", linewidth=0.5)
    ax.set_xlabel("Horizontal displacement (mm)")
    ax.set_ylabel("Vertical strain (mm)")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return ax


def plot_failure_envelope(
    report: ReportAggregator,
    ax: Any = None,
    sigma_max: float = 450.0,
    tau_max: float | None = 300.0,
) -> Any:
    """Plot the Mohr-Coulomb envelope and the recorded failure points.

    Args:
        report: Report of the completed tests.
        ax: Matplotlib axes (creates new figure if None).
        sigma_max: Upper normal-stress limit (kPa).
        tau_max: Upper shear-strength limit (kPa).  Autoscaled if None.

    Returns:
        Matplotlib axes.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(6, 4))

    sigma, tau = report.envelope()
    ax.plot(
        sigma, tau, "-", color="#e74c3c", linewidth=3,
        label=f"c = {report.cohesion():g} kPa, φ = {report.friction_angle():g}°",
    )
    if report.points:
        ax.plot(
            [p.normal_stress for p in report.points],
            [p.shear_strength for p in report.points],
            "o", color="#2c3e50", label="Failure points",
        )

    ax.set_xlim(0.0, sigma_max)
    if tau_max is not None:
        ax.set_ylim(0.0, tau_max)
    ax.set_xlabel("Normal stress (kPa)")
    ax.set_ylabel("Shear strength (kPa)")
    ax.set_title("Failure envelope")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left")
    return ax
