"""Schematic of the direct-shear apparatus.

:func:`draw_apparatus` is a pure function of the run state and parameters.
:meth:`~pyshearbox.apparatus.runner.TestRunner.subscribe` passes only the
state, so bind the rest with a closure or :func:`functools.partial` to
redraw the machine after every change::

    runner.subscribe(
        lambda state: draw_apparatus(state, runner.soil, runner.config, ax)
    )
"""

from __future__ import annotations

from typing import Any

from pyshearbox.apparatus.config import TestConfig
from pyshearbox.apparatus.state import RunState
from pyshearbox.materials.base import Saturation, SoilCategory, SoilParameters

# (dry, saturated) fill colours
SOIL_COLORS = {
    SoilCategory.SAND: ("#F4A460", "#D2B48C"),
    SoilCategory.CLAY: ("#A0522D", "#8B4513"),
    SoilCategory.SILT: ("#DEB887", "#BC8F8F"),
    SoilCategory.SANDY_CLAY: ("#D2691E", "#CD853F"),
}

# Drawing units: an 800 x 450 canvas, y pointing up.
_WIDTH, _HEIGHT = 800.0, 450.0
_BOX_W, _BOX_H = 400.0, 200.0
_BOX_X = (_WIDTH - _BOX_W) / 2
_BOX_Y = 100.0
#: Travel of the upper half at the end of the test.
_MAX_SHIFT = 100.0


def soil_color(soil: SoilParameters) -> str:
    """Fill colour of the sample."""
    dry, wet = SOIL_COLORS[soil.category]
    return wet if soil.saturation is Saturation.SATURATED else dry


def weight_count(normal_stress: float) -> int:
    """Number of weights drawn on the hanger (one per 50 kPa, at most 5)."""
    return max(0, min(int(normal_stress // 50), 5))


def draw_apparatus(
    state: RunState,
    soil: SoilParameters,
    config: TestConfig,
    ax: Any = None,
) -> Any:
    """Draw the shear box at the state's displacement.

    The axes are cleared first.

    Args:
        state: Current run state.
        soil: Soil parameters (sample colour and caption).
        config: Test configuration (normal stress, end of travel).
        ax: Matplotlib axes (creates new figure if None).

    Returns:
        Matplotlib axes.
    """
    import matplotlib.pyplot as plt
    from matplotlib.patches import Circle, Rectangle

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 4.5))
    ax.clear()

    shift = state.displacement / config.max_displacement * _MAX_SHIFT
    half = _BOX_H / 2

    ax.add_patch(Rectangle((0, 0), _WIDTH, _HEIGHT, color="#f8f9fa"))
    # lower half (fixed) and upper half (moving)
    ax.add_patch(Rectangle((_BOX_X, _BOX_Y), _BOX_W, half, color="#95a5a6"))
    ax.add_patch(Rectangle((_BOX_X + shift, _BOX_Y + half), _BOX_W, half, color="#7f8c8d"))

    soil_w, soil_h = _BOX_W * 0.9, _BOX_H * 0.8
    ax.add_patch(
        Rectangle(
            (_BOX_X + (_BOX_W - soil_w) / 2 + shift * 0.8, _BOX_Y + (_BOX_H - soil_h) / 2),
            soil_w, soil_h, color=soil_color(soil),
        )
    )
    ax.plot(
        [_BOX_X, _BOX_X + _BOX_W], [_BOX_Y + half, _BOX_Y + half],
        color="#34495e", linewidth=2,
    )

    for dx in (30.0, _BOX_W - 30.0):
        for dy in (-15.0, 15.0):
            ax.add_patch(Circle((_BOX_X + shift + dx, _BOX_Y + half + dy), 6, color="#e74c3c"))

    # weight hanger
    post_x, post_y = _BOX_X - 100.0, _BOX_Y + 30.0
    ax.add_patch(Rectangle((post_x + 25, post_y), 10, 120, color="#95a5a6"))
    ax.add_patch(Rectangle((post_x, post_y), 60, 10, color="#95a5a6"))
    for i in range(weight_count(config.normal_stress)):
        ax.add_patch(Rectangle((post_x + 10, post_y + 15 + i * 20), 40, 15, color="#2c3e50"))

    # normal force
    top_x = _BOX_X + _BOX_W / 2 + shift
    top_y = _BOX_Y + _BOX_H
    ax.annotate(
        "", xy=(top_x, top_y), xytext=(top_x, top_y + 30),
        arrowprops=dict(arrowstyle="-|>", color="#3498db", lw=2),
    )
    ax.text(top_x - 30, top_y + 40, f"σ = {config.normal_stress:g} kPa", color="#3498db", fontsize=9)

    # shear force
    mid_y = _BOX_Y + half
    right = _BOX_X + _BOX_W
    ax.annotate(
        "", xy=(right + 30, mid_y), xytext=(right + 10, mid_y),
        arrowprops=dict(arrowstyle="-|>", color="#e74c3c", lw=2),
    )
    ax.text(right + 35, mid_y + 10, f"τ = {state.shear_stress:.2f} kPa", color="#e74c3c", fontsize=9)

    state_label = "Saturated" if soil.saturated else "Dry"
    lines = [
        f"{soil.category.value} | c = {soil.cohesion:g} kPa | φ = {soil.friction_angle:g}°",
        f"σ = {config.normal_stress:g} kPa | {state_label} | {state.phase.value}",
        f"Displacement: {state.displacement:.2f} mm | "
        f"Vertical: {state.vertical_strain:+.3f} mm",
    ]
    ax.text(20, _HEIGHT - 30, "Direct shear machine", color="#2c3e50", fontsize=12)
    for i, line in enumerate(lines):
        ax.text(20, _HEIGHT - 55 - 22 * i, line, color="#2c3e50", fontsize=9)

    ax.set_xlim(0, _WIDTH)
    ax.set_ylim(0, _HEIGHT)
    ax.set_aspect("equal")
    ax.set_axis_off()
    return ax
