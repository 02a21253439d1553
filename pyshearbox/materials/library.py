"""Standard soil presets.

Default strength parameters and shear-curve constants for each
:class:`~pyshearbox.materials.base.SoilCategory`.  Values are typical
teaching values, not site data; the user may override cohesion and
friction angle after selecting a category.

Usage::

    from pyshearbox.materials import parameters_for
    parameters_for("clay", "saturated").peak_displacement  # 4.8 mm
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from pyshearbox.materials.base import Saturation, SoilCategory

#: Peak displacement multiplier applied to saturated samples.
SATURATED_PEAK_FACTOR = 1.2


@dataclass(frozen=True)
class SoilPreset:
    """Default parameters of one soil category.

    Args:
        cohesion: Cohesion c (kPa).
        friction_angle: Friction angle φ (degrees).
        peak_displacement: Horizontal displacement at peak resistance (mm).
        post_peak_factor: Post-peak softening (or hardening, for dilative
            soils) over the remaining travel, as a fraction of the peak.
    """

    cohesion: float
    friction_angle: float
    peak_displacement: float
    post_peak_factor: float


# ------------------------------------------------------------------
# Dry presets
# ------------------------------------------------------------------

sand = SoilPreset(
    cohesion=0.0,               # kPa
    friction_angle=35.0,        # degrees
    peak_displacement=2.0,      # mm
    post_peak_factor=0.10,
)

clay = SoilPreset(
    cohesion=25.0,
    friction_angle=20.0,
    peak_displacement=4.0,
    post_peak_factor=0.30,
)

silt = SoilPreset(
    cohesion=10.0,
    friction_angle=28.0,
    peak_displacement=3.0,
    post_peak_factor=0.20,
)

sandy_clay = SoilPreset(
    cohesion=15.0,
    friction_angle=30.0,
    peak_displacement=2.5,
    post_peak_factor=0.15,
)

PRESETS: dict[SoilCategory, SoilPreset] = {
    SoilCategory.SAND: sand,
    SoilCategory.CLAY: clay,
    SoilCategory.SILT: silt,
    SoilCategory.SANDY_CLAY: sandy_clay,
}


def parameters_for(
    category: SoilCategory | str,
    saturation: Saturation | str = Saturation.DRY,
) -> SoilPreset:
    """Return the preset for *category* under *saturation*.

    Saturated samples reach their peak later: the peak displacement is
    multiplied by :data:`SATURATED_PEAK_FACTOR` for every category.

    Args:
        category: Soil category (member or string).
        saturation: Sample condition (member or string).

    Returns:
        The adjusted :class:`SoilPreset`.

    Raises:
        InvalidCategory: If *category* or *saturation* is not recognised.
    """
    preset = PRESETS[SoilCategory.parse(category)]
    if Saturation.parse(saturation) is Saturation.SATURATED:
        preset = replace(
            preset,
            peak_displacement=preset.peak_displacement * SATURATED_PEAK_FACTOR,
        )
    return preset
