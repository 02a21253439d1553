"""Constitutive response of a direct-shear sample.

All functions are pure and accept scalars or numpy arrays of
displacement; scalar input yields a ``float``.

Classes
-------
MohrCoulomb
    Mohr-Coulomb failure criterion.
ShearResponse
    Stress, force and vertical strain at one displacement.

Functions
---------
shear_strength
    Peak strength with the saturated-sample reduction.
shear_stress_at
    Shear stress along the stress-displacement curve.
vertical_strain_at
    Dilation (positive) or contraction (negative) of the sample.
evaluate
    Bundle the three responses for one displacement.

Pre-peak shape
--------------
The curve rises as a saturating exponential normalised to reach the peak
strength exactly at the peak displacement::

    τ(d) = τ_peak (1 − exp(−3 d / d_p)) / (1 − exp(−3))

so that it is continuous with the post-peak branch, which starts from
τ_peak and softens (contractive soils) or hardens (dilative soils)
linearly over the remaining travel.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from pyshearbox.materials.base import SoilCategory, SoilParameters
from pyshearbox.materials.library import SoilPreset

#: Strength reduction applied to saturated samples.
SATURATED_STRENGTH_FACTOR = 0.70

#: Exponent of the pre-peak exponential rise.
PRE_PEAK_RATE = 3.0

#: Pre-peak dilation of a sand at the reference friction angle (mm/mm).
DILATION_RATE = 0.05
#: Reference friction angle for :data:`DILATION_RATE` (degrees).
REFERENCE_FRICTION_ANGLE = 35.0
#: Post-peak contraction of dilative soils (mm/mm).
POST_PEAK_CONTRACTION_RATE = 0.02
#: Contraction of contractive soils (mm/mm).
CONTRACTION_RATE = 0.03

DILATIVE_CATEGORIES = frozenset({SoilCategory.SAND})


def _out(value: np.ndarray) -> float | np.ndarray:
    return float(value) if np.ndim(value) == 0 else value


# ======================================================================
# Failure criterion
# ======================================================================


@dataclass
class MohrCoulomb:
    """Mohr-Coulomb failure criterion.

    Args:
        cohesion: Cohesion c (kPa).
        friction_angle: Friction angle φ (degrees).
    """

    cohesion: float = 0.0
    friction_angle: float = 30.0

    @property
    def phi_rad(self) -> float:
        """Friction angle in radians."""
        return math.radians(self.friction_angle)

    def shear_strength(self, normal_stress: ArrayLike) -> np.ndarray:
        """Compute shear strength τ = c + σ tan(φ).

        Args:
            normal_stress: Normal stress σ (kPa).

        Returns:
            Shear strength array (kPa).
        """
        sigma = np.asarray(normal_stress, dtype=float)
        return self.cohesion + sigma * np.tan(self.phi_rad)


def shear_strength(
    cohesion: float,
    friction_angle: float,
    normal_stress: float,
    saturated: bool = False,
) -> float:
    """Peak shear strength of the sample (kPa).

    Saturated samples are reduced by the fixed
    :data:`SATURATED_STRENGTH_FACTOR`.
    """
    tau = float(MohrCoulomb(cohesion, friction_angle).shear_strength(normal_stress))
    if saturated:
        tau *= SATURATED_STRENGTH_FACTOR
    return tau


def is_dilative(category: SoilCategory | str) -> bool:
    """True for soils that dilate and harden after the peak."""
    return SoilCategory.parse(category) in DILATIVE_CATEGORIES


# ======================================================================
# Stress-displacement curve
# ======================================================================


def shear_stress_at(
    displacement: ArrayLike,
    peak_strength: float,
    peak_displacement: float,
    post_peak_factor: float,
    max_displacement: float,
    dilative: bool = False,
) -> float | np.ndarray:
    """Shear stress at a horizontal displacement.

    Args:
        displacement: Horizontal displacement d (mm).  Negative values are
            treated as zero.
        peak_strength: Peak shear strength τ_peak (kPa).
        peak_displacement: Displacement at the peak d_p (mm), > 0.
        post_peak_factor: Fractional change of stress between the peak and
            *max_displacement*.
        max_displacement: End of travel (mm), > *peak_displacement*.
        dilative: Harden after the peak instead of softening.

    Returns:
        Shear stress (kPa).
    """
    d = np.maximum(np.asarray(displacement, dtype=float), 0.0)
    rise = (1.0 - np.exp(-PRE_PEAK_RATE * d / peak_displacement)) / (
        1.0 - math.exp(-PRE_PEAK_RATE)
    )
    # zero post-peak span: full softening/hardening right after the peak
    span = max(max_displacement - peak_displacement, np.finfo(float).eps)
    progress = np.clip((d - peak_displacement) / span, 0.0, 1.0)
    sign = 1.0 if dilative else -1.0
    post = 1.0 + sign * post_peak_factor * progress
    tau = peak_strength * np.where(d <= peak_displacement, rise, post)
    return _out(tau)


def vertical_strain_at(
    displacement: ArrayLike,
    category: SoilCategory | str,
    peak_displacement: float,
    friction_angle: float,
) -> float | np.ndarray:
    """Vertical movement of the top cap (mm, positive = dilation).

    Dilative soils rise at a rate proportional to tan(φ) up to the peak and
    then settle slowly; contractive soils settle at a constant rate.

    Args:
        displacement: Horizontal displacement (mm).
        category: Soil category.
        peak_displacement: Displacement at the peak (mm).
        friction_angle: Friction angle φ (degrees).

    Returns:
        Vertical strain (mm).
    """
    d = np.maximum(np.asarray(displacement, dtype=float), 0.0)
    if not is_dilative(category):
        return _out(-CONTRACTION_RATE * d)

    rate = DILATION_RATE * math.tan(math.radians(friction_angle)) / math.tan(
        math.radians(REFERENCE_FRICTION_ANGLE)
    )
    strain = np.where(
        d <= peak_displacement,
        rate * d,
        rate * peak_displacement - POST_PEAK_CONTRACTION_RATE * (d - peak_displacement),
    )
    return _out(strain)


# ======================================================================
# Combined response
# ======================================================================


@dataclass(frozen=True)
class ShearResponse:
    """Instantaneous response of the sample.

    Attributes:
        shear_stress: Shear stress τ (kPa).
        shear_force: Shear force on the sample (kN).
        vertical_strain: Vertical movement (mm).
    """

    shear_stress: float
    shear_force: float
    vertical_strain: float


def evaluate(
    displacement: float,
    soil: SoilParameters,
    preset: SoilPreset,
    normal_stress: float,
    max_displacement: float,
    sample_area: float,
) -> ShearResponse:
    """Evaluate the sample response at *displacement*.

    Args:
        displacement: Horizontal displacement (mm).
        soil: Strength parameters of the sample.
        preset: Curve constants (peak displacement, post-peak factor).
        normal_stress: Applied normal stress (kPa).
        max_displacement: End of travel (mm).
        sample_area: Sample plan area (cm²).

    Returns:
        A :class:`ShearResponse`.
    """
    peak = shear_strength(
        soil.cohesion, soil.friction_angle, normal_stress, soil.saturated
    )
    tau = shear_stress_at(
        displacement,
        peak,
        preset.peak_displacement,
        preset.post_peak_factor,
        max_displacement,
        dilative=is_dilative(soil.category),
    )
    strain = vertical_strain_at(
        displacement, soil.category, preset.peak_displacement, soil.friction_angle
    )
    # kPa * cm² -> kN
    force = tau * sample_area * 1e-4
    return ShearResponse(
        shear_stress=float(tau),
        shear_force=float(force),
        vertical_strain=float(strain),
    )
