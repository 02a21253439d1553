"""Materials: soil description, presets and constitutive response."""

from pyshearbox.materials.base import SoilCategory, Saturation, SoilParameters
from pyshearbox.materials.library import (
    SoilPreset,
    parameters_for,
    sand,
    clay,
    silt,
    sandy_clay,
)
from pyshearbox.materials.constitutive import (
    MohrCoulomb,
    ShearResponse,
    shear_strength,
    shear_stress_at,
    vertical_strain_at,
    is_dilative,
    evaluate,
)

__all__ = [
    "SoilCategory",
    "Saturation",
    "SoilParameters",
    "SoilPreset",
    "parameters_for",
    "sand",
    "clay",
    "silt",
    "sandy_clay",
    "MohrCoulomb",
    "ShearResponse",
    "shear_strength",
    "shear_stress_at",
    "vertical_strain_at",
    "is_dilative",
    "evaluate",
]
