"""Soil description used by the constitutive engine and the test runner.

Classes
-------
SoilCategory
    Enumerated soil types available in the apparatus.
Saturation
    Dry or saturated sample condition.
SoilParameters
    Strength parameters of the sample under test.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum

from pyshearbox.errors import InvalidCategory, InvalidConfig


class SoilCategory(Enum):
    """Soil category of the sample."""

    SAND = "sand"
    CLAY = "clay"
    SILT = "silt"
    SANDY_CLAY = "sandy_clay"

    @classmethod
    def parse(cls, value: SoilCategory | str) -> SoilCategory:
        """Return the category for *value*.

        Accepts a member, its value, or its name in any case.  The spellings
        ``clayeySand`` and ``sandClay`` map to :attr:`SANDY_CLAY`.

        Raises:
            InvalidCategory: If *value* names no known category.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            key = _CATEGORY_ALIASES.get(key, key)
            for member in cls:
                if key == member.value:
                    return member
        raise InvalidCategory(f"Unknown soil category: {value!r}")


_CATEGORY_ALIASES = {
    "clayeysand": "sandy_clay",
    "sandclay": "sandy_clay",
    "sandyclay": "sandy_clay",
    "clayey_sand": "sandy_clay",
}


class Saturation(Enum):
    """Moisture condition of the sample."""

    DRY = "dry"
    SATURATED = "saturated"

    @classmethod
    def parse(cls, value: Saturation | str) -> Saturation:
        """Return the saturation state for *value*.

        Raises:
            InvalidCategory: If *value* is neither ``dry`` nor ``saturated``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key == member.value:
                    return member
        raise InvalidCategory(f"Unknown saturation state: {value!r}")


@dataclass(frozen=True)
class SoilParameters:
    """Strength parameters of a direct-shear sample.

    Cohesion and friction angle follow the category preset only when built
    with :meth:`from_category`; either may be overridden afterwards with
    :func:`dataclasses.replace`.

    Args:
        category: Soil category.
        cohesion: Cohesion c (kPa), >= 0.
        friction_angle: Friction angle φ (degrees), in [0, 90].
        saturation: Sample condition.  Defaults to dry.

    Example::

        soil = SoilParameters.from_category("clay", saturation="saturated")
        soil.cohesion  # 25.0
    """

    category: SoilCategory
    cohesion: float
    friction_angle: float
    saturation: Saturation = Saturation.DRY

    @classmethod
    def from_category(
        cls,
        category: SoilCategory | str,
        saturation: Saturation | str = Saturation.DRY,
    ) -> SoilParameters:
        """Build parameters from the default preset of *category*."""
        from pyshearbox.materials.library import parameters_for

        cat = SoilCategory.parse(category)
        sat = Saturation.parse(saturation)
        preset = parameters_for(cat, sat)
        return cls(
            category=cat,
            cohesion=preset.cohesion,
            friction_angle=preset.friction_angle,
            saturation=sat,
        )

    @property
    def saturated(self) -> bool:
        """True for a saturated sample."""
        return self.saturation is Saturation.SATURATED

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            InvalidConfig: If a value is out of range or not finite.
        """
        if not isinstance(self.category, SoilCategory):
            raise InvalidConfig(f"category must be a SoilCategory, got {self.category!r}")
        if not isinstance(self.saturation, Saturation):
            raise InvalidConfig(f"saturation must be a Saturation, got {self.saturation!r}")
        for name in ("cohesion", "friction_angle"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Real) or isinstance(value, bool):
                raise InvalidConfig(f"{name} must be a number, got {value!r}")
        if not math.isfinite(self.cohesion) or self.cohesion < 0:
            raise InvalidConfig(f"cohesion must be >= 0 kPa, got {self.cohesion!r}")
        if not math.isfinite(self.friction_angle) or not 0.0 <= self.friction_angle <= 90.0:
            raise InvalidConfig(
                f"friction_angle must be in [0, 90] degrees, got {self.friction_angle!r}"
            )
