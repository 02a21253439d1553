"""Test configuration of the direct-shear apparatus."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from pyshearbox.errors import InvalidConfig


@dataclass(frozen=True)
class TestConfig:
    """Loading and travel settings of one shear test.

    Args:
        normal_stress: Applied normal stress σ (kPa), > 0.
        speed: Horizontal shearing rate (mm/min), > 0.
        sample_area: Plan area of the sample (cm²), > 0.
        max_displacement: Travel at which the test ends (mm), > 0.
        time_scale: Simulated seconds per wall-clock second, > 0.  The
            default of 60 plays one minute of shearing per second.

    Example::

        config = TestConfig(normal_stress=100.0, speed=1.2)
        config.validate()
    """

    __test__ = False

    normal_stress: float
    speed: float
    sample_area: float = 36.0
    max_displacement: float = 10.0
    time_scale: float = 60.0

    @property
    def rate(self) -> float:
        """Displacement per simulated second (mm/s)."""
        return self.speed / 60.0

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            InvalidConfig: If any value is not a finite positive number.
        """
        for name in ("normal_stress", "speed", "sample_area", "max_displacement", "time_scale"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Real) or isinstance(value, bool):
                raise InvalidConfig(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise InvalidConfig(f"{name} must be > 0, got {value!r}")
