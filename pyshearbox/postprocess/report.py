"""Summary values of completed shear tests.

The strength parameters shown to the user are the configured cohesion and
friction angle read back as entered; they are not fitted to the recorded
failure points.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pyshearbox.materials.base import SoilParameters
from pyshearbox.materials.constitutive import MohrCoulomb, shear_strength
from pyshearbox.postprocess.series import FailureEnvelopePoint

if TYPE_CHECKING:
    from pyshearbox.apparatus.config import TestConfig

#: Normal stresses at which the envelope line is drawn (kPa).
ENVELOPE_STRESSES = (0.0, 100.0, 200.0, 300.0, 400.0)


class ReportAggregator:
    """Results of one or more completed tests.

    Args:
        soil: Soil parameters the tests were run with.
        points: Failure points of completed tests.
        config: Test configuration, used for the strength estimate when no
            test has completed yet.

    Example::

        report = ReportAggregator.from_runner(runner)
        report.cohesion(), report.friction_angle(), report.max_shear_stress()
    """

    def __init__(
        self,
        soil: SoilParameters,
        points: Iterable[FailureEnvelopePoint] = (),
        config: TestConfig | None = None,
    ) -> None:
        self.soil = soil
        self.points: tuple[FailureEnvelopePoint, ...] = tuple(points)
        self.config = config

    @classmethod
    def from_runner(cls, runner: Any) -> ReportAggregator:
        """Build a report from a :class:`~pyshearbox.apparatus.TestRunner`."""
        return cls(runner.soil, runner.failure_envelope(), runner.config)

    def cohesion(self) -> float:
        """Configured cohesion c (kPa)."""
        return self.soil.cohesion

    def friction_angle(self) -> float:
        """Configured friction angle φ (degrees)."""
        return self.soil.friction_angle

    def max_shear_stress(self) -> float | None:
        """Largest shear strength reached (kPa).

        Falls back to the Mohr-Coulomb strength at the configured normal
        stress when no test has completed, and to None without a
        configuration either.
        """
        if self.points:
            return max(p.shear_strength for p in self.points)
        if self.config is None:
            return None
        return shear_strength(
            self.soil.cohesion,
            self.soil.friction_angle,
            self.config.normal_stress,
            self.soil.saturated,
        )

    def results_table(self) -> list[tuple[float, float, float | None]]:
        """Rows of ``(normal stress, shear strength, displacement at peak)``.

        Sorted by normal stress; tests at equal normal stress keep their
        completion order.
        """
        rows = [(p.normal_stress, p.shear_strength, p.displacement) for p in self.points]
        return sorted(rows, key=lambda row: row[0])

    def envelope(
        self, normal_stresses: ArrayLike | Sequence[float] = ENVELOPE_STRESSES
    ) -> tuple[np.ndarray, np.ndarray]:
        """Mohr-Coulomb line of the configured parameters.

        Args:
            normal_stresses: Normal stresses σ (kPa).

        Returns:
            Tuple ``(sigma, tau)`` of arrays (kPa).
        """
        sigma = np.asarray(normal_stresses, dtype=float)
        tau = MohrCoulomb(self.soil.cohesion, self.soil.friction_angle).shear_strength(sigma)
        return sigma, tau

    def __repr__(self) -> str:
        return (
            f"ReportAggregator(c={self.cohesion()}, phi={self.friction_angle()}, "
            f"n_points={len(self.points)})"
        )
