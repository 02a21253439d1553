"""Recorded time series of a shear test.

Classes
-------
SamplePoint
    One (displacement, stress) sample of the running test.
FailureEnvelopePoint
    Peak strength of one completed test at its normal stress.
SeriesRecorder
    Bounded sample buffer plus the failure-envelope accumulation.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SamplePoint:
    """One recorded sample.

    Args:
        displacement: Horizontal displacement (mm).
        shear_stress: Shear stress (kPa).
        vertical_strain: Vertical movement (mm).
    """

    displacement: float
    shear_stress: float
    vertical_strain: float = 0.0


@dataclass(frozen=True)
class FailureEnvelopePoint:
    """Failure point of a completed test.

    Args:
        normal_stress: Normal stress of the test (kPa).
        shear_strength: Peak shear stress reached (kPa).
        displacement: Displacement at which the peak was reached (mm),
            if known.
    """

    normal_stress: float
    shear_strength: float
    displacement: float | None = None


class SeriesRecorder:
    """Sample buffer consumed by plotting.

    Samples are cleared on every test reset; failure points accumulate
    across tests (typically at several normal stresses) until
    :meth:`clear_failure_points` is called.  Recorders created with
    :meth:`fork` share one list of failure points but keep their own
    samples.

    Args:
        max_samples: Number of most recent samples retained.  Older samples
            are dropped first.  ``None`` keeps every sample.

    Example::

        rec = SeriesRecorder(max_samples=50)
        rec.append(SamplePoint(0.02, 1.3))
        d, tau, dv = rec.as_arrays()
    """

    def __init__(self, max_samples: int | None = None) -> None:
        if max_samples is not None and (
            isinstance(max_samples, bool)
            or not isinstance(max_samples, int)
            or max_samples <= 0
        ):
            raise ValueError(f"max_samples must be a positive integer or None, got {max_samples!r}")
        self.max_samples = max_samples
        self._samples: deque[SamplePoint] = deque(maxlen=max_samples)
        self._failure_points: list[FailureEnvelopePoint] = []

    # samples ---------------------------------------------------------------

    def append(self, point: SamplePoint) -> None:
        """Record *point*, evicting the oldest sample when full."""
        self._samples.append(point)

    def clear(self) -> None:
        """Drop all samples.  Failure points are kept."""
        self._samples.clear()

    def samples(self) -> tuple[SamplePoint, ...]:
        """Retained samples, oldest first."""
        return tuple(self._samples)

    def latest(self) -> SamplePoint | None:
        """Most recent sample, or None when empty."""
        return self._samples[-1] if self._samples else None

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(displacement, shear_stress, vertical_strain)`` arrays."""
        data = np.array(
            [(p.displacement, p.shear_stress, p.vertical_strain) for p in self._samples],
            dtype=float,
        ).reshape(-1, 3)
        return data[:, 0], data[:, 1], data[:, 2]

    def __len__(self) -> int:
        return len(self._samples)

    # failure envelope ------------------------------------------------------

    def add_failure_point(self, point: FailureEnvelopePoint) -> None:
        """Record the failure point of a completed test."""
        self._failure_points.append(point)

    def failure_points(self) -> tuple[FailureEnvelopePoint, ...]:
        """Failure points in the order the tests completed."""
        return tuple(self._failure_points)

    def clear_failure_points(self) -> None:
        """Forget every recorded failure point."""
        self._failure_points.clear()

    def fork(self) -> SeriesRecorder:
        """Empty recorder with the same cap, sharing these failure points.

        Each test runner records its samples in a fork, so that resetting
        one test leaves the samples of the others untouched while their
        failure points still accumulate in one envelope.
        """
        child = SeriesRecorder(self.max_samples)
        child._failure_points = self._failure_points
        return child

    def __repr__(self) -> str:
        return (
            f"SeriesRecorder(n_samples={len(self._samples)}, "
            f"max_samples={self.max_samples}, "
            f"n_failure_points={len(self._failure_points)})"
        )
