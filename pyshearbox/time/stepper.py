"""Time stepping utilities.

Classes
-------
Stepper
    Fixed logical time step, independent of any display refresh rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np


@dataclass
class Stepper:
    """Fixed time stepper.

    Times are wall-clock seconds as seen by
    :meth:`~pyshearbox.apparatus.runner.TestRunner.tick`; the runner's
    ``time_scale`` converts them to simulated shearing time.

    Args:
        t_end: End time (s).
        dt: Time-step size (s).
        t_start: Start time (s).  Defaults to 0.

    Example::

        stepper = Stepper.at_rate(60, t_end=10)  # 60 ticks per second
        for t, dt in stepper:
            print(f"t={t:.3f} s, dt={dt:.4f} s")
    """

    t_end: float
    dt: float
    t_start: float = 0.0

    def __post_init__(self) -> None:
        if self.dt <= 0:
            raise ValueError(f"dt must be > 0, got {self.dt!r}")

    @classmethod
    def at_rate(cls, rate: float, t_end: float, t_start: float = 0.0) -> Stepper:
        """Stepper ticking *rate* times per second."""
        if rate <= 0:
            raise ValueError(f"rate must be > 0, got {rate!r}")
        return cls(t_end=t_end, dt=1.0 / rate, t_start=t_start)

    @property
    def n_steps(self) -> int:
        """Number of time steps."""
        return int(np.ceil((self.t_end - self.t_start) / self.dt - 1e-9))

    @property
    def times(self) -> np.ndarray:
        """Array of all time values (including start)."""
        return np.arange(self.t_start, self.t_end + 0.5 * self.dt, self.dt)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        """Yield ``(t, dt)`` tuples.

        Times are computed from the step index, so rounding does not
        accumulate into an extra sliver step at the end.
        """
        n = self.n_steps
        t_prev = self.t_start
        for i in range(1, n + 1):
            t = self.t_end if i == n else self.t_start + i * self.dt
            yield t, t - t_prev
            t_prev = t

    def __repr__(self) -> str:
        return f"Stepper(t_end={self.t_end}, dt={self.dt}, t_start={self.t_start})"
