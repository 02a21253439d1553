"""Run phase and state snapshot of a shear test."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(Enum):
    """Life-cycle phase of a test run.

    ``IDLE -> RUNNING <-> PAUSED``, ``RUNNING -> COMPLETED``; any phase
    returns to ``IDLE`` on reset.
    """

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RunState:
    """Read-only snapshot of a test run.

    Attributes:
        displacement: Horizontal displacement (mm).
        elapsed_ticks: Ticks applied since the last reset.
        elapsed_time: Simulated shearing time (s).
        phase: Current :class:`Phase`.
        shear_stress: Shear stress at *displacement* (kPa).
        shear_force: Shear force at *displacement* (kN).
        vertical_strain: Vertical movement at *displacement* (mm).
    """

    displacement: float = 0.0
    elapsed_ticks: int = 0
    elapsed_time: float = 0.0
    phase: Phase = Phase.IDLE
    shear_stress: float = 0.0
    shear_force: float = 0.0
    vertical_strain: float = 0.0

    @property
    def running(self) -> bool:
        """True while the test is shearing."""
        return self.phase is Phase.RUNNING

    @property
    def completed(self) -> bool:
        """True once the end of travel was reached."""
        return self.phase is Phase.COMPLETED
