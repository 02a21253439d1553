"""Time: fixed time stepping and tick scheduling."""

from pyshearbox.time.stepper import Stepper
from pyshearbox.time.scheduler import TickScheduler, ManualScheduler

__all__ = [
    "Stepper",
    "TickScheduler",
    "ManualScheduler",
]
