"""Tick scheduling.

A scheduler holds at most one pending frame callback.  The runner asks it
whether a tick is pending instead of tracking a nullable timer handle.

Classes
-------
TickScheduler
    Abstract scheduler interface.
ManualScheduler
    Host-driven scheduler: the host calls :meth:`ManualScheduler.fire`
    once per frame with the measured elapsed time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

FrameCallback = Callable[[float], None]


class TickScheduler(ABC):
    """Abstract single-slot frame scheduler."""

    @abstractmethod
    def request(self, callback: FrameCallback) -> None:
        """Schedule *callback* for the next frame, replacing any pending one."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop the pending callback, if any."""

    @property
    @abstractmethod
    def pending(self) -> bool:
        """True when a callback is waiting for the next frame."""


class ManualScheduler(TickScheduler):
    """Scheduler driven explicitly by the host loop.

    Example::

        scheduler = ManualScheduler()
        runner = TestRunner(soil, config, scheduler=scheduler)
        runner.start()
        while scheduler.pending:
            scheduler.fire(1 / 60)
    """

    def __init__(self) -> None:
        self._callback: FrameCallback | None = None
        self.frames = 0

    def request(self, callback: FrameCallback) -> None:
        self._callback = callback

    def cancel(self) -> None:
        self._callback = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def fire(self, dt: float) -> bool:
        """Run the pending callback with elapsed time *dt*.

        The slot is emptied before the callback runs, so the callback may
        request the following frame.

        Returns:
            True if a callback ran.
        """
        callback, self._callback = self._callback, None
        if callback is None:
            return False
        self.frames += 1
        callback(dt)
        return True

    def __repr__(self) -> str:
        return f"ManualScheduler(pending={self.pending}, frames={self.frames})"
