"""Direct-shear test runner.

:class:`TestRunner` owns the mutable state of one shear test: the run
phase, displacement and elapsed time.  It evaluates the constitutive
response once per tick, records a sample, and ends the test when the end of
travel is reached.

Phases::

    IDLE --start--> RUNNING --pause--> PAUSED --start--> RUNNING
    RUNNING --(displacement reaches max)--> COMPLETED
    any --reset--> IDLE

Several runners may share one
:class:`~pyshearbox.postprocess.series.SeriesRecorder` to collect failure
points at different normal stresses for a Mohr-Coulomb envelope; each
runner keeps its own samples.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

from pyshearbox.apparatus.config import TestConfig
from pyshearbox.apparatus.state import Phase, RunState
from pyshearbox.errors import (
    AlreadyRunning,
    ConcurrentTickRejected,
    InvalidConfig,
    InvalidTransition,
    NotRunning,
)
from pyshearbox.materials.base import SoilParameters
from pyshearbox.materials.constitutive import evaluate
from pyshearbox.materials.library import SoilPreset, parameters_for
from pyshearbox.postprocess.series import (
    FailureEnvelopePoint,
    SamplePoint,
    SeriesRecorder,
)
from pyshearbox.time.scheduler import TickScheduler
from pyshearbox.time.stepper import Stepper

logger = logging.getLogger(__name__)

StateListener = Callable[[RunState], None]


class TestRunner:
    """State machine driving one direct-shear test.

    Args:
        soil: Soil parameters of the sample.
        config: Loading and travel settings.
        recorder: Failure-point accumulator, possibly shared with other
            runners.  The runner records its samples in a
            :meth:`~pyshearbox.postprocess.series.SeriesRecorder.fork` of it
            (same sample cap), available as :attr:`recorder`.  An unbounded
            recorder is created when omitted.
        scheduler: Optional frame scheduler.  When given, :meth:`start`
            requests frames and each frame advances the test by its
            elapsed time.

    Raises:
        InvalidConfig: If *soil* or *config* is invalid.

    Example::

        runner = TestRunner(
            SoilParameters.from_category("sand"),
            TestConfig(normal_stress=100.0, speed=1.2),
        )
        runner.start()
        state = runner.run(Stepper.at_rate(60, t_end=10))
        state.phase  # Phase.COMPLETED
    """

    __test__ = False

    def __init__(
        self,
        soil: SoilParameters,
        config: TestConfig,
        recorder: SeriesRecorder | None = None,
        scheduler: TickScheduler | None = None,
    ) -> None:
        self._soil, self._config, self._preset = self._checked(soil, config)
        self.recorder = (recorder if recorder is not None else SeriesRecorder()).fork()
        self.scheduler = scheduler
        self._listeners: list[StateListener] = []
        self._ticking = False

        self._phase = Phase.IDLE
        self._displacement = 0.0
        self._ticks = 0
        self._elapsed_time = 0.0
        self._latest: SamplePoint | None = None
        self._peak: SamplePoint | None = None

    # configuration ---------------------------------------------------------

    @staticmethod
    def _checked(
        soil: SoilParameters, config: TestConfig
    ) -> tuple[SoilParameters, TestConfig, SoilPreset]:
        soil.validate()
        config.validate()
        preset = parameters_for(soil.category, soil.saturation)
        if preset.peak_displacement >= config.max_displacement:
            raise InvalidConfig(
                f"max_displacement ({config.max_displacement} mm) must exceed the "
                f"peak displacement of {soil.category.value} "
                f"({preset.peak_displacement:.2f} mm)"
            )
        return soil, config, preset

    def configure(self, soil: SoilParameters, config: TestConfig) -> None:
        """Replace the soil parameters and test configuration.

        Allowed in every phase; a running test continues with the new
        values from its next tick.  On error nothing is changed.

        Raises:
            InvalidConfig: If a value is out of range, or if the new end of
                travel lies behind the current displacement.
        """
        soil, config, preset = self._checked(soil, config)
        if config.max_displacement < self._displacement:
            raise InvalidConfig(
                f"max_displacement ({config.max_displacement} mm) is below the "
                f"current displacement ({self._displacement:.2f} mm)"
            )
        self._soil, self._config, self._preset = soil, config, preset
        logger.info(
            f"Configured {soil.category.value} ({soil.saturation.value}): "
            f"c={soil.cohesion} kPa, phi={soil.friction_angle} deg, "
            f"sigma={config.normal_stress} kPa, v={config.speed} mm/min"
        )
        self._notify()

    @property
    def soil(self) -> SoilParameters:
        """Current soil parameters."""
        return self._soil

    @property
    def config(self) -> TestConfig:
        """Current test configuration."""
        return self._config

    @property
    def preset(self) -> SoilPreset:
        """Curve constants derived from the soil category and saturation."""
        return self._preset

    # control ---------------------------------------------------------------

    def start(self) -> None:
        """Start or resume shearing.

        Raises:
            AlreadyRunning: If the test is already running.
            InvalidTransition: If the test has completed; reset it first.
        """
        if self._phase is Phase.RUNNING:
            logger.warning("start() ignored: test already running")
            raise AlreadyRunning("Test is already running.")
        if self._phase is Phase.COMPLETED:
            logger.warning("start() ignored: test completed")
            raise InvalidTransition("Test has completed; reset before starting again.")

        resumed = self._phase is Phase.PAUSED
        self._phase = Phase.RUNNING
        logger.info(
            f"Test {'resumed' if resumed else 'started'} at d={self._displacement:.2f} mm"
        )
        if self.scheduler is not None:
            self.scheduler.request(self._on_frame)
        self._notify()

    def pause(self) -> None:
        """Suspend shearing; displacement is frozen until :meth:`start`.

        Raises:
            NotRunning: If the test is not running.
        """
        if self._phase is not Phase.RUNNING:
            logger.warning(f"pause() ignored in phase {self._phase.value}")
            raise NotRunning(f"Cannot pause a test in phase {self._phase.value!r}.")
        self._phase = Phase.PAUSED
        self._cancel_frame()
        logger.info(f"Test paused at d={self._displacement:.2f} mm")
        self._notify()

    def reset(self) -> None:
        """Return to IDLE and clear displacement, time and samples.

        Failure points already added to the recorder are kept.  Safe to call
        in any phase, and more than once.
        """
        self._cancel_frame()
        self._phase = Phase.IDLE
        self._displacement = 0.0
        self._ticks = 0
        self._elapsed_time = 0.0
        self._latest = None
        self._peak = None
        self.recorder.clear()
        logger.info("Test reset.")
        self._notify()

    # stepping --------------------------------------------------------------

    def tick(self, dt: float) -> RunState:
        """Advance the test by *dt* wall-clock seconds.

        The displacement grows by ``speed / 60 * dt * time_scale`` and is
        clamped at the end of travel, where the test completes and its
        failure point is recorded.

        Args:
            dt: Elapsed wall-clock time since the previous tick (s), >= 0.

        Returns:
            The state after the tick.

        Raises:
            ConcurrentTickRejected: If called from within another tick (for
                example from a state listener).
            InvalidTransition: If the test is not running.
            ValueError: If *dt* is negative or not finite.
        """
        if self._ticking:
            logger.warning("tick() rejected: another tick is in progress")
            raise ConcurrentTickRejected("tick() called while a tick is in progress.")
        if self._phase is not Phase.RUNNING:
            logger.warning(f"tick() ignored in phase {self._phase.value}")
            raise InvalidTransition(f"Cannot tick a test in phase {self._phase.value!r}.")
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be a finite number >= 0, got {dt!r}")

        self._ticking = True
        try:
            cfg = self._config
            step = cfg.rate * dt * cfg.time_scale
            self._displacement = min(self._displacement + step, cfg.max_displacement)
            self._ticks += 1
            self._elapsed_time += dt * cfg.time_scale

            response = evaluate(
                self._displacement,
                self._soil,
                self._preset,
                cfg.normal_stress,
                cfg.max_displacement,
                cfg.sample_area,
            )
            sample = SamplePoint(
                displacement=self._displacement,
                shear_stress=response.shear_stress,
                vertical_strain=response.vertical_strain,
            )
            self.recorder.append(sample)
            self._latest = sample
            if self._peak is None or sample.shear_stress > self._peak.shear_stress:
                self._peak = sample
            logger.debug(
                f"tick {self._ticks}: d={sample.displacement:.3f} mm, "
                f"tau={sample.shear_stress:.2f} kPa"
            )

            if self._displacement >= cfg.max_displacement:
                self._complete()

            state = self.current_state()
            self._notify(state)
        finally:
            self._ticking = False
        return state

    def _complete(self) -> None:
        self._phase = Phase.COMPLETED
        self._cancel_frame()
        peak = self._peak
        point = FailureEnvelopePoint(
            normal_stress=self._config.normal_stress,
            shear_strength=peak.shear_stress,
            displacement=peak.displacement,
        )
        self.recorder.add_failure_point(point)
        logger.info(
            f"Test completed after {self._ticks} ticks: peak tau="
            f"{point.shear_strength:.2f} kPa at d={point.displacement:.2f} mm "
            f"(sigma={point.normal_stress} kPa)"
        )

    def run(self, stepper: Stepper) -> RunState:
        """Tick through *stepper* until it is exhausted or the test ends.

        An idle or paused test is started first.

        Returns:
            The final state.
        """
        if self._phase is not Phase.RUNNING:
            self.start()
        for _, dt in stepper:
            if self._phase is not Phase.RUNNING:
                break
            self.tick(dt)
        return self.current_state()

    def run_to_completion(self, rate: float = 60.0) -> RunState:
        """Run at *rate* ticks per second until the end of travel."""
        cfg = self._config
        remaining = (cfg.max_displacement - self._displacement) / (cfg.rate * cfg.time_scale)
        return self.run(Stepper.at_rate(rate, t_end=remaining + 2.0 / rate))

    # scheduling ------------------------------------------------------------

    def _on_frame(self, dt: float) -> None:
        self.tick(dt)
        if self._phase is Phase.RUNNING and self.scheduler is not None:
            self.scheduler.request(self._on_frame)

    def _cancel_frame(self) -> None:
        if self.scheduler is not None and self.scheduler.pending:
            self.scheduler.cancel()

    @property
    def tick_pending(self) -> bool:
        """True if the scheduler holds a frame for this runner."""
        return self.scheduler is not None and self.scheduler.pending

    # observation -----------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call *listener* with the new state after every change.

        Returns:
            A function removing the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: RunState | None = None) -> None:
        if not self._listeners:
            return
        state = state if state is not None else self.current_state()
        for listener in list(self._listeners):
            listener(state)

    def current_state(self) -> RunState:
        """Snapshot of the run, with the response at the current displacement."""
        cfg = self._config
        response = evaluate(
            self._displacement,
            self._soil,
            self._preset,
            cfg.normal_stress,
            cfg.max_displacement,
            cfg.sample_area,
        )
        return RunState(
            displacement=self._displacement,
            elapsed_ticks=self._ticks,
            elapsed_time=self._elapsed_time,
            phase=self._phase,
            shear_stress=response.shear_stress,
            shear_force=response.shear_force,
            vertical_strain=response.vertical_strain,
        )

    @property
    def phase(self) -> Phase:
        """Current run phase."""
        return self._phase

    def latest_sample(self) -> SamplePoint | None:
        """Sample of the last tick since reset, or None."""
        return self._latest

    def peak_sample(self) -> SamplePoint | None:
        """Sample with the highest shear stress since reset, or None."""
        return self._peak

    def all_samples(self) -> tuple[SamplePoint, ...]:
        """Samples retained by the recorder, oldest first."""
        return self.recorder.samples()

    def failure_envelope(self) -> tuple[FailureEnvelopePoint, ...]:
        """Failure points recorded so far (shared with other runners)."""
        return self.recorder.failure_points()

    def __repr__(self) -> str:
        return (
            f"TestRunner(category={self._soil.category.value!r}, "
            f"phase={self._phase.value!r}, displacement={self._displacement:.3f})"
        )
