"""Tests for the test runner state machine."""

from dataclasses import replace

import numpy as np
import pytest

from pyshearbox.apparatus.config import TestConfig
from pyshearbox.apparatus.runner import TestRunner
from pyshearbox.apparatus.state import Phase, RunState
from pyshearbox.errors import (
    AlreadyRunning,
    ConcurrentTickRejected,
    InvalidConfig,
    InvalidTransition,
    NotRunning,
)
from pyshearbox.materials.base import SoilParameters
from pyshearbox.postprocess.series import SeriesRecorder
from pyshearbox.time.scheduler import ManualScheduler
from pyshearbox.time.stepper import Stepper

DT = 1.0 / 60.0


def _runner(category="sand", normal_stress=100.0, speed=1.2, **kwargs):
    soil = SoilParameters.from_category(category)
    config = TestConfig(normal_stress=normal_stress, speed=speed, max_displacement=10.0)
    return TestRunner(soil, config, **kwargs)


class TestConstruction:
    def test_initial_state(self):
        state = _runner().current_state()
        assert state.phase is Phase.IDLE
        assert state.displacement == 0.0
        assert state.elapsed_ticks == 0
        assert state.shear_stress == 0.0

    def test_invalid_config_rejected(self):
        soil = SoilParameters.from_category("sand")
        with pytest.raises(InvalidConfig):
            TestRunner(soil, TestConfig(normal_stress=100.0, speed=0.0))

    def test_peak_beyond_travel_rejected(self):
        soil = SoilParameters.from_category("clay", saturation="saturated")
        # saturated clay peaks at 4.8 mm
        with pytest.raises(InvalidConfig, match="peak displacement"):
            TestRunner(soil, TestConfig(normal_stress=100.0, speed=1.2, max_displacement=4.5))

    def test_numpy_scalar_config(self):
        soil = SoilParameters.from_category("sand")
        for sigma in np.arange(100, 400, 100):
            runner = TestRunner(soil, TestConfig(normal_stress=sigma, speed=np.float32(1.2)))
            assert runner.config.normal_stress == sigma

    @pytest.mark.parametrize("speed", [None, "1.2", True])
    def test_non_numeric_config_rejected(self, speed):
        soil = SoilParameters.from_category("sand")
        with pytest.raises(InvalidConfig, match="must be a number"):
            TestRunner(soil, TestConfig(normal_stress=100.0, speed=speed))

    def test_short_travel_variant(self):
        runner = TestRunner(
            SoilParameters.from_category("clay", saturation="saturated"),
            TestConfig(normal_stress=100.0, speed=1.2, max_displacement=5.0),
        )
        assert runner.preset.peak_displacement == pytest.approx(4.8)


class TestTransitions:
    def test_start(self):
        runner = _runner()
        runner.start()
        assert runner.phase is Phase.RUNNING

    def test_start_twice(self):
        runner = _runner()
        runner.start()
        with pytest.raises(AlreadyRunning):
            runner.start()
        assert runner.phase is Phase.RUNNING

    def test_already_running_is_invalid_transition(self):
        assert issubclass(AlreadyRunning, InvalidTransition)
        assert issubclass(NotRunning, InvalidTransition)

    def test_pause_and_resume(self):
        runner = _runner()
        runner.start()
        runner.tick(DT)
        runner.pause()
        assert runner.phase is Phase.PAUSED
        runner.start()
        assert runner.phase is Phase.RUNNING

    def test_pause_when_idle(self):
        runner = _runner()
        with pytest.raises(NotRunning):
            runner.pause()
        assert runner.phase is Phase.IDLE

    def test_tick_when_idle(self):
        runner = _runner()
        before = runner.current_state()
        with pytest.raises(InvalidTransition):
            runner.tick(DT)
        assert runner.current_state() == before

    def test_tick_when_paused_freezes_displacement(self):
        runner = _runner()
        runner.start()
        for _ in range(10):
            runner.tick(DT)
        runner.pause()
        frozen = runner.current_state()
        with pytest.raises(InvalidTransition):
            runner.tick(DT)
        assert runner.current_state() == frozen

    def test_start_after_completion(self):
        runner = _runner()
        runner.run_to_completion()
        with pytest.raises(InvalidTransition):
            runner.start()

    def test_negative_dt(self):
        runner = _runner()
        runner.start()
        with pytest.raises(ValueError):
            runner.tick(-0.1)


class TestReset:
    def test_reset_clears_run(self):
        runner = _runner()
        runner.start()
        for _ in range(30):
            runner.tick(DT)
        runner.reset()
        state = runner.current_state()
        assert state.phase is Phase.IDLE
        assert state.displacement == 0.0
        assert state.elapsed_ticks == 0
        assert runner.all_samples() == ()
        assert runner.latest_sample() is None

    def test_reset_idempotent(self):
        runner = _runner()
        runner.start()
        runner.tick(DT)
        runner.reset()
        once = runner.current_state()
        runner.reset()
        assert runner.current_state() == once

    def test_reset_keeps_failure_points(self):
        runner = _runner()
        runner.run_to_completion()
        runner.reset()
        assert len(runner.failure_envelope()) == 1

    def test_reset_from_every_phase(self):
        runner = _runner()
        runner.reset()
        runner.start()
        runner.reset()
        runner.start()
        runner.pause()
        runner.reset()
        runner.run_to_completion()
        runner.reset()
        assert runner.phase is Phase.IDLE


class TestTicking:
    def test_displacement_per_tick(self):
        runner = _runner(speed=1.2)
        runner.start()
        state = runner.tick(DT)
        # 1.2 mm/min at 60 simulated s per wall s, one 1/60 s frame
        assert state.displacement == pytest.approx(0.02)
        assert state.elapsed_ticks == 1
        assert state.elapsed_time == pytest.approx(1.0)

    def test_frame_rate_independent(self):
        fast, slow = _runner(), _runner()
        fast.start()
        slow.start()
        for _ in range(120):
            fast.tick(1.0 / 120.0)
        for _ in range(30):
            slow.tick(1.0 / 30.0)
        assert fast.current_state().displacement == pytest.approx(slow.current_state().displacement)

    def test_termination(self):
        runner = _runner(speed=1.2)
        runner.start()
        ticks = 0
        while runner.phase is Phase.RUNNING:
            runner.tick(DT)
            ticks += 1
            assert ticks <= 501
        state = runner.current_state()
        assert 499 <= ticks <= 501
        assert state.phase is Phase.COMPLETED
        assert state.displacement == 10.0

    def test_displacement_monotonic_and_bounded(self):
        runner = _runner()
        runner.start()
        last = 0.0
        while runner.phase is Phase.RUNNING:
            d = runner.tick(0.05).displacement
            assert last <= d <= 10.0
            last = d

    def test_samples_recorded(self):
        runner = _runner()
        runner.start()
        for _ in range(5):
            runner.tick(DT)
        samples = runner.all_samples()
        assert len(samples) == 5
        assert samples[-1] == runner.latest_sample()
        assert [s.displacement for s in samples] == sorted(s.displacement for s in samples)

    def test_failure_point_at_peak_for_softening_soil(self):
        runner = _runner(category="clay", normal_stress=200.0)
        runner.run_to_completion()
        (point,) = runner.failure_envelope()
        assert point.normal_stress == 200.0
        assert point.shear_strength == pytest.approx(97.79, abs=0.05)
        assert point.displacement == pytest.approx(4.0, abs=0.05)

    def test_failure_point_at_end_for_hardening_soil(self):
        runner = _runner(category="sand", normal_stress=100.0)
        runner.run_to_completion()
        (point,) = runner.failure_envelope()
        assert point.displacement == 10.0
        assert point.shear_strength == pytest.approx(70.02 * 1.1, abs=0.01)

    def test_run_with_stepper(self):
        runner = _runner()
        state = runner.run(Stepper.at_rate(60, t_end=2.0))
        assert state.phase is Phase.RUNNING
        assert state.elapsed_ticks == 120
        assert state.displacement == pytest.approx(2.4)

    def test_shared_recorder_builds_envelope(self):
        recorder = SeriesRecorder(max_samples=50)
        for sigma in (100.0, 200.0, 300.0):
            _runner(category="clay", normal_stress=sigma, recorder=recorder).run_to_completion()
        points = recorder.failure_points()
        assert [p.normal_stress for p in points] == [100.0, 200.0, 300.0]
        strengths = [p.shear_strength for p in points]
        assert strengths == sorted(strengths)

    def test_shared_recorder_keeps_samples_per_runner(self):
        recorder = SeriesRecorder()
        a = _runner(normal_stress=100.0, recorder=recorder)
        b = _runner(normal_stress=200.0, recorder=recorder)
        a.start()
        b.start()
        for _ in range(5):
            a.tick(DT)
            b.tick(DT)
        assert len(a.all_samples()) == len(b.all_samples()) == 5
        b.reset()
        assert len(a.all_samples()) == 5
        assert a.phase is Phase.RUNNING
        assert a.current_state().displacement == pytest.approx(0.1)
        a.run_to_completion()
        assert [p.normal_stress for p in b.failure_envelope()] == [100.0]
        assert recorder.failure_points() == a.failure_envelope()


class TestConfigure:
    def test_invalid_speed_leaves_state(self):
        runner = _runner()
        runner.start()
        runner.tick(DT)
        before = runner.current_state()
        with pytest.raises(InvalidConfig):
            runner.configure(runner.soil, replace(runner.config, speed=0.0))
        assert runner.current_state() == before
        assert runner.config.speed == 1.2

    def test_live_change_applies_next_tick(self):
        runner = _runner()
        runner.start()
        runner.tick(DT)
        runner.configure(runner.soil, replace(runner.config, speed=2.4))
        d0 = runner.current_state().displacement
        d1 = runner.tick(DT).displacement
        assert d1 - d0 == pytest.approx(0.04)

    def test_travel_behind_displacement_rejected(self):
        runner = _runner()
        runner.run(Stepper.at_rate(60, t_end=3.0))
        with pytest.raises(InvalidConfig):
            runner.configure(runner.soil, replace(runner.config, max_displacement=3.0))

    def test_override_cohesion(self):
        runner = _runner(category="sand")
        runner.configure(replace(runner.soil, cohesion=10.0), runner.config)
        assert runner.soil.cohesion == 10.0


class TestNotifications:
    def test_listener_receives_states(self):
        runner = _runner()
        seen = []
        runner.subscribe(seen.append)
        runner.start()
        runner.tick(DT)
        runner.pause()
        assert [s.phase for s in seen] == [Phase.RUNNING, Phase.RUNNING, Phase.PAUSED]
        assert all(isinstance(s, RunState) for s in seen)

    def test_unsubscribe(self):
        runner = _runner()
        seen = []
        unsubscribe = runner.subscribe(seen.append)
        unsubscribe()
        runner.start()
        assert seen == []

    def test_reentrant_tick_rejected(self):
        runner = _runner()
        errors = []

        def listener(state):
            if state.elapsed_ticks == 1:
                try:
                    runner.tick(DT)
                except ConcurrentTickRejected as exc:
                    errors.append(exc)

        runner.subscribe(listener)
        runner.start()
        state = runner.tick(DT)
        assert len(errors) == 1
        assert state.elapsed_ticks == 1
        # the guard is released once the tick returns
        assert runner.tick(DT).elapsed_ticks == 2


class TestScheduler:
    def test_start_requests_frame(self):
        scheduler = ManualScheduler()
        runner = _runner(scheduler=scheduler)
        assert not runner.tick_pending
        runner.start()
        assert runner.tick_pending

    def test_frames_drive_to_completion(self):
        scheduler = ManualScheduler()
        runner = _runner(scheduler=scheduler)
        runner.start()
        while scheduler.pending:
            scheduler.fire(DT)
        assert runner.phase is Phase.COMPLETED
        assert 499 <= scheduler.frames <= 501
        assert not runner.tick_pending

    def test_pause_cancels_frame(self):
        scheduler = ManualScheduler()
        runner = _runner(scheduler=scheduler)
        runner.start()
        scheduler.fire(DT)
        runner.pause()
        assert not scheduler.pending
        assert scheduler.fire(DT) is False
        assert runner.current_state().elapsed_ticks == 1

    def test_reset_cancels_frame(self):
        scheduler = ManualScheduler()
        runner = _runner(scheduler=scheduler)
        runner.start()
        runner.reset()
        assert not runner.tick_pending
