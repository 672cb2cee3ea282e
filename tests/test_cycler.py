"""Tests for the phase cycler."""

import pytest

from breathing_orb.cycler import PhaseCycler
from breathing_orb.phases import BreathingPattern, BreathingPhase, ScaleTarget

INHALE = BreathingPhase.INHALE
HOLD_INHALE = BreathingPhase.HOLD_INHALE
EXHALE = BreathingPhase.EXHALE
HOLD_EXHALE = BreathingPhase.HOLD_EXHALE


def make_cycler(state, scheduler, pattern=None):
    cycler = PhaseCycler(state, scheduler, pattern) if pattern else PhaseCycler(state, scheduler)
    transitions = []
    cycler.add_listener(transitions.append)
    return cycler, transitions


class TestPhaseCycler:

    def test_start_enters_inhale_immediately(self, state, scheduler):
        cycler, transitions = make_cycler(state, scheduler)
        cycler.start()

        assert state.current_phase is INHALE
        assert state.scale_target is ScaleTarget.MAX
        assert len(transitions) == 1
        assert transitions[0].phase is INHALE
        assert transitions[0].scale_target is ScaleTarget.MAX
        assert transitions[0].count == 1

    def test_full_cycle_sequence(self, state, scheduler):
        cycler, transitions = make_cycler(state, scheduler)
        cycler.start()

        expected = [
            (4.0, HOLD_INHALE, ScaleTarget.MAX),
            (8.0, EXHALE, ScaleTarget.MIN),
            (12.0, HOLD_EXHALE, ScaleTarget.MIN),
            (16.0, INHALE, ScaleTarget.MAX),
        ]
        for at, phase, scale in expected:
            scheduler.advance(at - scheduler.now)
            assert state.current_phase is phase
            assert state.scale_target is scale

        assert [t.phase for t in transitions] == [INHALE, HOLD_INHALE, EXHALE, HOLD_EXHALE, INHALE]
        assert [t.count for t in transitions] == [1, 2, 3, 4, 5]

    def test_no_transition_inside_hold(self, state, scheduler):
        cycler, transitions = make_cycler(state, scheduler)
        cycler.start()
        scheduler.advance(4.0)
        assert len(transitions) == 2

        scheduler.advance(3.9)
        assert len(transitions) == 2
        assert state.current_phase is HOLD_INHALE

    def test_four_notifications_per_cycle(self, state, scheduler):
        cycler, transitions = make_cycler(state, scheduler)
        cycler.start()
        scheduler.advance(16.0)
        first = len(transitions)

        scheduler.advance(16.0)
        assert len(transitions) - first == 4

    def test_scale_follows_phase(self, state, scheduler):
        cycler, transitions = make_cycler(state, scheduler)
        cycler.start()
        scheduler.advance(64.0)

        for t in transitions:
            if t.phase in (INHALE, HOLD_INHALE):
                assert t.scale_target is ScaleTarget.MAX
            else:
                assert t.scale_target is ScaleTarget.MIN

    def test_single_pending_timer(self, state, scheduler):
        cycler, _ = make_cycler(state, scheduler)
        cycler.start()
        assert len(scheduler.pending) == 1

        for _ in range(6):
            scheduler.advance(4.0)
            assert len(scheduler.pending) == 1

        cycler.start()
        assert len(scheduler.pending) == 1

    def test_uses_pattern_durations(self, state, scheduler):
        pattern = BreathingPattern(3.0, 2.0, 3.0, 2.0)
        cycler, transitions = make_cycler(state, scheduler, pattern)
        cycler.start()

        scheduler.advance(3.0)
        assert state.current_phase is HOLD_INHALE
        scheduler.advance(2.0)
        assert state.current_phase is EXHALE
        scheduler.advance(3.0)
        assert state.current_phase is HOLD_EXHALE
        scheduler.advance(2.0)
        assert state.current_phase is INHALE
        assert len(transitions) == 5

    def test_stop_resets_to_idle_pose(self, state, scheduler):
        cycler, transitions = make_cycler(state, scheduler)
        cycler.start()
        scheduler.advance(10.0)
        assert state.current_phase is EXHALE

        cycler.stop()
        assert state.current_phase is INHALE
        assert state.scale_target is ScaleTarget.MIN
        assert not cycler.is_running

        count = len(transitions)
        scheduler.advance(30.0)
        assert len(transitions) == count

    def test_stop_is_idempotent(self, state, scheduler):
        cycler, transitions = make_cycler(state, scheduler)
        cycler.stop()
        cycler.start()
        cycler.stop()
        cycler.stop()

        assert state.current_phase is INHALE
        assert state.scale_target is ScaleTarget.MIN
        assert scheduler.pending == []
        assert len(transitions) == 1

    def test_remove_listener(self, state, scheduler):
        cycler = PhaseCycler(state, scheduler)
        seen = []
        remove = cycler.add_listener(seen.append)
        cycler.start()
        remove()
        remove()
        scheduler.advance(4.0)
        assert len(seen) == 1

    def test_restart_resets_count(self, state, scheduler):
        cycler, transitions = make_cycler(state, scheduler)
        cycler.start()
        scheduler.advance(8.0)
        cycler.start()
        assert cycler.transition_count == 1
        assert transitions[-1].count == 1
        assert state.current_phase is INHALE

    def test_late_phase_callback_does_not_drift(self, state, scheduler):
        cycler, transitions = make_cycler(state, scheduler)
        cycler.start()

        # Deliver the INHALE -> HOLD_INHALE timer 0.5s late
        handle = scheduler.pending[0]
        handle.cancel()
        scheduler.advance(4.5)
        handle.callback()
        assert state.current_phase is HOLD_INHALE

        # EXHALE still begins on the 8s boundary
        assert scheduler.pending[0].when == pytest.approx(8.0)
        scheduler.advance(3.5)
        assert state.current_phase is EXHALE
        assert len(transitions) == 3
