"""Tests for the KegelBump session engine.

Covers: state transitions, tick / boundary / terminal laws, derived
display values, haptic calls, scheduler arming, configuration
replacement, and the empty-routine edge case.
"""

import pytest

from kegelbump.session.configuration import (
    Configuration, FALLBACK_CONFIGURATION, PhaseType, hold_rest_block,
)
from kegelbump.session.engine import SessionEngine, SessionState
from kegelbump.session.scheduler import QtTickScheduler, TICK_INTERVAL_MS

from helpers import SignalCollector, run_to_completion


# ═══════════════════════════════════════════════════════════════════════════
#  STATE TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestStateTransitions:

    def test_initial_state_is_idle(self, engine):
        assert engine.state == SessionState.IDLE
        assert engine.current_index == 0
        assert engine.remaining == 3
        assert engine.session_started is False

    def test_start_transitions_to_running(self, engine, scheduler):
        engine.start()
        assert engine.state == SessionState.RUNNING
        assert engine.session_started is True
        assert scheduler.is_active

    def test_pause_keeps_position(self, engine, scheduler):
        engine.start()
        scheduler.fire()
        engine.pause()
        assert engine.state == SessionState.PAUSED
        assert engine.remaining == 2
        assert not scheduler.is_active

    def test_resume_continues_where_paused(self, engine, scheduler):
        engine.start()
        scheduler.fire()
        engine.pause()
        engine.resume()
        assert engine.state == SessionState.RUNNING
        assert engine.remaining == 2
        scheduler.fire()
        assert engine.remaining == 1

    def test_toggle_cycles_run_pause(self, engine):
        engine.toggle_running()
        assert engine.state == SessionState.RUNNING
        engine.toggle_running()
        assert engine.state == SessionState.PAUSED
        engine.toggle_running()
        assert engine.state == SessionState.RUNNING

    def test_toggle_from_complete_restarts(self, engine, scheduler):
        engine.start()
        run_to_completion(engine)
        assert engine.state == SessionState.COMPLETE

        engine.toggle_running()
        assert engine.state == SessionState.RUNNING
        assert engine.current_index == 0
        assert engine.remaining == 3

    def test_pause_is_noop_when_idle(self, engine):
        engine.pause()
        assert engine.state == SessionState.IDLE

    def test_resume_is_noop_when_idle(self, engine):
        engine.resume()
        assert engine.state == SessionState.IDLE

    def test_start_is_noop_when_running(self, engine, scheduler):
        engine.start()
        engine.start()
        assert scheduler.starts == 1

    def test_state_changed_signal_fires_on_transitions(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)

        engine.start()
        assert c.last == SessionState.RUNNING
        engine.pause()
        assert c.last == SessionState.PAUSED
        engine.reset()
        assert c.last == SessionState.IDLE

    def test_changed_fires_after_every_mutation(self, engine, scheduler):
        c = SignalCollector()
        engine.changed.connect(c)

        engine.start()
        scheduler.fire()
        engine.pause()
        engine.reset()
        engine.load_configuration(FALLBACK_CONFIGURATION)
        assert len(c) == 5
        assert c.last.state == SessionState.IDLE
        assert c.last.remaining_seconds == 7


# ═══════════════════════════════════════════════════════════════════════════
#  TICK LAWS
# ═══════════════════════════════════════════════════════════════════════════


class TestTickLaws:

    def test_tick_decrements_remaining(self, engine, scheduler):
        engine.start()
        scheduler.fire()
        assert engine.remaining == 2
        assert engine.current_index == 0

    def test_tick_ignored_unless_running(self, engine):
        engine._on_tick()
        assert engine.remaining == 3
        engine.start()
        engine.pause()
        engine._on_tick()
        assert engine.remaining == 3

    def test_boundary_from_zero_advances(self, engine):
        engine.start()
        engine._remaining = 0
        engine._on_tick()
        assert engine.current_index == 1
        assert engine.remaining == 2

    def test_terminal_from_zero_completes(self, engine, scheduler):
        engine.start()
        engine._index = 3
        engine._remaining = 0
        engine._on_tick()
        assert engine.state == SessionState.COMPLETE
        assert engine.remaining == 0
        assert not scheduler.is_active

    def test_example_walkthrough(self, engine, scheduler):
        engine.start()
        scheduler.fire(3)
        assert engine.current_index == 1
        assert engine.current_phase.type == PhaseType.REST
        assert engine.remaining == 2

        scheduler.fire(2)
        assert engine.current_index == 2
        assert engine.current_phase.type == PhaseType.HOLD
        assert engine.current_phase.set_index == 2
        assert engine.remaining == 3
        assert engine.completed_repetitions == 1

    def test_full_run_completes_and_stops_ticking(self, engine, scheduler):
        engine.start()
        scheduler.fire(100)
        assert engine.state == SessionState.COMPLETE
        assert scheduler.stops >= 1

    def test_run_to_completion_tick_count(self, engine):
        engine.start()
        assert run_to_completion(engine) == engine.total_duration

    def test_tick_signal_emits_remaining(self, engine, scheduler):
        c = SignalCollector()
        engine.tick.connect(c)
        engine.start()
        scheduler.fire(3)
        assert c.items == [2, 1, 2]

    def test_session_completed_emitted_once(self, engine, scheduler):
        c = SignalCollector()
        engine.session_completed.connect(c)
        engine.start()
        scheduler.fire(100)
        assert len(c) == 1

    def test_phase_completed_carries_finished_phase(self, engine, scheduler):
        c = SignalCollector()
        engine.phase_completed.connect(c)
        engine.start()
        scheduler.fire(3)
        assert len(c) == 1
        assert c.last.type == PhaseType.HOLD
        assert c.last.set_index == 1


# ═══════════════════════════════════════════════════════════════════════════
#  HAPTICS
# ═══════════════════════════════════════════════════════════════════════════


class TestHaptics:

    def test_tick_pulse_every_second(self, engine, scheduler, haptics):
        engine.start()
        scheduler.fire(2)
        assert haptics.calls == ["tick", "tick"]

    def test_phase_complete_before_advance(self, engine, scheduler, haptics):
        engine.start()
        scheduler.fire(3)
        assert haptics.calls == ["tick", "tick", "tick", "phase_complete"]

    def test_one_phase_complete_per_phase(self, engine, scheduler, haptics):
        engine.start()
        scheduler.fire(100)
        assert haptics.count("phase_complete") == 4
        assert haptics.count("tick") == engine.total_duration

    def test_no_haptics_when_idle(self, engine, haptics):
        engine._on_tick()
        assert haptics.calls == []


# ═══════════════════════════════════════════════════════════════════════════
#  RESET / RELOAD
# ═══════════════════════════════════════════════════════════════════════════


class TestReset:

    @pytest.mark.parametrize("ticks", [0, 1, 4, 7, 100])
    def test_reset_from_any_point(self, engine, scheduler, ticks):
        engine.start()
        scheduler.fire(ticks)
        engine.reset()
        assert engine.state == SessionState.IDLE
        assert engine.current_index == 0
        assert engine.remaining == 3
        assert engine.session_started is False
        assert not scheduler.is_active

    def test_reset_is_idempotent(self, engine):
        engine.reset()
        engine.reset()
        assert engine.state == SessionState.IDLE
        assert engine.remaining == 3

    def test_reset_from_paused(self, engine, scheduler):
        engine.start()
        scheduler.fire(4)
        engine.pause()
        engine.reset()
        assert engine.current_index == 0
        assert engine.remaining == 3

    def test_load_configuration_resets_mid_session(self, engine, scheduler):
        engine.start()
        scheduler.fire(4)
        engine.load_configuration(Configuration((hold_rest_block(1, 9, 4),)))
        assert engine.state == SessionState.IDLE
        assert engine.current_index == 0
        assert engine.remaining == 9
        assert engine.total_duration == 13
        assert engine.total_sets == 1
        assert not scheduler.is_active

    def test_load_configuration_replaces_phases(self, engine):
        engine.load_configuration(FALLBACK_CONFIGURATION)
        assert len(engine.phases) == 40
        assert engine.configuration is FALLBACK_CONFIGURATION


# ═══════════════════════════════════════════════════════════════════════════
#  DERIVED VALUES
# ═══════════════════════════════════════════════════════════════════════════


class TestDerivedValues:

    def test_display_seconds_before_start(self, engine):
        assert engine.display_seconds == 3

    def test_display_seconds_while_running(self, engine, scheduler):
        engine.start()
        scheduler.fire()
        assert engine.display_seconds == 2

    def test_display_seconds_when_complete(self, engine, scheduler):
        engine.start()
        scheduler.fire(100)
        assert engine.display_seconds == 0

    def test_progress_zero_before_start(self, engine):
        assert engine.progress == 0.0

    def test_progress_through_phase(self, engine, scheduler):
        engine.start()
        assert engine.progress == 0.0
        scheduler.fire()
        assert engine.progress == pytest.approx(1 / 3)
        scheduler.fire()
        assert engine.progress == pytest.approx(2 / 3)

    def test_progress_zero_when_complete(self, engine, scheduler):
        engine.start()
        scheduler.fire(100)
        assert engine.progress == 0.0

    def test_completed_repetitions(self, engine, scheduler):
        assert engine.completed_repetitions == 0
        engine.start()
        scheduler.fire(4)   # still in set 1 (rest phase)
        assert engine.completed_repetitions == 0
        scheduler.fire(1)   # into set 2
        assert engine.completed_repetitions == 1
        scheduler.fire(100)
        assert engine.completed_repetitions == 2

    def test_session_remaining_and_elapsed(self, engine, scheduler):
        assert engine.session_remaining_seconds == 10
        assert engine.session_elapsed_seconds == 0
        engine.start()
        scheduler.fire(4)
        assert engine.session_remaining_seconds == 6
        assert engine.session_elapsed_seconds == 4

    def test_session_remaining_zero_when_complete(self, engine, scheduler):
        engine.start()
        scheduler.fire(100)
        assert engine.session_remaining_seconds == 0
        assert engine.session_elapsed_seconds == 10

    def test_phase_names(self, engine, scheduler):
        assert engine.phase_name == "Hold"
        engine.start()
        scheduler.fire(3)
        assert engine.phase_name == "Rest"
        scheduler.fire(100)
        assert engine.phase_name == "Complete"

    def test_next_phase(self, engine, scheduler):
        assert engine.next_phase_title == "Rest"
        assert engine.next_phase_detail == "2s"
        engine.start()
        scheduler.fire(8)
        assert engine.current_index == 3
        assert engine.next_phase is None
        assert engine.next_phase_title == "Next"
        assert engine.next_phase_detail == "--"

    def test_out_of_range_index_degrades(self, engine):
        engine._index = 99
        assert engine.current_phase is None
        assert engine.next_phase is None
        assert engine.progress == 0.0
        assert engine.phase_name == "Ready"

    def test_snapshot_matches_properties(self, engine, scheduler):
        engine.start()
        scheduler.fire(5)
        snap = engine.snapshot()
        assert snap.state == SessionState.RUNNING
        assert snap.session_started is True
        assert snap.current_index == 2
        assert snap.remaining_seconds == 3
        assert snap.display_seconds == 3
        assert snap.completed_repetitions_text == "1/2"
        assert snap.remaining_text == "5s"
        assert snap.elapsed_text == "5s"
        assert snap.is_running
        assert not snap.is_complete


# ═══════════════════════════════════════════════════════════════════════════
#  EMPTY ROUTINE
# ═══════════════════════════════════════════════════════════════════════════


class TestEmptyRoutine:

    def test_empty_is_idle_with_zero_display(self, empty_engine):
        assert empty_engine.state == SessionState.IDLE
        assert empty_engine.total_sets == 0
        assert empty_engine.display_seconds == 0
        assert empty_engine.remaining == 0

    def test_start_is_noop(self, empty_engine, scheduler):
        empty_engine.start()
        assert empty_engine.state == SessionState.IDLE
        assert scheduler.starts == 0

    def test_toggle_is_noop(self, empty_engine):
        empty_engine.toggle_running()
        assert empty_engine.state == SessionState.IDLE

    def test_derived_values_are_zero(self, empty_engine):
        assert empty_engine.session_remaining_seconds == 0
        assert empty_engine.session_elapsed_seconds == 0
        assert empty_engine.completed_repetitions == 0
        assert empty_engine.progress == 0.0
        assert empty_engine.phase_name == "Ready"
        assert empty_engine.snapshot().completed_repetitions_text == "0/0"

    def test_reset_on_empty(self, empty_engine):
        empty_engine.reset()
        assert empty_engine.remaining == 0
        assert empty_engine.current_index == 0

    def test_all_zero_repeat_blocks(self, qapp, scheduler):
        eng = SessionEngine(
            None,
            configuration=Configuration((hold_rest_block(0, 5, 5),)),
            scheduler=scheduler,
        )
        eng.start()
        assert eng.state == SessionState.IDLE
        assert eng.total_sets == 0


# ═══════════════════════════════════════════════════════════════════════════
#  QT SCHEDULER
# ═══════════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestQtScheduler:

    def test_default_scheduler_is_qt(self):
        eng = SessionEngine(None, configuration=FALLBACK_CONFIGURATION)
        assert isinstance(eng._scheduler, QtTickScheduler)

    def test_start_and_stop(self):
        sched = QtTickScheduler()
        assert not sched.is_active
        sched.start(lambda: None)
        assert sched.is_active
        assert sched.interval_ms == TICK_INTERVAL_MS
        sched.stop()
        assert not sched.is_active

    def test_restart_replaces_timer(self):
        sched = QtTickScheduler()
        sched.start(lambda: None)
        first = sched._timer
        sched.start(lambda: None)
        assert sched._timer is not first
        assert sched.is_active
        sched.stop()

    def test_engine_arms_and_cancels_qt_timer(self):
        eng = SessionEngine(None, configuration=FALLBACK_CONFIGURATION)
        eng.start()
        assert eng._scheduler.is_active
        eng.pause()
        assert not eng._scheduler.is_active
