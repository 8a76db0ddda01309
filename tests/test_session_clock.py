"""Tests for the breathing session core.

Covers: bb.core.phase, bb.core.session, bb.core.clock
"""

import math
import os
import tempfile
import unittest

os.environ.setdefault("BOXBREATHE_HOME", tempfile.mkdtemp(prefix="boxbreathe_tests_"))

from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer


def _ensure_app():
    return QCoreApplication.instance() or QCoreApplication([])


def _spin(ms):
    """Run the Qt event loop for roughly ``ms`` milliseconds."""
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


def _run_seconds(clock, seconds):
    from bb.core.clock import UPDATE_INTERVAL_MS
    for _ in range(seconds * 1000 // UPDATE_INTERVAL_MS):
        clock.tick()


# ──────────────────────────────────────────────────────────────────────────
# phase.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestPhase(unittest.TestCase):

    def test_cycle_order(self):
        from bb.core.phase import Phase
        self.assertIs(Phase.INHALE.next(), Phase.HOLD_IN)
        self.assertIs(Phase.HOLD_IN.next(), Phase.EXHALE)
        self.assertIs(Phase.EXHALE.next(), Phase.HOLD_OUT)
        self.assertIs(Phase.HOLD_OUT.next(), Phase.INHALE)

    def test_idle_leads_into_inhale(self):
        from bb.core.phase import Phase
        self.assertIs(Phase.IDLE.next(), Phase.INHALE)

    def test_only_hold_out_ends_a_cycle(self):
        from bb.core.phase import Phase
        self.assertEqual([p for p in Phase if p.ends_cycle], [Phase.HOLD_OUT])

    def test_instructions(self):
        from bb.core.phase import Phase
        self.assertEqual(Phase.IDLE.instruction, "Ready to begin")
        self.assertEqual(Phase.INHALE.instruction, "Breathe In")
        self.assertEqual(Phase.HOLD_IN.instruction, "Hold")
        self.assertEqual(Phase.EXHALE.instruction, "Breathe Out")
        self.assertEqual(Phase.HOLD_OUT.instruction, "Hold")


# ──────────────────────────────────────────────────────────────────────────
# session.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestSessionConfig(unittest.TestCase):

    def test_defaults(self):
        from bb.core.session import SessionConfig
        cfg = SessionConfig()
        self.assertEqual(cfg.phase_duration_seconds, 4)
        self.assertEqual(cfg.session_length_seconds, 30)
        self.assertEqual(cfg.phase_duration_ms, 4000)
        self.assertEqual(cfg.session_length_ms, 30000)

    def test_out_of_range_raises(self):
        from bb.core.session import SessionConfig
        with self.assertRaises(ValueError):
            SessionConfig(phase_duration_seconds=6)
        with self.assertRaises(ValueError):
            SessionConfig(phase_duration_seconds=2)
        with self.assertRaises(ValueError):
            SessionConfig(session_length_seconds=5)
        with self.assertRaises(ValueError):
            SessionConfig(session_length_seconds=310)

    def test_session_length_must_follow_step(self):
        from bb.core.session import SessionConfig, is_valid_session_length
        self.assertFalse(is_valid_session_length(15))
        with self.assertRaises(ValueError):
            SessionConfig(session_length_seconds=15)

    def test_bools_and_floats_are_not_durations(self):
        from bb.core.session import is_valid_phase_duration, is_valid_session_length
        self.assertFalse(is_valid_phase_duration(True))
        self.assertFalse(is_valid_phase_duration(4.0))
        self.assertFalse(is_valid_session_length(30.0))

    def test_with_helpers_return_new_config(self):
        from bb.core.session import SessionConfig
        cfg = SessionConfig()
        changed = cfg.with_phase_duration(5).with_session_length(120)
        self.assertEqual(cfg, SessionConfig())
        self.assertEqual(changed.phase_duration_seconds, 5)
        self.assertEqual(changed.session_length_seconds, 120)


class TestSessionState(unittest.TestCase):

    def test_default_snapshot(self):
        from bb.core.phase import Phase
        from bb.core.session import SessionState
        s = SessionState()
        self.assertFalse(s.is_active)
        self.assertIs(s.phase, Phase.IDLE)
        self.assertEqual(s.progress, 0.0)
        self.assertEqual(s.cycle_count, 0)
        self.assertEqual(s.current_second, 0)
        self.assertEqual(s.total_elapsed_seconds, 0)
        self.assertFalse(s.is_completed)

    def test_derived_countdowns(self):
        from bb.core.phase import Phase
        from bb.core.session import SessionState
        s = SessionState(is_active=True, phase=Phase.EXHALE, current_second=1, total_elapsed_seconds=25)
        self.assertEqual(s.seconds_remaining_in_phase, 3)
        self.assertEqual(s.session_seconds_remaining, 5)
        self.assertEqual(s.instruction, "Breathe Out")

    def test_snapshots_are_frozen(self):
        from dataclasses import FrozenInstanceError
        from bb.core.session import SessionState
        with self.assertRaises(FrozenInstanceError):
            SessionState().progress = 0.5

    def test_fresh_keeps_config(self):
        from bb.core.phase import Phase
        from bb.core.session import SessionConfig, SessionState
        cfg = SessionConfig(5, 60)
        s = SessionState(is_active=True, phase=Phase.HOLD_IN, cycle_count=3, config=cfg)
        self.assertEqual(s.fresh(), SessionState(config=cfg))


# ──────────────────────────────────────────────────────────────────────────
# clock.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestSessionClock(unittest.TestCase):
    """Drives SessionClock by calling tick() directly, one simulated interval at a time."""

    @classmethod
    def setUpClass(cls):
        cls.app = _ensure_app()

    def setUp(self):
        from bb.core.clock import SessionClock
        self.clock = SessionClock()
        self.published = []
        self.clock.state_changed.connect(self.published.append)

    def tearDown(self):
        self.clock.stop()

    def _make(self, phase, length):
        from bb.core.clock import SessionClock
        from bb.core.session import SessionConfig
        self.clock.stop()
        self.clock = SessionClock(SessionConfig(phase, length))
        self.published = []
        self.clock.state_changed.connect(self.published.append)
        return self.clock

    def test_start_enters_inhale(self):
        from bb.core.phase import Phase
        self.clock.start()
        s = self.clock.state
        self.assertTrue(s.is_active)
        self.assertIs(s.phase, Phase.INHALE)
        self.assertEqual(s.total_elapsed_seconds, 0)
        self.assertEqual(s.cycle_count, 0)
        self.assertTrue(self.clock.is_running)
        self.assertEqual(len(self.published), 1)

    def test_one_full_cycle_for_every_phase_duration(self):
        """4 × phase duration of ticks completes exactly one cycle and lands back on INHALE."""
        from bb.core.phase import Phase
        for duration in (3, 4, 5):
            with self.subTest(duration=duration):
                clock = self._make(duration, 300)
                clock.start()
                _run_seconds(clock, 4 * duration)
                s = clock.state
                self.assertEqual(s.cycle_count, 1)
                self.assertIs(s.phase, Phase.INHALE)
                self.assertEqual(s.progress, 0.0)
                self.assertTrue(s.is_active)

    def test_phase_walks_in_order(self):
        from bb.core.phase import Phase
        self.clock.start()
        _run_seconds(self.clock, 16)
        phases = []
        for s in self.published:
            if not phases or phases[-1] is not s.phase:
                phases.append(s.phase)
        self.assertEqual(phases, [Phase.INHALE, Phase.HOLD_IN, Phase.EXHALE, Phase.HOLD_OUT, Phase.INHALE])

    def test_progress_and_current_second_stay_in_range(self):
        for duration in (3, 4, 5):
            with self.subTest(duration=duration):
                clock = self._make(duration, 60)
                clock.start()
                _run_seconds(clock, 40)
                active = [s for s in self.published if s.is_active]
                self.assertTrue(active)
                for s in active:
                    self.assertGreaterEqual(s.progress, 0.0)
                    self.assertLess(s.progress, 1.0)
                    self.assertGreaterEqual(s.current_second, 0)
                    self.assertLess(s.current_second, duration)
                    self.assertEqual(s.current_second, math.floor(s.progress * duration + 1e-9))

    def test_progress_non_decreasing_within_phase(self):
        self.clock.start()
        _run_seconds(self.clock, 20)
        for prev, cur in zip(self.published, self.published[1:]):
            if prev.phase is cur.phase and prev.cycle_count == cur.cycle_count:
                self.assertGreaterEqual(cur.progress, prev.progress)
            else:
                self.assertEqual(cur.progress, 0.0)

    def test_cycle_count_never_decreases(self):
        self._make(3, 120).start()
        _run_seconds(self.clock, 60)
        counts = [s.cycle_count for s in self.published]
        self.assertEqual(counts, sorted(counts))
        self.assertEqual(self.clock.state.cycle_count, 5)

    def test_start_while_active_is_noop(self):
        self.clock.start()
        _run_seconds(self.clock, 3)
        before = self.clock.state
        published = len(self.published)
        self.clock.start()
        self.assertEqual(self.clock.state, before)
        self.assertEqual(len(self.published), published)

    def test_coalesced_tick_crosses_several_boundaries(self):
        """One late tick covering several phases still advances through each of them."""
        from bb.core.phase import Phase
        self._make(4, 300).start()
        self.clock.tick(10000)
        s = self.clock.state
        self.assertIs(s.phase, Phase.EXHALE)
        self.assertEqual(s.progress, 0.5)
        self.assertEqual(s.current_second, 2)
        self.assertEqual(s.total_elapsed_seconds, 10)

        self.clock.tick(10000)
        s = self.clock.state
        self.assertIs(s.phase, Phase.HOLD_IN)
        self.assertEqual(s.cycle_count, 1)

    def test_uneven_ticks_keep_phase_timing(self):
        """Tick spacing doesn't change where phase boundaries fall."""
        from bb.core.phase import Phase
        self._make(4, 300).start()
        for delta in [7, 33, 16, 50, 3] * 25:
            self.clock.tick(delta)
        # 25 * 109ms = 2725ms, still inside the first inhale
        self.assertIs(self.clock.state.phase, Phase.INHALE)
        self.clock.tick(1275)
        self.assertIs(self.clock.state.phase, Phase.HOLD_IN)
        self.assertEqual(self.clock.state.progress, 0.0)

    def test_session_completes_and_keeps_phase(self):
        """10s session with 4s phases stops itself at 10s, leaving the last phase showing."""
        from bb.core.phase import Phase
        self._make(4, 10).start()
        _run_seconds(self.clock, 10)
        s = self.clock.state
        self.assertFalse(s.is_active)
        self.assertEqual(s.total_elapsed_seconds, 10)
        self.assertIs(s.phase, Phase.EXHALE)
        self.assertTrue(s.is_completed)
        self.assertFalse(self.clock.is_running)

        # Nothing moves after completion
        published = len(self.published)
        _run_seconds(self.clock, 2)
        self.assertEqual(len(self.published), published)
        self.assertLessEqual(self.clock.state.total_elapsed_seconds, 10)

    def test_total_elapsed_capped_by_session_length(self):
        self._make(4, 10).start()
        self.clock.tick(60000)
        self.assertEqual(self.clock.state.total_elapsed_seconds, 10)
        self.assertFalse(self.clock.state.is_active)

    def test_stop_keeps_run_values(self):
        from bb.core.phase import Phase
        self.clock.start()
        _run_seconds(self.clock, 5)
        running = self.clock.state
        self.clock.stop()
        s = self.clock.state
        self.assertFalse(s.is_active)
        self.assertIs(s.phase, Phase.HOLD_IN)
        self.assertEqual(s.progress, running.progress)
        self.assertEqual(s.cycle_count, running.cycle_count)
        self.assertFalse(self.clock.is_running)

    def test_stop_is_idempotent(self):
        self.clock.start()
        self.clock.stop()
        published = len(self.published)
        self.clock.stop()
        self.assertEqual(len(self.published), published)

    def test_tick_after_stop_publishes_nothing(self):
        self.clock.start()
        self.clock.stop()
        published = len(self.published)
        self.clock.tick()
        self.assertEqual(len(self.published), published)

    def test_reset_returns_to_idle_and_keeps_config(self):
        from bb.core.phase import Phase
        self.clock.set_phase_duration(5)
        self.clock.set_session_length(120)
        self.clock.start()
        _run_seconds(self.clock, 25)
        self.clock.reset()
        s = self.clock.state
        self.assertFalse(s.is_active)
        self.assertIs(s.phase, Phase.IDLE)
        self.assertEqual(s.progress, 0.0)
        self.assertEqual(s.cycle_count, 0)
        self.assertEqual(s.current_second, 0)
        self.assertEqual(s.total_elapsed_seconds, 0)
        self.assertEqual(s.config.phase_duration_seconds, 5)
        self.assertEqual(s.config.session_length_seconds, 120)

    def test_restart_after_completion_starts_over(self):
        from bb.core.phase import Phase
        self._make(4, 10).start()
        _run_seconds(self.clock, 10)
        self.clock.start()
        s = self.clock.state
        self.assertTrue(s.is_active)
        self.assertIs(s.phase, Phase.INHALE)
        self.assertEqual(s.total_elapsed_seconds, 0)

    # ── Configuration ──

    def test_set_phase_duration_out_of_range_rejected(self):
        before = self.clock.state
        self.assertFalse(self.clock.set_phase_duration(6))
        self.assertFalse(self.clock.set_phase_duration(2))
        self.assertEqual(self.clock.state, before)
        self.assertEqual(self.published, [])

    def test_set_session_length_out_of_range_rejected(self):
        before = self.clock.state
        self.assertFalse(self.clock.set_session_length(5))
        self.assertFalse(self.clock.set_session_length(310))
        self.assertFalse(self.clock.set_session_length(25))
        self.assertEqual(self.clock.state, before)

    def test_configure_while_active_rejected(self):
        self.clock.start()
        self.assertFalse(self.clock.set_phase_duration(5))
        self.assertFalse(self.clock.set_session_length(60))
        self.assertEqual(self.clock.state.config.phase_duration_seconds, 4)
        self.assertEqual(self.clock.state.config.session_length_seconds, 30)

    def test_configure_while_stopped_publishes(self):
        self.assertTrue(self.clock.set_phase_duration(3))
        self.assertTrue(self.clock.set_session_length(300))
        self.assertEqual(len(self.published), 2)
        self.assertEqual(self.published[-1].config.phase_duration_seconds, 3)
        self.assertEqual(self.published[-1].config.session_length_seconds, 300)


class TestSessionClockTimer(unittest.TestCase):
    """Lets the real QTimer drive the clock through the event loop."""

    @classmethod
    def setUpClass(cls):
        cls.app = _ensure_app()

    def test_timer_publishes_while_running(self):
        from bb.core.clock import SessionClock
        clock = SessionClock()
        published = []
        clock.state_changed.connect(published.append)
        clock.start()
        _spin(200)
        clock.stop()
        self.assertGreater(len(published), 2)
        self.assertGreater(published[-2].progress, 0.0)

    def test_no_snapshots_after_stop(self):
        from bb.core.clock import SessionClock
        clock = SessionClock()
        published = []
        clock.state_changed.connect(published.append)
        clock.start()
        _spin(50)
        clock.stop()
        count = len(published)
        _spin(100)
        self.assertEqual(len(published), count)
        self.assertFalse(published[-1].is_active)


if __name__ == "__main__":
    unittest.main()
