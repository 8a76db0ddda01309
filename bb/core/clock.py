import time
from dataclasses import replace
from PySide6.QtCore import QObject, Qt, QTimer, Signal
from bb.common.logger import log
from bb.core.phase import Phase
from bb.core.session import SessionConfig, SessionState, is_valid_phase_duration, is_valid_session_length

# ~60 updates a second, enough for a smooth progress ring.
UPDATE_INTERVAL_MS = 16

def _monotonic_ms():
    return time.monotonic_ns() // 1_000_000

# Drives the box-breathing state machine. Time is accumulated as integer milliseconds and every phase, progress and
# countdown value is derived from that accumulator, so nothing drifts over a long session no matter how the ticks
# are spaced. The clock is the only writer of SessionState; everyone else just listens to `state_changed`.
class SessionClock(QObject):

    state_changed = Signal(object)

    def __init__(self, config=None, parent=None):
        super().__init__(parent)
        self._state = SessionState(config=config or SessionConfig())
        self._elapsed_ms = 0
        self._last_mono_ms = None

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.setInterval(UPDATE_INTERVAL_MS)
        self._timer.timeout.connect(self._on_timeout)

    # Synchronous read of the most recent snapshot.
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_running(self):
        return self._timer.isActive()

    #region === Commands ===

    def start(self):
        if self._state.is_active:
            log.debug("Ignored start(), session is already active")
            return
        self._elapsed_ms = 0
        self._last_mono_ms = _monotonic_ms()
        self._publish(SessionState(is_active=True, phase=Phase.INHALE, config=self._state.config))
        self._timer.start()
        log.info(f"Started session: {self._state.config.phase_duration_seconds}s phases, "
                 f"{self._state.config.session_length_seconds}s total")

    # Stops the timer before anything else, so no tick can land after this returns. Phase, progress and cycle count
    # are left where they were.
    def stop(self):
        self._timer.stop()
        self._last_mono_ms = None
        if self._state.is_active:
            self._publish(replace(self._state, is_active=False))
            log.info(f"Stopped session at {self._elapsed_ms}ms, phase {self._state.phase.name}, "
                     f"{self._state.cycle_count} cycles")

    def reset(self):
        self.stop()
        self._elapsed_ms = 0
        self._publish(self._state.fresh())
        log.info("Reset session")

    # Both setters only apply while stopped and in range, anything else is quietly ignored. The return value says
    # which happened, for callers that care.
    def set_phase_duration(self, seconds):
        if self._state.is_active or not is_valid_phase_duration(seconds):
            log.debug(f"Rejected phase duration {seconds!r} (active={self._state.is_active})")
            return False
        self._publish(replace(self._state, config=self._state.config.with_phase_duration(seconds)))
        log.info(f"Phase duration set to {seconds}s")
        return True
    def set_session_length(self, seconds):
        if self._state.is_active or not is_valid_session_length(seconds):
            log.debug(f"Rejected session length {seconds!r} (active={self._state.is_active})")
            return False
        self._publish(replace(self._state, config=self._state.config.with_session_length(seconds)))
        log.info(f"Session length set to {seconds}s")
        return True

    #endregion === Commands ===

    #region === Ticking ===

    # QTimer slot. Feeds tick() the real time since the previous tick, which makes late or coalesced timer events
    # catch up instead of stretching the phases.
    def _on_timeout(self):
        now = _monotonic_ms()
        delta = now - self._last_mono_ms if self._last_mono_ms is not None else UPDATE_INTERVAL_MS
        self._last_mono_ms = now
        self.tick(max(0, delta))

    def tick(self, delta_ms=UPDATE_INTERVAL_MS):
        """Advance the session by ``delta_ms`` milliseconds and publish the result.

        Phase boundaries are found from the absolute accumulator, so a single
        call spanning several boundaries still walks the phase through each of
        them in order. Reaching the session length stops the clock; the final
        snapshot keeps its phase and reports ``is_active=False``.
        """
        if not self._state.is_active:
            return
        config = self._state.config
        phase_ms = config.phase_duration_ms

        previous_ms = self._elapsed_ms
        self._elapsed_ms = min(previous_ms + delta_ms, config.session_length_ms)

        phase = self._state.phase
        cycle_count = self._state.cycle_count
        for _ in range(self._elapsed_ms // phase_ms - previous_ms // phase_ms):
            if phase.ends_cycle:
                cycle_count += 1
            phase = phase.next()

        into_phase_ms = self._elapsed_ms % phase_ms
        completed = self._elapsed_ms >= config.session_length_ms
        if completed:
            self._timer.stop()
            self._last_mono_ms = None

        self._publish(SessionState(
            is_active=not completed,
            phase=phase,
            progress=into_phase_ms / phase_ms,
            cycle_count=cycle_count,
            current_second=into_phase_ms // 1000,
            total_elapsed_seconds=self._elapsed_ms // 1000,
            config=config,
        ))
        if completed:
            log.info(f"Session completed after {config.session_length_seconds}s, {cycle_count} full cycles")

    #endregion === Ticking ===

    def _publish(self, state):
        if state == self._state:
            return
        self._state = state
        self.state_changed.emit(state)
