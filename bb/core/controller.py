"""Command facade between the window and the session clock."""

from PySide6.QtCore import QObject, Signal
from bb.common.logger import log
from bb.core.clock import SessionClock
from bb.core.phase import Phase
from bb.core.session import (
    PHASE_DURATION_MAX,
    PHASE_DURATION_MIN,
    SESSION_LENGTH_MAX,
    SESSION_LENGTH_MIN,
    SESSION_LENGTH_STEP,
    SessionState,
)


class SessionController(QObject):
    """Owns the one SessionClock of the app and republishes its snapshots.

    Besides the plain commands it exposes the extra signals the window needs:
    ``phase_changed`` for the pulse when a new phase begins,
    ``session_completed`` when a run finishes on its own, and
    ``config_changed`` so settings can be saved.
    """

    state_changed = Signal(object)
    phase_changed = Signal(object)
    session_completed = Signal(object)
    config_changed = Signal(object)

    def __init__(self, config=None, parent=None):
        super().__init__(parent)
        self._clock = SessionClock(config, parent=self)
        self._last = self._clock.state
        self._clock.state_changed.connect(self._on_state)

    @property
    def state(self) -> SessionState:
        return self._clock.state

    @property
    def clock(self):
        return self._clock

    # -- Commands ------------------------------------------------------ #

    def start(self):
        self._clock.start()

    def stop(self):
        self._clock.stop()

    # Start/stop button behaviour.
    def toggle(self):
        if self.state.is_active:
            self.stop()
        else:
            self.start()

    def reset(self):
        self._clock.reset()

    def set_phase_duration(self, seconds):
        return self._clock.set_phase_duration(seconds)

    def set_session_length(self, seconds):
        return self._clock.set_session_length(seconds)

    def increase_session_length(self):
        if not self.can_increase_session_length:
            return False
        return self.set_session_length(self.state.config.session_length_seconds + SESSION_LENGTH_STEP)

    def decrease_session_length(self):
        if not self.can_decrease_session_length:
            return False
        return self.set_session_length(self.state.config.session_length_seconds - SESSION_LENGTH_STEP)

    def increase_phase_duration(self):
        if not self.can_increase_phase_duration:
            return False
        return self.set_phase_duration(self.state.config.phase_duration_seconds + 1)

    def decrease_phase_duration(self):
        if not self.can_decrease_phase_duration:
            return False
        return self.set_phase_duration(self.state.config.phase_duration_seconds - 1)

    # Called when the view goes away, the clock must not outlive it.
    def shutdown(self):
        if self.state.is_active:
            log.info("Stopping active session on shutdown")
        self._clock.stop()

    # -- Control enablement -------------------------------------------- #

    @property
    def can_increase_session_length(self):
        return not self.state.is_active and self.state.config.session_length_seconds < SESSION_LENGTH_MAX

    @property
    def can_decrease_session_length(self):
        return not self.state.is_active and self.state.config.session_length_seconds > SESSION_LENGTH_MIN

    @property
    def can_increase_phase_duration(self):
        return not self.state.is_active and self.state.config.phase_duration_seconds < PHASE_DURATION_MAX

    @property
    def can_decrease_phase_duration(self):
        return not self.state.is_active and self.state.config.phase_duration_seconds > PHASE_DURATION_MIN

    @property
    def can_reset(self):
        return not self.state.is_active and self.state.phase is not Phase.IDLE

    # -- Republishing --------------------------------------------------- #

    def _on_state(self, state):
        previous, self._last = self._last, state
        self.state_changed.emit(state)

        if state.config != previous.config:
            self.config_changed.emit(state.config)
        entered_phase = not previous.is_active or state.phase is not previous.phase
        if state.is_active and state.phase is not Phase.IDLE and entered_phase:
            self.phase_changed.emit(state.phase)
        if previous.is_active and state.is_completed:
            self.session_completed.emit(state)
