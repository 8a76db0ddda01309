"""Session configuration and the immutable snapshots the clock publishes."""

from dataclasses import dataclass, field, replace
from bb.core.phase import Phase

PHASE_DURATION_MIN = 3
PHASE_DURATION_MAX = 5
PHASE_DURATION_DEFAULT = 4

SESSION_LENGTH_MIN = 10
SESSION_LENGTH_MAX = 300
SESSION_LENGTH_STEP = 10
SESSION_LENGTH_DEFAULT = 30


def is_valid_phase_duration(seconds):
    return type(seconds) is int and PHASE_DURATION_MIN <= seconds <= PHASE_DURATION_MAX


def is_valid_session_length(seconds):
    return (type(seconds) is int
            and SESSION_LENGTH_MIN <= seconds <= SESSION_LENGTH_MAX
            and seconds % SESSION_LENGTH_STEP == 0)


@dataclass(frozen=True)
class SessionConfig:
    """User-adjustable session parameters, in whole seconds."""

    phase_duration_seconds: int = PHASE_DURATION_DEFAULT
    session_length_seconds: int = SESSION_LENGTH_DEFAULT

    def __post_init__(self):
        if not is_valid_phase_duration(self.phase_duration_seconds):
            raise ValueError(
                f"phase_duration_seconds must be an int in [{PHASE_DURATION_MIN}, {PHASE_DURATION_MAX}], "
                f"got {self.phase_duration_seconds!r}")
        if not is_valid_session_length(self.session_length_seconds):
            raise ValueError(
                f"session_length_seconds must be a multiple of {SESSION_LENGTH_STEP} in "
                f"[{SESSION_LENGTH_MIN}, {SESSION_LENGTH_MAX}], got {self.session_length_seconds!r}")

    @property
    def phase_duration_ms(self):
        return self.phase_duration_seconds * 1000

    @property
    def session_length_ms(self):
        return self.session_length_seconds * 1000

    def with_phase_duration(self, seconds):
        return replace(self, phase_duration_seconds=seconds)

    def with_session_length(self, seconds):
        return replace(self, session_length_seconds=seconds)


@dataclass(frozen=True)
class SessionState:
    """A fully computed view of the session at one instant.

    A new instance is produced for every change; nothing ever mutates one
    in place, so observers may hold on to snapshots freely.
    """

    is_active: bool = False
    phase: Phase = Phase.IDLE
    progress: float = 0.0          # fraction of the current phase elapsed, [0, 1)
    cycle_count: int = 0           # completed HOLD_OUT -> INHALE wraparounds
    current_second: int = 0        # whole seconds into the current phase
    total_elapsed_seconds: int = 0
    config: SessionConfig = field(default_factory=SessionConfig)

    # Countdown shown in the middle of the circle, phase_duration down to 1.
    @property
    def seconds_remaining_in_phase(self):
        return self.config.phase_duration_seconds - self.current_second

    @property
    def session_seconds_remaining(self):
        return max(0, self.config.session_length_seconds - self.total_elapsed_seconds)

    @property
    def instruction(self):
        return self.phase.instruction

    # True only for the snapshot left behind when a run hit its session length on its own.
    @property
    def is_completed(self):
        return (not self.is_active
                and self.phase is not Phase.IDLE
                and self.total_elapsed_seconds >= self.config.session_length_seconds)

    def fresh(self):
        """Default snapshot that keeps this snapshot's config."""
        return SessionState(config=self.config)
