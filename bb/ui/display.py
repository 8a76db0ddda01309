"""What the breathing screen shows for a snapshot, kept free of Qt so it can be checked headless."""

from typing import assert_never

from bb.core.phase import Phase
from bb.util.misc import format_seconds

IDLE_SCALE = 0.7
SMALL_SCALE = 0.5
LARGE_SCALE = 1.0


def circle_scale(state):
    """Scale of the inner circle: grows over an inhale, shrinks over an exhale."""
    if not state.is_active:
        return IDLE_SCALE
    match state.phase:
        case Phase.INHALE:
            return SMALL_SCALE + (LARGE_SCALE - SMALL_SCALE) * state.progress
        case Phase.HOLD_IN:
            return LARGE_SCALE
        case Phase.EXHALE:
            return LARGE_SCALE - (LARGE_SCALE - SMALL_SCALE) * state.progress
        case Phase.HOLD_OUT:
            return SMALL_SCALE
        case Phase.IDLE:
            return IDLE_SCALE
        case _:
            assert_never(state.phase)


def center_text(state):
    """(big number, caption) drawn in the middle of the circle."""
    if state.phase is Phase.IDLE:
        return str(state.config.phase_duration_seconds), "seconds"
    caption = f"Cycle {state.cycle_count}" if state.cycle_count > 0 else ""
    return str(state.seconds_remaining_in_phase), caption


def session_text(state):
    if state.is_active:
        return f"{state.session_seconds_remaining}s remaining"
    return f"Session: {format_seconds(state.config.session_length_seconds)}"


def phase_text(state):
    return f"Phase: {state.config.phase_duration_seconds}s"

