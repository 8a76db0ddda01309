"""Breathing phases and the fixed order they cycle through."""

from enum import Enum
from typing import assert_never


class Phase(Enum):
    """One of the four box-breathing phases, or IDLE before a session starts."""

    IDLE = "idle"
    INHALE = "inhale"
    HOLD_IN = "hold_in"
    EXHALE = "exhale"
    HOLD_OUT = "hold_out"

    def next(self):
        """Phase that follows this one once a full phase duration has elapsed.

        IDLE leads into INHALE, which is also where a HOLD_OUT wraps around to
        begin the next cycle.
        """
        match self:
            case Phase.IDLE:
                return Phase.INHALE
            case Phase.INHALE:
                return Phase.HOLD_IN
            case Phase.HOLD_IN:
                return Phase.EXHALE
            case Phase.EXHALE:
                return Phase.HOLD_OUT
            case Phase.HOLD_OUT:
                return Phase.INHALE
            case _:
                assert_never(self)

    @property
    def ends_cycle(self):
        return self is Phase.HOLD_OUT

    @property
    def instruction(self):
        match self:
            case Phase.IDLE:
                return "Ready to begin"
            case Phase.INHALE:
                return "Breathe In"
            case Phase.HOLD_IN | Phase.HOLD_OUT:
                return "Hold"
            case Phase.EXHALE:
                return "Breathe Out"
            case _:
                assert_never(self)


# Active phases in the order one breathing cycle walks through them.
CYCLE = (Phase.INHALE, Phase.HOLD_IN, Phase.EXHALE, Phase.HOLD_OUT)
