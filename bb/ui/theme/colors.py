from typing import assert_never
from bb.core.phase import Phase

# Dark, minimal palette. Only one theme exists, keys mirror what the stylesheet builder expects.
THEME = {
    "background": "#0F1419",
    "surface": "#1A1F26",
    "surface_variant": "#242B33",
    "text": "#EAEAEA",
    "text_secondary": "#A0A0A0",
    "border": "#333333",
    "accent": "#00C49A",
    "accent_pressed": "#00A582",
    "on_accent": "#000000",
    "stop": "#EF5350",
    "on_stop": "#FFFFFF",
}

# (start, end) gradient colors of the breathing circle for each phase.
def phase_colors(phase):
    match phase:
        case Phase.INHALE:
            return "#00C49A", "#00E5B8"
        case Phase.HOLD_IN | Phase.HOLD_OUT:
            return "#FFA726", "#FFA726"
        case Phase.EXHALE:
            return "#42A5F5", "#1E88E5"
        case Phase.IDLE:
            return THEME["accent"], THEME["accent"]
        case _:
            assert_never(phase)
