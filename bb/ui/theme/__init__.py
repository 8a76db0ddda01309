"""Theme system — palette, phase colors, and stylesheet generation."""
from .colors import THEME, phase_colors
from .stylesheet import build_stylesheet

__all__ = ["THEME", "phase_colors", "build_stylesheet"]
