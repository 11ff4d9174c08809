"""Terminal rendering for the digit roll."""

from .theme import DEFAULT_THEME, ColorPalette, console
from .odometer import render_columns, play

__all__ = [
    "DEFAULT_THEME",
    "ColorPalette",
    "console",
    "render_columns",
    "play",
]
