"""Terminal odometer: draws RollEngine snapshots with rich.

A terminal row cannot scroll by fractions of a line, so a rolling column
shows its current digit for the first half of each step and the incoming
digit for the second half.
"""

import time
from typing import Optional, Sequence

from rich.console import Console
from rich.live import Live
from rich.text import Text

from ..engine import ColumnState, RollEngine
from .theme import DEFAULT_THEME, ColorPalette


def _column_glyph(state: ColumnState) -> str:
    if state.is_rolling and state.sub_offset >= 0.5:
        return str(state.next_digit)
    return str(state.current_digit)


def _column_style(state: ColumnState, palette: ColorPalette) -> str:
    if state.visibility < 1:
        return f"dim {palette.text_dim}"
    if state.is_rolling:
        return f"bold {palette.rolling}"
    return f"bold {palette.text_bright}"


def render_columns(
    states: Sequence[ColumnState],
    prefix: str = "",
    palette: Optional[ColorPalette] = None,
) -> Text:
    """Render one frame of the counter, skipping columns that have faded out."""
    palette = palette or DEFAULT_THEME.palette
    t = Text()
    if prefix:
        t.append(prefix, style=palette.prefix)
    for state in states:
        if not state.is_visible:
            continue
        t.append(_column_glyph(state), style=_column_style(state, palette))
    return t


def play(
    engine: RollEngine,
    console: Optional[Console] = None,
    fps: int = 60,
    prefix: str = "",
) -> None:
    """Drive ``engine`` frame by frame inside a Live display until the run ends.

    Ctrl-C skips to the final value.
    """
    from .theme import console as default_console

    con = console or default_console
    frame = 1 / max(fps, 1)
    previous = engine.on_invalidate

    with Live(
        render_columns(engine.get_column_states(), prefix),
        console=con,
        refresh_per_second=max(fps, 1),
    ) as live:

        def _redraw() -> None:
            live.update(render_columns(engine.get_column_states(), prefix))
            if previous is not None:
                previous()

        engine.on_invalidate = _redraw
        try:
            while engine.advance():
                time.sleep(frame)
        except KeyboardInterrupt:
            engine.skip_to_end()
        finally:
            engine.on_invalidate = previous
        live.update(render_columns(engine.get_column_states(), prefix))
