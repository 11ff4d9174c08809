"""Digit-roll engine.

Pads the start and end numbers to a common width, plans one wheel per
column and turns per-column progress into ColumnState snapshots for a
renderer. Columns run on their own durations (base + index * increment)
so the rightmost, least significant column settles last.

Every mutation replaces the RunState wholesale. Starting, stopping or
re-setting numbers bumps a generation counter; ticks carrying an older
generation are dropped.
"""

import logging
import math
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .config import RollConfig
from .plan import DIGITS, ColumnPlan

_log = logging.getLogger(__name__)


class InvalidDigitString(ValueError):
    """A number string contained something other than ASCII digits 0-9."""


def parse_digits(value: str, allow_empty: bool = False) -> tuple[int, ...]:
    """Split a number string into digits, raising InvalidDigitString on bad input."""
    if not isinstance(value, str):
        raise InvalidDigitString(f"expected a string of digits, got {type(value).__name__}")
    if not value and not allow_empty:
        raise InvalidDigitString("expected at least one digit")
    bad = [ch for ch in value if ch not in DIGITS]
    if bad:
        raise InvalidDigitString(f"'{value}' contains non-digit characters: {''.join(bad)!r}")
    return tuple(int(ch) for ch in value)


@dataclass(frozen=True)
class Column:
    """One decimal position of the padded number pair. Index 0 is most significant."""

    index: int
    plan: ColumnPlan
    is_vanishing: bool = False
    duration_ms: int = 0

    @property
    def start_digit(self) -> int:
        return self.plan.start_digit

    @property
    def end_digit(self) -> int:
        return self.plan.end_digit

    @property
    def total_steps(self) -> int:
        return self.plan.total_steps


@dataclass(frozen=True)
class ColumnState:
    """What a renderer draws for one column on one frame."""

    current_digit: int
    next_digit: int
    sub_offset: float = 0.0
    visibility: float = 1.0

    @classmethod
    def settled(cls, digit: int) -> "ColumnState":
        return cls(current_digit=digit, next_digit=digit)

    @property
    def is_rolling(self) -> bool:
        return self.next_digit != self.current_digit

    @property
    def is_visible(self) -> bool:
        return self.visibility > 0


@dataclass(frozen=True)
class RunState:
    """Immutable snapshot of one animation run (or of the idle display)."""

    generation: int = 0
    padded_from: str = ""
    padded_to: str = ""
    columns: tuple[Column, ...] = ()
    states: tuple[ColumnState, ...] = ()
    finished: frozenset = frozenset()
    is_animating: bool = False
    started_at: Optional[float] = None

    @property
    def remaining(self) -> int:
        """Columns whose driver has not reported completion yet."""
        return len(self.columns) - len(self.finished)

    @property
    def total_duration_ms(self) -> int:
        return max((c.duration_ms for c in self.columns), default=0)

    def with_column_state(self, index: int, state: ColumnState) -> "RunState":
        states = list(self.states)
        states[index] = state
        return replace(self, states=tuple(states))


def _settled_states(number: str) -> tuple[ColumnState, ...]:
    return tuple(ColumnState.settled(int(ch)) for ch in number)


class RollEngine:
    """Odometer roll between two digit strings.

    Usage:
        engine = RollEngine(on_invalidate=redraw)
        engine.set_numbers("99", "123")
        engine.start_animation()
        while engine.advance():
            ...  # wait for the next frame
    """

    def __init__(
        self,
        config: Optional[RollConfig] = None,
        on_invalidate: Optional[Callable[[], None]] = None,
        on_animation_end: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or RollConfig()
        self.on_invalidate = on_invalidate
        self.on_animation_end = on_animation_end
        self._clock = clock
        self._from = ""
        self._to = ""
        self._generation = 0
        self._run = RunState()
        self._dirty = False
        self._last_invalidate: Optional[float] = None

    # -- Read-only views ---------------------------------------------------

    @property
    def from_number(self) -> str:
        return self._from

    @property
    def to_number(self) -> str:
        return self._to

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def run_state(self) -> RunState:
        return self._run

    @property
    def is_animating(self) -> bool:
        return self._run.is_animating

    @property
    def displayed_text(self) -> str:
        """Digits currently on display, skipping fully faded columns."""
        return "".join(str(s.current_digit) for s in self._run.states if s.is_visible)

    def get_column_states(self) -> tuple[ColumnState, ...]:
        """Latest snapshot, most significant column first."""
        return self._run.states

    # -- Commands ----------------------------------------------------------

    def set_numbers(self, from_number: str, to_number: str) -> bool:
        """Store a new number pair and show ``from_number`` at rest.

        Returns False and keeps the previous state when either string holds
        anything but ASCII digits. An empty string leaves the pair unset.
        """
        try:
            start = parse_digits(from_number, allow_empty=True)
            parse_digits(to_number, allow_empty=True)
        except InvalidDigitString as e:
            _log.info("Rejected numbers %r -> %r: %s", from_number, to_number, e)
            return False

        self._cancel()
        self._from = from_number
        self._to = to_number
        self._run = RunState(
            generation=self._generation,
            states=tuple(ColumnState.settled(d) for d in start),
        )
        self._request_redraw()
        return True

    def start_animation(self) -> None:
        """Plan every column and start a new run. No-op while numbers are unset."""
        if not self._from or not self._to:
            _log.debug("start_animation ignored: numbers not set")
            return

        self._cancel()
        width = max(len(self._from), len(self._to))
        padded_from = self._from.rjust(width, "0")
        padded_to = self._to.rjust(width, "0")
        vanishing = len(self._from) - len(self._to)
        columns = tuple(
            Column(
                index=i,
                plan=ColumnPlan(int(a), int(b)),
                is_vanishing=i < vanishing,
                duration_ms=self.config.column_duration_ms(i),
            )
            for i, (a, b) in enumerate(zip(padded_from, padded_to))
        )

        if all(c.plan.is_static and not c.is_vanishing for c in columns):
            _log.debug("Nothing to roll for %s -> %s", self._from, self._to)
            self._run = RunState(
                generation=self._generation,
                padded_from=padded_from,
                padded_to=padded_to,
                columns=columns,
                states=_settled_states(self._to),
                finished=frozenset(range(width)),
            )
            self._request_redraw()
            return

        self._run = RunState(
            generation=self._generation,
            padded_from=padded_from,
            padded_to=padded_to,
            columns=columns,
            states=tuple(ColumnState.settled(c.start_digit) for c in columns),
            is_animating=True,
            started_at=self._clock(),
        )
        _log.debug(
            "Run %d started: %s -> %s (%d columns, %d ms)",
            self._generation, padded_from, padded_to, width, self._run.total_duration_ms,
        )
        self._request_redraw()

    def stop_animation(self) -> None:
        """Cancel the run, freezing the last computed digits with zero offset."""
        run = self._run
        if not run.is_animating:
            return
        self._generation += 1
        states = tuple(
            ColumnState(s.current_digit, s.current_digit, 0.0, s.visibility) for s in run.states
        )
        self._run = replace(run, generation=self._generation, states=states, is_animating=False)
        _log.debug("Run %d stopped", run.generation)
        self._request_redraw()

    def skip_to_end(self) -> None:
        """Jump straight to the settled end value of the active run."""
        if self._run.is_animating:
            self._complete()

    # -- Driver hooks ------------------------------------------------------

    def on_tick(self, index: int, progress: float, generation: Optional[int] = None) -> bool:
        """Apply eased ``progress`` in [0, 1] to one column.

        Marks the frame dirty but does not notify; call commit_frame once
        the whole batch for a frame is applied. Returns False when the tick
        was discarded.
        """
        if not self._accepts(index, generation):
            return False
        if not math.isfinite(progress):
            _log.debug("Discarded non-finite progress %r for column %d", progress, index)
            return False
        progress = min(max(progress, 0.0), 1.0)
        column = self._run.columns[index]
        self._run = self._run.with_column_state(index, self._column_state(column, progress))
        self._dirty = True
        return True

    def finish_column(self, index: int, generation: Optional[int] = None) -> bool:
        """Report that a column's driver is done. The last one completes the run."""
        if not self._accepts(index, generation):
            return False
        run = self._run
        if index in run.finished:
            return False
        self._run = replace(run, finished=run.finished | {index})
        if self._run.remaining == 0:
            self._complete()
        return True

    def commit_frame(self, force: bool = False) -> bool:
        """Notify ``on_invalidate`` for a dirty frame, at most once per redraw interval."""
        if not self._dirty:
            return False
        now = self._clock()
        if (
            not force
            and self._last_invalidate is not None
            and (now - self._last_invalidate) * 1000 < self.config.min_redraw_interval_ms
        ):
            return False
        self._dirty = False
        self._last_invalidate = now
        if self.on_invalidate is not None:
            self.on_invalidate()
        return True

    def advance(self) -> bool:
        """Tick every column from the elapsed time and commit one frame.

        Returns True while the run is still animating.
        """
        run = self._run
        if not run.is_animating:
            return False

        elapsed_ms = max(0.0, (self._clock() - run.started_at) * 1000)
        generation = self._generation
        done = []
        for column in run.columns:
            if column.index in run.finished:
                continue
            if column.duration_ms <= 0:
                linear = 1.0
            else:
                linear = min(1.0, elapsed_ms / column.duration_ms)
            self.on_tick(column.index, self.config.easing(linear), generation)
            if linear >= 1.0:
                done.append(column.index)

        for index in done:
            self.finish_column(index, generation)

        if self._run.is_animating:
            self.commit_frame()
        return self._run.is_animating

    # -- Internals ---------------------------------------------------------

    def _accepts(self, index: int, generation: Optional[int]) -> bool:
        if generation is not None and generation != self._generation:
            _log.debug("Discarded stale tick for column %d (run %d, current %d)",
                       index, generation, self._generation)
            return False
        if not self._run.is_animating:
            return False
        return 0 <= index < len(self._run.columns)

    def _column_state(self, column: Column, progress: float) -> ColumnState:
        plan = column.plan
        if plan.is_static:
            current = nxt = plan.start_digit
            offset = 0.0
        elif self.config.step_mode == "column":
            position = progress * plan.total_steps
            step = int(position)
            offset = position - step
            current, nxt = plan.value_at(step)
        else:
            position = progress * self.config.sample_resolution
            step = int(position)
            offset = position - step
            current, nxt = plan.sampled_value_at(step, self.config.sample_resolution)

        visibility = 1.0
        if column.is_vanishing:
            visibility = 1.0 - min(1.0, progress * self.config.vanish_fade_multiplier)
        return ColumnState(current, nxt, offset, visibility)

    def _cancel(self) -> None:
        if self._run.is_animating:
            _log.debug("Run %d cancelled", self._generation)
        self._generation += 1

    def _complete(self) -> None:
        run = self._run
        self._run = replace(
            run,
            states=_settled_states(self._to),
            finished=frozenset(range(len(run.columns))),
            is_animating=False,
        )
        _log.debug("Run %d finished on %s", run.generation, self._to)
        self._request_redraw()
        if self.on_animation_end is not None:
            self.on_animation_end()

    def _request_redraw(self) -> None:
        self._dirty = True
        self.commit_frame(force=True)
