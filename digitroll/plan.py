"""Per-column roll plan: how many steps a digit wheel travels and what it shows.

A wheel only ever counts downward. From its start digit it drops to 0,
wraps to 9 and keeps dropping until it lands on the end digit.
"""

from dataclasses import dataclass

DIGITS = "0123456789"


def _check_digit(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 9:
        raise ValueError(f"{name} must be a digit 0-9, got {value!r}")
    return value


@dataclass(frozen=True)
class ColumnPlan:
    """Immutable roll plan for a single column."""

    start_digit: int
    end_digit: int

    def __post_init__(self) -> None:
        _check_digit(self.start_digit, "start_digit")
        _check_digit(self.end_digit, "end_digit")

    @property
    def is_static(self) -> bool:
        return self.start_digit == self.end_digit

    @property
    def total_steps(self) -> int:
        """Discrete transitions needed, including the final landing step."""
        if self.is_static:
            return 0
        return self.start_digit + (9 - self.end_digit) + 1

    def digit_at(self, step: int) -> int:
        if self.is_static or step >= self.total_steps:
            return self.end_digit
        return (self.start_digit - max(step, 0)) % 10

    def value_at(self, step: int) -> tuple[int, int]:
        """Return ``(current, next)`` at a step of the column's own sequence."""
        step = max(step, 0)
        return self.digit_at(step), self.digit_at(step + 1)

    def sampled_digit_at(self, step: int, resolution: int) -> int:
        if self.is_static:
            return self.start_digit
        step = max(step, 0)
        if step >= resolution:
            return self.end_digit
        if step <= self.start_digit:
            return self.start_digit - step
        # Past zero the wheel is re-timed so it lands exactly on the last grid step.
        return (resolution + self.end_digit - step) % 10

    def sampled_value_at(self, step: int, resolution: int) -> tuple[int, int]:
        """Return ``(current, next)`` when sampling on a fixed grid of ``resolution`` steps.

        Every non-static column lands on its end digit at ``step == resolution``
        regardless of ``total_steps``, so long wheels skip intermediate digits.
        """
        step = max(step, 0)
        return (
            self.sampled_digit_at(step, resolution),
            self.sampled_digit_at(step + 1, resolution),
        )


def plan(start_digit: int, end_digit: int) -> ColumnPlan:
    """Build the roll plan for one column."""
    return ColumnPlan(start_digit=start_digit, end_digit=end_digit)


def value_at(step: int, start_digit: int, end_digit: int) -> tuple[int, int]:
    """Shortcut for ``plan(start_digit, end_digit).value_at(step)``."""
    return plan(start_digit, end_digit).value_at(step)
