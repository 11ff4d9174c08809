"""Easing curves mapping linear time to eased progress, both in [0, 1]."""

import re
from dataclasses import dataclass
from typing import Callable

Easing = Callable[[float], float]

_BEZIER_RE = re.compile(
    r"^cubic-bezier\(\s*([-\d.]+)\s*,\s*([-\d.]+)\s*,\s*([-\d.]+)\s*,\s*([-\d.]+)\s*\)$"
)


def _clamp(t: float) -> float:
    return 0.0 if t <= 0 else 1.0 if t >= 1 else t


def linear(t: float) -> float:
    return _clamp(t)


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out."""
    t = _clamp(t)
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


@dataclass(frozen=True)
class CubicBezier:
    """CSS-style cubic bezier from (0, 0) to (1, 1) through two control points.

    x1 and x2 must lie in [0, 1] so the curve is a function of time.
    """

    x1: float
    y1: float
    x2: float
    y2: float

    def __post_init__(self) -> None:
        if not (0 <= self.x1 <= 1 and 0 <= self.x2 <= 1):
            raise ValueError("bezier x control points must lie in [0, 1]")

    @staticmethod
    def _coord(t: float, p1: float, p2: float) -> float:
        u = 1 - t
        return 3 * u * u * t * p1 + 3 * u * t * t * p2 + t * t * t

    def _slope_x(self, t: float) -> float:
        u = 1 - t
        return 3 * u * u * self.x1 + 6 * u * t * (self.x2 - self.x1) + 3 * t * t * (1 - self.x2)

    def _solve_t(self, x: float) -> float:
        t = x
        for _ in range(8):
            err = self._coord(t, self.x1, self.x2) - x
            if abs(err) < 1e-9:
                return t
            slope = self._slope_x(t)
            if abs(slope) < 1e-6:
                break
            t -= err / slope
            if not 0 <= t <= 1:
                break
        # Newton stalled or left [0, 1]; fall back to bisection.
        lo, hi = 0.0, 1.0
        t = x
        for _ in range(60):
            err = self._coord(t, self.x1, self.x2) - x
            if abs(err) < 1e-9:
                break
            if err > 0:
                hi = t
            else:
                lo = t
            t = (lo + hi) / 2
        return t

    def __call__(self, x: float) -> float:
        x = _clamp(x)
        if x in (0.0, 1.0):
            return x
        return self._coord(self._solve_t(x), self.y1, self.y2)


# The reference odometer curve: slow start, fast middle, long settle.
STANDARD = CubicBezier(0.84, 0.0, 0.16, 1.0)

EASINGS: dict[str, Easing] = {
    "standard": STANDARD,
    "linear": linear,
    "ease-in-out-cubic": ease_in_out_cubic,
}


def get_easing(name: str) -> Easing:
    """Resolve an easing by name or ``cubic-bezier(x1, y1, x2, y2)`` literal."""
    key = name.strip().lower()
    if key in EASINGS:
        return EASINGS[key]
    match = _BEZIER_RE.match(key)
    if match:
        return CubicBezier(*(float(g) for g in match.groups()))
    raise ValueError(
        f"Unknown easing '{name}'. Available: {', '.join(EASINGS)} or cubic-bezier(x1, y1, x2, y2)"
    )
