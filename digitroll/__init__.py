"""digitroll - odometer-style digit roll transitions."""

__version__ = "0.1.0"

from .config import ConfigManager, RollConfig
from .engine import (
    Column,
    ColumnState,
    InvalidDigitString,
    RollEngine,
    RunState,
    parse_digits,
)
from .plan import ColumnPlan, plan, value_at

__all__ = [
    "ConfigManager",
    "RollConfig",
    "Column",
    "ColumnState",
    "InvalidDigitString",
    "RollEngine",
    "RunState",
    "parse_digits",
    "ColumnPlan",
    "plan",
    "value_at",
]
