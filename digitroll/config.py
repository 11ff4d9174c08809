"""Configuration management for digitroll."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any
import yaml

from .easing import Easing, STANDARD, get_easing

_log = logging.getLogger(__name__)

STEP_MODES = ("sampled", "column")


@dataclass(frozen=True)
class RollConfig:
    """Engine timing and sampling settings."""

    base_duration_ms: int = 600
    per_column_increment_ms: int = 100
    sample_resolution: int = 10
    min_redraw_interval_ms: int = 16
    vanish_fade_multiplier: float = 1.5
    easing: Easing = field(default=STANDARD, compare=False)
    step_mode: str = "sampled"  # sampled: fixed grid, column: per-column total_steps

    def __post_init__(self) -> None:
        if self.base_duration_ms < 0 or self.per_column_increment_ms < 0:
            raise ValueError("durations must not be negative")
        if self.sample_resolution < 1:
            raise ValueError("sample_resolution must be at least 1")
        if self.min_redraw_interval_ms < 0:
            raise ValueError("min_redraw_interval_ms must not be negative")
        if self.vanish_fade_multiplier <= 0:
            raise ValueError("vanish_fade_multiplier must be positive")
        if self.step_mode not in STEP_MODES:
            raise ValueError(f"step_mode must be one of {STEP_MODES}, got '{self.step_mode}'")
        if not callable(self.easing):
            raise ValueError("easing must be callable")

    def column_duration_ms(self, index: int) -> int:
        return self.base_duration_ms + index * self.per_column_increment_ms


DEFAULT_CONFIG: Dict[str, Any] = {
    "animation": {
        "base_duration_ms": 600,
        "per_column_increment_ms": 100,
        "sample_resolution": 10,
        "min_redraw_interval_ms": 16,
        "vanish_fade_multiplier": 1.5,
        "easing": "standard",
        "step_mode": "sampled",
    },
    "display": {
        "prefix": "",
        "fps": 60,
    },
}


class ConfigManager:
    """Manage digitroll configuration from YAML."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path or "~/.config/digitroll/config.yaml").expanduser()
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self._create_default_config()
        return self._read_yaml()

    def _read_yaml(self) -> Dict[str, Any]:
        """Read and parse YAML file."""
        try:
            with open(self.config_path, "r") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            _log.warning("Error reading config %s: %s", self.config_path, e)
            return {}
        if content is None:
            return {}
        if not isinstance(content, dict):
            _log.warning("Ignoring config %s: top level is not a mapping", self.config_path)
            return {}
        return content

    def _create_default_config(self) -> None:
        """Create default configuration file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False)
        except OSError as e:
            _log.warning("Could not write default config %s: %s", self.config_path, e)

    def _section(self, name: str) -> Dict[str, Any]:
        config = self.data.get(name) or {}
        if not isinstance(config, dict):
            _log.warning("Ignoring '%s' in %s: expected a mapping", name, self.config_path)
            config = {}
        return {**DEFAULT_CONFIG[name], **config}

    def get_animation_config(self) -> Dict[str, Any]:
        """Get animation settings merged over the defaults."""
        return self._section("animation")

    def get_display_config(self) -> Dict[str, Any]:
        """Get terminal display settings merged over the defaults.

        Raises ValueError for an fps that is not a positive integer.
        """
        values = self._section("display")
        fps = values.get("fps")
        if isinstance(fps, bool) or not isinstance(fps, int) or fps < 1:
            raise ValueError(f"Invalid display config: fps must be a positive integer, got {fps!r}")
        values["prefix"] = "" if values.get("prefix") is None else str(values["prefix"])
        return values

    def get_roll_config(self, **overrides: Any) -> RollConfig:
        """Build a RollConfig from the animation section.

        Keyword overrides win over file values; ``None`` overrides are ignored.
        Raises ValueError for invalid values.
        """
        values = self.get_animation_config()
        values.update({k: v for k, v in overrides.items() if v is not None})
        easing = values.get("easing", "standard")
        if isinstance(easing, str):
            easing = get_easing(easing)
        try:
            return RollConfig(
                base_duration_ms=int(values["base_duration_ms"]),
                per_column_increment_ms=int(values["per_column_increment_ms"]),
                sample_resolution=int(values["sample_resolution"]),
                min_redraw_interval_ms=int(values["min_redraw_interval_ms"]),
                vanish_fade_multiplier=float(values["vanish_fade_multiplier"]),
                easing=easing,
                step_mode=str(values["step_mode"]),
            )
        except (TypeError, KeyError) as e:
            raise ValueError(f"Invalid animation config: {e}") from e
