"""Counter palette and the shared rich console."""

from dataclasses import dataclass
from rich.console import Console


@dataclass(frozen=True)
class ColorPalette:
    """Core counter color palette."""

    text_bright: str = "#e8e8f0"
    text_dim: str = "#4a4a60"
    rolling: str = "#e5c747"
    prefix: str = "#00d4e5"


@dataclass(frozen=True)
class RollTheme:
    """Theme binding for the counter renderer."""

    palette: ColorPalette


DEFAULT_THEME = RollTheme(palette=ColorPalette())

console = Console()
