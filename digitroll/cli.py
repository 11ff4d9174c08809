"""digitroll CLI - odometer digit rolls in the terminal."""

import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from .config import ConfigManager, STEP_MODES
from .engine import InvalidDigitString, RollEngine, parse_digits
from .ui import console, play, render_columns
from .ui.theme import DEFAULT_THEME

# Transitions from the original demo screen
SHOWCASES = (
    ("123", "9"),
    ("99", "123"),
    ("321", "111"),
    ("555", "555"),
    ("102", "199"),
)


class DigitRollApp:
    """Wires configuration, engine and terminal renderer together."""

    def __init__(self, config_path: Optional[str] = None):
        self.config = ConfigManager(config_path)
        try:
            self.display = self.config.get_display_config()
        except ValueError as e:
            raise click.ClickException(str(e))

    def build_engine(self, **overrides) -> RollEngine:
        """Create an engine from the config file plus CLI overrides.

        Raises ValueError for invalid settings.
        """
        return RollEngine(config=self.config.get_roll_config(**overrides))

    def roll(
        self,
        engine: RollEngine,
        from_number: str,
        to_number: str,
        prefix: Optional[str] = None,
        animate: bool = True,
    ) -> str:
        """Roll from one number to the other and return the settled display."""
        if not engine.set_numbers(from_number, to_number):
            raise click.ClickException(f"Cannot roll '{from_number}' -> '{to_number}'")
        prefix = self.display["prefix"] if prefix is None else prefix

        engine.start_animation()
        if animate:
            play(engine, console=console, fps=self.display["fps"], prefix=prefix)
        else:
            engine.skip_to_end()
            console.print(render_columns(engine.get_column_states(), prefix))
        return engine.displayed_text


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _check_number(ctx, param, value):
    try:
        parse_digits(value)
    except InvalidDigitString as e:
        raise click.BadParameter(str(e))
    return value


# CLI Commands
@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="Config file (default ~/.config/digitroll/config.yaml)")
@click.option("--verbose", "-v", is_flag=True, help="Log engine activity to stderr")
@click.pass_context
def cli(ctx, config_path, verbose):
    """DIGITROLL - odometer-style number transitions.

    Each digit column rolls downward through intermediate values, wrapping
    9 -> 0, until it lands on the target digit.
    """
    _setup_logging(verbose)
    ctx.obj = DigitRollApp(config_path)


@cli.command()
@click.argument("from_number", callback=_check_number)
@click.argument("to_number", callback=_check_number)
@click.option("--prefix", "-p", default=None, help="Text shown before the digits")
@click.option("--duration", "-d", type=int, default=None, help="Base column duration in ms")
@click.option("--increment", "-i", type=int, default=None, help="Extra ms per column")
@click.option("--easing", "-e", default=None,
              help="standard, linear, ease-in-out-cubic or cubic-bezier(x1, y1, x2, y2)")
@click.option("--step-mode", type=click.Choice(STEP_MODES), default=None,
              help="Sample on a fixed grid or on each column's own step count")
@click.option("--no-animate", is_flag=True, help="Print the final value only")
@click.pass_obj
def roll(app, from_number, to_number, prefix, duration, increment, easing, step_mode, no_animate):
    """Roll FROM_NUMBER to TO_NUMBER."""
    try:
        engine = app.build_engine(
            base_duration_ms=duration,
            per_column_increment_ms=increment,
            easing=easing,
            step_mode=step_mode,
        )
    except ValueError as e:
        raise click.ClickException(str(e))
    app.roll(engine, from_number, to_number, prefix=prefix, animate=not no_animate)


@cli.command()
@click.option("--no-animate", is_flag=True, help="Print the final values only")
@click.pass_obj
def demo(app, no_animate):
    """Play the showcase transitions."""
    palette = DEFAULT_THEME.palette
    try:
        engine = app.build_engine()
    except ValueError as e:
        raise click.ClickException(str(e))
    for from_number, to_number in SHOWCASES:
        console.print(f"{from_number} -> {to_number}", style=f"dim {palette.text_dim}")
        app.roll(engine, from_number, to_number, animate=not no_animate)


@cli.command()
@click.pass_obj
def config(app):
    """Show configuration."""
    console.print(f"Config file: {app.config.config_path}")
    for key, value in app.config.get_animation_config().items():
        console.print(f"  {key}: {value}")
    for key, value in app.display.items():
        console.print(f"  {key}: {value!r}")


if __name__ == "__main__":
    cli()
