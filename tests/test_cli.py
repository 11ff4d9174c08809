"""Tests for the digitroll CLI."""

import pytest
from click.testing import CliRunner

from digitroll.cli import SHOWCASES, DigitRollApp, cli


@pytest.fixture
def config_args(tmp_path):
    return ["--config", str(tmp_path / "config.yaml")]


def test_roll_prints_final_value(config_args):
    result = CliRunner().invoke(cli, config_args + ["roll", "99", "123", "--no-animate"])
    assert result.exit_code == 0, result.output
    assert "123" in result.output


def test_roll_with_prefix(config_args):
    result = CliRunner().invoke(
        cli, config_args + ["roll", "123", "9", "--prefix", "$", "--no-animate"],
    )
    assert result.exit_code == 0, result.output
    assert "$9" in result.output


def test_roll_rejects_non_digits(config_args):
    result = CliRunner().invoke(cli, config_args + ["roll", "12a", "5", "--no-animate"])
    assert result.exit_code == 2
    assert "non-digit" in result.output


def test_roll_rejects_unknown_easing(config_args):
    result = CliRunner().invoke(
        cli, config_args + ["roll", "1", "5", "--easing", "bouncy", "--no-animate"],
    )
    assert result.exit_code == 1
    assert "Unknown easing" in result.output


def test_roll_animated(config_args):
    result = CliRunner().invoke(
        cli, config_args + ["roll", "321", "111", "--duration", "0", "--increment", "0"],
    )
    assert result.exit_code == 0, result.output
    assert "111" in result.output


def test_demo(config_args):
    result = CliRunner().invoke(cli, config_args + ["demo", "--no-animate"])
    assert result.exit_code == 0, result.output
    for from_number, to_number in SHOWCASES:
        assert f"{from_number} -> {to_number}" in result.output


def test_config_command(tmp_path):
    config_path = tmp_path / "config.yaml"
    result = CliRunner().invoke(cli, ["--config", str(config_path), "config"])
    assert result.exit_code == 0, result.output
    assert "base_duration_ms: 600" in result.output
    assert config_path.exists()


def test_bad_fps_is_reported_without_traceback(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("display:\n  fps: fast\n")
    result = CliRunner().invoke(cli, ["--config", str(config_path), "roll", "1", "2"])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "fps must be a positive integer" in result.output


def test_non_mapping_animation_section_uses_defaults(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("animation: [1, 2]\n")
    result = CliRunner().invoke(
        cli, ["--config", str(config_path), "roll", "1", "2", "--no-animate"],
    )
    assert result.exit_code == 0, result.output
    assert "2" in result.output


def test_app_roll_returns_display(tmp_path):
    app = DigitRollApp(str(tmp_path / "config.yaml"))
    engine = app.build_engine(step_mode="column")
    assert app.roll(engine, "102", "199", animate=False) == "199"
