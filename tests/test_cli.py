"""Tests for the command line front door and configuration."""

import pytest

from chipax.cli import build_parser, config_from_args, main
from chipax.config import EmulatorConfig
from chipax import MachineStatus, Quirks
from conftest import assemble


@pytest.fixture
def rom_file(tmp_path):
    path = tmp_path / "loop.ch8"
    path.write_bytes(assemble(0x6005, 0xF018, 0x1204))
    return path


def test_config_from_args_defaults():
    config = config_from_args(build_parser().parse_args(["game.ch8"]))
    assert config.scale == 20
    assert config.cpu_hz == 700
    assert config.quirks == "default"
    assert not config.strict


def test_config_colors_override_scheme():
    args = build_parser().parse_args(["game.ch8", "--scheme", "amber", "--bg", "#102030"])
    config = config_from_args(args)
    assert config.foreground == (255, 176, 0)
    assert config.background == (16, 32, 48)


def test_config_creates_core_state():
    state = EmulatorConfig(strict=True, quirks="cosmac", stack_depth=14).create_state()
    assert state.strict
    assert state.quirks == Quirks.cosmac()
    assert state.stack.capacity == 14


@pytest.mark.parametrize("kwargs", [
    {"scale": 0}, {"cpu_hz": 0}, {"quirks": "schip"},
    {"stack_depth": 11}, {"stack_depth": 20}, {"tone_hz": 0}, {"tone_hz": -440},
])
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        EmulatorConfig(**kwargs)


@pytest.mark.parametrize("option", [["--stack-depth", "20"], ["--tone", "0"]])
def test_out_of_range_option_exit_code(rom_file, option):
    assert main([str(rom_file), "--headless", "--frames", "1"] + option) == 2


def test_headless_run(rom_file, tmp_path):
    screenshot = tmp_path / "final.png"
    code = main([str(rom_file), "--headless", "--frames", "3", "--screenshot", str(screenshot)])
    assert code == 0
    assert screenshot.exists()


def test_headless_halt_exit_code(tmp_path):
    path = tmp_path / "bad.ch8"
    path.write_bytes(assemble(0x00EE))
    assert main([str(path), "--headless", "--frames", "2"]) == 1


def test_missing_rom_exit_code(tmp_path):
    assert main([str(tmp_path / "missing.ch8"), "--headless"]) == 1


def test_oversized_rom_exit_code(tmp_path):
    path = tmp_path / "huge.ch8"
    path.write_bytes(bytes(4000))
    assert main([str(path), "--headless"]) == 1


def test_bad_color_exit_code(rom_file):
    assert main([str(rom_file), "--headless", "--fg", "purple"]) == 2
