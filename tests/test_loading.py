"""Tests for ROM loading and reset."""

import jax.numpy as jnp
import pytest
from chipax import (
    load_rom, load_rom_file, read_rom_file, reset, execute, create_state, Quirks,
    MachineStatus, RomTooLarge, RomUnreadable, PROGRAM_START, MAX_ROM_SIZE, FONT_DATA,
)


@pytest.mark.parametrize("size", [0, 1, 2, 1000, MAX_ROM_SIZE])
def test_valid_sizes_load(fresh_state, size):
    state = load_rom(fresh_state, bytes(range(256)) * (size // 256) + bytes(size % 256))
    assert state.pc == PROGRAM_START
    assert state.status == MachineStatus.RUNNING


def test_max_rom_size_is_3584():
    assert MAX_ROM_SIZE == 3584


@pytest.mark.parametrize("size", [MAX_ROM_SIZE + 1, 4096])
def test_oversized_rom_rejected(fresh_state, size):
    with pytest.raises(RomTooLarge) as excinfo:
        load_rom(fresh_state, bytes(size))
    assert excinfo.value.size == size
    assert excinfo.value.limit == MAX_ROM_SIZE


def test_rom_placed_at_entry_point(fresh_state):
    state = load_rom(fresh_state, b"\x12\x34\x56")
    assert state.memory[PROGRAM_START:PROGRAM_START + 3].tolist() == [0x12, 0x34, 0x56]
    assert state.memory[PROGRAM_START + 3] == 0


def test_full_rom_fills_memory_to_the_end(fresh_state):
    state = load_rom(fresh_state, b"\xAA" * MAX_ROM_SIZE)
    assert state.memory[0xFFF] == 0xAA


def test_font_table_after_load(fresh_state):
    dirty = fresh_state.replace(memory=fresh_state.memory.at[:0x50].set(0))
    state = load_rom(dirty, b"\x00\xE0")
    assert jnp.array_equal(state.memory[:0x50], FONT_DATA)


def test_load_resets_machine(fresh_state):
    state = execute(fresh_state, 0x6142)
    state = execute(state, 0xA321)
    state = state.replace(display=state.display.at[0, 0].set(True), status=MachineStatus.HALTED)

    state = load_rom(state, b"\x00\xE0", name="clear")

    assert state.V[1] == 0
    assert state.I == 0
    assert not state.display.any()
    assert state.status == MachineStatus.RUNNING
    assert state.error is None
    assert state.rom_name == "clear"


def test_load_keeps_configuration():
    state = create_state(strict=True, quirks=Quirks.cosmac(), stack_depth=16)
    state = load_rom(state, b"")
    assert state.strict
    assert state.quirks == Quirks.cosmac()
    assert state.stack.capacity == 16


def test_reset_reloads_program(fresh_state):
    state = load_rom(fresh_state, b"\x61\x05", name="prog")
    state = execute(state, 0x6107)
    state = state.replace(memory=state.memory.at[PROGRAM_START].set(0))

    state = reset(state)

    assert state.memory[PROGRAM_START] == 0x61
    assert state.V[1] == 0
    assert state.rom_name == "prog"


def test_read_rom_file(tmp_path):
    path = tmp_path / "game.ch8"
    path.write_bytes(b"\x00\xE0\x12\x00")
    assert read_rom_file(str(path)) == b"\x00\xE0\x12\x00"


def test_load_rom_file_records_name(fresh_state, tmp_path):
    path = tmp_path / "game.ch8"
    path.write_bytes(b"\x00\xE0")
    state = load_rom_file(fresh_state, str(path))
    assert state.rom_name == str(path)
    assert state.rom == b"\x00\xE0"


def test_missing_rom_unreadable(tmp_path):
    missing = tmp_path / "missing.ch8"
    with pytest.raises(RomUnreadable) as excinfo:
        read_rom_file(str(missing))
    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_directory_unreadable(tmp_path):
    with pytest.raises(RomUnreadable):
        read_rom_file(str(tmp_path))
