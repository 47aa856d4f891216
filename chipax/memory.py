"""CHIP-8 memory access and ROM loading."""

from typing import Optional, Sequence, Union

import jax.numpy as jnp

from chipax.constants import (
    ADDRESS_MASK, FONT_END, FONT_START, MAX_ROM_SIZE, MEMORY_SIZE, PROGRAM_START,
)
from chipax.errors import MemoryViolation, RomTooLarge, RomUnreadable
from chipax.state import EmulatorState, MachineStatus, create_state


def read_rom_file(path: str) -> bytes:
    """Read a ROM image from disk."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise RomUnreadable(str(path), e.strerror or str(e)) from e


def load_rom(state: EmulatorState, rom_data: bytes, name: Optional[str] = None) -> EmulatorState:
    """Load ROM data into a fresh machine starting at 0x200.

    The returned machine keeps ``state``'s configuration (strictness, quirks,
    stack depth, random key) and starts RUNNING at the entry point.
    """
    rom_data = bytes(rom_data)
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom_data), MAX_ROM_SIZE)

    fresh = create_state(
        state.rng, strict=state.strict, quirks=state.quirks, stack_depth=state.stack.capacity
    )
    memory = fresh.memory
    if rom_data:
        rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
        memory = memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return fresh.replace(
        memory=memory,
        pc=jnp.astype(PROGRAM_START, jnp.uint16),
        status=MachineStatus.RUNNING,
        rom_name=name,
        rom=rom_data,
    )


def load_rom_file(state: EmulatorState, path: str) -> EmulatorState:
    """Read ``path`` and load it as the machine's program."""
    return load_rom(state, read_rom_file(path), name=str(path))


def reset(state: EmulatorState) -> EmulatorState:
    """Reload the current program from scratch."""
    return load_rom(state, state.rom, name=state.rom_name)


def _check_write(state: EmulatorState, address: int) -> None:
    if state.strict and (FONT_START <= address < FONT_END or address >= MEMORY_SIZE):
        raise MemoryViolation(address)


def read_byte(state: EmulatorState, address: int) -> int:
    return int(state.memory[address & ADDRESS_MASK])


def write_byte(state: EmulatorState, address: int, value: int) -> EmulatorState:
    _check_write(state, address)
    return state.replace(memory=state.memory.at[address & ADDRESS_MASK].set(value & 0xFF))


def read_block(state: EmulatorState, address: int, length: int) -> jnp.ndarray:
    """Read ``length`` bytes starting at ``address``, wrapping at the end of memory."""
    indices = (address + jnp.arange(length)) & ADDRESS_MASK
    return state.memory[indices]


def write_block(state: EmulatorState, address: int, values: Union[Sequence[int], jnp.ndarray]) -> EmulatorState:
    """Write consecutive bytes starting at ``address``, wrapping at the end of memory."""
    values = jnp.asarray(values, dtype=jnp.uint8)
    length = values.shape[0]
    if state.strict:
        for offset in range(length):
            _check_write(state, address + offset)
    indices = (address + jnp.arange(length)) & ADDRESS_MASK
    return state.replace(memory=state.memory.at[indices].set(values))
