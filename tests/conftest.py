"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipax import create_state, load_rom, Quirks


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def cosmac_state():
    """Provide a fresh state with original COSMAC VIP quirks."""
    return create_state(quirks=Quirks.cosmac())


@pytest.fixture
def modern_state():
    """Provide a fresh state with modern quirks."""
    return create_state(quirks=Quirks.modern())


@pytest.fixture
def strict_state():
    """Provide a fresh state in strict mode."""
    return create_state(strict=True)


def assemble(*words):
    """Big-endian ROM bytes for a list of 16-bit instruction words."""
    rom = bytearray()
    for word in words:
        rom += bytes([(word >> 8) & 0xFF, word & 0xFF])
    return bytes(rom)


def load_program(state, *words):
    """Load instruction words as a ROM at the entry point."""
    return load_rom(state, assemble(*words), name="test")


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
