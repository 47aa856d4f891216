"""CHIP-8 hex keypad.

The FX0A "wait for key" instruction does not block. It puts the machine in an
explicit waiting sub-state that the interpreter resolves once per cycle, so
timers and input keep flowing while a program waits.

When several keys go down between two checks, the lowest key index wins.
"""

import jax.numpy as jnp

from chipax.constants import NUM_KEYS
from chipax.state import EmulatorState


def _check_index(index: int) -> int:
    if not 0 <= index < NUM_KEYS:
        raise ValueError(f"Key index must be between 0x0 and 0xF, got {index}")
    return index


def set_key(state: EmulatorState, index: int, pressed: bool) -> EmulatorState:
    """Record one key going down or up."""
    return state.replace(keypad=state.keypad.at[_check_index(index)].set(bool(pressed)))


def is_pressed(state: EmulatorState, index: int) -> bool:
    return bool(state.keypad[_check_index(index)])


def is_awaiting_key(state: EmulatorState) -> bool:
    return state.key_wait_register >= 0


def await_keypress(state: EmulatorState, register: int) -> EmulatorState:
    """Start waiting for a new key press to store in ``register``.

    PC is moved back onto the waiting instruction so it does not advance
    until the wait is resolved.
    """
    return state.replace(
        pc=state.pc - 2,
        key_wait_register=register,
        key_wait_snapshot=state.keypad,
    )


def resolve_key_wait(state: EmulatorState) -> EmulatorState:
    """Finish the wait if a key went down since the last check."""
    new_presses = state.keypad & ~state.key_wait_snapshot
    if not bool(jnp.any(new_presses)):
        # Released keys drop out of the snapshot so pressing them again counts
        return state.replace(key_wait_snapshot=state.key_wait_snapshot & state.keypad)

    pressed_key = jnp.argmax(new_presses)
    return state.replace(
        V=state.V.at[state.key_wait_register].set(pressed_key.astype(jnp.uint8)),
        pc=state.pc + 2,
        key_wait_register=-1,
        key_wait_snapshot=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
    )
