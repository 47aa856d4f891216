"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.keypad import is_pressed
from chipax.stack import push


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return state.replace(pc=state.pc + 2)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)

execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, inst: is_pressed(state, int(state.V[inst.x]) & 0xF)
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: not is_pressed(state, int(state.V[inst.x]) & 0xF)
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0 (NNN + VX with the jump quirk).

    The target is not wrapped, so a jump past the end of memory surfaces as a
    fetch error on the next cycle.
    """
    offset_register = instruction.x if state.quirks.jump_uses_vx else 0
    jump_address = instruction.nnn + int(state.V[offset_register])
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))
