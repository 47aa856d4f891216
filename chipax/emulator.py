"""Main CHIP-8 emulator execution engine."""

import jax.numpy as jnp
from chipax.state import EmulatorState, MachineStatus, halt
from chipax.decode import DecodedInstruction, Op, decode
from chipax.constants import MEMORY_SIZE
from chipax.errors import Chip8Error, FetchOutOfBounds
from chipax.keypad import is_awaiting_key, resolve_key_wait
from chipax.logging import logger
from chipax.instructions.system import execute_machine_call, execute_clear_screen, execute_return
from chipax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed,
)
from chipax.instructions.alu import ALU_OPERATIONS, execute_alu_operation
from chipax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipax.instructions.display import execute_display
from chipax.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers,
)

HANDLERS = {
    Op.SYS: execute_machine_call,
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_IMM: execute_skip_if_equal_immediate,
    Op.SNE_IMM: execute_skip_if_not_equal_immediate,
    Op.SE_REG: execute_skip_if_equal_register,
    Op.LD_IMM: execute_set,
    Op.ADD_IMM: execute_add,
    **{op: execute_alu_operation for op in ALU_OPERATIONS},
    Op.SNE_REG: execute_skip_if_not_equal_register,
    Op.LD_I: execute_set_index,
    Op.JP_OFFSET: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key_pressed,
    Op.SKNP: execute_skip_if_key_not_pressed,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_KEY: execute_wait_for_key,
    Op.LD_DT_VX: execute_set_delay_timer,
    Op.LD_ST_VX: execute_set_sound_timer,
    Op.ADD_I: execute_add_to_index,
    Op.LD_FONT: execute_font_character,
    Op.LD_BCD: execute_bcd_conversion,
    Op.STORE: execute_store_registers,
    Op.LOAD: execute_load_registers,
}


def execute_decoded(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Apply an already decoded instruction."""
    return HANDLERS[instruction.op](state, instruction)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    PC is expected to already point past the instruction (see ``fetch``).
    Raises a ``Chip8Error`` subclass when the instruction cannot run.
    """
    return execute_decoded(state, decode(instruction))


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a 16-bit word."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC past it."""
    pc = int(state.pc)
    if pc + 1 >= MEMORY_SIZE:
        raise FetchOutOfBounds(pc)
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def step(state: EmulatorState) -> EmulatorState:
    """Run one cycle.

    Only RUNNING machines advance. A machine waiting on FX0A spends the cycle
    checking the keypad. Any ``Chip8Error`` halts the machine and is kept on
    ``state.error``.
    """
    if state.status != MachineStatus.RUNNING:
        return state
    if is_awaiting_key(state):
        return resolve_key_wait(state)

    pc = int(state.pc)
    try:
        state, instruction = fetch(state)
        return execute(state, instruction)
    except Chip8Error as e:
        logger.log_halt(e, pc)
        return halt(state, e)


def run(state: EmulatorState, cycles: int) -> EmulatorState:
    """Run up to ``cycles`` cycles, stopping early if the machine stops running."""
    for _ in range(cycles):
        if state.status != MachineStatus.RUNNING:
            break
        state = step(state)
    return state
