"""Tests for system instructions (0xxx) and the return stack."""

import jax.numpy as jnp
import pytest
from chipax import (
    execute, step, run, MachineStatus, StackOverflow, StackUnderflow, UnknownOpcode,
    PROGRAM_START, create_state,
)
from chipax.stack import push, pop
from conftest import load_program


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(True).at[31, 63].set(True))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.data[state.stack.pointer - 1] == initial_pc

    state = execute(state, 0x00EE)  # Return
    assert state.pc == initial_pc


def test_call_return_round_trip_in_program(fresh_state):
    """CALL then RET resumes right after the CALL with the same stack depth."""
    # 0x200: CALL 0x206 / 0x202: V1 = 1 / 0x204: JP 0x204 / 0x206: RET
    state = load_program(fresh_state, 0x2206, 0x6101, 0x1204, 0x00EE)
    depth = state.stack.pointer

    state = step(state)
    assert state.pc == 0x206
    assert state.stack.pointer == depth + 1

    state = step(state)
    assert state.pc == PROGRAM_START + 2
    assert state.stack.pointer == depth

    state = step(state)
    assert state.V[1] == 1


def test_return_with_empty_stack_halts(fresh_state):
    state = step(load_program(fresh_state, 0x00EE))
    assert state.status == MachineStatus.HALTED
    assert isinstance(state.error, StackUnderflow)


def test_recursion_overflows_stack(fresh_state):
    state = load_program(fresh_state, 0x2200)  # Calls itself forever
    state = run(state, 100)
    assert state.status == MachineStatus.HALTED
    assert isinstance(state.error, StackOverflow)
    assert state.stack.pointer == 12


def test_stack_depth_is_configurable():
    state = load_program(create_state(stack_depth=16), 0x2200)
    state = run(state, 100)
    assert isinstance(state.error, StackOverflow)
    assert state.error.depth == 16


@pytest.mark.parametrize("depth", [11, 17])
def test_stack_depth_bounds(depth):
    with pytest.raises(ValueError):
        create_state(stack_depth=depth)


def test_halted_machine_stays_inspectable(fresh_state):
    state = load_program(fresh_state, 0x6142, 0x00EE, 0x6243)
    state = run(state, 10)
    assert state.status == MachineStatus.HALTED
    assert state.V[1] == 0x42
    assert state.V[2] == 0
    assert step(state) is state


def test_push_pop_order(fresh_state):
    stack = push(fresh_state.stack, 0x222)
    stack = push(stack, 0x444)
    stack, top = pop(stack)
    assert top == 0x444
    stack, top = pop(stack)
    assert top == 0x222
    with pytest.raises(StackUnderflow):
        pop(stack)


def test_zero_word_is_unknown(fresh_state):
    """0x0000 halts with UnknownOpcode."""
    state = step(load_program(fresh_state, 0x0000))
    assert state.status == MachineStatus.HALTED
    assert isinstance(state.error, UnknownOpcode)
    assert state.error.word == 0x0000


def test_empty_memory_halts(fresh_state):
    """Running off the end of a program hits zeroed memory."""
    state = run(load_program(fresh_state, 0x6001), 5)
    assert isinstance(state.error, UnknownOpcode)


def test_machine_call_ignored(fresh_state):
    """0NNN is a no-op outside strict mode."""
    state = step(load_program(fresh_state, 0x0123))
    assert state.status == MachineStatus.RUNNING
    assert state.pc == PROGRAM_START + 2


def test_machine_call_strict(strict_state):
    state = step(load_program(strict_state, 0x0123))
    assert state.status == MachineStatus.HALTED
    assert state.error.word == 0x0123
