"""CHIP-8 system instructions (0x0xxx)."""

from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.errors import UnknownOpcode
from chipax.framebuffer import clear_display
from chipax.stack import pop


def execute_machine_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """0NNN - Call native routine at NNN. Ignored unless running strict."""
    if state.strict:
        raise UnknownOpcode(instruction.raw)
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=clear_display(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)
