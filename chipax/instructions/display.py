"""CHIP-8 display operations."""

from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.constants import FLAG_REGISTER
from chipax.framebuffer import draw_sprite
from chipax.memory import read_block


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite_rows = read_block(state, int(state.I), instruction.n)
    display, collision = draw_sprite(
        state.display, sprite_rows, int(state.V[instruction.x]), int(state.V[instruction.y])
    )
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(int(collision)),
    )
