"""CHIP-8 emulator state structures."""

import enum
from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chipax.constants import (
    FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE,
    MIN_STACK_SIZE, MAX_STACK_SIZE, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, PROGRAM_START,
)
from chipax.errors import Chip8Error


class MachineStatus(enum.Enum):
    """Lifecycle of a machine. HALTED and QUIT are terminal."""
    RUNNING = "running"
    PAUSED = "paused"
    HALTED = "halted"
    QUIT = "quit"

    @property
    def is_terminal(self) -> bool:
        return self in (MachineStatus.HALTED, MachineStatus.QUIT)


@dataclass(frozen=True)
class Quirks:
    """Behavioural switches where CHIP-8 interpreters historically disagree.

    Attributes:
        shift_uses_vy: 8XY6/8XYE shift VY into VX instead of shifting VX in place
        jump_uses_vx: BXNN jumps to NNN + VX instead of NNN + V0
        load_store_increments_i: FX55/FX65 leave I pointing past the last register
        logic_resets_vf: 8XY1/8XY2/8XY3 clear VF
    """
    shift_uses_vy: bool = field(pytree_node=False, default=False)
    jump_uses_vx: bool = field(pytree_node=False, default=False)
    load_store_increments_i: bool = field(pytree_node=False, default=False)
    logic_resets_vf: bool = field(pytree_node=False, default=False)

    @classmethod
    def cosmac(cls) -> "Quirks":
        """Original COSMAC VIP interpreter."""
        return cls(shift_uses_vy=True, load_store_increments_i=True, logic_resets_vf=True)

    @classmethod
    def modern(cls) -> "Quirks":
        """Behaviour most games written after 1990 expect."""
        return cls(jump_uses_vx=True)

    @classmethod
    def from_name(cls, name: str) -> "Quirks":
        presets = {"default": cls, "cosmac": cls.cosmac, "modern": cls.modern}
        if name not in presets:
            raise ValueError(f"Unknown quirks preset '{name}'. Available: {list(presets.keys())}")
        return presets[name]()


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0

    @property
    def capacity(self) -> int:
        return self.data.shape[0]


class EmulatorState(PyTreeNode):
    """Main CHIP-8 machine state.

    The display is row-major, shape (SCREEN_HEIGHT, SCREEN_WIDTH), indexed [y, x].
    ``key_wait_register`` is -1 unless an FX0A instruction is waiting for a key.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    key_wait_snapshot: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    key_wait_register: int = field(pytree_node=False, default=-1)
    status: MachineStatus = field(pytree_node=False, default=MachineStatus.RUNNING)
    error: Optional[Chip8Error] = field(pytree_node=False, default=None)
    rom_name: Optional[str] = field(pytree_node=False, default=None)
    rom: bytes = field(pytree_node=False, default=b"")
    strict: bool = field(pytree_node=False, default=False)
    quirks: Quirks = field(pytree_node=False, default=Quirks())


def create_state(
    rng: jax.random.PRNGKey = jax.random.PRNGKey(0),
    strict: bool = False,
    quirks: Optional[Quirks] = None,
    stack_depth: int = STACK_SIZE,
) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if not MIN_STACK_SIZE <= stack_depth <= MAX_STACK_SIZE:
        raise ValueError(
            f"Stack depth must be between {MIN_STACK_SIZE} and {MAX_STACK_SIZE}, got {stack_depth}"
        )
    state = EmulatorState(
        rng,
        stack=StackState(data=jnp.zeros(stack_depth, dtype=jnp.uint16)),
        strict=strict,
        quirks=quirks if quirks is not None else Quirks(),
    )
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))


def toggle_pause(state: EmulatorState) -> EmulatorState:
    """Flip between RUNNING and PAUSED. Terminal machines are left alone."""
    if state.status == MachineStatus.RUNNING:
        return state.replace(status=MachineStatus.PAUSED)
    if state.status == MachineStatus.PAUSED:
        return state.replace(status=MachineStatus.RUNNING)
    return state


def request_quit(state: EmulatorState) -> EmulatorState:
    """Stop the machine for good at the next cycle boundary.

    A halted machine also moves to QUIT; its ``error`` is kept.
    """
    return state.replace(status=MachineStatus.QUIT)


def halt(state: EmulatorState, error: Chip8Error) -> EmulatorState:
    """Enter HALTED, keeping the error for inspection."""
    return state.replace(status=MachineStatus.HALTED, error=error)
