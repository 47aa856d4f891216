"""CHIP-8 delay and sound timers."""

import jax.numpy as jnp
from chipax.state import EmulatorState


def _decrement(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.astype(jnp.maximum(jnp.astype(timer, jnp.int32) - 1, 0), jnp.uint8)


def tick(state: EmulatorState) -> EmulatorState:
    """One 60 Hz timer tick: decrement both timers, clamping at zero."""
    return state.replace(
        delay_timer=_decrement(state.delay_timer),
        sound_timer=_decrement(state.sound_timer),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether the buzzer should currently be sounding."""
    return bool(state.sound_timer > 0)
