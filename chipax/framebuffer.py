"""CHIP-8 monochrome framebuffer with XOR sprite drawing."""

import numpy as np
import jax.numpy as jnp

from chipax.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chipax.state import EmulatorState

_SPRITE_COLUMNS = jnp.arange(8)


def draw_sprite(display: jnp.ndarray, sprite_rows: jnp.ndarray, x: int, y: int) -> tuple[jnp.ndarray, bool]:
    """XOR an 8-pixel-wide sprite onto the display with wrap-around.

    Args:
        display: Boolean array of shape (SCREEN_HEIGHT, SCREEN_WIDTH)
        sprite_rows: One byte per sprite row, most significant bit leftmost
        x: Column of the sprite's top-left corner (any value, wrapped)
        y: Row of the sprite's top-left corner (any value, wrapped)

    Returns:
        Tuple of (new display, collision) where collision is True iff at least
        one pixel went from on to off.
    """
    sprite_rows = jnp.asarray(sprite_rows, dtype=jnp.uint8)
    height = sprite_rows.shape[0]
    if height == 0:
        return display, False

    bits = ((sprite_rows[:, None] >> (7 - _SPRITE_COLUMNS)[None, :]) & 1).astype(jnp.bool_)
    rows = (y + jnp.arange(height)) % SCREEN_HEIGHT
    cols = (x + _SPRITE_COLUMNS) % SCREEN_WIDTH

    # A sprite is at most 15 rows by 8 columns, so wrapped positions never repeat
    sprite = jnp.zeros_like(display).at[rows[:, None], cols[None, :]].set(bits)
    collision = bool(jnp.any(display & sprite))
    return display ^ sprite, collision


def clear_display(display: jnp.ndarray) -> jnp.ndarray:
    """Turn every pixel off."""
    return jnp.zeros_like(display)


def snapshot(state: EmulatorState) -> np.ndarray:
    """Read-only copy of the display for renderers."""
    frame = np.array(state.display, dtype=np.bool_)
    frame.setflags(write=False)
    return frame
