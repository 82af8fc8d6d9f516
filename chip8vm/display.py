"""CHIP-8 display buffer: sprite compositing and snapshots."""

import jax.numpy as jnp
import numpy as np

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')

MAX_SPRITE_HEIGHT = 15


def clear_display(display: jnp.ndarray) -> jnp.ndarray:
    """Return an all-zero buffer of the same shape."""
    return jnp.zeros_like(display)


def draw_sprite(display: jnp.ndarray, x: int, y: int, sprite) -> tuple[jnp.ndarray, bool]:
    """XOR a sprite into the display with wrap-around.

    Each byte is one row, most-significant bit leftmost. Pixel ``(col, row)``
    lands on ``((x + col) % 64, (y + row) % 32)``.

    Returns:
        Tuple of the new display and whether any set pixel was erased.
    """
    rows = jnp.asarray(sprite, dtype=jnp.uint8)
    height = rows.shape[0]
    assert height <= MAX_SPRITE_HEIGHT, f"sprite too tall: {height}"
    if height == 0:
        return display, False

    padded = jnp.zeros(MAX_SPRITE_HEIGHT + 1, dtype=jnp.int32).at[:height].set(rows)

    col_offset = (xx - x) % SCREEN_WIDTH
    row_offset = (yy - y) % SCREEN_HEIGHT
    in_sprite = (col_offset < SPRITE_WIDTH) & (row_offset < height)

    row_bytes = padded[jnp.minimum(row_offset, MAX_SPRITE_HEIGHT)]
    shift = (SPRITE_WIDTH - 1) - jnp.minimum(col_offset, SPRITE_WIDTH - 1)
    sprite_pixels = (((row_bytes >> shift) & 1) == 1) & in_sprite

    collision = bool(jnp.any(display & sprite_pixels))
    return display ^ sprite_pixels, collision


def snapshot(display: jnp.ndarray) -> np.ndarray:
    """Read-only copy of the display for renderers, indexed ``[x, y]``."""
    frame = np.array(display, dtype=np.bool_)
    frame.flags.writeable = False
    return frame
