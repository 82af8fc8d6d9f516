"""CHIP-8 delay and sound timers, decremented by a 60 Hz clock."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState


def _decay(timer: jnp.ndarray) -> jnp.ndarray:
    value = int(timer)
    return jnp.astype(value - 1 if value > 0 else 0, jnp.uint8)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement both timers by one, clamping at zero."""
    return state.replace(
        delay_timer=_decay(state.delay_timer),
        sound_timer=_decay(state.sound_timer),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether the audio sink should be producing a tone."""
    return int(state.sound_timer) > 0
