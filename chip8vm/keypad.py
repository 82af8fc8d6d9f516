"""CHIP-8 hex keypad input events."""

from chip8vm.constants import NUM_KEYS, NO_KEY_WAIT
from chip8vm.registers import write_register
from chip8vm.state import EmulatorState


def _check_key(key: int):
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key must be in range 0x0-0xF, got {key}")


def press_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark key as held and resolve a pending FX0A wait."""
    _check_key(key)
    state = state.replace(keypad=state.keypad.at[key].set(True))
    if is_waiting_for_key(state):
        state = write_register(state, state.waiting_register, key)
        state = state.replace(waiting_register=NO_KEY_WAIT)
    return state


def release_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark key as released."""
    _check_key(key)
    return state.replace(keypad=state.keypad.at[key].set(False))


def is_waiting_for_key(state: EmulatorState) -> bool:
    return state.waiting_register != NO_KEY_WAIT
