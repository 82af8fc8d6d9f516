"""CHIP-8 general-purpose register access."""

from chip8vm.constants import NUM_REGISTERS, FLAG_REGISTER
from chip8vm.state import EmulatorState


def read_register(state: EmulatorState, index: int) -> int:
    """Read VX as a Python int."""
    assert 0 <= index < NUM_REGISTERS, f"register index out of range: {index}"
    return int(state.V[index])


def write_register(state: EmulatorState, index: int, value: int) -> EmulatorState:
    """Write VX, wrapping the value to 8 bits."""
    assert 0 <= index < NUM_REGISTERS, f"register index out of range: {index}"
    return state.replace(V=state.V.at[index].set(int(value) & 0xFF))


def write_with_flag(state: EmulatorState, index: int, value: int, flag: int) -> EmulatorState:
    """Write VX then VF.

    VF is written last so that flag-producing operations targeting VF keep
    the flag rather than the result.
    """
    state = write_register(state, index, value)
    return write_register(state, FLAG_REGISTER, flag)
