"""CHIP-8 display operations."""

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.display import draw_sprite
from chip8vm.memory import read_bytes
from chip8vm.registers import read_register, write_register
from chip8vm.constants import FLAG_REGISTER


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    sprite = read_bytes(state.memory, state.I, instruction.n)
    display, collision = draw_sprite(
        state.display,
        read_register(state, instruction.x),
        read_register(state, instruction.y),
        sprite,
    )
    state = state.replace(display=display)
    return write_register(state, FLAG_REGISTER, int(collision))
