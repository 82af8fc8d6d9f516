"""Main CHIP-8 emulator execution engine."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import decode
from chip8vm.constants import MEMORY_SIZE
from chip8vm.errors import OutOfBoundsError
from chip8vm.keypad import is_waiting_for_key
from chip8vm.memory import load_program
from chip8vm.instructions.system import execute_system_instruction
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import execute_misc_instruction

# Indexed by the first nibble; each family validates its remaining nibbles.
OPCODE_HANDLERS = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
]


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Raises:
        InvalidInstructionError: the instruction matches no opcode pattern.
        OutOfBoundsError: the instruction touches memory outside 0x000-0xFFF.
        StackOverflowError, StackUnderflowError: on CALL/RET misuse.
    """
    decoded_instruction = decode(instruction)
    return OPCODE_HANDLERS[decoded_instruction.opcode](state, decoded_instruction)


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into a big-endian 16-bit word."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC by 2."""
    pc = int(state.pc)
    if pc > MEMORY_SIZE - 2:
        raise OutOfBoundsError(pc, f"Program counter out of bounds: 0x{pc:04X}")
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=jnp.astype(pc + 2, jnp.uint16)), instruction


def step(state: EmulatorState) -> EmulatorState:
    """Run one instruction-clock tick; a no-op while waiting for a key."""
    if is_waiting_for_key(state):
        return state
    state, instruction = fetch(state)
    return execute(state, instruction)


def read_rom(filename: str) -> bytes:
    """Read a ROM image from disk."""
    with open(filename, 'rb') as f:
        return f.read()


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    return state.replace(memory=load_program(state.memory, read_rom(filename)))
