"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.errors import InvalidInstructionError
from chip8vm.registers import read_register
from chip8vm.stack import push


def _skip(state: EmulatorState) -> EmulatorState:
    return state.replace(pc=jnp.astype(int(state.pc) + 2, jnp.uint16))


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn, register_pair: bool = False):
    """Factory for skip instructions.

    Register-pair skips (5XY0, 9XY0) are only defined with a zero low nibble.
    """
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if register_pair and instruction.n != 0:
            raise InvalidInstructionError(instruction.raw)
        if condition_fn(state, instruction):
            return _skip(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: read_register(state, inst.x) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: read_register(state, inst.x) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: read_register(state, inst.x) == read_register(state, inst.y),
    register_pair=True,
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: read_register(state, inst.x) != read_register(state, inst.y),
    register_pair=True,
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = instruction.nnn + read_register(state, 0)
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))


def _key_pressed(state: EmulatorState, instruction: DecodedInstruction) -> bool:
    key_index = read_register(state, instruction.x) & 0xF
    return bool(state.keypad[key_index])


def execute_skip_if_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """EX9E/EXA1 - Skip if key pressed/not pressed."""
    if instruction.nn == 0x9E:
        condition = _key_pressed(state, instruction)
    elif instruction.nn == 0xA1:
        condition = not _key_pressed(state, instruction)
    else:
        raise InvalidInstructionError(instruction.raw)
    return _skip(state) if condition else state
