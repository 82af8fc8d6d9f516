"""CHIP-8 interpreter package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import execute, fetch, step, load_rom
from chip8vm.decode import DecodedInstruction, decode
from chip8vm.errors import (
    Chip8Error,
    OutOfBoundsError,
    InvalidInstructionError,
    StackOverflowError,
    StackUnderflowError,
)
from chip8vm.interpreter import Interpreter
from chip8vm.timers import tick_timers, sound_active
from chip8vm.keypad import press_key, release_key
from chip8vm.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "Chip8Error",
    "OutOfBoundsError",
    "InvalidInstructionError",
    "StackOverflowError",
    "StackUnderflowError",
    "Interpreter",
    "tick_timers",
    "sound_active",
    "press_key",
    "release_key",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "FONT_START",
    "FONT_DATA",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
    "TIMER_FREQUENCY",
]
