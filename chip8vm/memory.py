"""CHIP-8 address space access with bounds checking."""

import jax.numpy as jnp

from chip8vm.constants import MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA
from chip8vm.errors import OutOfBoundsError


def _check_range(address: int, length: int = 1):
    if address < 0 or address + length > MEMORY_SIZE:
        bad = address if address < 0 or address >= MEMORY_SIZE else MEMORY_SIZE
        raise OutOfBoundsError(
            bad, f"Memory access out of bounds: 0x{address:04X} (+{length} bytes)"
        )


def read_byte(memory: jnp.ndarray, address: int) -> int:
    """Read one byte."""
    address = int(address)
    _check_range(address)
    return int(memory[address])


def write_byte(memory: jnp.ndarray, address: int, value: int) -> jnp.ndarray:
    """Write one byte, returning the new memory array."""
    address = int(address)
    _check_range(address)
    return memory.at[address].set(int(value) & 0xFF)


def read_bytes(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    """Read ``length`` consecutive bytes starting at ``address``."""
    address = int(address)
    _check_range(address, length)
    return memory[address:address + length]


def write_bytes(memory: jnp.ndarray, address: int, data) -> jnp.ndarray:
    """Write a byte sequence starting at ``address``."""
    address = int(address)
    data = jnp.asarray(data, dtype=jnp.uint8)
    _check_range(address, len(data))
    return memory.at[address:address + len(data)].set(data)


def load_font(memory: jnp.ndarray) -> jnp.ndarray:
    """Copy the built-in hex font into the reserved font region."""
    return write_bytes(memory, FONT_START, FONT_DATA)


def load_program(memory: jnp.ndarray, program: bytes) -> jnp.ndarray:
    """Copy a program image into memory at PROGRAM_START."""
    if len(program) == 0:
        return memory
    return write_bytes(memory, PROGRAM_START, list(program))
