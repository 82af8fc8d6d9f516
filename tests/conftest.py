"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, Interpreter, PROGRAM_START


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def interpreter():
    """Provide a quiet interpreter with a 600 Hz instruction clock."""
    return Interpreter(instruction_frequency=600, log_level="ERROR")


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def assemble(*instructions):
    """Encode 16-bit instructions as a big-endian program image."""
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)


def setup_program(state, *instructions, address=PROGRAM_START):
    """Helper to place instructions in memory."""
    return setup_sprite_in_memory(state, address, list(assemble(*instructions)))
