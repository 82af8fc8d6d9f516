"""Tests for system instructions (0xxx)."""

import jax.numpy as jnp
import pytest
from chip8vm import execute, StackUnderflowError


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(True).at[63, 31].set(True))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0
    assert state.display.shape == (64, 32)


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.data[state.stack.pointer - 1] == initial_pc

    state = execute(state, 0x00EE)  # Return
    assert state.pc == initial_pc
    assert state.stack.pointer == 0


def test_return_with_empty_stack(fresh_state):
    """00EE on an empty stack is fatal."""
    with pytest.raises(StackUnderflowError):
        execute(fresh_state, 0x00EE)


@pytest.mark.parametrize("instruction", [0x0000, 0x0123, 0x0FFF, 0x00E1])
def test_system_call_is_ignored(fresh_state, instruction):
    """0NNN - Legacy machine code call does nothing."""
    state = execute(fresh_state, instruction)

    assert state.pc == fresh_state.pc
    assert jnp.array_equal(state.V, fresh_state.V)
    assert jnp.array_equal(state.memory, fresh_state.memory)
