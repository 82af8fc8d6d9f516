"""Tests for display operations (DXYN) and the display buffer."""

import jax.numpy as jnp
import numpy as np
import pytest
from chip8vm import execute, OutOfBoundsError
from chip8vm.display import draw_sprite, clear_display, snapshot
from conftest import setup_sprite_in_memory


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        sprite = [0xC0, 0xC0]  # 2x2 box
        state = setup_sprite_in_memory(fresh_state, 0x300, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6105)  # V1 = 5
        state = execute(state, 0xA300)  # I = 0x300
        state = execute(state, 0xD012)

        assert state.display[10, 5] == 1
        assert state.display[11, 5] == 1
        assert state.display[10, 6] == 1
        assert state.display[11, 6] == 1
        assert state.display[12, 5] == 0
        assert jnp.sum(state.display) == 4
        assert state.V[15] == 0

    def test_collision_detection(self, fresh_state):
        """Drawing the same sprite twice erases it and reports a collision."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x80])

        state = execute(state, 0x6014)  # V0 = 20
        state = execute(state, 0x610A)  # V1 = 10
        state = execute(state, 0xA400)

        state = execute(state, 0xD011)
        assert state.display[20, 10] == 1
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert state.display[20, 10] == 0
        assert state.V[15] == 1

    def test_xor_without_collision(self, fresh_state):
        """Setting new pixels next to existing ones is not a collision."""
        state = setup_sprite_in_memory(fresh_state, 0x500, [0xF0, 0x0F])

        state = execute(state, 0xA500)
        state = execute(state, 0xD011)  # Row 0xF0 at (0, 0)
        state = execute(state, 0xA501)
        state = execute(state, 0xD011)  # Row 0x0F at (0, 0)

        assert jnp.all(state.display[0:8, 0])
        assert state.V[15] == 0

    def test_draw_from_font(self, fresh_state):
        """FX29 + DXY5 renders the built-in glyph for 0."""
        state = execute(fresh_state, 0xF029)  # I = glyph for V0 = 0
        state = execute(state, 0xD015)

        top_row = [bool(state.display[x, 0]) for x in range(8)]
        assert top_row == [True, True, True, True, False, False, False, False]
        middle_row = [bool(state.display[x, 2]) for x in range(8)]
        assert middle_row == [True, False, False, True, False, False, False, False]


class TestScreenWrapping:
    """Sprites wrap around both screen edges."""

    def test_right_edge_wraps(self, fresh_state):
        state = setup_sprite_in_memory(fresh_state, 0x600, [0xFF])

        state = execute(state, 0x603C)  # V0 = 60
        state = execute(state, 0x6100)
        state = execute(state, 0xA600)
        state = execute(state, 0xD011)

        for x in (60, 61, 62, 63, 0, 1, 2, 3):
            assert state.display[x, 0] == 1
        assert state.display[4, 0] == 0
        assert jnp.sum(state.display) == 8

    def test_bottom_edge_wraps(self, fresh_state):
        state = setup_sprite_in_memory(fresh_state, 0x700, [0x80, 0x80, 0x80])

        state = execute(state, 0x6000)
        state = execute(state, 0x611E)  # V1 = 30
        state = execute(state, 0xA700)
        state = execute(state, 0xD013)

        assert state.display[0, 30] == 1
        assert state.display[0, 31] == 1
        assert state.display[0, 0] == 1

    def test_coordinate_wrapping(self, fresh_state):
        """Start coordinates are taken modulo the screen size."""
        state = setup_sprite_in_memory(fresh_state, 0x800, [0x80])

        state = execute(state, 0x6046)  # V0 = 70 -> 6
        state = execute(state, 0x6125)  # V1 = 37 -> 5
        state = execute(state, 0xA800)
        state = execute(state, 0xD011)

        assert state.display[6, 5] == 1

    def test_wrapped_collision(self, fresh_state):
        state = setup_sprite_in_memory(fresh_state, 0x900, [0xFF])
        state = state.replace(display=state.display.at[1, 0].set(True))

        state = execute(state, 0x603C)
        state = execute(state, 0xA900)
        state = execute(state, 0xD011)

        assert state.display[1, 0] == 0
        assert state.V[15] == 1


class TestSpriteVariations:
    """Test different sprite configurations."""

    def test_different_sprite_heights(self, fresh_state):
        sprite = [0x80, 0x40, 0x20, 0x10, 0x08]  # Diagonal line
        state = setup_sprite_in_memory(fresh_state, 0x900, sprite)

        state = execute(state, 0x600A)
        state = execute(state, 0x6108)
        state = execute(state, 0xA900)
        state = execute(state, 0xD013)  # Only first 3 rows

        assert state.display[10, 8] == 1
        assert state.display[11, 9] == 1
        assert state.display[12, 10] == 1
        assert state.display[13, 11] == 0

    def test_zero_height_draws_nothing(self, fresh_state):
        state = execute(fresh_state, 0x6F01)
        state = execute(state, 0xD010)

        assert jnp.sum(state.display) == 0
        assert state.V[15] == 0

    def test_vf_cleared_without_collision(self, fresh_state):
        state = setup_sprite_in_memory(fresh_state, 0xB00, [0x80])

        state = execute(state, 0x6F01)  # VF = 1
        state = execute(state, 0xAB00)
        state = execute(state, 0xD011)

        assert state.V[15] == 0

    def test_sprite_past_end_of_memory(self, fresh_state):
        """Reading sprite rows beyond 0xFFF is fatal."""
        state = execute(fresh_state, 0xAFFE)
        with pytest.raises(OutOfBoundsError):
            execute(state, 0xD013)


class TestDisplayBuffer:
    """Direct display buffer operations."""

    def test_draw_sprite_returns_collision(self, fresh_state):
        display, collision = draw_sprite(fresh_state.display, 3, 4, [0xA0])
        assert not collision
        assert display[3, 4] and not display[4, 4] and display[5, 4]

        display, collision = draw_sprite(display, 5, 4, [0x80])
        assert collision
        assert not display[5, 4]

    def test_clear_display(self, fresh_state):
        display = fresh_state.display.at[:, :].set(True)
        assert jnp.sum(clear_display(display)) == 0

    def test_snapshot_is_read_only(self, fresh_state):
        frame = snapshot(fresh_state.display.at[2, 3].set(True))

        assert isinstance(frame, np.ndarray)
        assert frame.shape == (64, 32)
        assert frame[2, 3]
        with pytest.raises(ValueError):
            frame[0, 0] = True
