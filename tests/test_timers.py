"""Tests for the delay and sound timers."""

from chip8vm import execute, tick_timers, sound_active


def test_delay_timer_decays_to_zero(fresh_state):
    state = execute(fresh_state, 0x6005)
    state = execute(state, 0xF015)

    for expected in (4, 3, 2, 1, 0):
        state = tick_timers(state)
        assert state.delay_timer == expected

    state = tick_timers(state)
    assert state.delay_timer == 0


def test_timers_decay_independently(fresh_state):
    state = execute(fresh_state, 0x6003)
    state = execute(state, 0xF015)
    state = execute(state, 0x6101)
    state = execute(state, 0xF118)

    state = tick_timers(state)
    assert state.delay_timer == 2
    assert state.sound_timer == 0


def test_sound_active(fresh_state):
    assert not sound_active(fresh_state)

    state = execute(fresh_state, 0x6002)
    state = execute(state, 0xF018)
    assert sound_active(state)

    state = tick_timers(tick_timers(state))
    assert not sound_active(state)
