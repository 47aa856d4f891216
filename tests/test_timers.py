"""Tests for the delay and sound timers."""

from chipax import tick, sound_active, run
from conftest import load_program


def test_delay_timer_counts_down_to_zero(fresh_state):
    # V0 = 10, DT = V0
    state = run(load_program(fresh_state, 0x600A, 0xF015), 2)
    assert state.delay_timer == 10

    for _ in range(10):
        state = tick(state)
    assert state.delay_timer == 0

    state = tick(state)
    assert state.delay_timer == 0


def test_timers_are_independent(fresh_state):
    state = fresh_state.replace(delay_timer=fresh_state.delay_timer + 3, sound_timer=fresh_state.sound_timer + 1)
    state = tick(state)
    assert state.delay_timer == 2
    assert state.sound_timer == 0
    state = tick(state)
    assert state.delay_timer == 1
    assert state.sound_timer == 0


def test_max_timer_value(fresh_state):
    state = run(load_program(fresh_state, 0x60FF, 0xF018), 2)
    state = tick(state)
    assert state.sound_timer == 0xFE


def test_sound_active_follows_sound_timer(fresh_state):
    assert not sound_active(fresh_state)
    state = run(load_program(fresh_state, 0x6002, 0xF018), 2)
    assert sound_active(state)
    state = tick(state)
    assert sound_active(state)
    state = tick(state)
    assert not sound_active(state)


def test_delay_timer_read_back(fresh_state):
    state = run(load_program(fresh_state, 0x6005, 0xF015, 0xF107), 2)
    state = tick(tick(state))
    state = run(state, 1)
    assert state.V[1] == 3
