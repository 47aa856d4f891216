"""Tests for the pygame input mapping, buzzer waveform and window loop."""

import numpy as np
import pygame
import pytest

from chipax import MachineStatus, StackUnderflow
from chipax.config import EmulatorConfig
from chipax.frontend import KEY_MAP, run_interactive, translate_event, square_wave
from chipax.scheduler import Control, KeyEvent
from conftest import assemble


def test_key_map_covers_whole_keypad():
    assert sorted(KEY_MAP.values()) == list(range(16))


@pytest.mark.parametrize("key,index", [(pygame.K_1, 0x1), (pygame.K_q, 0x4), (pygame.K_x, 0x0), (pygame.K_v, 0xF)])
def test_key_down_and_up(key, index):
    assert translate_event(pygame.event.Event(pygame.KEYDOWN, key=key)) == KeyEvent(index, True)
    assert translate_event(pygame.event.Event(pygame.KEYUP, key=key)) == KeyEvent(index, False)


def test_control_keys():
    assert translate_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)) == Control.PAUSE
    assert translate_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)) == Control.QUIT
    assert translate_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_F5)) == Control.RESET
    assert translate_event(pygame.event.Event(pygame.QUIT)) == Control.QUIT


def test_unmapped_events_ignored():
    assert translate_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p)) is None
    assert translate_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_SPACE)) is None


def test_square_wave():
    wave = square_wave(441, sample_rate=44100)
    assert wave.dtype == np.int16
    assert wave.shape == (44100,)
    assert wave[0] > 0
    assert wave[75] < 0


def test_escape_closes_window_after_halt(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    polls = []

    def fake_events():
        polls.append(None)
        if len(polls) > 100:
            raise RuntimeError("window did not close")
        if len(polls) >= 10:
            return [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)]
        return []

    monkeypatch.setattr(pygame.event, "get", fake_events)
    state = run_interactive(EmulatorConfig(scale=1), assemble(0x00EE), "underflow.ch8")

    assert state.status == MachineStatus.QUIT
    assert isinstance(state.error, StackUnderflow)
    assert len(polls) == 10
