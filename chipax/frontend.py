"""pygame host for interactive play: window, keyboard and buzzer."""

import time
from typing import Optional

import numpy as np
import pygame

from chipax.config import EmulatorConfig
from chipax.constants import SCREEN_WIDTH, SCREEN_HEIGHT, TIMER_HZ
from chipax.framebuffer import snapshot
from chipax.logging import logger
from chipax.memory import load_rom
from chipax.rendering import display_to_rgb
from chipax.scheduler import Control, Event, KeyEvent, Scheduler
from chipax.state import EmulatorState, MachineStatus
from chipax.timers import sound_active

# COSMAC VIP hex keypad laid over the left side of a QWERTY keyboard:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

CONTROL_KEYS = {
    pygame.K_SPACE: Control.PAUSE,
    pygame.K_ESCAPE: Control.QUIT,
    pygame.K_F5: Control.RESET,
}

SAMPLE_RATE = 44100


def translate_event(event) -> Optional[Event]:
    """Map a pygame event to a scheduler event, or None if irrelevant."""
    if event.type == pygame.QUIT:
        return Control.QUIT
    if event.type == pygame.KEYDOWN:
        if event.key in CONTROL_KEYS:
            return CONTROL_KEYS[event.key]
        if event.key in KEY_MAP:
            return KeyEvent(KEY_MAP[event.key], True)
    elif event.type == pygame.KEYUP and event.key in KEY_MAP:
        return KeyEvent(KEY_MAP[event.key], False)
    return None


def square_wave(tone_hz: int, volume: float = 0.25, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """One second of a mono 16-bit square wave."""
    t = np.arange(sample_rate)
    period = sample_rate / tone_hz
    wave = np.where((t % period) < period / 2, 1.0, -1.0)
    return (wave * volume * np.iinfo(np.int16).max).astype(np.int16)


class Beeper:
    """Plays a tone while the sound timer is running."""

    def __init__(self, tone_hz: int = 440):
        self.playing = False
        self.sound = None
        try:
            pygame.mixer.init(SAMPLE_RATE, -16, 1, 512)
        except pygame.error as e:
            logger.warning(f"Audio disabled: {e}")
            return
        # make_sound needs one column per mixer channel
        channels = pygame.mixer.get_init()[2]
        wave = square_wave(tone_hz)
        if channels > 1:
            wave = np.repeat(wave[:, None], channels, axis=1)
        self.sound = pygame.sndarray.make_sound(np.ascontiguousarray(wave))

    def update(self, active: bool):
        if self.sound is None or active == self.playing:
            return
        if active:
            self.sound.play(loops=-1)
        else:
            self.sound.stop()
        self.playing = active


class Window:
    """Scaled pygame window showing the framebuffer."""

    def __init__(self, config: EmulatorConfig):
        self.config = config
        self.screen = pygame.display.set_mode(
            (SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale)
        )
        self._caption = None

    def draw(self, state: EmulatorState):
        rgb = display_to_rgb(
            snapshot(state), self.config.scale, self.config.foreground, self.config.background
        )
        # surfarray is indexed [x, y]
        pygame.surfarray.blit_array(self.screen, rgb.transpose(1, 0, 2))
        pygame.display.flip()

        caption = f"CHIP-8 - {state.rom_name or 'no ROM'}"
        if state.status != MachineStatus.RUNNING:
            caption += f" [{state.status.name}]"
        if state.error is not None:
            caption += f" {type(state.error).__name__}"
        if caption != self._caption:
            pygame.display.set_caption(caption)
            self._caption = caption


def run_interactive(config: EmulatorConfig, rom_data: bytes, rom_name: Optional[str] = None) -> EmulatorState:
    """Open a window and play ``rom_data`` until the user quits.

    A halted machine stays on screen so its last frame can be inspected;
    F5 restarts it and Escape closes the window.
    """
    state = load_rom(config.create_state(), rom_data, name=rom_name)
    logger.log_rom_loaded(rom_name, len(rom_data))

    pygame.init()
    window = Window(config)
    beeper = Beeper(config.tone_hz)
    scheduler = Scheduler(config.cpu_hz, TIMER_HZ)
    clock = pygame.time.Clock()
    start = last = time.perf_counter()

    try:
        while state.status != MachineStatus.QUIT:
            clock.tick(TIMER_HZ)
            for event in pygame.event.get():
                translated = translate_event(event)
                if translated is not None:
                    scheduler.post(translated)

            now = time.perf_counter()
            state = scheduler.advance(state, now - last)
            last = now

            beeper.update(state.status == MachineStatus.RUNNING and sound_active(state))
            window.draw(state)
    finally:
        beeper.update(False)
        pygame.quit()

    logger.log_stats(scheduler.total_cycles, scheduler.total_ticks, time.perf_counter() - start)
    return state
