"""CHIP-8 virtual machine package."""

from chipax.state import (
    EmulatorState, MachineStatus, Quirks, StackState, create_state, halt, request_quit, toggle_pause,
)
from chipax.emulator import execute, fetch, step, run
from chipax.memory import load_rom, load_rom_file, read_rom_file, read_byte, write_byte, reset
from chipax.decode import DecodedInstruction, Op, decode
from chipax.errors import (
    Chip8Error, RomError, RomTooLarge, RomUnreadable, StackOverflow, StackUnderflow,
    FetchOutOfBounds, UnknownOpcode, MemoryViolation,
)
from chipax.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT, MAX_ROM_SIZE, MEMORY_SIZE,
)
from chipax.framebuffer import snapshot
from chipax.timers import tick, sound_active
from chipax.scheduler import Scheduler, Control, KeyEvent
from chipax.rendering import display_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "MachineStatus",
    "Quirks",
    "StackState",
    "create_state",
    "halt",
    "request_quit",
    "toggle_pause",
    "fetch",
    "execute",
    "step",
    "run",
    "load_rom",
    "load_rom_file",
    "read_rom_file",
    "read_byte",
    "write_byte",
    "reset",
    "DecodedInstruction",
    "Op",
    "decode",
    "Chip8Error",
    "RomError",
    "RomTooLarge",
    "RomUnreadable",
    "StackOverflow",
    "StackUnderflow",
    "FetchOutOfBounds",
    "UnknownOpcode",
    "MemoryViolation",
    "PROGRAM_START",
    "FONT_START",
    "FONT_DATA",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "MAX_ROM_SIZE",
    "MEMORY_SIZE",
    "snapshot",
    "tick",
    "sound_active",
    "Scheduler",
    "Control",
    "KeyEvent",
    "display_to_rgb",
    "create_color_scheme",
]
