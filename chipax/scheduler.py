"""Real-time scheduling of CPU cycles and 60 Hz timer ticks.

The scheduler owns the only loop that touches a machine. Input arriving from
other threads is posted to a queue and applied at the start of the next
iteration, never in the middle of a cycle.
"""

import enum
import math
import queue
from dataclasses import dataclass
from typing import Union

from chipax.constants import DEFAULT_CPU_HZ, TIMER_HZ
from chipax.emulator import step
from chipax.keypad import set_key
from chipax.logging import logger
from chipax.memory import reset
from chipax.state import EmulatorState, MachineStatus, request_quit, toggle_pause
from chipax.timers import tick

# Absorbs float error so that whole periods are never lost to rounding
_EPSILON = 1e-9


class Control(enum.Enum):
    """Host signals that are not part of the CHIP-8 instruction set."""
    PAUSE = "pause"
    QUIT = "quit"
    RESET = "reset"


@dataclass(frozen=True)
class KeyEvent:
    index: int
    pressed: bool


Event = Union[KeyEvent, Control]


class Scheduler:
    """Drives a machine at two independent rates.

    Args:
        cpu_hz: Instruction cycles per second of emulated time
        timer_hz: Timer ticks per second of emulated time (60 for CHIP-8)
    """

    def __init__(self, cpu_hz: int = DEFAULT_CPU_HZ, timer_hz: int = TIMER_HZ):
        if cpu_hz <= 0 or timer_hz <= 0:
            raise ValueError(f"Rates must be positive, got cpu_hz={cpu_hz}, timer_hz={timer_hz}")
        self.cpu_hz = cpu_hz
        self.timer_hz = timer_hz
        self.events: "queue.SimpleQueue[Event]" = queue.SimpleQueue()
        self._cpu_time = 0.0
        self._timer_time = 0.0
        self.total_cycles = 0
        self.total_ticks = 0

    def post(self, event: Event):
        """Queue an input event. Safe to call from any thread."""
        self.events.put(event)

    def drain_events(self, state: EmulatorState) -> EmulatorState:
        """Apply every queued event in arrival order."""
        while True:
            try:
                event = self.events.get_nowait()
            except queue.Empty:
                return state
            state = self._apply(state, event)

    def _apply(self, state: EmulatorState, event: Event) -> EmulatorState:
        if isinstance(event, KeyEvent):
            return set_key(state, event.index, event.pressed)
        if event == Control.PAUSE:
            new_state = toggle_pause(state)
        elif event == Control.QUIT:
            new_state = request_quit(state)
        elif event == Control.RESET:
            new_state = reset(state)
            self._cpu_time = self._timer_time = 0.0
        else:
            raise ValueError(f"Unknown event {event!r}")
        if new_state.status != state.status:
            logger.log_status(new_state.status)
        return new_state

    def advance(self, state: EmulatorState, elapsed: float) -> EmulatorState:
        """One scheduler iteration covering ``elapsed`` seconds of wall time.

        Cycles and timer ticks that fall due in the interval are interleaved
        in time order. Fractional remainders carry over to the next call.
        """
        state = self.drain_events(state)
        if state.status != MachineStatus.RUNNING:
            return state

        cpu_due = self._cpu_time + elapsed * self.cpu_hz
        timer_due = self._timer_time + elapsed * self.timer_hz
        cycles = math.floor(cpu_due + _EPSILON)
        ticks = math.floor(timer_due + _EPSILON)
        self._cpu_time = max(cpu_due - cycles, 0.0)
        self._timer_time = max(timer_due - ticks, 0.0)

        cycle_index = tick_index = 0
        while cycle_index < cycles or tick_index < ticks:
            next_cycle_at = (cycle_index + 1) / self.cpu_hz if cycle_index < cycles else math.inf
            next_tick_at = (tick_index + 1) / self.timer_hz if tick_index < ticks else math.inf
            if next_tick_at <= next_cycle_at:
                state = tick(state)
                tick_index += 1
            else:
                state = step(state)
                cycle_index += 1
                if state.status != MachineStatus.RUNNING:
                    break

        self.total_cycles += cycle_index
        self.total_ticks += tick_index
        return state

    def run_frames(self, state: EmulatorState, frames: int) -> EmulatorState:
        """Advance exactly ``frames`` timer periods without touching the clock."""
        for _ in range(frames):
            state = self.advance(state, 1.0 / self.timer_hz)
            if state.status.is_terminal:
                break
        return state
