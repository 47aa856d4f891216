"""Emulator configuration consumed by the scheduler, renderer and front-end."""

from dataclasses import dataclass, asdict
from typing import Any, Dict

import jax

from chipax.constants import DEFAULT_CPU_HZ, MAX_STACK_SIZE, MIN_STACK_SIZE, STACK_SIZE
from chipax.rendering import Color, create_color_scheme
from chipax.state import EmulatorState, Quirks, create_state


@dataclass
class EmulatorConfig:
    """Runtime settings.

    Only ``strict``, ``quirks``, ``stack_depth`` and ``seed`` reach the core;
    the rest belongs to the host.
    """
    scale: int = 20
    foreground: Color = create_color_scheme("classic")[0]
    background: Color = create_color_scheme("classic")[1]
    cpu_hz: int = DEFAULT_CPU_HZ
    strict: bool = False
    quirks: str = "default"
    stack_depth: int = STACK_SIZE
    seed: int = 0
    tone_hz: int = 440
    log_level: str = "INFO"

    def __post_init__(self):
        if self.scale < 1:
            raise ValueError(f"Scale must be at least 1, got {self.scale}")
        if self.cpu_hz < 1:
            raise ValueError(f"CPU rate must be at least 1 Hz, got {self.cpu_hz}")
        if not MIN_STACK_SIZE <= self.stack_depth <= MAX_STACK_SIZE:
            raise ValueError(
                f"Stack depth must be between {MIN_STACK_SIZE} and {MAX_STACK_SIZE}, got {self.stack_depth}"
            )
        if self.tone_hz <= 0:
            raise ValueError(f"Tone must be a positive frequency, got {self.tone_hz}")
        Quirks.from_name(self.quirks)

    def create_state(self) -> EmulatorState:
        """Empty machine carrying this configuration's core settings."""
        return create_state(
            jax.random.PRNGKey(self.seed),
            strict=self.strict,
            quirks=Quirks.from_name(self.quirks),
            stack_depth=self.stack_depth,
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
