"""Console logging utilities for Chipax.

A small leveled logger with optional colors and timestamps, plus an
emulator-specific subclass that knows how to report machine events.
"""

import time
import sys
from typing import Any, Dict, Optional

from chipax.errors import Chip8Error


class ConsoleLogger:
    """Flexible console logger with level filtering and formatters."""

    def __init__(
        self,
        name: str = "Chipax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream
        out = stream if stream is not None else sys.stdout
        self.use_colors = (
            use_colors and hasattr(out, "isatty") and out.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }

    def set_level(self, log_level: str):
        if log_level.upper() not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order.keys())}"
            )
        self.log_level = log_level.upper()

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, file=self.stream or sys.stdout, flush=True)

    def debug(self, message: str):
        """Log debug message."""
        self.log("DEBUG", message)

    def info(self, message: str):
        """Log info message."""
        self.log("INFO", message)

    def warning(self, message: str):
        """Log warning message."""
        self.log("WARNING", message)

    def error(self, message: str):
        """Log error message."""
        self.log("ERROR", message)

    def critical(self, message: str):
        """Log critical message."""
        self.log("CRITICAL", message)


class EmulatorLogger(ConsoleLogger):
    """Logger for machine lifecycle events and run statistics."""

    def __init__(self, name: str = "Chipax", **kwargs):
        super().__init__(name, **kwargs)

    def log_config(self, config: Dict[str, Any]):
        """Log emulator configuration at startup."""
        self.info("=" * 60)
        self.info("Starting emulator with configuration:")
        for key, value in config.items():
            self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_rom_loaded(self, name: Optional[str], size: int):
        self.info(f"Loaded ROM {name or '<memory>'} ({size} bytes)")

    def log_status(self, status: Any):
        self.info(f"==== {str(getattr(status, 'name', status)).upper()} ====")

    def log_halt(self, error: Chip8Error, pc: int):
        """Report the error that stopped a machine."""
        self.error(f"Machine halted at PC=0x{pc:03X}: {type(error).__name__}: {error}")

    def log_stats(self, cycles: int, ticks: int, elapsed: float):
        """Log executed cycles and effective rates over a run."""
        if elapsed > 0:
            self.info(
                f"{cycles:,} cycles, {ticks:,} timer ticks in {elapsed:.2f}s "
                f"(CPU {cycles / elapsed:.0f} Hz, timers {ticks / elapsed:.1f} Hz)"
            )
        else:
            self.info(f"{cycles:,} cycles, {ticks:,} timer ticks")


logger = EmulatorLogger()
