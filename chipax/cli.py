"""Command line entry point."""

import argparse
import sys
import time
from typing import List, Optional

from tqdm import tqdm

from chipax.config import EmulatorConfig
from chipax.constants import DEFAULT_CPU_HZ, STACK_SIZE, TIMER_HZ
from chipax.errors import RomError
from chipax.framebuffer import snapshot
from chipax.logging import logger
from chipax.memory import load_rom, read_rom_file
from chipax.rendering import create_color_scheme, create_video, parse_color, save_screenshot
from chipax.scheduler import Scheduler
from chipax.state import EmulatorState


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chipax", description="CHIP-8 virtual machine")
    parser.add_argument("rom", help="Path to a CHIP-8 ROM")
    parser.add_argument("--scale", type=int, default=20, help="Pixel scale factor (default 20)")
    parser.add_argument("--cpu-hz", type=int, default=DEFAULT_CPU_HZ,
                        help=f"Instructions per second (default {DEFAULT_CPU_HZ})")
    parser.add_argument("--scheme", default="classic", help="Named color scheme")
    parser.add_argument("--fg", help="Foreground color as #RRGGBB, overrides --scheme")
    parser.add_argument("--bg", help="Background color as #RRGGBB, overrides --scheme")
    parser.add_argument("--quirks", choices=["default", "cosmac", "modern"], default="default",
                        help="Interpreter behaviour preset")
    parser.add_argument("--strict", action="store_true",
                        help="Halt on SYS calls and writes into the font table")
    parser.add_argument("--stack-depth", type=int, default=STACK_SIZE,
                        help=f"Return stack depth, 12 to 16 (default {STACK_SIZE})")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for CXNN")
    parser.add_argument("--tone", type=int, default=440, help="Buzzer frequency in Hz")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--frames", type=int, default=600,
                        help="Frames (1/60 s each) to run in headless mode")
    parser.add_argument("--record", help="Headless: save the run as an MP4 video")
    parser.add_argument("--screenshot", help="Headless: save the final frame as an image")
    return parser


def config_from_args(args: argparse.Namespace) -> EmulatorConfig:
    foreground, background = create_color_scheme(args.scheme)
    if args.fg:
        foreground = parse_color(args.fg)
    if args.bg:
        background = parse_color(args.bg)
    return EmulatorConfig(
        scale=args.scale,
        foreground=foreground,
        background=background,
        cpu_hz=args.cpu_hz,
        strict=args.strict,
        quirks=args.quirks,
        stack_depth=args.stack_depth,
        seed=args.seed,
        tone_hz=args.tone,
        log_level=args.log_level,
    )


def run_headless(config: EmulatorConfig, state: EmulatorState, frames: int,
                 record: Optional[str] = None, screenshot: Optional[str] = None) -> EmulatorState:
    """Run ``frames`` timer periods as fast as possible."""
    scheduler = Scheduler(config.cpu_hz, TIMER_HZ)
    recorded = []
    start = time.perf_counter()

    with tqdm(total=frames, desc=f"Running {state.rom_name or 'ROM'}", unit="frame") as bar:
        for _ in range(frames):
            state = scheduler.run_frames(state, 1)
            if record:
                recorded.append(snapshot(state))
            bar.update(1)
            if state.status.is_terminal:
                break

    logger.log_stats(scheduler.total_cycles, scheduler.total_ticks, time.perf_counter() - start)
    colors = (config.foreground, config.background)
    if record:
        create_video(recorded, record, fps=TIMER_HZ, scale=config.scale, colors=colors)
    if screenshot:
        save_screenshot(snapshot(state), screenshot, config.scale, *colors)
        logger.info(f"Screenshot saved: {screenshot}")
    return state


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as e:
        logger.error(str(e))
        return 2
    logger.set_level(config.log_level)
    logger.log_config(config.as_dict())

    try:
        rom_data = read_rom_file(args.rom)
        state = load_rom(config.create_state(), rom_data, name=args.rom)
    except RomError as e:
        logger.error(str(e))
        return 1

    if args.headless:
        logger.log_rom_loaded(args.rom, len(rom_data))
        state = run_headless(config, state, args.frames, args.record, args.screenshot)
    else:
        # Imported here so headless runs never need a display
        from chipax.frontend import run_interactive
        state = run_interactive(config, rom_data, args.rom)

    return 1 if state.error is not None else 0


if __name__ == "__main__":
    sys.exit(main())
