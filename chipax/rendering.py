"""CHIP-8 rendering utilities: RGB frames, screenshots and video."""

from typing import Iterable, Sequence, Tuple

import cv2
import numpy as np
from PIL import Image

from chipax.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chipax.logging import logger

Color = Tuple[int, int, int]


def display_to_rgb(
    display: np.ndarray,
    scale: int = 8,
    on_color: Color = (255, 255, 255),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Convert CHIP-8 boolean display to RGB array with optional upscaling.

    Args:
        display: Boolean array of shape (32, 64), row-major
        scale: Integer upscaling factor (nearest neighbour)
        on_color: RGB color for "on" pixels
        off_color: RGB color for "off" pixels

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    pixels = np.asarray(display, dtype=np.bool_)
    if pixels.shape != (SCREEN_HEIGHT, SCREEN_WIDTH):
        raise ValueError(f"Expected display shape {(SCREEN_HEIGHT, SCREEN_WIDTH)}, got {pixels.shape}")

    rgb_frame = np.empty((*pixels.shape, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(scheme: str = "classic") -> Tuple[Color, Color]:
    """Get predefined color schemes for CHIP-8 rendering.

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "classic": ((255, 255, 255), (0, 0, 0)),  # White on black
        "phosphor": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "sdl": ((255, 255, 255), (255, 255, 0)),  # White on yellow
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def parse_color(value: str) -> Color:
    """Parse ``#RRGGBB`` (or ``RRGGBB``) into an RGB tuple."""
    digits = value.strip().lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Expected a color like #RRGGBB, got '{value}'")
    try:
        packed = int(digits, 16)
    except ValueError:
        raise ValueError(f"Expected a color like #RRGGBB, got '{value}'") from None
    return (packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF


def save_screenshot(display: np.ndarray, filename: str, scale: int = 8,
                    on_color: Color = (255, 255, 255), off_color: Color = (0, 0, 0)) -> None:
    """Write the display to an image file (format from the extension)."""
    Image.fromarray(display_to_rgb(display, scale, on_color, off_color)).save(filename)


def create_video(
        frames: Iterable[np.ndarray],
        filename: str,
        fps: float = 60.0,
        scale: int = 8,
        colors: Sequence[Color] = ((255, 255, 255), (0, 0, 0)),
        persistence: bool = True,
) -> int:
    """Save a sequence of CHIP-8 displays as an MP4 video.

    Args:
        frames: Boolean displays of shape (32, 64), one per video frame
        filename: Output MP4 path
        fps: Video frame rate
        scale: Upscaling factor
        colors: (on_color, off_color)
        persistence: Blend frames like a phosphor screen to hide XOR flicker

    Returns:
        Number of frames written
    """
    height, width = SCREEN_HEIGHT * scale, SCREEN_WIDTH * scale
    on_color, off_color = np.array(colors[0]), np.array(colors[1])

    fourcc = cv2.VideoWriter_fourcc(*'mp4v')
    writer = cv2.VideoWriter(filename, fourcc, fps, (width, height))

    glow = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=np.float32)
    decay = 0.8
    count = 0

    try:
        for frame_display in frames:
            pixels = np.asarray(frame_display, dtype=np.float32)
            if persistence:
                glow = np.clip(glow * decay + pixels, 0.0, 1.0)
                pixels = glow

            frame = (off_color + pixels[..., None] * (on_color - off_color)).astype(np.uint8)
            if scale > 1:
                frame = np.repeat(np.repeat(frame, scale, axis=0), scale, axis=1)
            writer.write(cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))
            count += 1
    finally:
        writer.release()

    logger.info(f"Video saved: {filename} ({count} frames, {fps} FPS, {count / fps:.1f}s)")
    return count
