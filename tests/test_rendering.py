"""Tests for frame rendering, screenshots and video output."""

import numpy as np
import pytest
from PIL import Image

from chipax import display_to_rgb, create_color_scheme, snapshot, execute
from chipax.rendering import parse_color, save_screenshot, create_video


@pytest.fixture
def glyph_display(fresh_state):
    """Display showing the font glyph for 0 at the top-left corner."""
    state = execute(fresh_state, 0xD005)  # I = 0 is the glyph for 0
    return snapshot(state)


def test_display_to_rgb_shape_and_colors(glyph_display):
    rgb = display_to_rgb(glyph_display, scale=1, on_color=(1, 2, 3), off_color=(9, 9, 9))
    assert rgb.shape == (32, 64, 3)
    assert rgb.dtype == np.uint8
    assert rgb[0, 0].tolist() == [1, 2, 3]
    assert rgb[1, 1].tolist() == [9, 9, 9]


def test_display_to_rgb_scales(glyph_display):
    rgb = display_to_rgb(glyph_display, scale=4)
    assert rgb.shape == (128, 256, 3)
    assert (rgb[:4, :4] == 255).all()


def test_display_to_rgb_rejects_wrong_shape():
    with pytest.raises(ValueError):
        display_to_rgb(np.zeros((64, 32), dtype=bool))


def test_color_schemes():
    assert create_color_scheme("classic") == ((255, 255, 255), (0, 0, 0))
    with pytest.raises(ValueError, match="Unknown color scheme"):
        create_color_scheme("nope")


@pytest.mark.parametrize("text,expected", [
    ("#FFFFFF", (255, 255, 255)),
    ("ffff00", (255, 255, 0)),
    ("#102030", (16, 32, 48)),
])
def test_parse_color(text, expected):
    assert parse_color(text) == expected


@pytest.mark.parametrize("text", ["#FFF", "#GGGGGG", ""])
def test_parse_color_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_color(text)


def test_save_screenshot(glyph_display, tmp_path):
    path = tmp_path / "frame.png"
    save_screenshot(glyph_display, str(path), scale=2)
    with Image.open(path) as image:
        assert image.size == (128, 64)
        assert image.getpixel((0, 0)) == (255, 255, 255)


def test_create_video_counts_frames(glyph_display, tmp_path):
    frames = [glyph_display, np.zeros_like(glyph_display), glyph_display]
    written = create_video(frames, str(tmp_path / "run.mp4"), scale=2)
    assert written == 3
