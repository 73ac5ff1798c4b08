"""
Pytest configuration and shared fixtures for Image Merger and Resizer tests.

This module provides small Pillow images and image files used across
multiple test modules.
"""

import pytest
from PIL import Image

from IMR_Libs.PixelSourceLib.color_models import Color, RGBAModel
from IMR_Libs.PixelSourceLib.geometry import Rectangle
from IMR_Libs.PixelSourceLib.pixel_source import PillowImageSource

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (0, 0, 0, 0)


class FunctionSource:
    """PixelSource computing each color from its coordinate."""

    def __init__(self, width, height, color_fn, model=None):
        self._bounds = Rectangle.from_size(width, height)
        self._color_fn = color_fn
        self._model = model or RGBAModel()

    def color_model(self):
        return self._model

    def bounds(self):
        return self._bounds

    def at(self, x, y):
        return self._color_fn(x, y)


def gradient_color(x, y):
    return Color.from_rgba8(x % 256, y % 256, (x + y) % 256, 255)


@pytest.fixture
def red_image():
    """A 4x4 fully opaque red RGBA image."""
    return Image.new("RGBA", (4, 4), RED)


@pytest.fixture
def blue_dot_image():
    """A 4x4 transparent RGBA image with one opaque blue pixel at (2, 2)."""
    image = Image.new("RGBA", (4, 4), CLEAR)
    image.putpixel((2, 2), BLUE)
    return image


@pytest.fixture
def red_source(red_image):
    return PillowImageSource(red_image)


@pytest.fixture
def blue_dot_source(blue_dot_image):
    return PillowImageSource(blue_dot_image)


@pytest.fixture
def gradient_image():
    """A 7x5 RGBA image whose pixel (x, y) is (10x, 10y, 0, 255)."""
    image = Image.new("RGBA", (7, 5))
    for y in range(5):
        for x in range(7):
            image.putpixel((x, y), (x * 10, y * 10, 0, 255))
    return image


@pytest.fixture
def image_files(tmp_path, red_image, blue_dot_image, gradient_image):
    """
    Write the sample images to disk.

    Returns:
        Dict mapping a short name to the written Path
    """
    paths = {
        "red": tmp_path / "red.png",
        "blue_dot": tmp_path / "blue_dot.png",
        "gradient": tmp_path / "gradient.png",
        "clear": tmp_path / "clear.png",
    }
    red_image.save(paths["red"])
    blue_dot_image.save(paths["blue_dot"])
    gradient_image.save(paths["gradient"])
    Image.new("RGBA", (4, 4), CLEAR).save(paths["clear"])
    return paths
