"""
Pixel source contract and the decoded-image source.

A PixelSource answers three questions: which color model it uses, which
coordinates are valid, and what color sits at a coordinate. Everything that
transforms images is written against this contract, never against a pixel
buffer, so views can be stacked without copying pixel data.

Classes:
    PixelSource: Structural protocol for pixel sources
    PillowImageSource: PixelSource wrapping a decoded Pillow image

Functions:
    materialize: Sweep a source's bounds into a concrete Pillow image
"""

from typing import Any, Protocol

import numpy as np
from PIL import Image

from IMR_Libs.PixelSourceLib.color_models import Color, ColorModel, color_model_for_image
from IMR_Libs.PixelSourceLib.geometry import Rectangle


class PixelSource(Protocol):
    """Lazy, read-only image.

    Calling ``at`` with a coordinate outside ``bounds()`` is undefined;
    callers only ever enumerate ``bounds()``.
    """

    def color_model(self) -> ColorModel:
        ...

    def bounds(self) -> Rectangle:
        ...

    def at(self, x: int, y: int) -> Color:
        ...


class PillowImageSource:
    """PixelSource over a decoded Pillow image.

    The image is referenced, not copied. Its pixel access object is taken
    once at construction.

    Attributes:
        image: The wrapped PIL Image (modes 1, L, LA, RGB, RGBA or P)
    """

    def __init__(self, image: Any):
        if not hasattr(image, "mode") or not hasattr(image, "load"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        self.image = image
        self._model = color_model_for_image(image)
        self._bounds = Rectangle.from_size(image.width, image.height)
        self._pixels = image.load()

    def color_model(self) -> ColorModel:
        return self._model

    def bounds(self) -> Rectangle:
        return self._bounds

    def at(self, x: int, y: int) -> Color:
        return self._model.decode(self._pixels[x, y])

    def __repr__(self) -> str:
        return (
            f"PillowImageSource(mode={self.image.mode!r}, "
            f"size={self.image.width}x{self.image.height})"
        )


_CHANNELS = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}


def materialize(source: PixelSource) -> Any:
    """
    Build a concrete Pillow image from a pixel source.

    Every coordinate of ``source.bounds()`` is read once, in row-major
    order. The output has the bounds' width and height (its origin is
    always (0, 0)) and the mode the source's color model materializes to.

    Args:
        source: Any PixelSource

    Returns:
        A new PIL Image
    """
    model = source.color_model()
    mode = model.materialize_mode
    channels = _CHANNELS[mode]
    rect = source.bounds()

    if rect.empty():
        return Image.new(mode, (rect.width, rect.height))

    shape = (rect.height, rect.width) if channels == 1 else (rect.height, rect.width, channels)
    array = np.zeros(shape, dtype=np.uint8)

    for y in range(rect.min_y, rect.max_y):
        row = y - rect.min_y
        for x in range(rect.min_x, rect.max_x):
            array[row, x - rect.min_x] = model.encode(source.at(x, y))

    # uint8 arrays with 1-4 channels map to L, LA, RGB and RGBA
    return Image.fromarray(array)
