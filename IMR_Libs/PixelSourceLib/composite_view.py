"""
Alpha-gated overlay compositing.

CompositeView shows an overlay on top of a base image wherever the overlay
pixel has a non-zero alpha. Alpha is a visible/invisible gate, not a blend
weight: a visible overlay pixel, converted into the base's color model,
fully replaces the base pixel. The gate reads the overlay's own alpha, so
bases without an alpha channel (L, 1, P) are left untouched under
transparent overlay pixels.

The offsets do not move the overlay. Both sides are sampled at the same
absolute coordinate; an offset only narrows the window in which the overlay
is eligible, shrinking it by ``offset_x`` from the left and the right edge
and by ``offset_y`` from the top and the bottom edge. A large enough offset
hides the overlay entirely.

Example:
    >>> base = PillowImageSource(Image.new("RGBA", (4, 4), (255, 0, 0, 255)))
    >>> overlay = PillowImageSource(Image.new("RGBA", (4, 4), (0, 0, 0, 0)))
    >>> view = CompositeView(base, overlay, offset_x=1, offset_y=1)
    >>> view.bounds() == base.bounds()
    True
"""

from typing import Optional

from IMR_Libs.PixelSourceLib.color_models import Color, ColorModel
from IMR_Libs.PixelSourceLib.geometry import Rectangle
from IMR_Libs.PixelSourceLib.pixel_source import PixelSource


class CompositeView:
    """Base image with an alpha-gated overlay.

    Attributes:
        base: Source providing bounds, color model and fallback colors
        overlay: Source whose visible pixels replace the base's
        offset_x: Horizontal margin carved from both overlay edges
        offset_y: Vertical margin carved from both overlay edges
    """

    def __init__(
        self,
        base: PixelSource,
        overlay: PixelSource,
        offset_x: int = 0,
        offset_y: int = 0,
    ):
        self.base = base
        self.overlay = overlay
        self.offset_x = int(offset_x)
        self.offset_y = int(offset_y)
        self._window = self._visibility_window()

    def _visibility_window(self) -> Optional[Rectangle]:
        """
        Compute the coordinates where the overlay may be sampled.

        The window is [min + offset, max - offset] on each axis, inclusive,
        clipped to the overlay's own bounds so the overlay is never read
        outside them.

        Returns:
            The window as a Rectangle, or None when it is empty
        """
        ob = self.overlay.bounds()
        min_x = max(ob.min_x + self.offset_x, ob.min_x)
        min_y = max(ob.min_y + self.offset_y, ob.min_y)
        max_x = min(ob.max_x - self.offset_x + 1, ob.max_x)
        max_y = min(ob.max_y - self.offset_y + 1, ob.max_y)

        if min_x >= max_x or min_y >= max_y:
            return None
        return Rectangle(min_x, min_y, max_x, max_y)

    def color_model(self) -> ColorModel:
        return self.base.color_model()

    def bounds(self) -> Rectangle:
        return self.base.bounds()

    def at(self, x: int, y: int) -> Color:
        left_color = self.base.at(x, y)

        if self._window is not None and self._window.contains(x, y):
            right_color = self.overlay.at(x, y)
            if right_color.a > 0:
                return self.base.color_model().convert(right_color)

        return left_color

    def __repr__(self) -> str:
        return (
            f"CompositeView({self.base!r}, {self.overlay!r}, "
            f"offset_x={self.offset_x}, offset_y={self.offset_y})"
        )
