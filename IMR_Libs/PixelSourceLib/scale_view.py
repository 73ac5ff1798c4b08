"""
Uniform integer downscaling by point sampling.

ScaleView reads exactly one base pixel per output pixel: output (x, y)
is base (x * factor, y * factor). There is no averaging and no
intermediate buffer.
"""

from IMR_Libs.PixelSourceLib.color_models import Color, ColorModel
from IMR_Libs.PixelSourceLib.geometry import Rectangle
from IMR_Libs.PixelSourceLib.pixel_source import PixelSource


def _truncating_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


class ScaleView:
    """Point-sampled downscale of a base PixelSource.

    Attributes:
        base: The source being scaled (held by reference)
        scale_factor: Integer factor >= 1; 1 is the identity
    """

    def __init__(self, base: PixelSource, scale_factor: int):
        if isinstance(scale_factor, bool) or not isinstance(scale_factor, int):
            raise TypeError(f"scale_factor must be an int, got {type(scale_factor)}")
        if scale_factor < 1:
            raise ValueError(f"scale_factor must be >= 1, got {scale_factor}")

        self.base = base
        self.scale_factor = scale_factor

    def color_model(self) -> ColorModel:
        return self.base.color_model()

    def bounds(self) -> Rectangle:
        """Base min corner, base max corner divided by the factor."""
        base_bounds = self.base.bounds()
        max_x = max(_truncating_div(base_bounds.max_x, self.scale_factor), base_bounds.min_x)
        max_y = max(_truncating_div(base_bounds.max_y, self.scale_factor), base_bounds.min_y)
        return Rectangle(base_bounds.min_x, base_bounds.min_y, max_x, max_y)

    def at(self, x: int, y: int) -> Color:
        return self.base.at(x * self.scale_factor, y * self.scale_factor)

    def __repr__(self) -> str:
        return f"ScaleView({self.base!r}, scale_factor={self.scale_factor})"
