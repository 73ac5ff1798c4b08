"""
PixelSourceLib - Lazy pixel sources

This module provides the PixelSource contract, the decoded-image source,
and the scale and composite views built on top of it.
"""

from IMR_Libs.PixelSourceLib.geometry import Point, Rectangle
from IMR_Libs.PixelSourceLib.color_models import (
    Color,
    ColorModel,
    RGBAModel,
    RGBModel,
    GrayModel,
    BilevelModel,
    GrayAlphaModel,
    PaletteModel,
    color_model_for_image,
)
from IMR_Libs.PixelSourceLib.pixel_source import PixelSource, PillowImageSource, materialize
from IMR_Libs.PixelSourceLib.scale_view import ScaleView
from IMR_Libs.PixelSourceLib.composite_view import CompositeView

__all__ = [
    "Point",
    "Rectangle",
    "Color",
    "ColorModel",
    "RGBAModel",
    "RGBModel",
    "GrayModel",
    "BilevelModel",
    "GrayAlphaModel",
    "PaletteModel",
    "color_model_for_image",
    "PixelSource",
    "PillowImageSource",
    "materialize",
    "ScaleView",
    "CompositeView",
]
