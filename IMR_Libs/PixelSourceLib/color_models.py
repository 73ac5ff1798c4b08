"""
Colors and color models for pixel sources.

A Color holds four 16-bit premultiplied channels. A ColorModel maps any
Color into the canonical representation of one Pillow mode, which is how two
images with different storage are reconciled before they are compared.

Classes:
    Color: Immutable premultiplied 16-bit RGBA value
    ColorModel: Base class for per-mode models
    RGBAModel, RGBModel, GrayModel, BilevelModel, GrayAlphaModel, PaletteModel

Functions:
    color_model_for_image: Pick the model matching a Pillow image's mode
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from IMR_Libs.constants import CHANNEL_MAX

Rgba8 = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Color:
    """A premultiplied RGBA color with 16 bits per channel.

    Attributes:
        r: Red, premultiplied by alpha (0-0xFFFF)
        g: Green, premultiplied by alpha (0-0xFFFF)
        b: Blue, premultiplied by alpha (0-0xFFFF)
        a: Alpha (0-0xFFFF)
        straight: The 8-bit straight-alpha value this color was built from,
                  if any; to_rgba8 returns it unchanged so decoded pixels
                  survive re-encoding exactly
    """
    r: int
    g: int
    b: int
    a: int
    straight: Optional[Rgba8] = field(default=None, compare=False, repr=False)

    def rgba(self) -> Tuple[int, int, int, int]:
        """Return the premultiplied 16-bit channels."""
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def from_rgba8(cls, r: int, g: int, b: int, a: int = 255) -> "Color":
        """Build from straight (non-premultiplied) 8-bit channels as Pillow stores them."""
        return cls(
            (r * 0x101) * a // 0xFF,
            (g * 0x101) * a // 0xFF,
            (b * 0x101) * a // 0xFF,
            a * 0x101,
            straight=(r, g, b, a),
        )

    @classmethod
    def from_gray8(cls, y: int) -> "Color":
        y16 = y * 0x101
        return cls(y16, y16, y16, CHANNEL_MAX, straight=(y, y, y, 255))

    def to_rgba8(self) -> Rgba8:
        """Return straight (non-premultiplied) 8-bit channels."""
        if self.straight is not None:
            return self.straight
        if self.a == CHANNEL_MAX:
            return (self.r >> 8, self.g >> 8, self.b >> 8, 0xFF)
        if self.a == 0:
            return (0, 0, 0, 0)
        r = (self.r * CHANNEL_MAX) // self.a
        g = (self.g * CHANNEL_MAX) // self.a
        b = (self.b * CHANNEL_MAX) // self.a
        return (r >> 8, g >> 8, b >> 8, self.a >> 8)

    def luminance8(self) -> int:
        """8-bit luma of the premultiplied channels (ITU-R BT.601 weights)."""
        return (19595 * self.r + 38470 * self.g + 7471 * self.b + (1 << 15)) >> 24


TRANSPARENT = Color(0, 0, 0, 0)


class ColorModel:
    """Canonical color representation of one Pillow mode.

    Subclasses implement three conversions:
        convert: any Color -> the closest Color this mode can store
        decode: a raw Pillow pixel of ``mode`` -> Color
        encode: a Color -> raw pixel of ``materialize_mode``
    """

    mode = ""
    materialize_mode = ""

    def convert(self, color: Color) -> Color:
        raise NotImplementedError

    def decode(self, raw: Any) -> Color:
        raise NotImplementedError

    def encode(self, color: Color) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mode={self.mode!r})"


class RGBAModel(ColorModel):
    """Straight-alpha 8-bit RGBA."""

    mode = "RGBA"
    materialize_mode = "RGBA"

    def convert(self, color: Color) -> Color:
        if color.straight is not None:
            return color
        return Color.from_rgba8(*color.to_rgba8())

    def decode(self, raw: Sequence[int]) -> Color:
        return Color.from_rgba8(*raw)

    def encode(self, color: Color) -> Rgba8:
        return color.to_rgba8()


class RGBModel(ColorModel):
    """8-bit RGB.

    Decoded pixels are always opaque, but converted colors keep their alpha
    at 8-bit precision so transparent overlay pixels stay transparent.
    Encoding drops alpha and writes the premultiplied channels.
    """

    mode = "RGB"
    materialize_mode = "RGB"

    def convert(self, color: Color) -> Color:
        r, g, b, a = (c >> 8 for c in color.rgba())
        return Color(r * 0x101, g * 0x101, b * 0x101, a * 0x101)

    def decode(self, raw: Sequence[int]) -> Color:
        r, g, b = raw[:3]
        return Color.from_rgba8(r, g, b, 255)

    def encode(self, color: Color) -> Tuple[int, int, int]:
        return (color.r >> 8, color.g >> 8, color.b >> 8)


class GrayModel(ColorModel):
    """8-bit opaque grayscale."""

    mode = "L"
    materialize_mode = "L"

    def convert(self, color: Color) -> Color:
        return Color.from_gray8(color.luminance8())

    def decode(self, raw: int) -> Color:
        return Color.from_gray8(raw)

    def encode(self, color: Color) -> int:
        return color.luminance8()


class BilevelModel(GrayModel):
    """1-bit black and white, materialized as 8-bit grayscale."""

    mode = "1"
    materialize_mode = "L"

    def convert(self, color: Color) -> Color:
        return Color.from_gray8(255 if color.luminance8() >= 128 else 0)

    def decode(self, raw: int) -> Color:
        return Color.from_gray8(255 if raw else 0)

    def encode(self, color: Color) -> int:
        return 255 if color.luminance8() >= 128 else 0


class GrayAlphaModel(ColorModel):
    """8-bit grayscale with straight alpha."""

    mode = "LA"
    materialize_mode = "LA"

    def convert(self, color: Color) -> Color:
        return self.decode(self.encode(color))

    def decode(self, raw: Sequence[int]) -> Color:
        y, a = raw[:2]
        return Color.from_rgba8(y, y, y, a)

    def encode(self, color: Color) -> Tuple[int, int]:
        r, g, b, a = color.to_rgba8()
        y = (19595 * r + 38470 * g + 7471 * b + (1 << 15)) >> 16
        return (y, a)


class PaletteModel(ColorModel):
    """Indexed color; conversion picks the nearest palette entry.

    Distance is the sum of squared differences over the premultiplied
    16-bit channels. Ties go to the lowest index.
    """

    mode = "P"
    materialize_mode = "RGBA"

    def __init__(self, palette: Sequence[Color]):
        if not palette:
            raise ValueError("PaletteModel requires at least one palette entry")
        self.palette: Tuple[Color, ...] = tuple(palette)

    @classmethod
    def from_image(cls, image: Any) -> "PaletteModel":
        """Build the palette of a Pillow "P" image, honouring its transparency info."""
        palette = getattr(image, "palette", None)
        if palette is not None and palette.mode == "RGBA":
            flat = image.getpalette("RGBA") or []
            entries: List[Rgba8] = [
                tuple(flat[i:i + 4]) for i in range(0, len(flat) - 3, 4)
            ]
        else:
            flat = image.getpalette() or []
            entries = [
                tuple(flat[i:i + 3]) + (255,) for i in range(0, len(flat) - 2, 3)
            ]
        if not entries:
            entries = [(0, 0, 0, 255)]

        transparency = image.info.get("transparency")
        if isinstance(transparency, int):
            if 0 <= transparency < len(entries):
                r, g, b, _ = entries[transparency]
                entries[transparency] = (r, g, b, 0)
        elif isinstance(transparency, (bytes, bytearray)):
            for index, alpha in enumerate(transparency[:len(entries)]):
                r, g, b, _ = entries[index]
                entries[index] = (r, g, b, alpha)

        return cls([Color.from_rgba8(*entry) for entry in entries])

    def index(self, color: Color) -> int:
        best_index = 0
        best_distance = None
        for i, candidate in enumerate(self.palette):
            distance = sum(
                (p - q) ** 2 for p, q in zip(color.rgba(), candidate.rgba())
            )
            if distance == 0:
                return i
            if best_distance is None or distance < best_distance:
                best_index = i
                best_distance = distance
        return best_index

    def convert(self, color: Color) -> Color:
        return self.palette[self.index(color)]

    def decode(self, raw: int) -> Color:
        if 0 <= raw < len(self.palette):
            return self.palette[raw]
        return TRANSPARENT

    def encode(self, color: Color) -> Rgba8:
        return color.to_rgba8()

    def __repr__(self) -> str:
        return f"PaletteModel(mode='P', entries={len(self.palette)})"


_MODELS_BY_MODE = {
    "RGBA": RGBAModel,
    "RGB": RGBModel,
    "L": GrayModel,
    "1": BilevelModel,
    "LA": GrayAlphaModel,
}


def color_model_for_image(image: Any) -> ColorModel:
    """
    Pick the color model matching a Pillow image.

    Args:
        image: A PIL Image in one of the modes 1, L, LA, RGB, RGBA or P

    Returns:
        A ColorModel instance for the image's mode

    Raises:
        ValueError: If the mode has no color model
    """
    if image.mode == "P":
        return PaletteModel.from_image(image)

    model_cls = _MODELS_BY_MODE.get(image.mode)
    if model_cls is None:
        raise ValueError(f"No color model for image mode: {image.mode}")
    return model_cls()
