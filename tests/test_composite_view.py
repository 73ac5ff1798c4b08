"""
Tests for CompositeView.

Tests cover:
- Alpha-gated replacement with zero offsets
- Offsets shrinking the visibility window symmetrically
- Overlays smaller or larger than the base
- Conversion into the base's color model
"""

import pytest
from PIL import Image

from IMR_Libs.PixelSourceLib.color_models import BilevelModel, Color, GrayModel, PaletteModel
from IMR_Libs.PixelSourceLib.composite_view import CompositeView
from IMR_Libs.PixelSourceLib.pixel_source import PillowImageSource, materialize

from conftest import BLUE, CLEAR, RED, FunctionSource, gradient_color


def _pixels(view):
    return {(x, y): view.at(x, y).to_rgba8() for x, y in view.bounds().points()}


class TestCompositeViewZeroOffset:
    """Tests for compositing without offsets."""

    def test_blue_dot_over_red(self, red_source, blue_dot_source):
        view = CompositeView(red_source, blue_dot_source, 0, 0)

        pixels = _pixels(view)

        assert pixels[(2, 2)] == BLUE
        for point, color in pixels.items():
            if point != (2, 2):
                assert color == RED

    def test_matches_overlay_where_visible(self, red_source):
        """Wherever overlay alpha is non-zero the overlay color wins."""
        overlay_image = Image.new("RGBA", (4, 4), CLEAR)
        overlay_image.putpixel((0, 0), (10, 200, 30, 1))
        overlay_image.putpixel((3, 3), (0, 255, 0, 255))
        overlay = PillowImageSource(overlay_image)

        view = CompositeView(red_source, overlay)

        assert view.at(0, 0).to_rgba8() == (10, 200, 30, 1)
        assert view.at(3, 3).to_rgba8() == (0, 255, 0, 255)
        assert view.at(1, 2).to_rgba8() == RED

    def test_alpha_is_a_gate_not_a_weight(self, red_source):
        """A faint overlay pixel replaces the base instead of blending with it."""
        overlay = PillowImageSource(Image.new("RGBA", (4, 4), (0, 0, 255, 1)))

        view = CompositeView(red_source, overlay)

        assert view.at(1, 1).to_rgba8() == (0, 0, 255, 1)

    def test_transparent_overlay_leaves_base(self, red_image, red_source):
        overlay = PillowImageSource(Image.new("RGBA", (4, 4), CLEAR))

        result = materialize(CompositeView(red_source, overlay))

        assert result.tobytes() == red_image.tobytes()

    def test_materialized_output(self, red_source, blue_dot_source):
        result = materialize(CompositeView(red_source, blue_dot_source))

        assert result.size == (4, 4)
        assert result.getpixel((2, 2)) == BLUE
        assert result.getpixel((0, 0)) == RED


class TestCompositeViewOffsets:
    """Tests for the offset visibility window."""

    def test_large_offset_hides_overlay(self, red_source, blue_dot_source):
        view = CompositeView(red_source, blue_dot_source, 3, 3)

        assert set(_pixels(view).values()) == {RED}

    @pytest.mark.parametrize("offset", [1, 2])
    def test_small_offset_keeps_center(self, red_source, blue_dot_source, offset):
        view = CompositeView(red_source, blue_dot_source, offset, offset)

        assert view.at(2, 2).to_rgba8() == BLUE

    def test_offset_shrinks_both_edges(self, red_source):
        """Offset 1 on a 4x4 overlay leaves the inclusive range [1, 3]."""
        overlay = PillowImageSource(Image.new("RGBA", (4, 4), BLUE))

        view = CompositeView(red_source, overlay, 1, 1)

        assert view.at(0, 2).to_rgba8() == RED
        assert view.at(2, 0).to_rgba8() == RED
        assert view.at(1, 1).to_rgba8() == BLUE
        assert view.at(3, 3).to_rgba8() == BLUE

    def test_offset_does_not_translate_overlay(self, red_source, blue_dot_source):
        """The overlay is sampled at the same coordinate as the base."""
        view = CompositeView(red_source, blue_dot_source, 1, 0)

        assert view.at(2, 2).to_rgba8() == BLUE
        assert view.at(3, 2).to_rgba8() == RED

    def test_axes_are_independent(self, red_source):
        overlay = PillowImageSource(Image.new("RGBA", (4, 4), BLUE))

        view = CompositeView(red_source, overlay, 0, 2)

        assert view.at(0, 2).to_rgba8() == BLUE
        assert view.at(0, 1).to_rgba8() == RED
        assert view.at(0, 3).to_rgba8() == RED

    @pytest.mark.parametrize("offset_x,offset_y", [(0, 0), (1, 2), (5, 5), (100, 0)])
    def test_bounds_are_base_bounds(self, red_source, offset_x, offset_y):
        overlay = FunctionSource(9, 2, gradient_color)

        view = CompositeView(red_source, overlay, offset_x, offset_y)

        assert view.bounds() == red_source.bounds()


class TestCompositeViewSizes:
    """Tests for overlays whose size differs from the base."""

    def test_smaller_overlay_is_never_read_out_of_range(self, red_source):
        overlay = PillowImageSource(Image.new("RGBA", (2, 2), (0, 255, 0, 255)))

        pixels = _pixels(CompositeView(red_source, overlay))

        assert pixels[(1, 1)] == (0, 255, 0, 255)
        assert pixels[(2, 1)] == RED
        assert pixels[(3, 3)] == RED

    def test_larger_overlay_is_clipped_to_base(self, red_source):
        overlay = PillowImageSource(Image.new("RGBA", (10, 10), BLUE))

        result = materialize(CompositeView(red_source, overlay))

        assert result.size == (4, 4)
        assert set(result.getdata()) == {BLUE}


class TestCompositeViewColorModel:
    """Tests for color model reconciliation."""

    def test_color_model_is_base_model(self, red_source, blue_dot_source):
        view = CompositeView(red_source, blue_dot_source)

        assert view.color_model() is red_source.color_model()

    def test_overlay_converted_into_rgb_base(self, blue_dot_source):
        base = PillowImageSource(Image.new("RGB", (4, 4), (255, 0, 0)))

        result = materialize(CompositeView(base, blue_dot_source))

        assert result.mode == "RGB"
        assert result.getpixel((2, 2)) == (0, 0, 255)
        assert result.getpixel((1, 2)) == (255, 0, 0)

    @pytest.mark.parametrize("image,model_cls", [
        (Image.new("L", (4, 4), 200), GrayModel),
        (Image.new("1", (4, 4), 1), BilevelModel),
        (Image.new("RGB", (4, 4), (200, 10, 10)).convert("P"), PaletteModel),
    ])
    def test_transparent_overlay_keeps_alphaless_base(self, image, model_cls):
        """Bases without alpha keep every pixel under a fully transparent overlay."""
        base = PillowImageSource(image)
        overlay = PillowImageSource(Image.new("RGBA", (4, 4), CLEAR))

        view = CompositeView(base, overlay)

        assert isinstance(view.color_model(), model_cls)
        assert materialize(view).tobytes() == materialize(base).tobytes()

    def test_gray_base_shows_only_visible_overlay_pixels(self, blue_dot_source):
        base = PillowImageSource(Image.new("L", (4, 4), 200))

        result = materialize(CompositeView(base, blue_dot_source))

        assert result.mode == "L"
        assert result.getpixel((0, 0)) == 200
        assert result.getpixel((2, 2)) == 29

    def test_palette_base_maps_overlay_to_nearest_entry(self, blue_dot_source):
        base_image = Image.new("P", (4, 4), 0)
        base_image.putpalette([200, 10, 10, 0, 0, 250])
        base = PillowImageSource(base_image)

        result = materialize(CompositeView(base, blue_dot_source))

        assert result.getpixel((0, 0)) == (200, 10, 10, 255)
        assert result.getpixel((2, 2)) == (0, 0, 250, 255)

    def test_is_lazy(self, red_source):
        calls = []
        overlay = FunctionSource(4, 4, lambda x, y: calls.append((x, y)) or Color(0, 0, 0, 0))

        view = CompositeView(red_source, overlay)

        assert calls == []
        view.at(1, 1)
        assert calls == [(1, 1)]
