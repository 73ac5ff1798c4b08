"""
Tests for the Transform Dispatcher.
"""

from unittest.mock import Mock

import pytest
from PIL import Image

from IMR_Libs.errors import (
    InvalidCommandError,
    InvalidScaleFactorError,
    MissingExtensionError,
    SourceUnavailableError,
    UnsupportedFormatError,
)
from IMR_Libs.PixelSourceLib.composite_view import CompositeView
from IMR_Libs.PixelSourceLib.scale_view import ScaleView
from IMR_Libs.TransformLib.commands import MergeCommand, ScaleCommand
from IMR_Libs.TransformLib.transform_dispatcher import TransformDispatcher

from conftest import BLUE, RED


class TestDispatchScale:
    """Tests for scale dispatch."""

    def test_builds_scale_view(self, red_source):
        view = TransformDispatcher().dispatch(red_source, "scale:2")

        assert isinstance(view, ScaleView)
        assert view.base is red_source
        assert view.scale_factor == 2
        assert view.bounds().size == (2, 2)

    def test_invalid_factor(self, red_source):
        with pytest.raises(InvalidScaleFactorError):
            TransformDispatcher().dispatch(red_source, "scale:0")

    def test_unknown_command(self, red_source):
        with pytest.raises(InvalidCommandError):
            TransformDispatcher().dispatch(red_source, "rotate:90")


class TestDispatchMerge:
    """Tests for merge dispatch."""

    def test_uses_overlay_loader(self, red_source, blue_dot_source):
        loader = Mock(return_value=blue_dot_source)
        dispatcher = TransformDispatcher(overlay_loader=loader)

        view = dispatcher.apply(red_source, MergeCommand("dot.png", 1, 2))

        assert isinstance(view, CompositeView)
        assert view.overlay is blue_dot_source
        assert (view.offset_x, view.offset_y) == (1, 2)
        loader.assert_called_once()
        assert loader.call_args[0][0] == "dot.png"

    def test_loads_overlay_from_disk(self, red_source, image_files):
        view = TransformDispatcher().dispatch(red_source, f"merge:{image_files['blue_dot']}")

        assert view.at(2, 2).to_rgba8() == BLUE
        assert view.at(0, 0).to_rgba8() == RED

    def test_extension_lookup_is_case_insensitive(self, red_source, tmp_path, blue_dot_image):
        path = tmp_path / "DOT.PNG"
        blue_dot_image.save(path, format="PNG")

        view = TransformDispatcher().dispatch(red_source, f"merge:{path}")

        assert view.at(2, 2).to_rgba8() == BLUE

    def test_unsupported_overlay_format(self, red_source, tmp_path):
        path = tmp_path / "dot.tiff"
        Image.new("RGBA", (4, 4)).save(path)

        with pytest.raises(UnsupportedFormatError):
            TransformDispatcher().dispatch(red_source, f"merge:{path}")

    def test_overlay_without_extension(self, red_source):
        with pytest.raises(MissingExtensionError):
            TransformDispatcher().dispatch(red_source, "merge:overlay")

    def test_missing_overlay_file(self, red_source, tmp_path):
        with pytest.raises(SourceUnavailableError):
            TransformDispatcher().dispatch(red_source, f"merge:{tmp_path / 'missing.png'}")


class TestDispatcherLogging:
    """Tests for the injected logger."""

    def test_logs_through_injected_logger(self, red_source):
        log = Mock()

        TransformDispatcher(log=log).apply(red_source, ScaleCommand(2))

        messages = [c[0][0] for c in log.info.call_args_list]
        assert "Scaling image..." in messages
