"""
Transform Dispatcher.

Turns a command token and an already-decoded base image into the lazy view
that implements the command. Merge commands decode their overlay through the
codec collaborator.
"""

from typing import Callable, Optional
import logging

from IMR_Libs.CodecLib.image_codecs import load_image_source
from IMR_Libs.PixelSourceLib.composite_view import CompositeView
from IMR_Libs.PixelSourceLib.pixel_source import PixelSource
from IMR_Libs.PixelSourceLib.scale_view import ScaleView
from IMR_Libs.TransformLib.commands import Command, MergeCommand, ScaleCommand, parse_command
from IMR_Libs.TransformLib.transform_registry import (
    TransformContext,
    TransformRegistry,
    get_default_registry,
)

logger = logging.getLogger(__name__)


def build_scale_transform(
    base: PixelSource,
    command: ScaleCommand,
    context: TransformContext,
) -> PixelSource:
    context.log.info("Scaling image...")
    context.log.info("Scale factor: %d", command.factor)
    return ScaleView(base, command.factor)


def build_merge_transform(
    base: PixelSource,
    command: MergeCommand,
    context: TransformContext,
) -> PixelSource:
    context.log.info("Merging image...")
    context.log.info("Merge-file path: %s", command.overlay_path)
    overlay = context.load_overlay(command.overlay_path)
    return CompositeView(base, overlay, command.offset_x, command.offset_y)


class TransformDispatcher:
    """Selects and builds the view for a command.

    Args:
        registry: Transform registry (default: the global registry)
        overlay_loader: Callable(path, log) decoding overlay files
                        (default: load_image_source)
        log: Logger for progress messages (default: module logger)
    """

    def __init__(
        self,
        registry: Optional[TransformRegistry] = None,
        overlay_loader: Optional[Callable[..., PixelSource]] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.registry = registry or get_default_registry()
        self.overlay_loader = overlay_loader or load_image_source
        self.log = log or logger

    def _load_overlay(self, path: str) -> PixelSource:
        return self.overlay_loader(path, log=self.log)

    def parse(self, token: str) -> Command:
        return parse_command(token)

    def apply(self, base: PixelSource, command: Command) -> PixelSource:
        """
        Build the lazy view for an already parsed command.

        Raises:
            KeyError: If no builder handles the command's kind
            ImageToolError: If the overlay cannot be loaded
        """
        context = TransformContext(load_overlay=self._load_overlay, log=self.log)
        return self.registry.build(base, command, context)

    def dispatch(self, base: PixelSource, token: str) -> PixelSource:
        """Parse ``token`` and build its view over ``base``."""
        return self.apply(base, self.parse(token))
