"""
Transform Builder Registry.

This module provides a registry mapping command kinds ("scale", "merge") to
the builder that turns a base PixelSource and a parsed command into a lazy
view.

Classes:
    TransformContext: Collaborators handed to every builder
    TransformRegistry: Registry for transform builders

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_transforms: Register the built-in scale and merge builders
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging

from IMR_Libs.PixelSourceLib.pixel_source import PixelSource

logger = logging.getLogger(__name__)


@dataclass
class TransformContext:
    """Collaborators available to transform builders.

    Attributes:
        load_overlay: Callable decoding an image path into a PixelSource
        log: Logger the builder should report to
    """
    load_overlay: Callable[[str], PixelSource]
    log: logging.Logger


# Type alias for builder function
TransformBuilder = Callable[[PixelSource, Any, TransformContext], PixelSource]


class TransformRegistry:
    """
    Registry for transform builders.

    Example:
        >>> registry = TransformRegistry()
        >>> registry.register("scale", build_scale_transform)
        >>> builder = registry.get_builder("scale")
        >>> view = builder(base, ScaleCommand(2), context)
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._builders: Dict[str, TransformBuilder] = {}

    def register(self, kind: str, builder: TransformBuilder) -> None:
        """
        Register a transform builder.

        Args:
            kind: Command kind handled by the builder (e.g., "scale")
            builder: Callable accepting (base, command, context)

        Raises:
            ValueError: If kind is empty or builder is not callable
            RuntimeError: If kind is already registered
        """
        kind = str(kind).strip().lower()

        if not kind:
            raise ValueError("kind cannot be empty")

        if not callable(builder):
            raise ValueError(f"builder must be callable, got {type(builder)}")

        if kind in self._builders:
            raise RuntimeError(
                f"Transform '{kind}' is already registered. "
                f"Each command kind has exactly one builder."
            )

        self._builders[kind] = builder

        logger.debug(f"Registered builder for transform: {kind}")

    def get_builder(self, kind: str) -> TransformBuilder:
        """
        Get the builder for a command kind.

        Raises:
            KeyError: If kind is not registered
        """
        kind = str(kind).strip().lower()

        if kind not in self._builders:
            available = ", ".join(self.list_kinds())
            raise KeyError(
                f"No builder registered for transform '{kind}'. "
                f"Available transforms: {available}"
            )

        return self._builders[kind]

    def build(self, base: PixelSource, command: Any, context: TransformContext) -> PixelSource:
        """Look up the builder for ``command.kind`` and run it."""
        builder = self.get_builder(command.kind)
        return builder(base, command, context)

    def list_kinds(self) -> List[str]:
        return sorted(self._builders.keys())


# Global singleton registry
_default_registry: Optional[TransformRegistry] = None


def get_default_registry() -> TransformRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in transforms.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = TransformRegistry()
        register_default_transforms(_default_registry)

    return _default_registry


def register_default_transforms(registry: TransformRegistry) -> None:
    """
    Register the built-in transforms (scale and merge).

    Args:
        registry: The registry to register builders with
    """
    from IMR_Libs.constants import COMMAND_MERGE, COMMAND_SCALE
    from IMR_Libs.TransformLib.transform_dispatcher import (
        build_merge_transform,
        build_scale_transform,
    )

    registry.register(COMMAND_SCALE, build_scale_transform)
    registry.register(COMMAND_MERGE, build_merge_transform)

    logger.debug("Registered default transforms")
