"""
TransformLib - Command parsing and transform dispatch

This module parses transform commands, builds the matching lazy views,
and runs complete decode-transform-encode passes.
"""

from IMR_Libs.TransformLib.commands import (
    ScaleCommand,
    MergeCommand,
    parse_command,
    parse_scale_factor,
)
from IMR_Libs.TransformLib.transform_registry import (
    TransformContext,
    TransformRegistry,
    get_default_registry,
    register_default_transforms,
)
from IMR_Libs.TransformLib.transform_dispatcher import (
    TransformDispatcher,
    build_scale_transform,
    build_merge_transform,
)
from IMR_Libs.TransformLib.transform_runner import (
    TransformRequest,
    TransformResult,
    run_transform,
)

__all__ = [
    "ScaleCommand",
    "MergeCommand",
    "parse_command",
    "parse_scale_factor",
    "TransformContext",
    "TransformRegistry",
    "get_default_registry",
    "register_default_transforms",
    "TransformDispatcher",
    "build_scale_transform",
    "build_merge_transform",
    "TransformRequest",
    "TransformResult",
    "run_transform",
]
