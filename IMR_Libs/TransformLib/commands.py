"""
Transform commands and their parser.

Two command tokens are understood (keywords are case-insensitive):

- ``scale:<factor>`` - downscale by a positive integer factor
- ``merge:<overlay path>[:<offsetX>][:<offsetY>]`` - composite an overlay,
  offsets default to 0

The overlay path may itself contain ':'; only up to two trailing all-digit
segments are read as offsets.

Classes:
    ScaleCommand: Parsed scale command
    MergeCommand: Parsed merge command

Functions:
    parse_command: Parse a command token
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Union
import re

from IMR_Libs.constants import (
    COMMAND_MERGE,
    COMMAND_SCALE,
    COMMAND_SEPARATOR,
    DEFAULT_OFFSET_X,
    DEFAULT_OFFSET_Y,
)
from IMR_Libs.errors import InvalidCommandError, InvalidScaleFactorError

DIGITS_PATTERN = re.compile(r"[0-9]+")
OFFSET_PATTERN = re.compile(r"[0-9]*")

USAGE_HINT = "Expected scale:<factor> or merge:<merge_file>[:offsetX][:offsetY]"


@dataclass(frozen=True)
class ScaleCommand:
    """Downscale by ``factor`` (>= 1)."""
    factor: int

    kind = COMMAND_SCALE

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind
        return data


@dataclass(frozen=True)
class MergeCommand:
    """Composite the image at ``overlay_path`` over the base.

    Attributes:
        overlay_path: Path of the overlay image, as given by the user
        offset_x: Margin carved from the overlay's left and right edges
        offset_y: Margin carved from the overlay's top and bottom edges
    """
    overlay_path: str
    offset_x: int = DEFAULT_OFFSET_X
    offset_y: int = DEFAULT_OFFSET_Y

    kind = COMMAND_MERGE

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind
        return data


Command = Union[ScaleCommand, MergeCommand]


def parse_scale_factor(text: str) -> int:
    """
    Parse a scale factor.

    Raises:
        InvalidScaleFactorError: If text is not a positive integer
    """
    text = text.strip()
    if not DIGITS_PATTERN.fullmatch(text):
        raise InvalidScaleFactorError(
            f"Error converting <scale_factor> to a number: {text!r}"
        )

    factor = int(text)
    if factor < 1:
        raise InvalidScaleFactorError(f"Scale factor must be at least 1, got {factor}")
    return factor


def _parse_merge(rest: str, token: str) -> MergeCommand:
    parts = rest.split(COMMAND_SEPARATOR)
    offsets: List[str] = []
    while len(offsets) < 2 and len(parts) > 1 and OFFSET_PATTERN.fullmatch(parts[-1]):
        offsets.insert(0, parts.pop())

    overlay_path = COMMAND_SEPARATOR.join(parts)
    if not overlay_path:
        raise InvalidCommandError(f"Merge command has no overlay path: {token!r}")

    # Empty segments ("merge:a.png::3") fall back to the defaults
    offset_x = int(offsets[0]) if len(offsets) > 0 and offsets[0] else DEFAULT_OFFSET_X
    offset_y = int(offsets[1]) if len(offsets) > 1 and offsets[1] else DEFAULT_OFFSET_Y
    return MergeCommand(overlay_path=overlay_path, offset_x=offset_x, offset_y=offset_y)


def parse_command(token: str) -> Command:
    """
    Parse a command token into a command object.

    Args:
        token: e.g. 'scale:2', 'merge:logo.png', 'merge:logo.png:4:8'

    Returns:
        ScaleCommand or MergeCommand

    Raises:
        InvalidCommandError: If the token matches neither syntax
        InvalidScaleFactorError: If a scale factor is not a positive integer
    """
    if not isinstance(token, str) or not token.strip():
        raise InvalidCommandError(f"Empty command. {USAGE_HINT}")

    keyword, separator, rest = token.strip().partition(COMMAND_SEPARATOR)
    keyword = keyword.lower()

    if keyword == COMMAND_SCALE:
        if not separator:
            raise InvalidScaleFactorError("Missing <scale_factor> after 'scale:'")
        return ScaleCommand(factor=parse_scale_factor(rest))

    if keyword == COMMAND_MERGE:
        if not separator or not rest:
            raise InvalidCommandError(f"Merge command has no overlay path: {token!r}")
        return _parse_merge(rest, token)

    raise InvalidCommandError(f"Unknown command: {token!r}. {USAGE_HINT}")
