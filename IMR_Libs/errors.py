"""
Error types raised by the Image Merger and Resizer collaborators.

Every externally triggerable failure (bad file, bad command) is an
ImageToolError carrying a ``kind`` string, so callers can report it as a
value instead of crashing. Each subclass also derives from the builtin
exception it most resembles so existing ``except ValueError`` or
``except IOError`` handlers keep working.
"""


class ImageToolError(Exception):
    """Base class for recoverable image tool failures."""

    kind = "ImageToolError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class UnsupportedFormatError(ImageToolError, ValueError):
    """File extension is not in the supported decode/encode set."""

    kind = "UnsupportedFormat"


class DecodeFailureError(ImageToolError, IOError):
    """Bytes could not be decoded as the declared format."""

    kind = "DecodeFailure"


class EncodeFailureError(ImageToolError, IOError):
    """The result could not be serialized in the requested format."""

    kind = "EncodeFailure"


class InvalidScaleFactorError(ImageToolError, ValueError):
    """Scale factor is not an integer or is not positive."""

    kind = "InvalidScaleFactor"


class MissingExtensionError(ImageToolError, ValueError):
    """Path has no parseable extension."""

    kind = "MissingExtension"


class SourceUnavailableError(ImageToolError, IOError):
    """A file could not be opened, read or written."""

    kind = "SourceUnavailable"


class InvalidCommandError(ImageToolError, ValueError):
    """Command token matches neither the scale nor the merge syntax."""

    kind = "InvalidCommand"
