"""
Image decoding and encoding through Pillow.

This module is the boundary between files and pixel sources. It picks a
codec from a file extension, decodes bytes into a PillowImageSource, and
materializes any PixelSource back into bytes. File handles are opened
right before use and always closed, including on errors.

Functions:
    get_supported_decode_formats: Format tags accepted by decode_image
    get_supported_encode_formats: Format tags accepted by encode_image
    expand_path: Expand '~' in a user supplied path
    get_extension: Extract a path's extension
    format_tag_for_path: Map a path's extension to a format tag
    output_format_for_path: Format tag for an output path
    get_save_kwargs: Pillow save() kwargs for a format tag
    decode_image: Decode a byte stream into a PixelSource
    load_image_source: Open and decode an image file
    encode_image: Encode a PixelSource onto a byte stream
    save_image_source: Encode a PixelSource into a file
"""

from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union
import io
import logging

from PIL import Image, UnidentifiedImageError

from IMR_Libs.constants import (
    DEFAULT_JPEG_QUALITY,
    DEFAULT_OUTPUT_FORMAT,
    EXTENSION_FORMAT_TAGS,
    NATIVE_MODES,
    OPAQUE_FALLBACK_MODES,
    PIL_FORMAT_NAMES,
    SUPPORTED_DECODE_FORMATS,
    SUPPORTED_ENCODE_FORMATS,
)
from IMR_Libs.errors import (
    DecodeFailureError,
    EncodeFailureError,
    MissingExtensionError,
    SourceUnavailableError,
    UnsupportedFormatError,
)
from IMR_Libs.PixelSourceLib.pixel_source import PillowImageSource, PixelSource, materialize

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Pillow modes each encoder can write directly; anything else is converted
_ENCODER_MODES = {
    "bmp": {"1", "L", "P", "RGB", "RGBA"},
    "gif": {"1", "L", "P", "RGB", "RGBA"},
    "jpeg": {"L", "RGB"},
    "png": {"1", "L", "LA", "P", "RGB", "RGBA"},
}


def get_supported_decode_formats() -> List[str]:
    """
    Get list of format tags that can be decoded.

    Returns:
        Sorted list of format tags (e.g., ['bmp', 'gif', ...])
    """
    return sorted(SUPPORTED_DECODE_FORMATS)


def get_supported_encode_formats() -> List[str]:
    """
    Get list of format tags that can be encoded.

    Returns:
        Sorted list of format tags (e.g., ['bmp', 'gif', ...])
    """
    return sorted(SUPPORTED_ENCODE_FORMATS)


def expand_path(path: PathLike) -> Path:
    """Expand a leading '~' to the current user's home directory."""
    return Path(path).expanduser()


def get_extension(path: PathLike) -> str:
    """
    Extract a path's extension, lower-cased and without the dot.

    Raises:
        MissingExtensionError: If the file name has no extension
    """
    suffix = Path(path).suffix
    if not suffix or suffix == ".":
        raise MissingExtensionError(f"This file does not have an extension: {path}")
    return suffix[1:].lower()


def format_tag_for_path(path: PathLike, supported=SUPPORTED_DECODE_FORMATS) -> str:
    """
    Map a path's extension (case-insensitive) to a format tag.

    Args:
        path: File path with an extension
        supported: Set of acceptable format tags

    Returns:
        The format tag, e.g. 'jpeg' for 'photo.JPG'

    Raises:
        MissingExtensionError: If the path has no extension
        UnsupportedFormatError: If the extension is not supported
    """
    extension = get_extension(path)
    tag = EXTENSION_FORMAT_TAGS.get(extension)
    if tag is None or tag not in supported:
        raise UnsupportedFormatError(
            f"Unknown file extension: {extension}. "
            f"Supported: {', '.join(sorted(supported))}"
        )
    return tag


def get_save_kwargs(format_tag: str, quality: int = DEFAULT_JPEG_QUALITY) -> Dict[str, Any]:
    """Get PIL Image.save() kwargs for a format tag."""
    kwargs: Dict[str, Any] = {"format": PIL_FORMAT_NAMES[format_tag]}

    if format_tag == "jpeg":
        kwargs["quality"] = max(1, min(100, quality))

    return kwargs


def _normalize_mode(image: Any) -> Any:
    """Convert modes without a color model to RGB or RGBA."""
    if image.mode in NATIVE_MODES:
        return image
    if image.mode in OPAQUE_FALLBACK_MODES:
        return image.convert("RGB")
    return image.convert("RGBA")


def decode_image(
    stream: BinaryIO,
    format_tag: str,
    log: Optional[logging.Logger] = None,
) -> PillowImageSource:
    """
    Decode a byte stream into a pixel source.

    The image is fully loaded before returning, so the stream may be closed
    as soon as this call ends. Animated formats yield their first frame.

    Args:
        stream: Binary stream positioned at the start of the image
        format_tag: One of get_supported_decode_formats()
        log: Optional logger (default: module logger)

    Returns:
        PillowImageSource wrapping the decoded image

    Raises:
        UnsupportedFormatError: If format_tag is not decodable
        DecodeFailureError: If the bytes are not a valid image of that format
    """
    log = log or logger

    if format_tag not in SUPPORTED_DECODE_FORMATS:
        raise UnsupportedFormatError(f"Unknown file extension: {format_tag}")

    log.info("Decoding %s...", format_tag)
    try:
        image = Image.open(stream, formats=[PIL_FORMAT_NAMES[format_tag]])
        image.load()
        image = _normalize_mode(image)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
        EOFError,
    ) as e:
        raise DecodeFailureError(f"Error decoding {format_tag} image: {str(e)}") from e

    return PillowImageSource(image)


def load_image_source(
    path: PathLike,
    log: Optional[logging.Logger] = None,
) -> PillowImageSource:
    """
    Open and decode an image file, selecting the decoder by extension.

    Args:
        path: Image file path; '~' is expanded
        log: Optional logger (default: module logger)

    Returns:
        PillowImageSource for the decoded image

    Raises:
        MissingExtensionError: If the path has no extension
        UnsupportedFormatError: If the extension is not decodable
        SourceUnavailableError: If the file cannot be opened or read
        DecodeFailureError: If the file is not a valid image
    """
    log = log or logger

    format_tag = format_tag_for_path(path, SUPPORTED_DECODE_FORMATS)
    file_path = expand_path(path)

    log.info("Reading from file: %s", file_path)
    try:
        handle = open(file_path, "rb")
    except OSError as e:
        raise SourceUnavailableError(f"Error opening file {file_path}: {str(e)}") from e

    with handle:
        return decode_image(handle, format_tag, log=log)


def output_format_for_path(path: PathLike) -> str:
    """Format tag for an output path; paths without an extension get the default."""
    try:
        return format_tag_for_path(path, SUPPORTED_ENCODE_FORMATS)
    except MissingExtensionError:
        return DEFAULT_OUTPUT_FORMAT


def _prepare_for_encoder(image: Any, format_tag: str) -> Any:
    if image.mode in _ENCODER_MODES[format_tag]:
        return image
    if format_tag == "jpeg":
        # JPEG cannot store alpha
        return image.convert("L" if image.mode == "LA" else "RGB")
    return image.convert("RGBA")


def encode_image(
    source: PixelSource,
    stream: BinaryIO,
    format_tag: str,
    quality: int = DEFAULT_JPEG_QUALITY,
    log: Optional[logging.Logger] = None,
) -> None:
    """
    Materialize a pixel source and write it to a stream.

    Args:
        source: Any PixelSource
        stream: Writable binary stream
        format_tag: One of get_supported_encode_formats()
        quality: JPEG quality 1-100 (ignored by other formats)
        log: Optional logger (default: module logger)

    Raises:
        UnsupportedFormatError: If format_tag is not encodable
        EncodeFailureError: If the image is empty or Pillow cannot serialize it
    """
    log = log or logger

    if format_tag not in SUPPORTED_ENCODE_FORMATS:
        raise UnsupportedFormatError(f"Unknown file extension: {format_tag}")

    if source.bounds().empty():
        width, height = source.bounds().size
        raise EncodeFailureError(f"Error encoding {format_tag} image: invalid image size {width}x{height}")

    image = _prepare_for_encoder(materialize(source), format_tag)

    log.info("Encoding %s...", format_tag)
    try:
        image.save(stream, **get_save_kwargs(format_tag, quality))
    except (OSError, ValueError, KeyError) as e:
        raise EncodeFailureError(f"Error encoding {format_tag} image: {str(e)}") from e


def save_image_source(
    source: PixelSource,
    path: PathLike,
    quality: int = DEFAULT_JPEG_QUALITY,
    create_directories: bool = True,
    log: Optional[logging.Logger] = None,
) -> Path:
    """
    Encode a pixel source into a file chosen by its extension.

    A path without an extension is written in the default output format.
    Existing files are overwritten once encoding has succeeded; a failed
    encode leaves them untouched.

    Args:
        source: Any PixelSource
        path: Destination path; '~' is expanded
        quality: JPEG quality 1-100
        create_directories: Create missing parent directories
        log: Optional logger (default: module logger)

    Returns:
        Path where the image was saved

    Raises:
        UnsupportedFormatError: If the extension is not encodable
        SourceUnavailableError: If the file cannot be opened for writing
        EncodeFailureError: If Pillow cannot serialize the image
    """
    log = log or logger

    format_tag = output_format_for_path(path)

    output_file = expand_path(path)

    # The destination is opened only after encoding succeeded
    buffer = io.BytesIO()
    encode_image(source, buffer, format_tag, quality=quality, log=log)

    log.info("Writing to file: %s", output_file)
    try:
        if create_directories:
            output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "wb") as handle:
            handle.write(buffer.getvalue())
    except OSError as e:
        raise SourceUnavailableError(f"Error writing file {output_file}: {str(e)}") from e

    return output_file
