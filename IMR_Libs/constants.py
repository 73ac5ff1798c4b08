"""
Constants and configuration values for the Image Merger and Resizer.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Command keywords (matched case-insensitively)
COMMAND_SCALE = "scale"
COMMAND_MERGE = "merge"
COMMAND_SEPARATOR = ":"

# Merge defaults
DEFAULT_OFFSET_X = 0
DEFAULT_OFFSET_Y = 0

# Format tags, keyed by lower-case file extension (without the dot)
EXTENSION_FORMAT_TAGS = {
    "bmp": "bmp",
    "gif": "gif",
    "jpeg": "jpeg",
    "jpg": "jpeg",
    "png": "png",
}

# Format tags accepted by each collaborator
SUPPORTED_DECODE_FORMATS = {"bmp", "gif", "jpeg", "png"}
SUPPORTED_ENCODE_FORMATS = {"bmp", "gif", "jpeg", "png"}

# Pillow format names for each tag
PIL_FORMAT_NAMES = {
    "bmp": "BMP",
    "gif": "GIF",
    "jpeg": "JPEG",
    "png": "PNG",
}

# Output defaults
DEFAULT_OUTPUT_FORMAT = "bmp"
DEFAULT_JPEG_QUALITY = 95

# Pillow modes that have a dedicated color model
NATIVE_MODES = {"1", "L", "LA", "RGB", "RGBA", "P"}

# Modes without alpha that are normalised to RGB when decoded;
# every other unsupported mode is normalised to RGBA
OPAQUE_FALLBACK_MODES = {"CMYK", "YCbCr", "RGBX", "LAB", "HSV", "I", "I;16", "F"}

# 16-bit channel range used by Color
CHANNEL_MAX = 0xFFFF

# Logger name used when logging is switched off
SILENT_LOGGER_NAME = "IMR_Libs.silent"
