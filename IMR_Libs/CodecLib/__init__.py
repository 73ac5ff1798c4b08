"""
CodecLib - Raster file decoding and encoding

This module selects codecs by file extension and converts between
files and pixel sources using Pillow.
"""

from IMR_Libs.CodecLib.image_codecs import (
    get_supported_decode_formats,
    get_supported_encode_formats,
    expand_path,
    get_extension,
    format_tag_for_path,
    output_format_for_path,
    get_save_kwargs,
    decode_image,
    load_image_source,
    encode_image,
    save_image_source,
)

__all__ = [
    "get_supported_decode_formats",
    "get_supported_encode_formats",
    "expand_path",
    "get_extension",
    "format_tag_for_path",
    "output_format_for_path",
    "get_save_kwargs",
    "decode_image",
    "load_image_source",
    "encode_image",
    "save_image_source",
]
