"""
IMR_Libs - Image Merger and Resizer Library Modules

This package contains core functionality for the Image Merger and Resizer,
organized into specialized sub-packages:

- PixelSourceLib: Lazy pixel sources (decoded images, scale and composite views)
- CodecLib: Decoding and encoding of raster files through Pillow
- TransformLib: Command parsing, transform dispatch and the end-to-end runner
"""

__version__ = "0.1.0"
