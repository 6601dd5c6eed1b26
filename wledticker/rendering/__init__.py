"""Rendering utilities for the LED matrix ticker."""

from wledticker.rendering.color import ColorGenerator, ColorSettings, quantize
from wledticker.rendering.compositor import PixelBuffer, paint
from wledticker.rendering.emulator import buffer_to_image, save_frame
from wledticker.rendering.font import glyph_of
from wledticker.rendering.rasterizer import rasterize

__all__ = [
    "ColorGenerator",
    "ColorSettings",
    "PixelBuffer",
    "buffer_to_image",
    "glyph_of",
    "paint",
    "quantize",
    "rasterize",
    "save_frame",
]
