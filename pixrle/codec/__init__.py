"""Codec modules for the pixel RLE codec."""

from .encoder import PixelImageEncoder
from .decoder import PixelImageDecoder

__all__ = [
    'PixelImageEncoder',
    'PixelImageDecoder',
]
