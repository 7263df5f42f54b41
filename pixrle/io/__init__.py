"""I/O modules for the pixel RLE codec."""

from .image_reader import read_pixel_buffer, read_compressed_stream
from .image_writer import write_pixel_buffer, save_compressed_stream
from .container import pack_header, unpack_header, wrap_stream, unwrap_stream

__all__ = [
    'read_pixel_buffer',
    'read_compressed_stream',
    'write_pixel_buffer',
    'save_compressed_stream',
    'pack_header',
    'unpack_header',
    'wrap_stream',
    'unwrap_stream',
]
