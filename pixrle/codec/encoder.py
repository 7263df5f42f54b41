"""Pixel Image Encoder - Run-length codes a pixel buffer into a container."""

from ..pixel_buffer import PixelBuffer
from ..io.container import wrap_stream
from ..entropy import rle_encode, count_runs


class PixelImageEncoder:
    """
    Encoder for 8-bit multi-channel images.

    Pipeline:
    1. Scan pixel windows into runs
    2. Serialize runs as [count][pixel bytes]
    3. Frame with header (dimensions, channels) and CRC-32
    """

    def __init__(self):
        self.last_stream_size = 0
        self.last_run_count = 0

    def encode_stream(self, pixels: PixelBuffer) -> bytes:
        """
        Encode pixels into a bare compressed stream (no container).

        Args:
            pixels: Source pixel buffer

        Returns:
            Compressed stream bytes
        """
        stream = rle_encode(pixels)

        self.last_stream_size = len(stream)
        self.last_run_count = count_runs(stream, pixels.channels)
        return stream

    def encode(self, pixels: PixelBuffer) -> bytes:
        """
        Encode pixels into a self-describing container.

        Args:
            pixels: Source pixel buffer

        Returns:
            Header + compressed stream + CRC as bytes
        """
        stream = self.encode_stream(pixels)
        return wrap_stream(stream, pixels.width, pixels.height, pixels.channels)
