"""Pixel Image Decoder - Restores a pixel buffer from a container."""

from ..pixel_buffer import PixelBuffer
from ..errors import CorruptStreamError
from ..io.container import unwrap_stream
from ..entropy import rle_decode


class PixelImageDecoder:
    """
    Decoder for 8-bit multi-channel images.

    Pipeline (reverse of encoder):
    1. Unpack header
    2. Verify CRC
    3. Expand runs
    4. Check decoded size against the header dimensions
    """

    def decode(self, data: bytes) -> PixelBuffer:
        """
        Decode a container into a pixel buffer.

        Args:
            data: Container bytes produced by PixelImageEncoder.encode

        Returns:
            Reconstructed PixelBuffer

        Raises:
            ContainerError: If the header or CRC is invalid
            CorruptStreamError: If the payload does not decode to the declared size
        """
        header, payload = unwrap_stream(data)
        return self.decode_stream(payload, header['width'], header['height'],
                                  header['channels'])

    def decode_stream(self, stream: bytes, width: int, height: int,
                      channels: int) -> PixelBuffer:
        """
        Decode a bare compressed stream with out-of-band dimensions.

        Raises:
            CorruptStreamError: If the stream is malformed or the size is wrong
        """
        data = rle_decode(stream, channels)

        expected = width * height * channels
        if len(data) != expected:
            raise CorruptStreamError(
                f"Decoded size mismatch: expected {expected} bytes "
                f"({width}x{height}x{channels}), got {len(data)}")

        return PixelBuffer(width, height, channels, data)
