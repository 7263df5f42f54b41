"""In-memory multi-channel pixel buffer."""

import numpy as np

from .errors import InvalidInputError


class PixelBuffer:
    """
    Flat, interleaved 8-bit pixel data with its dimensions.

    Layout is row-major with channels interleaved, i.e. the bytes of
    pixel (y, x) are data[(y * width + x) * channels : ... + channels].
    The buffer is never modified by the codec or the statistics.
    """

    __slots__ = ('width', 'height', 'channels', 'data')

    def __init__(self, width: int, height: int, channels: int, data):
        """
        Initialize a pixel buffer.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            channels: Bytes per pixel (>= 1)
            data: Bytes-like object of length width * height * channels

        Raises:
            InvalidInputError: If dimensions and data length disagree
        """
        if channels < 1:
            raise InvalidInputError(f"Channels must be >= 1, got {channels}")
        if width < 0 or height < 0:
            raise InvalidInputError(f"Invalid dimensions: {width}x{height}")

        data = bytes(data)
        if len(data) % channels != 0:
            raise InvalidInputError(
                f"Data length {len(data)} is not a multiple of {channels} channels")

        expected = width * height * channels
        if len(data) != expected:
            raise InvalidInputError(
                f"Data size mismatch. Expected {expected}, got {len(data)}")

        self.width = width
        self.height = height
        self.channels = channels
        self.data = data

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'PixelBuffer':
        """
        Build a buffer from a uint8 array of shape (H, W) or (H, W, C).

        Raises:
            InvalidInputError: If the array is not uint8 or has the wrong rank
        """
        array = np.asarray(array)
        if array.dtype != np.uint8:
            raise InvalidInputError(f"Expected uint8 array, got {array.dtype}")

        if array.ndim == 2:
            height, width = array.shape
            channels = 1
        elif array.ndim == 3:
            height, width, channels = array.shape
        else:
            raise InvalidInputError(f"Expected 2D or 3D array, got {array.ndim}D")

        return cls(width, height, channels, np.ascontiguousarray(array).tobytes())

    def to_array(self) -> np.ndarray:
        """Return the pixels as a read-only (H, W) or (H, W, C) uint8 array."""
        flat = np.frombuffer(self.data, dtype=np.uint8)
        if self.channels == 1:
            return flat.reshape((self.height, self.width))
        return flat.reshape((self.height, self.width, self.channels))

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    @property
    def nbytes(self) -> int:
        return len(self.data)

    @property
    def shape(self) -> tuple:
        return (self.height, self.width, self.channels)

    def __len__(self):
        return len(self.data)

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self.channels == other.channels and self.data == other.data)

    def __repr__(self):
        return (f"PixelBuffer(width={self.width}, height={self.height}, "
                f"channels={self.channels}, nbytes={self.nbytes})")
