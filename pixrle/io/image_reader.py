"""Image reader producing pixel buffers from raster, NumPy and raw files."""

import numpy as np
from pathlib import Path

from ..pixel_buffer import PixelBuffer

# Pillow modes kept with their native channel count
NATIVE_MODES = {'L': 1, 'LA': 2, 'RGB': 3, 'RGBA': 4}


def read_pixel_buffer(path: str, width: int = None, height: int = None,
                      channels: int = None) -> PixelBuffer:
    """
    Read an image into a pixel buffer.

    Args:
        path: Path to the image file (.npy, .raw, or any Pillow format)
        width: Image width (required for .raw files)
        height: Image height (required for .raw files)
        channels: Bytes per pixel (required for .raw files)

    Returns:
        PixelBuffer with 8-bit interleaved pixels

    Raises:
        ValueError: If format is unsupported or parameters are missing
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == '.npy':
        return _read_numpy(path)
    elif suffix == '.raw':
        if width is None or height is None or channels is None:
            raise ValueError("Width, height and channels are required for .raw files")
        return _read_raw(path, width, height, channels)
    else:
        return _read_raster(path)


def _read_raster(path: Path) -> PixelBuffer:
    """Decode a PNG/BMP/JPEG/... file with Pillow, keeping native channels."""
    from PIL import Image

    with Image.open(path) as img:
        if img.mode.startswith('I'):
            # 16-bit gray (I;16, I;16B, I): keep the high byte, single channel
            wide = np.clip(np.asarray(img).astype(np.int64), 0, 0xFFFF)
            return PixelBuffer.from_array((wide >> 8).astype(np.uint8))

        if img.mode == '1':
            img = img.convert('L')
        elif img.mode not in NATIVE_MODES:
            has_alpha = 'A' in img.getbands() or 'transparency' in img.info
            img = img.convert('RGBA' if has_alpha else 'RGB')
        array = np.asarray(img, dtype=np.uint8)

    return PixelBuffer.from_array(array)


def _read_numpy(path: Path) -> PixelBuffer:
    """Read a NumPy array file of uint8 pixels."""
    data = np.load(str(path))

    if data.ndim not in (2, 3):
        raise ValueError(f"Expected 2D or 3D array, got {data.ndim}D")

    if data.dtype != np.uint8:
        raise ValueError(f"Expected uint8 pixels, got {data.dtype}")

    return PixelBuffer.from_array(data)


def _read_raw(path: Path, width: int, height: int, channels: int) -> PixelBuffer:
    """Read a raw interleaved 8-bit file."""
    with open(path, 'rb') as f:
        data = f.read()

    expected_size = width * height * channels
    if len(data) != expected_size:
        raise ValueError(f"Data size mismatch. Expected {expected_size}, got {len(data)}")

    return PixelBuffer(width, height, channels, data)


def read_compressed_stream(path: str) -> bytes:
    """Read a bare compressed stream (no container) from disk."""
    with open(path, 'rb') as f:
        return f.read()
