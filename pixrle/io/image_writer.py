"""Image writer for pixel buffers."""

import numpy as np
from pathlib import Path

from ..constants import DEFAULT_IMAGE_FORMAT
from ..pixel_buffer import PixelBuffer


def write_pixel_buffer(pixels: PixelBuffer, path: str, format: str = None) -> Path:
    """
    Write a pixel buffer to file.

    Args:
        pixels: Pixel buffer to write
        path: Output file path
        format: 'npy', 'raw', or a Pillow format name ('png', 'bmp', ...).
                Auto-detected from extension if None.

    Returns:
        Path actually written

    Raises:
        ValueError: If the buffer cannot be stored in the requested format
    """
    path = Path(path)

    # Auto-detect format from extension
    if format is None:
        suffix = path.suffix.lower().lstrip('.')
        if suffix:
            format = suffix
        else:
            format = DEFAULT_IMAGE_FORMAT
            path = path.with_suffix('.' + DEFAULT_IMAGE_FORMAT)

    format = format.lower()
    if format == 'npy':
        _write_numpy(pixels, path)
    elif format == 'raw':
        _write_raw(pixels, path)
    else:
        _write_raster(pixels, path, format)

    return path


def _write_numpy(pixels: PixelBuffer, path: Path) -> None:
    """Write pixels as a NumPy array."""
    np.save(str(path), pixels.to_array())


def _write_raw(pixels: PixelBuffer, path: Path) -> None:
    """Write pixels as raw interleaved bytes."""
    with open(path, 'wb') as f:
        f.write(pixels.data)


def _write_raster(pixels: PixelBuffer, path: Path, format: str) -> None:
    """Encode pixels with Pillow."""
    from PIL import Image

    if pixels.channels > 4:
        raise ValueError(f"Cannot store {pixels.channels} channels as {format}")

    fmt = Image.registered_extensions().get('.' + format, format.upper())
    Image.fromarray(pixels.to_array().copy()).save(path, format=fmt)


def save_compressed_stream(path: str, stream: bytes) -> None:
    """Write a bare compressed stream (no container) to disk."""
    with open(path, 'wb') as f:
        f.write(stream)
