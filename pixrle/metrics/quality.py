"""Comparison metrics for codec evaluation."""

import numpy as np

from ..pixel_buffer import PixelBuffer


def _as_array(image) -> np.ndarray:
    if isinstance(image, PixelBuffer):
        return image.to_array()
    return np.asarray(image)


def calculate_rmse(original, reconstructed) -> float:
    """
    Calculate Root Mean Squared Error (RMSE).

    Args:
        original: Original image (PixelBuffer or array)
        reconstructed: Reconstructed image (PixelBuffer or array)

    Returns:
        RMSE value (0.0 for a lossless round trip)
    """
    diff = _as_array(original).astype(np.float64) - _as_array(reconstructed).astype(np.float64)
    if diff.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(diff ** 2)))


def is_lossless(original: PixelBuffer, reconstructed: PixelBuffer) -> bool:
    """Check that dimensions, channels and every byte match."""
    return original == reconstructed


def calculate_bpp(compressed_size: int, num_pixels: int) -> float:
    """
    Calculate Bits Per Pixel (BPP).

    Args:
        compressed_size: Size of compressed data in bytes
        num_pixels: Number of pixels (width * height)

    Returns:
        BPP value
    """
    if num_pixels == 0:
        return 0.0
    return (compressed_size * 8) / num_pixels


def calculate_compression_ratio(original_size: int, compressed_size: int) -> float:
    """
    Calculate compression ratio.

    Args:
        original_size: Size of original data in bytes
        compressed_size: Size of compressed data in bytes

    Returns:
        Compression ratio (original / compressed)
    """
    if compressed_size == 0:
        return float('inf')
    return original_size / compressed_size


def calculate_space_savings(original_size: int, compressed_size: int) -> float:
    """Space savings in percent; negative when the stream grew."""
    if original_size == 0:
        return 0.0
    return (1 - compressed_size / original_size) * 100


def generate_error_map(original, reconstructed) -> np.ndarray:
    """
    Generate absolute error map between original and reconstructed images.

    Returns:
        Absolute error map as uint8 array with the image's shape
    """
    diff = _as_array(original).astype(np.int16) - _as_array(reconstructed).astype(np.int16)
    return np.abs(diff).astype(np.uint8)
