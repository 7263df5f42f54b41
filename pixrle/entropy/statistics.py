"""Information-theoretic statistics over the raw byte stream."""

import numpy as np

from ..constants import NUM_SYMBOLS
from ..errors import EmptyInputError
from ..pixel_buffer import PixelBuffer


def _as_bytes(pixels) -> bytes:
    if isinstance(pixels, PixelBuffer):
        return pixels.data
    return bytes(pixels)


def byte_histogram(pixels) -> np.ndarray:
    """
    Count occurrences of every byte value.

    Channels and spatial position are ignored; the whole flat buffer is
    treated as one stream of byte symbols.

    Args:
        pixels: PixelBuffer or bytes-like object

    Returns:
        Array of NUM_SYMBOLS counts (int64)
    """
    values = np.frombuffer(_as_bytes(pixels), dtype=np.uint8)
    return np.bincount(values, minlength=NUM_SYMBOLS).astype(np.int64)


def _probabilities(pixels) -> np.ndarray:
    """Probabilities of the byte values that actually occur."""
    histogram = byte_histogram(pixels)
    total = histogram.sum()
    if total == 0:
        raise EmptyInputError("Cannot compute statistics of an empty buffer")

    counts = histogram[histogram > 0]
    return counts / total


def calculate_entropy(pixels) -> float:
    """
    Calculate the Shannon entropy of the byte stream.

    H = -sum(p_i * log2(p_i)) over byte values with p_i > 0

    Args:
        pixels: PixelBuffer or bytes-like object

    Returns:
        Entropy in bits per byte, in [0, 8]

    Raises:
        EmptyInputError: If the buffer is empty
    """
    p = _probabilities(pixels)
    return float(np.sum(p * np.log2(1.0 / p)))


def calculate_average_code_length(pixels) -> float:
    """
    Calculate the idealized average code length of the byte stream.

    L = sum(p_i * (1 + log2(1 / p_i))), i.e. each symbol is charged one
    bit more than its self-information. No code is actually built.

    Raises:
        EmptyInputError: If the buffer is empty
    """
    p = _probabilities(pixels)
    return float(np.sum(p * (1.0 + np.log2(1.0 / p))))


def calculate_coding_efficiency(pixels) -> float:
    """
    Calculate coding efficiency = entropy / average code length.

    The average code length of a non-empty buffer is at least 1 bit, so
    the ratio is always defined and lies in [0, 1).

    Raises:
        EmptyInputError: If the buffer is empty
    """
    return calculate_entropy(pixels) / calculate_average_code_length(pixels)


def stream_statistics(pixels) -> dict:
    """
    Compute all stream statistics in one pass over the histogram.

    Returns:
        Dictionary with 'entropy', 'average_code_length',
        'coding_efficiency', 'symbols_used' and 'total_bytes'

    Raises:
        EmptyInputError: If the buffer is empty
    """
    histogram = byte_histogram(pixels)
    total = int(histogram.sum())
    if total == 0:
        raise EmptyInputError("Cannot compute statistics of an empty buffer")

    p = histogram[histogram > 0] / total
    information = np.log2(1.0 / p)
    entropy = float(np.sum(p * information))
    average_code_length = float(np.sum(p * (1.0 + information)))

    return {
        'entropy': entropy,
        'average_code_length': average_code_length,
        'coding_efficiency': entropy / average_code_length,
        'symbols_used': int(np.count_nonzero(histogram)),
        'total_bytes': total,
    }
