"""Entropy-stage modules: pixel run-length coding and stream statistics."""

from .rle import (
    Run,
    scan_runs,
    rle_encode,
    rle_encode_bytes,
    rle_decode,
    parse_runs,
    count_runs,
    decoded_length,
)
from .statistics import (
    byte_histogram,
    calculate_entropy,
    calculate_average_code_length,
    calculate_coding_efficiency,
    stream_statistics,
)

__all__ = [
    'Run',
    'scan_runs',
    'rle_encode',
    'rle_encode_bytes',
    'rle_decode',
    'parse_runs',
    'count_runs',
    'decoded_length',
    'byte_histogram',
    'calculate_entropy',
    'calculate_average_code_length',
    'calculate_coding_efficiency',
    'stream_statistics',
]
