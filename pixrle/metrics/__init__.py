"""Quality metrics for the pixel RLE codec."""

from .quality import (
    calculate_rmse,
    is_lossless,
    calculate_bpp,
    calculate_compression_ratio,
    calculate_space_savings,
    generate_error_map,
)

__all__ = [
    'calculate_rmse',
    'is_lossless',
    'calculate_bpp',
    'calculate_compression_ratio',
    'calculate_space_savings',
    'generate_error_map',
]
