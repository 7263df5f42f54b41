#!/usr/bin/env python3
"""
Run experiments for Pixel RLE codec evaluation.

Encodes a set of synthetic images (and any image paths given on the
command line), verifies the round trip and writes metrics.json.
"""

import sys
import os
import json
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from pixrle.pixel_buffer import PixelBuffer
from pixrle.codec import PixelImageEncoder, PixelImageDecoder
from pixrle.entropy import stream_statistics
from pixrle.io import read_pixel_buffer, write_pixel_buffer
from pixrle.metrics import (
    calculate_bpp,
    calculate_compression_ratio,
    calculate_space_savings,
    is_lossless,
)


def make_synthetic_images(size: int = 128, seed: int = 42) -> dict:
    """Build synthetic test images covering best and worst cases for RLE."""
    rng = np.random.default_rng(seed)
    images = {}

    images['flat_gray'] = np.full((size, size), 128, dtype=np.uint8)

    stripes = np.zeros((size, size, 3), dtype=np.uint8)
    stripes[size // 4:size // 2] = (255, 0, 0)
    stripes[size // 2:3 * size // 4] = (0, 255, 0)
    stripes[3 * size // 4:] = (0, 0, 255)
    images['horizontal_stripes_rgb'] = stripes

    gradient = np.tile(np.arange(size, dtype=np.uint16) * 255 // max(size - 1, 1),
                       (size, 1)).astype(np.uint8)
    images['horizontal_gradient'] = gradient

    checker = (np.indices((size, size)).sum(axis=0) % 2 * 255).astype(np.uint8)
    images['checkerboard'] = checker

    rgba = np.zeros((size, size, 4), dtype=np.uint8)
    rgba[..., 3] = 255
    rgba[size // 3:2 * size // 3, size // 3:2 * size // 3] = (200, 40, 40, 128)
    images['sprite_rgba'] = rgba

    images['noise_rgb'] = rng.integers(0, 256, (size, size, 3), dtype=np.uint8)

    return {name: PixelBuffer.from_array(array) for name, array in images.items()}


def run_experiment(name: str, pixels: PixelBuffer, encoder, decoder):
    """Run encode/decode experiment on one image."""
    # Encode
    compressed = encoder.encode(pixels)

    # Decode
    recovered = decoder.decode(compressed)

    stats = stream_statistics(pixels)

    return {
        'name': name,
        'width': pixels.width,
        'height': pixels.height,
        'channels': pixels.channels,
        'original_bytes': pixels.nbytes,
        'stream_bytes': encoder.last_stream_size,
        'compressed_bytes': len(compressed),
        'runs': encoder.last_run_count,
        'compression_ratio': round(calculate_compression_ratio(pixels.nbytes, len(compressed)), 4),
        'space_savings_percent': round(calculate_space_savings(pixels.nbytes, len(compressed)), 2),
        'bpp': round(calculate_bpp(len(compressed), pixels.num_pixels), 4),
        'lossless': is_lossless(pixels, recovered),
        'entropy': round(stats['entropy'], 6),
        'average_code_length': round(stats['average_code_length'], 6),
        'coding_efficiency': round(stats['coding_efficiency'], 6),
    }, recovered


def main():
    """Run all experiments."""
    print("=" * 60)
    print("PIXEL RLE CODEC - EXPERIMENT RUNNER")
    print("=" * 60)

    # Configuration
    results_dir = "results"
    images_dir = os.path.join(results_dir, "images")

    # Ensure directories exist
    os.makedirs(images_dir, exist_ok=True)

    images = make_synthetic_images()
    for path in sys.argv[1:]:
        if not os.path.exists(path):
            print(f"Error: Image file not found: {path}")
            sys.exit(1)
        images[os.path.basename(path)] = read_pixel_buffer(path)

    encoder = PixelImageEncoder()
    decoder = PixelImageDecoder()

    all_results = []

    for name, pixels in images.items():
        print(f"\n--- {name} ({pixels.width}x{pixels.height}x{pixels.channels}) ---")

        result, recovered = run_experiment(name, pixels, encoder, decoder)
        all_results.append(result)

        print(f"  Runs:    {result['runs']:,}")
        print(f"  Size:    {result['original_bytes']:,} -> {result['compressed_bytes']:,} bytes")
        print(f"  CR:      {result['compression_ratio']:.2f}x")
        print(f"  BPP:     {result['bpp']:.4f}")
        print(f"  Entropy: {result['entropy']:.4f} bits/byte")
        print(f"  Lossless: {result['lossless']}")

        stem = os.path.splitext(name)[0]
        write_pixel_buffer(pixels, os.path.join(images_dir, f"{stem}_original.png"))
        write_pixel_buffer(recovered, os.path.join(images_dir, f"{stem}_decoded.png"))

    output = {
        "experiment_date": datetime.now().isoformat(),
        "codec_info": {
            "scheme": "Pixel-granular run-length encoding",
            "run_record": "[count:u8][pixel:channels bytes]",
            "max_run_length": 255,
            "container": "PRLE header + stream + CRC-32",
        },
        "results": all_results,
    }

    output_path = os.path.join(results_dir, "metrics.json")
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(output, f, indent=2, ensure_ascii=False)

    print("\n" + "=" * 60)
    print("EXPERIMENT COMPLETE")
    print("=" * 60)
    print(f"\nResults saved to: {output_path}")
    print(f"Images saved to: {images_dir}/")

    # Summary table
    print("\n" + "-" * 72)
    print("SUMMARY TABLE")
    print("-" * 72)
    print(f"{'Image':<24} {'Runs':>8} {'CR':>9} {'Entropy':>9} {'ACL':>8} {'Eff':>7}")
    print("-" * 72)
    for r in all_results:
        print(f"{r['name']:<24} {r['runs']:>8} {r['compression_ratio']:>8.2f}x "
              f"{r['entropy']:>9.4f} {r['average_code_length']:>8.4f} "
              f"{r['coding_efficiency']:>7.4f}")
    print("-" * 72)

    return 0 if all(r['lossless'] for r in all_results) else 1


if __name__ == "__main__":
    sys.exit(main())
