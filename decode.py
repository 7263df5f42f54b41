#!/usr/bin/env python3
"""
Pixel RLE Decoder CLI

Usage:
    python decode.py --input <path> --output <path>

Example:
    python decode.py --input logo.prle --output recovered.png --reference data/logo.png
"""

import argparse
import sys
import os
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from pixrle.io import read_pixel_buffer, write_pixel_buffer
from pixrle.codec import PixelImageDecoder
from pixrle.metrics import calculate_rmse, is_lossless


def main():
    parser = argparse.ArgumentParser(
        description='Pixel RLE Decoder - Decompress run-length coded images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Decode to PNG
  python decode.py --input logo.prle --output recovered.png

  # Decode and verify against the original image
  python decode.py --input logo.prle --output recovered.png --reference data/logo.png

  # Decode to raw format
  python decode.py --input logo.prle --output recovered.raw --format raw
        """
    )

    # Required arguments
    parser.add_argument('--input', '-i', required=True,
                        help='Input compressed file path (.prle)')
    parser.add_argument('--output', '-o', required=True,
                        help='Output image path (.png, .npy, .raw, ...)')

    # Optional arguments
    parser.add_argument('--format', '-f',
                        help='Output format (default: from extension, else png)')
    parser.add_argument('--reference', '-R',
                        help='Original image to check the round trip against')
    parser.add_argument('--ref-width', type=int,
                        help='Reference width (required for a raw reference)')
    parser.add_argument('--ref-height', type=int,
                        help='Reference height (required for a raw reference)')
    parser.add_argument('--ref-channels', type=int,
                        help='Reference bytes per pixel (required for a raw reference)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    args = parser.parse_args()

    # Check input file exists
    if not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    # Load reference image
    reference = None
    if args.reference:
        try:
            reference = read_pixel_buffer(args.reference, width=args.ref_width,
                                          height=args.ref_height,
                                          channels=args.ref_channels)
        except Exception as e:
            print(f"Error: Cannot read reference image {args.reference} - {e}",
                  file=sys.stderr)
            sys.exit(1)

    try:
        if args.verbose:
            print(f"Reading compressed file: {args.input}")

        start_time = time.time()

        with open(args.input, 'rb') as f:
            compressed = f.read()

        if args.verbose:
            print(f"  Compressed size: {len(compressed):,} bytes")
            print("Decoding...")

        decoder = PixelImageDecoder()
        pixels = decoder.decode(compressed)

        elapsed = time.time() - start_time

        if args.verbose:
            print("\nReconstructed image:")
            print(f"  Size: {pixels.width}x{pixels.height}")
            print(f"  Channels: {pixels.channels}")

        output_path = write_pixel_buffer(pixels, args.output, format=args.format)

        if args.verbose:
            print(f"  Output size: {pixels.nbytes:,} bytes")
            print(f"  Decoding time: {elapsed:.2f}s")
            print(f"\nOutput written to: {output_path}")
        else:
            print(f"Decoded: {args.input} -> {output_path} "
                  f"({pixels.width}x{pixels.height}x{pixels.channels})")

        if reference is not None:
            if not is_lossless(reference, pixels):
                if reference.shape == pixels.shape:
                    rmse = calculate_rmse(reference, pixels)
                    detail = f"RMSE {rmse:.4f}"
                else:
                    detail = f"shape {pixels.shape} != {reference.shape}"
                print(f"Error: Decoded image differs from reference ({detail})",
                      file=sys.stderr)
                sys.exit(1)
            print(f"Verified: lossless match with {args.reference}")

    except ValueError as e:
        print(f"Error: Invalid compressed file - {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
