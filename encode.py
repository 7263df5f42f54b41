#!/usr/bin/env python3
"""
Pixel RLE Encoder CLI

Usage:
    python encode.py --input <path> --output <path> [--stats]

Example:
    python encode.py --input data/logo.png --output logo.prle --stats
"""

import argparse
import sys
import os
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from pixrle.io import read_pixel_buffer, save_compressed_stream, wrap_stream
from pixrle.codec import PixelImageEncoder
from pixrle.entropy import stream_statistics
from pixrle.metrics import calculate_bpp, calculate_compression_ratio
from pixrle.constants import CONTAINER_EXTENSION


def main():
    parser = argparse.ArgumentParser(
        description='Pixel RLE Encoder - Lossless run-length compression for images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Encode a PNG file
  python encode.py --input data/logo.png --output logo.prle

  # Encode and report entropy / average code length / coding efficiency
  python encode.py --input data/logo.png --output logo.prle --stats

  # Encode raw file (requires dimensions)
  python encode.py --input data/frame.raw --output frame.prle \\
      --width 640 --height 480 --channels 3
        """
    )

    # Required arguments
    parser.add_argument('--input', '-i', required=True,
                        help='Input image path (.png, .bmp, ..., .npy, or .raw)')
    parser.add_argument('--output', '-o', required=True,
                        help=f'Output compressed file path ({CONTAINER_EXTENSION} added if no extension)')

    # Optional arguments
    parser.add_argument('--raw-output', '-r',
                        help='Also write the bare run stream (no header) to this path')
    parser.add_argument('--stats', '-s', action='store_true',
                        help='Print entropy, average code length and coding efficiency')
    parser.add_argument('--width', '-W', type=int,
                        help='Image width (required for raw files)')
    parser.add_argument('--height', '-H', type=int,
                        help='Image height (required for raw files)')
    parser.add_argument('--channels', '-c', type=int,
                        help='Bytes per pixel (required for raw files)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    args = parser.parse_args()

    # Check input file exists
    if not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    # Default container extension
    if not os.path.splitext(args.output)[1]:
        args.output += CONTAINER_EXTENSION

    # Check raw file requirements
    input_ext = os.path.splitext(args.input)[1].lower()
    if input_ext == '.raw':
        if args.width is None or args.height is None or args.channels is None:
            print("Error: --width, --height and --channels are required for raw files",
                  file=sys.stderr)
            sys.exit(1)

    try:
        if args.verbose:
            print(f"Reading input: {args.input}")

        start_time = time.time()

        pixels = read_pixel_buffer(args.input, width=args.width,
                                   height=args.height, channels=args.channels)

        if args.verbose:
            print(f"  Size: {pixels.width}x{pixels.height}")
            print(f"  Channels: {pixels.channels}")
            print(f"  Bytes: {pixels.nbytes:,}")
            print("Compressing image...")

        encoder = PixelImageEncoder()
        stream = encoder.encode_stream(pixels)
        compressed = wrap_stream(stream, pixels.width, pixels.height, pixels.channels)

        with open(args.output, 'wb') as f:
            f.write(compressed)

        if args.raw_output:
            save_compressed_stream(args.raw_output, stream)

        elapsed = time.time() - start_time

        original_size = pixels.nbytes
        compressed_size = len(compressed)
        bpp = calculate_bpp(compressed_size, pixels.num_pixels)
        cr = calculate_compression_ratio(original_size, compressed_size)

        if args.verbose:
            print("\nResults:")
            print(f"  Original size:   {original_size:,} bytes")
            print(f"  Stream size:     {encoder.last_stream_size:,} bytes "
                  f"({encoder.last_run_count:,} runs)")
            print(f"  Compressed size: {compressed_size:,} bytes")
            print(f"  Compression ratio: {cr:.2f}x")
            print(f"  Bits per pixel: {bpp:.3f}")
            print(f"  Encoding time: {elapsed:.2f}s")
            print(f"\nOutput written to: {args.output}")
            if args.raw_output:
                print(f"Raw stream written to: {args.raw_output}")
        else:
            print(f"Encoded: {args.input} -> {args.output} "
                  f"({cr:.1f}x compression, {bpp:.3f} bpp)")

        if args.stats:
            if pixels.nbytes == 0:
                print("Statistics skipped: empty image")
            else:
                stats = stream_statistics(pixels)
                print(f"Entropy: {stats['entropy']:.6f}")
                print(f"Average code length: {stats['average_code_length']:.6f}")
                print(f"Coding efficiency: {stats['coding_efficiency']:.6f}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
