"""Checkpoint 5: CLI Verification."""

import sys
import os
import subprocess
import tempfile

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from pixrle.pixel_buffer import PixelBuffer
from pixrle.io import read_pixel_buffer, write_pixel_buffer, read_compressed_stream
from pixrle.entropy import rle_decode
from pixrle.constants import CONTAINER_EXTENSION

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ENCODE = os.path.join(PROJECT_ROOT, 'encode.py')
DECODE = os.path.join(PROJECT_ROOT, 'decode.py')


def run_command(args):
    """Run a Python script and return (returncode, stdout, stderr)."""
    result = subprocess.run(
        [sys.executable] + args,
        capture_output=True,
        text=True,
        encoding='utf-8',
    )
    return result.returncode, result.stdout, result.stderr


def create_test_png(path: str, channels: int = 3) -> PixelBuffer:
    """Write a small striped image and return its pixels."""
    array = np.zeros((32, 48, channels), dtype=np.uint8)
    array[:, 16:32] = 200
    array[8:16] = 50
    pixels = PixelBuffer.from_array(array)
    write_pixel_buffer(pixels, path)
    return pixels


def test_encode_decode_roundtrip():
    """Test basic encode/decode CLI roundtrip."""
    print("=" * 60)
    print("Test 1: Encode/Decode CLI Roundtrip")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        for channels in (1, 3, 4):
            input_path = os.path.join(tmp, f"input_{channels}.png")
            compressed_path = os.path.join(tmp, f"out_{channels}.prle")
            output_path = os.path.join(tmp, f"decoded_{channels}.png")
            original = create_test_png(input_path, channels)

            code, stdout, stderr = run_command(
                [ENCODE, '-i', input_path, '-o', compressed_path])
            assert code == 0, f"Encode failed: {stderr}"
            assert 'Encoded:' in stdout

            code, stdout, stderr = run_command(
                [DECODE, '-i', compressed_path, '-o', output_path, '-R', input_path])
            assert code == 0, f"Decode failed: {stderr}"
            assert 'Verified: lossless' in stdout

            assert read_pixel_buffer(output_path) == original
            print(f"   ✓ {channels} channel(s): PNG -> PRLE -> PNG lossless")

    print("✅ Encode/decode CLI roundtrip test passed")


def test_stats_and_raw_stream():
    """Test --stats output and the bare stream side output."""
    print("\n" + "=" * 60)
    print("Test 2: Statistics and Raw Stream Output")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        input_path = os.path.join(tmp, "input.png")
        original = create_test_png(input_path, 3)
        raw_stream_path = os.path.join(tmp, "compressed_input.bin")

        code, stdout, stderr = run_command(
            [ENCODE, '-i', input_path, '-o', os.path.join(tmp, 'out.prle'),
             '--stats', '--raw-output', raw_stream_path, '--verbose'])
        assert code == 0, f"Encode failed: {stderr}"

        for label in ('Entropy:', 'Average code length:', 'Coding efficiency:'):
            assert label in stdout, f"Missing '{label}' in output"
        print("   ✓ Entropy, average code length and efficiency printed")

        stream = read_compressed_stream(raw_stream_path)
        assert rle_decode(stream, 3) == original.data
        print("   ✓ Raw stream decodes to the original pixels")

    print("✅ Statistics and raw stream test passed")


def test_raw_input_and_npy_output():
    """Test raw input with explicit dimensions and npy output."""
    print("\n" + "=" * 60)
    print("Test 3: Raw Input / NPY Output")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        raw_path = os.path.join(tmp, "frame.raw")
        data = bytes([1, 2] * 30 + [3, 4] * 30)
        with open(raw_path, 'wb') as f:
            f.write(data)

        compressed_path = os.path.join(tmp, "frame.prle")
        code, _, stderr = run_command([ENCODE, '-i', raw_path, '-o', compressed_path])
        assert code == 1 and '--width' in stderr
        print("   ✓ Missing raw dimensions rejected")

        code, _, stderr = run_command(
            [ENCODE, '-i', raw_path, '-o', compressed_path,
             '-W', '10', '-H', '6', '-c', '2'])
        assert code == 0, f"Encode failed: {stderr}"

        npy_path = os.path.join(tmp, "frame.npy")
        code, _, stderr = run_command([DECODE, '-i', compressed_path, '-o', npy_path])
        assert code == 0, f"Decode failed: {stderr}"

        restored = read_pixel_buffer(npy_path)
        assert restored == PixelBuffer(10, 6, 2, data)
        print("   ✓ Raw -> PRLE -> NPY lossless")

    print("✅ Raw input / NPY output test passed")


def test_error_handling():
    """Test CLI error exits."""
    print("\n" + "=" * 60)
    print("Test 4: Error Handling")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        code, _, stderr = run_command(
            [ENCODE, '-i', os.path.join(tmp, 'missing.png'), '-o', os.path.join(tmp, 'x.prle')])
        assert code == 1 and 'not found' in stderr
        print("   ✓ Missing input file")

        bogus = os.path.join(tmp, 'bogus.prle')
        with open(bogus, 'wb') as f:
            f.write(b'NOTAPRLEFILE' * 3)
        code, _, stderr = run_command([DECODE, '-i', bogus, '-o', os.path.join(tmp, 'x.png')])
        assert code == 1 and 'Invalid compressed file' in stderr
        print("   ✓ Invalid container")

        input_path = os.path.join(tmp, "input.png")
        create_test_png(input_path, 3)
        compressed_path = os.path.join(tmp, "out.prle")
        code, _, stderr = run_command([ENCODE, '-i', input_path, '-o', compressed_path])
        assert code == 0, f"Encode failed: {stderr}"

        other_path = os.path.join(tmp, "other.png")
        write_pixel_buffer(PixelBuffer.from_array(np.full((32, 48, 3), 9, dtype=np.uint8)),
                           other_path)
        code, _, stderr = run_command(
            [DECODE, '-i', compressed_path, '-o', os.path.join(tmp, 'y.png'), '-R', other_path])
        assert code == 1 and 'differs from reference' in stderr
        print("   ✓ Reference mismatch reported")

    print("✅ Error handling test passed")


def test_default_extension_and_raw_reference():
    """Test the default container suffix and raw reference images."""
    print("\n" + "=" * 60)
    print("Test 5: Default Extension / Raw Reference")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        raw_path = os.path.join(tmp, "frame.raw")
        data = bytes([7, 7, 7] * 20 + [1, 2, 3] * 20)
        with open(raw_path, 'wb') as f:
            f.write(data)

        stem = os.path.join(tmp, "frame_out")
        code, stdout, stderr = run_command(
            [ENCODE, '-i', raw_path, '-o', stem, '-W', '8', '-H', '5', '-c', '3'])
        assert code == 0, f"Encode failed: {stderr}"
        compressed_path = stem + CONTAINER_EXTENSION
        assert os.path.exists(compressed_path)
        assert not os.path.exists(stem)
        print(f"   ✓ Output written with {CONTAINER_EXTENSION} suffix")

        output_path = os.path.join(tmp, "decoded.raw")
        code, _, stderr = run_command(
            [DECODE, '-i', compressed_path, '-o', output_path, '-R', raw_path])
        assert code == 1
        assert 'Cannot read reference image' in stderr
        assert 'Invalid compressed file' not in stderr
        print("   ✓ Raw reference without dimensions reported as a reference error")

        code, stdout, stderr = run_command(
            [DECODE, '-i', compressed_path, '-o', output_path, '-R', raw_path,
             '--ref-width', '8', '--ref-height', '5', '--ref-channels', '3'])
        assert code == 0, f"Decode failed: {stderr}"
        assert 'Verified: lossless' in stdout
        print("   ✓ Raw reference with dimensions verified")

    print("✅ Default extension / raw reference test passed")


def _run(name, test):
    try:
        test()
        return (name, True)
    except Exception as e:
        print(f"❌ {name} failed: {e}")
        return (name, False)


def main():
    """Run all Checkpoint 5 tests."""
    print("\n" + "=" * 60)
    print("CHECKPOINT 5: CLI VERIFICATION")
    print("=" * 60 + "\n")

    results = [
        _run("Encode/Decode CLI Roundtrip", test_encode_decode_roundtrip),
        _run("Statistics and Raw Stream", test_stats_and_raw_stream),
        _run("Raw Input / NPY Output", test_raw_input_and_npy_output),
        _run("Error Handling", test_error_handling),
        _run("Default Extension / Raw Reference", test_default_extension_and_raw_reference),
    ]

    # Summary
    print("\n" + "=" * 60)
    print("CHECKPOINT 5 SUMMARY")
    print("=" * 60)

    all_passed = True
    for name, passed in results:
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"   {name}: {status}")
        if not passed:
            all_passed = False

    print("\n" + "=" * 60)
    if all_passed:
        print("🎉 CHECKPOINT 5 PASSED - All tests successful!")
    else:
        print("⚠️  CHECKPOINT 5 FAILED - Some tests did not pass")
    print("=" * 60 + "\n")

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
