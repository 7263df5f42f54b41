"""Run-Length Encoding over pixel windows."""

from typing import Iterator, NamedTuple, Tuple
import numpy as np

from ..constants import MAX_RUN_LENGTH, RUN_COUNT_SIZE
from ..errors import InvalidInputError, CorruptStreamError
from ..pixel_buffer import PixelBuffer


class Run(NamedTuple):
    """A repetition of one pixel value, serialized as [count] ++ pixel."""

    count: int
    pixel: bytes

    def to_bytes(self) -> bytes:
        return bytes([self.count]) + self.pixel


def _check_channels(channels: int) -> None:
    if channels < 1:
        raise InvalidInputError(f"Channels must be >= 1, got {channels}")


def _pixel_windows(data, channels: int) -> np.ndarray:
    """View a flat byte buffer as an (N, channels) array of pixel windows."""
    _check_channels(channels)
    flat = np.frombuffer(bytes(data), dtype=np.uint8)
    if len(flat) % channels != 0:
        raise InvalidInputError(
            f"Data length {len(flat)} is not a multiple of {channels} channels")
    return flat.reshape(-1, channels)


def _find_runs(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Locate runs of byte-equal pixel windows.

    A maximal repetition longer than MAX_RUN_LENGTH is split into
    consecutive runs of MAX_RUN_LENGTH followed by the remainder.

    Args:
        pixels: (N, channels) uint8 array

    Returns:
        (run_starts, run_lengths) as integer arrays, in scan order
    """
    n = len(pixels)
    if n == 0:
        empty = np.zeros(0, dtype=np.intp)
        return empty, empty

    # A new run starts wherever any channel differs from the previous pixel
    changes = np.any(pixels[1:] != pixels[:-1], axis=1)
    starts = np.concatenate(([0], np.flatnonzero(changes) + 1))
    lengths = np.diff(np.append(starts, n))

    # Split long repetitions into MAX_RUN_LENGTH chunks
    chunks = (lengths + MAX_RUN_LENGTH - 1) // MAX_RUN_LENGTH
    first_chunk = np.repeat(np.cumsum(chunks) - chunks, chunks)
    offsets = (np.arange(chunks.sum()) - first_chunk) * MAX_RUN_LENGTH

    run_starts = np.repeat(starts, chunks) + offsets
    run_lengths = np.minimum(np.repeat(lengths, chunks) - offsets, MAX_RUN_LENGTH)
    return run_starts, run_lengths


def _validate_run(run: Run, channels: int) -> Run:
    if not 1 <= run.count <= MAX_RUN_LENGTH:
        raise CorruptStreamError(f"Run count out of range: {run.count}")
    if len(run.pixel) != channels:
        raise CorruptStreamError(
            f"Run pixel has {len(run.pixel)} bytes, expected {channels}")
    return run


def scan_runs(data, channels: int) -> Iterator[Run]:
    """
    Scan a flat pixel buffer and lazily yield its runs.

    Pixels are compared as whole `channels`-byte windows with exact
    byte equality, so multi-channel images are encoded per pixel rather
    than per byte.

    Args:
        data: Flat bytes-like pixel data
        channels: Bytes per pixel

    Yields:
        Run records in scan order

    Raises:
        InvalidInputError: If channels < 1 or the length is not a multiple of channels
    """
    pixels = _pixel_windows(data, channels)
    run_starts, run_lengths = _find_runs(pixels)

    for start, length in zip(run_starts, run_lengths):
        yield _validate_run(Run(int(length), pixels[start].tobytes()), channels)


def rle_encode_bytes(data, channels: int) -> bytes:
    """
    Encode a flat pixel buffer into a compressed stream.

    Args:
        data: Flat bytes-like pixel data
        channels: Bytes per pixel

    Returns:
        Concatenated run records; empty input gives an empty stream
    """
    pixels = _pixel_windows(data, channels)
    run_starts, run_lengths = _find_runs(pixels)

    records = np.empty((len(run_starts), RUN_COUNT_SIZE + channels), dtype=np.uint8)
    records[:, 0] = run_lengths
    records[:, RUN_COUNT_SIZE:] = pixels[run_starts]
    return records.tobytes()


def rle_encode(pixels: PixelBuffer) -> bytes:
    """
    Encode a pixel buffer into a compressed stream.

    The stream carries no dimensions; the caller keeps width, height and
    channels alongside it.

    Args:
        pixels: Source pixel buffer

    Returns:
        Compressed stream bytes
    """
    return rle_encode_bytes(pixels.data, pixels.channels)


def _run_records(stream, channels: int) -> np.ndarray:
    """View a stream as (num_runs, 1 + channels) records, validating all of it."""
    _check_channels(channels)
    record_size = RUN_COUNT_SIZE + channels
    raw = np.frombuffer(bytes(stream), dtype=np.uint8)

    trailing = len(raw) % record_size
    if trailing:
        raise CorruptStreamError(
            f"Truncated run at offset {len(raw) - trailing}: "
            f"{trailing} bytes left, need {record_size}")

    records = raw.reshape(-1, record_size)
    zero_counts = np.flatnonzero(records[:, 0] == 0)
    if len(zero_counts):
        raise CorruptStreamError(f"Run {zero_counts[0]} has a zero count")

    return records


def parse_runs(stream, channels: int) -> Iterator[Run]:
    """
    Lazily read run records from a compressed stream.

    Raises:
        CorruptStreamError: On a truncated trailing run or a zero count
    """
    _check_channels(channels)
    stream = bytes(stream)
    record_size = RUN_COUNT_SIZE + channels

    for offset in range(0, len(stream), record_size):
        record = stream[offset:offset + record_size]
        if len(record) < record_size:
            raise CorruptStreamError(
                f"Truncated run at offset {offset}: "
                f"{len(record)} bytes left, need {record_size}")
        yield _validate_run(Run(record[0], record[RUN_COUNT_SIZE:]), channels)


def rle_decode(stream, channels: int) -> bytes:
    """
    Decode a compressed stream back into flat pixel data.

    The whole stream is validated before any output is produced, so a
    corrupt stream never yields a shortened buffer.

    Args:
        stream: Compressed stream bytes
        channels: Bytes per pixel used when encoding

    Returns:
        Flat pixel bytes of length sum(count * channels)

    Raises:
        InvalidInputError: If channels < 1
        CorruptStreamError: If the stream is not a sequence of complete runs
    """
    records = _run_records(stream, channels)
    return np.repeat(records[:, RUN_COUNT_SIZE:], records[:, 0], axis=0).tobytes()


def count_runs(stream, channels: int) -> int:
    """Return the number of runs in a well-formed stream."""
    return len(_run_records(stream, channels))


def decoded_length(stream, channels: int) -> int:
    """Return the decoded size in bytes without expanding the stream."""
    records = _run_records(stream, channels)
    return int(records[:, 0].sum(dtype=np.int64)) * channels
