"""Container framing for persisted compressed streams."""

import struct
import zlib

from ..constants import MAGIC, VERSION, HEADER_FORMAT, HEADER_SIZE, CRC_SIZE, MAX_CHANNELS
from ..errors import ContainerError


def pack_header(width: int, height: int, channels: int, data_len: int) -> bytes:
    """
    Pack image metadata into an 18-byte binary header.

    Args:
        width: Image width
        height: Image height
        channels: Bytes per pixel
        data_len: Length of the compressed stream in bytes

    Returns:
        18-byte header as bytes

    Raises:
        ContainerError: If a field does not fit the header
    """
    if not 1 <= channels <= MAX_CHANNELS:
        raise ContainerError(f"Channels must be 1-{MAX_CHANNELS}, got {channels}")

    try:
        return struct.pack(
            HEADER_FORMAT,
            MAGIC,          # Magic number
            VERSION,        # Version
            width,
            height,
            channels,
            data_len,
        )
    except struct.error as e:
        raise ContainerError(f"Header field out of range: {e}") from e


def unpack_header(header_bytes: bytes) -> dict:
    """
    Unpack the 18-byte binary header.

    Args:
        header_bytes: 18-byte header data

    Returns:
        Dictionary with header fields

    Raises:
        ContainerError: If header is invalid
    """
    if len(header_bytes) != HEADER_SIZE:
        raise ContainerError(f"Header size mismatch. Expected {HEADER_SIZE}, got {len(header_bytes)}")

    magic, ver, w, h, c, dlen = struct.unpack(HEADER_FORMAT, header_bytes)

    if magic != MAGIC:
        raise ContainerError(f"Invalid file signature: {magic}. Expected {MAGIC}")

    if ver != VERSION:
        raise ContainerError(f"Unsupported version: {ver}")

    if c == 0:
        raise ContainerError("Header declares zero channels")

    return {
        'width': w,
        'height': h,
        'channels': c,
        'data_len': dlen,
    }


def compute_crc(payload: bytes) -> bytes:
    """CRC-32 of the payload as 4 little-endian bytes."""
    return (zlib.crc32(payload) & 0xFFFFFFFF).to_bytes(CRC_SIZE, 'little')


def wrap_stream(stream: bytes, width: int, height: int, channels: int) -> bytes:
    """Frame a compressed stream as header + payload + CRC."""
    return pack_header(width, height, channels, len(stream)) + stream + compute_crc(stream)


def unwrap_stream(data: bytes):
    """
    Split a container into its header fields and verified payload.

    Returns:
        (header dict, payload bytes)

    Raises:
        ContainerError: If the data is truncated or the CRC does not match
    """
    if len(data) < HEADER_SIZE:
        raise ContainerError(f"Data too short: {len(data)} bytes, need at least {HEADER_SIZE}")

    header = unpack_header(data[:HEADER_SIZE])

    expected_len = HEADER_SIZE + header['data_len'] + CRC_SIZE
    if len(data) < expected_len:
        raise ContainerError(f"Data truncated: expected {expected_len} bytes, got {len(data)}")

    payload = data[HEADER_SIZE:HEADER_SIZE + header['data_len']]
    crc_received = data[HEADER_SIZE + header['data_len']:expected_len]

    crc_computed = compute_crc(payload)
    if crc_computed != crc_received:
        raise ContainerError(
            f"CRC mismatch: expected {crc_received.hex().upper()}, got {crc_computed.hex().upper()}")

    return header, payload
