"""Constants for the pixel RLE codec."""

import struct

# Run records: [count][pixel bytes]; count is a single unsigned byte
MAX_RUN_LENGTH = 255
RUN_COUNT_SIZE = 1

# Byte-valued symbols for the stream statistics
NUM_SYMBOLS = 256
MAX_ENTROPY = 8.0  # log2(NUM_SYMBOLS)

# Container magic number: 'PRLE' (Pixel Run-Length Encoding)
MAGIC = b'PRLE'
VERSION = 0x01

# Header format (Little-endian, 18 bytes total)
# 4s: Magic (4B), B: Version (1B), I: Width (4B), I: Height (4B)
# B: Channels (1B), I: Payload Length (4B)
HEADER_FORMAT = '<4sBIIBI'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 18 bytes

# CRC-32 trailer after the payload
CRC_SIZE = 4

MAX_CHANNELS = 255

# File extensions
CONTAINER_EXTENSION = '.prle'
DEFAULT_IMAGE_FORMAT = 'png'
