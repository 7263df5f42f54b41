"""Exception types raised by the pixel RLE codec."""


class PixelCodecError(ValueError):
    """Base class for all codec errors."""


class InvalidInputError(PixelCodecError):
    """Pixel buffer or parameters are malformed (e.g. channels == 0)."""


class CorruptStreamError(PixelCodecError):
    """Compressed stream cannot be parsed into complete, valid runs."""


class EmptyInputError(PixelCodecError):
    """Statistics were requested on a zero-length buffer."""


class ContainerError(PixelCodecError):
    """Container header, length or checksum is invalid."""
