"""
Exception types raised by pngprep.

Every fatal condition of a run is an exception derived from PngPrepError.
Library code raises; the command-line entry point decides the exit status.
"""


class PngPrepError(Exception):
    """Base class for all pngprep errors."""


class InvalidDimensionsError(PngPrepError):
    """Image width or height is zero or negative."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(f"invalid image size ({width},{height})")


class UnsupportedInputError(PngPrepError):
    """Decoded data has a channel count or depth that can't be represented."""


class ImageDecodeError(PngPrepError):
    """Input file is missing or could not be decoded."""


class EncodeError(PngPrepError):
    """Destination file could not be opened or written."""


class IdenticalPathError(PngPrepError):
    """Input and output refer to the same file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("In-place conversion is not supported.")
