"""
In-memory pixel buffer model.

A decoded image is held as a numpy array of shape (height, width, 4),
dtype uint8, channels in R, G, B, A order. Rows run top to bottom.
"""

from dataclasses import dataclass, replace
from enum import IntEnum

import numpy as np

from pngprep.core.errors import InvalidDimensionsError, UnsupportedInputError


class Channel(IntEnum):
    """Index of each channel along the last axis of a pixel array."""
    R = 0
    G = 1
    B = 2
    A = 3


OPAQUE = 255


def validate_dimensions(width: int, height: int) -> None:
    """
    Reject images that have no pixels.

    Raises:
        InvalidDimensionsError: If width or height is zero or negative
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(width, height)


def validate_rgba(pixels: np.ndarray) -> None:
    """
    Check that an array is a non-empty HxWx4 uint8 RGBA image.

    Raises:
        UnsupportedInputError: If the shape or dtype is wrong
        InvalidDimensionsError: If the image has no rows or columns
    """
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise UnsupportedInputError(f"pixel buffer must be HxWx4, got shape {pixels.shape}")
    validate_dimensions(pixels.shape[1], pixels.shape[0])
    if pixels.dtype != np.uint8:
        raise UnsupportedInputError(f"pixel buffer must be uint8, got {pixels.dtype}")


def to_rgba(data: np.ndarray) -> np.ndarray:
    """
    Upconvert a decoded 8-bit image to 4-channel RGBA.

    Args:
        data: uint8 array, either HxW (gray) or HxWxC with C in 1..4.
            Color data must already be in RGB order.

    Returns:
        New HxWx4 uint8 array. Alpha is 255 where the source had none.

    Raises:
        UnsupportedInputError: For other dtypes or channel counts
    """
    if data.dtype != np.uint8:
        raise UnsupportedInputError(f"unsupported pixel type {data.dtype}, expected uint8")

    if data.ndim == 2:
        data = data[:, :, np.newaxis]
    if data.ndim != 3:
        raise UnsupportedInputError(f"unsupported image shape {data.shape}")

    height, width, channels = data.shape
    rgba = np.empty((height, width, 4), dtype=np.uint8)

    if channels == 1:
        rgba[:, :, :3] = data
        rgba[:, :, Channel.A] = OPAQUE
    elif channels == 2:
        rgba[:, :, :3] = data[:, :, :1]
        rgba[:, :, Channel.A] = data[:, :, 1]
    elif channels == 3:
        rgba[:, :, :3] = data
        rgba[:, :, Channel.A] = OPAQUE
    elif channels == 4:
        rgba[:] = data
    else:
        raise UnsupportedInputError(f"unsupported channel count {channels}")

    return rgba


@dataclass
class PixelBuffer:
    """
    A decoded RGBA image plus what is known about its source.

    Attributes:
        pixels: HxWx4 uint8 array in RGBA order
        source_channels: Channel count of the decoded file (1-4)
        source_depth: Bits per channel of the decoded file
    """
    pixels: np.ndarray
    source_channels: int = 4
    source_depth: int = 8

    def __post_init__(self):
        validate_rgba(self.pixels)

    @classmethod
    def from_array(cls, data: np.ndarray, source_depth: int = 8) -> "PixelBuffer":
        """Create a PixelBuffer from an RGB-ordered array with 1-4 channels."""
        channels = 1 if data.ndim == 2 else data.shape[-1]
        return cls(to_rgba(data), source_channels=channels, source_depth=source_depth)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def has_alpha(self) -> bool:
        """Whether the source image carried an alpha channel."""
        return self.source_channels in (2, 4)

    def with_pixels(self, pixels: np.ndarray) -> "PixelBuffer":
        """Return a copy of this buffer holding different pixel data."""
        return replace(self, pixels=pixels)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "source_channels": self.source_channels,
            "source_depth": self.source_depth,
        }
