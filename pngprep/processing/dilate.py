"""
Color dilation into fully transparent pixels.

Texture filtering and mipmapping blend transparent texels with their
neighbors. When those texels hold black or garbage color, a dark or
colored fringe shows up around alpha edges. Dilation copies the average
color of the opaque neighbors into each transparent pixel, leaving alpha
untouched, so the blended color stays plausible.

The transform runs in two sequential passes:

1. Every pixel with alpha 0 has its color cleared to black.
2. Every pixel with alpha 0 takes the truncated mean color of the
   pixels with alpha > 0 in its 3x3 window, clipped to the image.
   Pass 2 reads the finished pass 1 result only.

Color spreads a single pixel per call. Transparent pixels with no opaque
pixel in their window stay (0, 0, 0, 0).
"""

import numpy as np
from scipy import ndimage

from pngprep.core.buffer import Channel, validate_rgba
from pngprep.processing.operations import Operation, register_operation


_WINDOW = np.ones((3, 3), dtype=np.int32)


def clear_transparent(pixels: np.ndarray) -> np.ndarray:
    """
    Zero the color of every pixel whose alpha is 0.

    Args:
        pixels: HxWx4 uint8 RGBA array

    Returns:
        New array; pixels with alpha > 0 are copied unchanged
    """
    result = pixels.copy()
    result[result[:, :, Channel.A] == 0, :3] = 0
    return result


def neighbor_sums(pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Sum the colors of opaque pixels over each clipped 3x3 window.

    Positions outside the image count as transparent, so zero padding
    gives the same totals as shrinking the window at the borders.

    Args:
        pixels: HxWx4 uint8 RGBA array

    Returns:
        Tuple of (HxWx3 int32 color sums, HxW int32 opaque counts)
    """
    opaque = (pixels[:, :, Channel.A] != 0).astype(np.int32)
    colors = pixels[:, :, :3].astype(np.int32) * opaque[:, :, np.newaxis]

    counts = ndimage.convolve(opaque, _WINDOW, mode="constant", cval=0)
    sums = ndimage.convolve(
        colors, _WINDOW[:, :, np.newaxis], mode="constant", cval=0
    )
    return sums, counts


@register_operation(Operation.DILATE, "Dilate color from alpha>0 pixels into adjacent alpha=0 pixels")
def dilate(pixels: np.ndarray) -> np.ndarray:
    """
    Dilate opaque color one pixel into fully transparent regions.

    Args:
        pixels: HxWx4 uint8 RGBA array

    Returns:
        New HxWx4 uint8 array. Alpha is identical to the input and every
        pixel with alpha > 0 is byte-identical.

    Raises:
        UnsupportedInputError: If pixels isn't an HxWx4 uint8 array
        InvalidDimensionsError: If the image is empty
    """
    validate_rgba(pixels)

    cleared = clear_transparent(pixels)
    sums, counts = neighbor_sums(cleared)

    fill = (cleared[:, :, Channel.A] == 0) & (counts > 0)
    result = cleared.copy()
    result[fill, :3] = (sums[fill] // counts[fill][:, np.newaxis]).astype(np.uint8)
    return result
