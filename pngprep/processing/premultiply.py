"""Premultiplication of color channels by alpha."""

import numpy as np

from pngprep.core.buffer import Channel, validate_rgba
from pngprep.processing.operations import Operation, register_operation


@register_operation(Operation.PREMULTIPLY, "Pre-multiply colors by alpha")
def premultiply(pixels: np.ndarray) -> np.ndarray:
    """
    Scale R, G and B by alpha / 255.

    Uses integer floor division, so R=255 with A=128 gives 128.
    Alpha is unchanged.

    Args:
        pixels: HxWx4 uint8 RGBA array

    Returns:
        New HxWx4 uint8 array
    """
    validate_rgba(pixels)

    alpha = pixels[:, :, Channel.A].astype(np.uint32)
    result = pixels.copy()
    scaled = pixels[:, :, :3].astype(np.uint32) * alpha[:, :, np.newaxis] // 255
    result[:, :, :3] = scaled.astype(np.uint8)
    return result
