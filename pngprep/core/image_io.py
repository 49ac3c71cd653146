"""
Image file I/O for pngprep.

Decoding is delegated to OpenCV, which covers PNG, JPEG, BMP, TGA-like
formats and more. Output is always an 8-bit-per-channel RGBA PNG,
whatever extension the destination path carries.
"""

import os
from pathlib import Path

import cv2
import numpy as np

from pngprep.core.buffer import PixelBuffer
from pngprep.core.errors import EncodeError, ImageDecodeError, UnsupportedInputError


DEFAULT_PNG_COMPRESSION = 3


def bgr_to_rgb(data: np.ndarray) -> np.ndarray:
    """Convert OpenCV channel order (BGR/BGRA) to RGB/RGBA. Gray passes through."""
    if data.ndim == 3 and data.shape[2] == 3:
        return cv2.cvtColor(data, cv2.COLOR_BGR2RGB)
    if data.ndim == 3 and data.shape[2] == 4:
        return cv2.cvtColor(data, cv2.COLOR_BGRA2RGBA)
    return data


def load_image(path: str | Path) -> PixelBuffer:
    """
    Decode an image file into an RGBA pixel buffer.

    16-bit images are reduced to 8 bits per channel. Images without an
    alpha channel get alpha 255.

    Args:
        path: Path to the image file

    Returns:
        PixelBuffer with source channel count and depth recorded

    Raises:
        ImageDecodeError: If the file doesn't exist or can't be decoded
        UnsupportedInputError: If the pixel type can't be represented
        InvalidDimensionsError: If the decoded image has no pixels
    """
    path = Path(path)
    if not path.exists():
        raise ImageDecodeError(f"Image file not found: {path}")

    try:
        data = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    except cv2.error as e:
        raise ImageDecodeError(f"Failed to load image: {path} ({e})") from e

    if data is None:
        raise ImageDecodeError(f"Failed to load image: {path}")

    if data.dtype == np.uint16:
        data = (data >> 8).astype(np.uint8)
        depth = 16
    elif data.dtype == np.uint8:
        depth = 8
    else:
        raise UnsupportedInputError(f"unsupported pixel type {data.dtype} in {path}")

    return PixelBuffer.from_array(bgr_to_rgb(data), source_depth=depth)


def decode_warnings(buffer: PixelBuffer) -> list[str]:
    """
    Describe lossy or surprising conversions done while decoding.

    Returns:
        List of human-readable warning messages (may be empty)
    """
    warnings = []
    if buffer.source_channels in (1, 3):
        warnings.append("image has no alpha channel.")
    if buffer.source_channels == 2:
        warnings.append("16 bpp grayscale with alpha images are converted to 32 bpp.")
    if buffer.source_depth == 16:
        warnings.append("16 bits per channel image is reduced to 8 bits per channel.")
    return warnings


def save_png(
    path: str | Path,
    image: PixelBuffer | np.ndarray,
    compression: int = DEFAULT_PNG_COMPRESSION,
) -> Path:
    """
    Write an RGBA image as an 8-bit-per-channel PNG.

    Args:
        path: Destination file, overwritten if it exists
        image: PixelBuffer or HxWx4 uint8 RGBA array
        compression: PNG compression level 0-9

    Returns:
        Path that was written

    Raises:
        ValueError: If the compression level is out of range
        EncodeError: If encoding fails or the destination can't be written
    """
    if not 0 <= compression <= 9:
        raise ValueError(f"PNG compression must be 0-9, got {compression}")

    path = Path(path)
    pixels = image.pixels if isinstance(image, PixelBuffer) else image

    try:
        bgra = cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA)
        success, encoded = cv2.imencode(
            ".png", bgra, [cv2.IMWRITE_PNG_COMPRESSION, compression]
        )
    except cv2.error as e:
        raise EncodeError(f"cannot encode image for file {path}: {e}") from e

    if not success:
        raise EncodeError(f"cannot encode image for file {path}")

    # Partial writes only ever touch the temporary file
    tmp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        with open(tmp_path, "wb") as f:
            f.write(encoded.tobytes())
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise EncodeError(f"cannot save image to file {path}: {e.strerror}") from e

    return path
