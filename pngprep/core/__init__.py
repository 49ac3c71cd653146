"""
Core module - Pixel buffer model, errors, image I/O and configuration.
"""

from pngprep.core.buffer import (
    Channel,
    PixelBuffer,
    to_rgba,
    validate_dimensions,
    validate_rgba,
)
from pngprep.core.config import (
    PrepConfig,
    load_config,
    save_config,
    get_env_config,
    apply_env_overrides,
)
from pngprep.core.errors import (
    PngPrepError,
    InvalidDimensionsError,
    UnsupportedInputError,
    ImageDecodeError,
    EncodeError,
    IdenticalPathError,
)
from pngprep.core.image_io import load_image, save_png, decode_warnings

__all__ = [
    "Channel",
    "PixelBuffer",
    "to_rgba",
    "validate_dimensions",
    "validate_rgba",
    "PrepConfig",
    "load_config",
    "save_config",
    "get_env_config",
    "apply_env_overrides",
    "PngPrepError",
    "InvalidDimensionsError",
    "UnsupportedInputError",
    "ImageDecodeError",
    "EncodeError",
    "IdenticalPathError",
    "load_image",
    "save_png",
    "decode_warnings",
]
