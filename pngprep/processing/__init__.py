"""
Processing module - Pixel transforms for alpha-blended textures.

This module provides:
- dilate: Spread opaque color into adjacent fully transparent pixels
- premultiply: Scale color channels by alpha
- Operation registry for selecting a transform by name
"""

from pngprep.processing.operations import (
    Operation,
    register_operation,
    get_operations,
    get_operation,
    describe_operation,
    apply_operation,
)
from pngprep.processing.dilate import (
    dilate,
    clear_transparent,
    neighbor_sums,
)
from pngprep.processing.premultiply import (
    premultiply,
)

__all__ = [
    # Operation selection
    "Operation",
    "register_operation",
    "get_operations",
    "get_operation",
    "describe_operation",
    "apply_operation",
    # Dilation
    "dilate",
    "clear_transparent",
    "neighbor_sums",
    # Premultiplication
    "premultiply",
]
