#!/usr/bin/env python3
"""
Minimal Example: pngprep API Usage
==================================

Shows the essential API calls without extra boilerplate.
This is the "quick reference" version.
"""

import sys

import numpy as np

from pngprep import load_image, save_png, prepare_image, PrepConfig
from pngprep.processing import Operation, dilate, premultiply, apply_operation


input_image = sys.argv[1] if len(sys.argv) > 1 else "sprite.png"


# =============================================================================
# STEP 1: ONE CALL
# Equivalent to: pngprep sprite.png sprite_dilated.png
# =============================================================================

result = prepare_image(input_image, "sprite_dilated.png")
print(f"{result.width}x{result.height}, warnings: {result.warnings}")


# =============================================================================
# STEP 2: WORKING WITH THE PIXEL BUFFER
# =============================================================================

image = load_image(input_image)
pixels = image.pixels  # HxWx4 uint8, RGBA

# Dilation reaches one pixel per call
dilated = dilate(pixels)
filled = np.count_nonzero((pixels[:, :, 3] == 0) & (dilated[:, :, :3].any(axis=2)))
print(f"Filled {filled} transparent pixels")

# Premultiplied copy
save_png("sprite_premul.png", premultiply(pixels))

# Select by name, as the command line does
config = PrepConfig(operation="premul", png_compression=9)
save_png(
    "sprite_premul_small.png",
    apply_operation(Operation.parse(config.operation), pixels),
    compression=config.png_compression,
)
