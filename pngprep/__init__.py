"""
pngprep - Alpha texture preparation
===================================

Prepares RGBA images for use as alpha-blended textures.

Main modules:
- pngprep.processing: Color dilation and alpha premultiplication
- pngprep.core: Pixel buffer model, image I/O, errors and configuration
- pngprep.pipeline: Processing a single image file end to end

The default operation dilates color from pixels with alpha > 0 into
neighboring pixels with alpha = 0, which avoids dark fringes when the
texture is filtered or mipmapped. The premultiply operation scales color
by alpha instead.

Quick start:
    >>> from pngprep import load_image, dilate, save_png
    >>> image = load_image("sprite.png")
    >>> save_png("sprite_dilated.png", dilate(image.pixels))
"""

__version__ = "1.0.1"

# Convenience imports
from pngprep.core import PixelBuffer, PrepConfig, PngPrepError, load_image, save_png
from pngprep.processing import Operation, dilate, premultiply, apply_operation
from pngprep.pipeline import PrepResult, prepare_image

__all__ = [
    "__version__",
    "PixelBuffer",
    "PrepConfig",
    "PngPrepError",
    "load_image",
    "save_png",
    "Operation",
    "dilate",
    "premultiply",
    "apply_operation",
    "PrepResult",
    "prepare_image",
]
