"""
Pipeline module - End-to-end processing of a single image.
"""

from pngprep.pipeline.runner import (
    PrepResult,
    prepare_image,
    check_paths,
    paths_collide,
)

__all__ = [
    "PrepResult",
    "prepare_image",
    "check_paths",
    "paths_collide",
]
