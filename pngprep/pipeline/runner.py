"""
Single-image processing run.

Takes one input file through path check, decode, transform and encode.
The first fatal error stops the run and propagates to the caller.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from pngprep.core.config import PrepConfig
from pngprep.core.errors import IdenticalPathError
from pngprep.core.image_io import decode_warnings, load_image, save_png
from pngprep.processing.operations import Operation, apply_operation


@dataclass
class PrepResult:
    """Result of processing one image."""
    input_path: Path
    output_path: Path
    operation: Operation
    width: int = 0
    height: int = 0
    source_channels: int = 4
    warnings: list[str] = field(default_factory=list)


def paths_collide(
    input_path: str | Path,
    output_path: str | Path,
    case_insensitive: bool = False,
) -> bool:
    """
    Check whether two paths name the same file.

    Compares the paths as given and as resolved absolute paths.
    """
    candidates = [
        (str(input_path), str(output_path)),
        (str(Path(input_path).resolve()), str(Path(output_path).resolve())),
    ]
    for a, b in candidates:
        if case_insensitive:
            a, b = a.casefold(), b.casefold()
        if a == b:
            return True

    if os.path.exists(input_path) and os.path.exists(output_path):
        return os.path.samefile(input_path, output_path)
    return False


def check_paths(
    input_path: str | Path,
    output_path: str | Path,
    case_insensitive: bool = False,
) -> None:
    """
    Refuse to process an image onto itself.

    Raises:
        IdenticalPathError: If input and output name the same file
    """
    if paths_collide(input_path, output_path, case_insensitive):
        raise IdenticalPathError(str(output_path))


def prepare_image(
    input_path: str | Path,
    output_path: str | Path,
    operation: Operation | str | None = None,
    config: PrepConfig | None = None,
) -> PrepResult:
    """
    Decode an image, apply one operation and save it as an RGBA PNG.

    Args:
        input_path: Image file to read
        output_path: PNG file to write, overwritten if it exists
        operation: Operation to run (None = config.operation)
        config: Run settings (None = defaults)

    Returns:
        PrepResult describing the processed image

    Raises:
        IdenticalPathError: Before any decoding, if the paths collide
        ImageDecodeError: If the input can't be read
        UnsupportedInputError: If the input pixel type can't be represented
        InvalidDimensionsError: If the input image is empty
        EncodeError: If the output can't be written
    """
    config = config or PrepConfig()
    op = Operation.parse(operation if operation is not None else config.operation)
    input_path = Path(input_path)
    output_path = Path(output_path)

    check_paths(input_path, output_path, config.paths_case_insensitive)

    buffer = load_image(input_path)
    warnings = decode_warnings(buffer)
    if config.verbose:
        for message in warnings:
            print(f"Warning: {message}")

    processed = buffer.with_pixels(apply_operation(op, buffer.pixels))
    save_png(output_path, processed, compression=config.png_compression)

    return PrepResult(
        input_path=input_path,
        output_path=output_path,
        operation=op,
        width=processed.width,
        height=processed.height,
        source_channels=buffer.source_channels,
        warnings=warnings,
    )
