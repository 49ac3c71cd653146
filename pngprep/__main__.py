"""
pngprep Command Line Interface

Usage:
    pngprep [-premul] input.png output.png

Processes the input image and saves the processed version as an
8-bit-per-channel RGBA PNG. The default operation is to dilate color
from alpha>0 pixels to nearby pixels with alpha=0. Using -premul changes
the operation to pre-multiply colors by alpha instead.

Warning: Destination files are overwritten!

Examples:
    pngprep sprite.png sprite_dilated.png
    pngprep -premul sprite.png sprite_premul.png
    pngprep -c pngprep.json sprite.png out.png
"""

import sys
import argparse

from pngprep import __version__
from pngprep.core.config import PrepConfig, apply_env_overrides, load_config
from pngprep.core.errors import PngPrepError
from pngprep.pipeline import prepare_image
from pngprep.processing import Operation


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='pngprep',
        description='Prepare alpha images for use as textures',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        '-V', '--version',
        action='version',
        version=f'pngprep {__version__}',
    )
    parser.add_argument('input', nargs='?', help='Input image file')
    parser.add_argument('output', nargs='?', help='Output PNG file')
    parser.add_argument(
        '-premul', '--premultiply',
        action='store_true',
        help='Pre-multiply colors by alpha instead of dilating',
    )
    parser.add_argument(
        '-c', '--config',
        default=None,
        help='JSON configuration file',
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Suppress banner, warnings and progress output',
    )
    return parser


def load_settings(args) -> PrepConfig:
    """Build the run configuration from file, environment and flags."""
    config = load_config(args.config) if args.config else PrepConfig()
    config = apply_env_overrides(config)
    if args.quiet:
        config.verbose = False
    return config


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.input is None or args.output is None:
        if not args.quiet:
            print(f"pngprep v{__version__}")
        parser.print_help()
        return 0

    try:
        config = load_settings(args)
        operation = Operation.PREMULTIPLY if args.premultiply else Operation.parse(config.operation)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.verbose:
        print(f"pngprep v{__version__}")

    try:
        result = prepare_image(args.input, args.output, operation, config)
    except PngPrepError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.verbose:
        print(f"{result.input_path} processed ({result.operation.value}) "
              f"and saved as {result.output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
