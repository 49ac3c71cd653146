"""
Tests for pngprep core: buffer model, image I/O, configuration.
"""

import json

import cv2
import pytest
import numpy as np


class TestPixelBuffer:
    """Tests for PixelBuffer and RGBA conversion."""

    def test_dimensions(self):
        """Width and height come from the array shape."""
        from pngprep.core.buffer import PixelBuffer

        buffer = PixelBuffer(np.zeros((3, 5, 4), dtype=np.uint8))
        assert buffer.width == 5
        assert buffer.height == 3
        assert buffer.to_dict()['width'] == 5

    def test_invalid_dimensions(self):
        """Empty images are rejected."""
        from pngprep.core.buffer import PixelBuffer, validate_dimensions
        from pngprep.core.errors import InvalidDimensionsError

        with pytest.raises(InvalidDimensionsError):
            PixelBuffer(np.zeros((3, 0, 4), dtype=np.uint8))
        with pytest.raises(InvalidDimensionsError, match=r"\(0,-1\)"):
            validate_dimensions(0, -1)

    def test_wrong_dtype(self):
        """Only 8 bits per channel are supported."""
        from pngprep.core.buffer import PixelBuffer
        from pngprep.core.errors import UnsupportedInputError

        with pytest.raises(UnsupportedInputError):
            PixelBuffer(np.zeros((2, 2, 4), dtype=np.float32))

    def test_gray_to_rgba(self):
        """Gray is replicated and alpha filled with 255."""
        from pngprep.core.buffer import to_rgba

        gray = np.array([[7, 200]], dtype=np.uint8)
        rgba = to_rgba(gray)

        assert rgba.shape == (1, 2, 4)
        assert tuple(rgba[0, 1]) == (200, 200, 200, 255)

    def test_gray_alpha_to_rgba(self):
        """Gray+alpha keeps its alpha."""
        from pngprep.core.buffer import to_rgba

        data = np.array([[[90, 12]]], dtype=np.uint8)
        assert tuple(to_rgba(data)[0, 0]) == (90, 90, 90, 12)

    def test_rgb_to_rgba(self):
        """RGB gets opaque alpha."""
        from pngprep.core.buffer import to_rgba

        data = np.array([[[1, 2, 3]]], dtype=np.uint8)
        assert tuple(to_rgba(data)[0, 0]) == (1, 2, 3, 255)

    def test_unsupported_channels(self):
        """Five channels can't be represented."""
        from pngprep.core.buffer import to_rgba
        from pngprep.core.errors import UnsupportedInputError

        with pytest.raises(UnsupportedInputError):
            to_rgba(np.zeros((2, 2, 5), dtype=np.uint8))

    def test_from_array_records_source(self):
        """from_array remembers the source channel count."""
        from pngprep.core.buffer import PixelBuffer

        buffer = PixelBuffer.from_array(np.zeros((2, 2, 3), dtype=np.uint8))
        assert buffer.source_channels == 3
        assert buffer.has_alpha is False

        buffer = PixelBuffer.from_array(np.zeros((2, 2), dtype=np.uint8))
        assert buffer.source_channels == 1

    def test_with_pixels(self):
        """with_pixels keeps source metadata."""
        from pngprep.core.buffer import PixelBuffer

        buffer = PixelBuffer(np.zeros((2, 2, 4), dtype=np.uint8), source_channels=2)
        other = buffer.with_pixels(np.ones((2, 2, 4), dtype=np.uint8))

        assert other.source_channels == 2
        assert other.pixels[0, 0, 0] == 1
        assert buffer.pixels[0, 0, 0] == 0


class TestImageIO:
    """Tests for decoding and encoding image files."""

    def test_load_bgra_as_rgba(self, tmp_path):
        """OpenCV channel order is converted to RGBA."""
        from pngprep.core.image_io import load_image, decode_warnings

        path = tmp_path / "in.png"
        bgra = np.zeros((2, 3, 4), dtype=np.uint8)
        bgra[0, 0] = (10, 20, 30, 40)
        cv2.imwrite(str(path), bgra)

        buffer = load_image(path)

        assert buffer.width == 3
        assert buffer.height == 2
        assert buffer.source_channels == 4
        assert tuple(buffer.pixels[0, 0]) == (30, 20, 10, 40)
        assert decode_warnings(buffer) == []

    def test_load_rgb_warns(self, tmp_path):
        """Images without alpha are made opaque and flagged."""
        from pngprep.core.image_io import load_image, decode_warnings

        path = tmp_path / "in.png"
        cv2.imwrite(str(path), np.full((2, 2, 3), 50, dtype=np.uint8))

        buffer = load_image(path)

        assert buffer.source_channels == 3
        assert np.all(buffer.pixels[:, :, 3] == 255)
        assert "image has no alpha channel." in decode_warnings(buffer)

    def test_load_gray(self, tmp_path):
        """Grayscale images are expanded to RGBA."""
        from pngprep.core.image_io import load_image, decode_warnings

        path = tmp_path / "gray.png"
        cv2.imwrite(str(path), np.full((2, 2), 77, dtype=np.uint8))

        buffer = load_image(path)

        assert buffer.source_channels == 1
        assert tuple(buffer.pixels[1, 1]) == (77, 77, 77, 255)
        assert "image has no alpha channel." in decode_warnings(buffer)

    def test_load_16bit(self, tmp_path):
        """16-bit images are reduced to 8 bits per channel."""
        from pngprep.core.image_io import load_image, decode_warnings

        path = tmp_path / "deep.png"
        bgra = np.zeros((1, 1, 4), dtype=np.uint16)
        bgra[0, 0] = (0x1234, 0x5678, 0xABCD, 0xFFFF)
        cv2.imwrite(str(path), bgra)

        buffer = load_image(path)

        assert buffer.pixels.dtype == np.uint8
        assert buffer.source_depth == 16
        assert tuple(buffer.pixels[0, 0]) == (0xAB, 0x56, 0x12, 0xFF)
        assert "16 bits per channel image is reduced to 8 bits per channel." in decode_warnings(buffer)

    def test_two_channel_warning(self):
        """Gray+alpha sources are flagged as upconverted."""
        from pngprep.core.buffer import PixelBuffer
        from pngprep.core.image_io import decode_warnings

        buffer = PixelBuffer.from_array(np.zeros((1, 1, 2), dtype=np.uint8))
        assert decode_warnings(buffer) == [
            "16 bpp grayscale with alpha images are converted to 32 bpp."
        ]

    def test_missing_file(self, tmp_path):
        """Missing input is a decode error."""
        from pngprep.core.image_io import load_image
        from pngprep.core.errors import ImageDecodeError

        with pytest.raises(ImageDecodeError, match="not found"):
            load_image(tmp_path / "missing.png")

    def test_corrupt_file(self, tmp_path):
        """Undecodable data is a decode error."""
        from pngprep.core.image_io import load_image
        from pngprep.core.errors import ImageDecodeError

        path = tmp_path / "bad.png"
        path.write_bytes(b"this is not an image")

        with pytest.raises(ImageDecodeError):
            load_image(path)

    def test_save_and_reload(self, tmp_path):
        """PNG output is lossless 8-bit RGBA."""
        from pngprep.core.image_io import load_image, save_png

        rng = np.random.default_rng(3)
        pixels = rng.integers(0, 256, size=(4, 5, 4), dtype=np.uint8)
        path = save_png(tmp_path / "out.png", pixels)

        buffer = load_image(path)
        assert buffer.pixels.dtype == np.uint8
        assert np.array_equal(buffer.pixels, pixels)

    def test_always_png(self, tmp_path):
        """The output format ignores the file extension."""
        from pngprep.core.buffer import PixelBuffer
        from pngprep.core.image_io import save_png

        path = tmp_path / "out.jpg"
        save_png(path, PixelBuffer(np.zeros((2, 2, 4), dtype=np.uint8)))

        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_save_to_missing_directory(self, tmp_path):
        """Unwritable destinations raise EncodeError."""
        from pngprep.core.image_io import save_png
        from pngprep.core.errors import EncodeError

        pixels = np.zeros((2, 2, 4), dtype=np.uint8)
        with pytest.raises(EncodeError):
            save_png(tmp_path / "nope" / "out.png", pixels)
        assert pixels.sum() == 0

    def test_bad_compression(self, tmp_path):
        """Compression level must be 0-9."""
        from pngprep.core.image_io import save_png

        with pytest.raises(ValueError):
            save_png(tmp_path / "out.png", np.zeros((1, 1, 4), dtype=np.uint8), compression=12)

    def test_failed_write_keeps_destination(self, tmp_path, monkeypatch):
        """A failed save leaves the old file intact and no temporary behind."""
        import errno
        from pngprep.core import image_io
        from pngprep.core.errors import EncodeError

        path = tmp_path / "out.png"
        path.write_bytes(b"previous contents")

        def fail_replace(src, dst):
            raise OSError(errno.ENOSPC, "No space left on device")

        monkeypatch.setattr(image_io.os, "replace", fail_replace)

        with pytest.raises(EncodeError, match="No space left"):
            image_io.save_png(path, np.zeros((2, 2, 4), dtype=np.uint8))

        assert path.read_bytes() == b"previous contents"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["out.png"]

    def test_save_overwrites(self, tmp_path):
        """An existing destination is replaced by the new PNG."""
        from pngprep.core.image_io import save_png

        path = tmp_path / "out.png"
        path.write_bytes(b"previous contents")

        save_png(path, np.zeros((2, 2, 4), dtype=np.uint8))

        assert path.read_bytes()[:4] == b"\x89PNG"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["out.png"]


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        """Default config dilates verbosely."""
        from pngprep.core.config import PrepConfig

        config = PrepConfig()
        assert config.operation == "dilate"
        assert config.png_compression == 3
        assert config.verbose is True

    def test_save_load(self, tmp_path):
        """Config survives a JSON save/load."""
        from pngprep.core.config import PrepConfig, load_config

        path = tmp_path / "pngprep.json"
        PrepConfig(operation="premul", png_compression=9, verbose=False).save(path)

        config = load_config(path)
        assert config.operation == "premul"
        assert config.png_compression == 9
        assert config.verbose is False
        assert json.loads(path.read_text())["case_insensitive_paths"] is None

    def test_missing_file(self, tmp_path):
        """Missing config raises FileNotFoundError."""
        from pngprep.core.config import load_config

        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_invalid_compression(self):
        """Out-of-range compression is rejected."""
        from pngprep.core.config import PrepConfig

        with pytest.raises(ValueError):
            PrepConfig(png_compression=10)

    def test_case_insensitive_override(self):
        """Explicit setting wins over the platform default."""
        from pngprep.core.config import PrepConfig

        assert PrepConfig(case_insensitive_paths=True).paths_case_insensitive is True
        assert PrepConfig(case_insensitive_paths=False).paths_case_insensitive is False

    def test_env_config(self, monkeypatch):
        """Prefixed environment variables are collected."""
        from pngprep.core.config import get_env_config

        monkeypatch.setenv("PNGPREP_VERBOSE", "false")
        assert get_env_config()["verbose"] == "false"

    def test_env_overrides(self, monkeypatch):
        """Environment overrides are converted to field types."""
        from pngprep.core.config import PrepConfig, apply_env_overrides

        monkeypatch.setenv("PNGPREP_OPERATION", "premul")
        monkeypatch.setenv("PNGPREP_PNG_COMPRESSION", "1")
        monkeypatch.setenv("PNGPREP_CASE_INSENSITIVE_PATHS", "yes")
        monkeypatch.setenv("PNGPREP_UNRELATED", "whatever")

        config = apply_env_overrides(PrepConfig())
        assert config.operation == "premul"
        assert config.png_compression == 1
        assert config.case_insensitive_paths is True

    def test_env_bad_bool(self, monkeypatch):
        """Unparseable booleans are rejected."""
        from pngprep.core.config import PrepConfig, apply_env_overrides

        monkeypatch.setenv("PNGPREP_VERBOSE", "maybe")
        with pytest.raises(ValueError):
            apply_env_overrides(PrepConfig())

    def test_file_values_coerced(self, tmp_path):
        """String values in the file are converted like environment values."""
        from pngprep.core.config import load_config

        path = tmp_path / "pngprep.json"
        path.write_text('{"verbose": "false", "png_compression": "5", "case_insensitive_paths": "yes"}')

        config = load_config(path)
        assert config.verbose is False
        assert config.png_compression == 5
        assert config.case_insensitive_paths is True

    @pytest.mark.parametrize("content", [
        '{"png_compression": null}',
        '{"png_compression": true}',
        '{"png_compression": "high"}',
        '{"verbose": null}',
        '{"verbose": "sometimes"}',
        '{"operation": 3}',
        '["dilate"]',
    ])
    def test_file_bad_values(self, tmp_path, content):
        """Wrong types in the file raise ValueError."""
        from pngprep.core.config import load_config

        path = tmp_path / "pngprep.json"
        path.write_text(content)

        with pytest.raises(ValueError):
            load_config(path)


class TestPackage:
    """Tests for package-level imports."""

    def test_package_level_import(self):
        """Main API is available at package level."""
        import pngprep
        assert hasattr(pngprep, 'dilate')
        assert hasattr(pngprep, 'premultiply')
        assert hasattr(pngprep, 'prepare_image')
        assert pngprep.__version__


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
