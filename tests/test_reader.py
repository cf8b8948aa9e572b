"""Tests for loading source images."""

import numpy as np
import pytest
from PIL import Image

from tricolor.core.pixels import PixelBuffer
from tricolor.core.reader import ImageDecodeError, ImageInfo, load_image


class TestLoadImage:
    @pytest.fixture
    def sample_png(self, tmp_path):
        path = tmp_path / "input.png"
        Image.new("RGB", (6, 4), (10, 20, 30)).save(str(path))
        return path

    def test_loads_rgba(self, sample_png):
        pixels, info = load_image(sample_png)
        assert isinstance(pixels, PixelBuffer)
        assert pixels.size == (6, 4)
        assert tuple(pixels.data[0, 0]) == (10, 20, 30, 255)

    def test_info(self, sample_png):
        _, info = load_image(sample_png)
        assert isinstance(info, ImageInfo)
        assert info.format == "PNG"
        assert info.mode == "RGB"
        assert (info.width, info.height) == (6, 4)
        assert info.path == sample_png

    def test_accepts_str_path(self, sample_png):
        pixels, _ = load_image(str(sample_png))
        assert pixels.size == (6, 4)

    def test_format_sniffed_from_content(self, tmp_path):
        path = tmp_path / "actually_png.jpg"
        Image.new("RGB", (2, 2), (255, 0, 0)).save(str(path), format="PNG")
        pixels, info = load_image(path)
        assert info.format == "PNG"
        assert tuple(pixels.data[1, 1]) == (255, 0, 0, 255)

    def test_palette_image_converted(self, tmp_path):
        path = tmp_path / "indexed.gif"
        Image.new("P", (3, 3), 0).save(str(path))
        pixels, info = load_image(path)
        assert info.format == "GIF"
        assert pixels.data.shape == (3, 3, 4)

    def test_transparency_kept_in_alpha(self, tmp_path):
        path = tmp_path / "clear.png"
        Image.new("RGBA", (2, 2), (1, 2, 3, 0)).save(str(path))
        pixels, _ = load_image(path)
        assert np.all(pixels.data[:, :, 3] == 0)

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "missing.png")

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("definitely not a png")
        with pytest.raises(ImageDecodeError, match="Cannot decode"):
            load_image(path)

    def test_decode_error_is_value_error(self, tmp_path):
        path = tmp_path / "empty.png"
        path.write_bytes(b"")
        with pytest.raises(ValueError):
            load_image(path)

    def test_sixteen_bit_gray_scaled_down(self, tmp_path):
        path = tmp_path / "deep.png"
        Image.fromarray(np.full((2, 2), 128 * 257, dtype=np.uint16)).save(str(path))
        pixels, _ = load_image(path)
        assert tuple(pixels.data[1, 1]) == (128, 128, 128, 255)

    def test_sixteen_bit_extremes(self, tmp_path):
        path = tmp_path / "deep_range.png"
        arr = np.array([[0, 65535]], dtype=np.uint16)
        Image.fromarray(arr).save(str(path))
        pixels, _ = load_image(path)
        assert tuple(pixels.data[0, 0]) == (0, 0, 0, 255)
        assert tuple(pixels.data[0, 1]) == (255, 255, 255, 255)
