"""Tests for the PNG writer."""

import numpy as np
import pytest
from PIL import Image

from tricolor.core.palette import BLACK, DARK_RED, WHITE
from tricolor.core.pixels import PixelBuffer
from tricolor.core.planes import split_planes
from tricolor.core.writer import ImageEncodeError, save_image, save_planes


def _make_planes():
    quantized = PixelBuffer.from_array(
        np.array([[DARK_RED, BLACK], [WHITE, WHITE]], dtype=np.uint8)
    )
    return split_planes(quantized)


class TestSaveImage:
    def test_writes_rgb_png(self, tmp_path):
        output = tmp_path / "out.png"
        rgb = np.zeros((3, 4, 3), dtype=np.uint8)
        save_image(rgb, output)

        img = Image.open(str(output))
        assert img.format == "PNG"
        assert img.mode == "RGB"
        assert img.size == (4, 3)

    def test_png_even_with_other_extension(self, tmp_path):
        output = tmp_path / "out.bmp"
        save_image(np.zeros((1, 1, 3), dtype=np.uint8), output)
        assert Image.open(str(output)).format == "PNG"

    def test_missing_directory(self, tmp_path):
        output = tmp_path / "nope" / "out.png"
        with pytest.raises(ImageEncodeError, match="Cannot write"):
            save_image(np.zeros((1, 1, 3), dtype=np.uint8), output)


class TestSavePlanes:
    def test_writes_three_files(self, tmp_path):
        paths = [tmp_path / n for n in ("red.png", "black.png", "result.png")]
        save_planes(_make_planes(), *paths)

        red, black, result = (np.array(Image.open(str(p))) for p in paths)
        assert tuple(result[0, 0]) == DARK_RED
        assert tuple(red[0, 0]) == BLACK
        assert tuple(red[0, 1]) == WHITE
        assert tuple(black[0, 0]) == BLACK
        assert tuple(black[0, 1]) == BLACK

    def test_order_reported(self, tmp_path):
        paths = [tmp_path / n for n in ("red.png", "black.png", "result.png")]
        saved = []
        save_planes(_make_planes(), *paths, on_saved=saved.append)
        assert saved == paths

    def test_earlier_files_kept_on_failure(self, tmp_path):
        red = tmp_path / "red.png"
        black = tmp_path / "missing" / "black.png"
        result = tmp_path / "result.png"

        with pytest.raises(ImageEncodeError):
            save_planes(_make_planes(), red, black, result)

        assert red.exists()
        assert not result.exists()
