"""
Tests for the Pillow PNG writer.
"""

import numpy as np
import pytest
from PIL import Image

from planet_generator.codec import to_image, write_png
from planet_generator.color_maps import quantize
from planet_generator.errors import EncodingError


ELEVATION = np.array([[-1.0, -0.5, 0.0], [0.25, 0.5, 1.0]])


class TestWritePng:

    def test_greyscale8(self, tmp_path):
        path = write_png(str(tmp_path / "grey.png"), quantize(ELEVATION, 'greyscale8'), 3, 2, 'greyscale8')
        with Image.open(path) as image:
            assert image.size == (3, 2)
            assert image.mode == 'L'
            assert image.getpixel((0, 0)) == 0
            assert image.getpixel((2, 1)) == 255

    def test_greyscale16(self, tmp_path):
        path = write_png(str(tmp_path / "grey16.png"), quantize(ELEVATION, 'greyscale16'), 3, 2, 'greyscale16')
        with Image.open(path) as image:
            assert image.size == (3, 2)
            assert image.getpixel((0, 0)) == 0
            assert image.getpixel((2, 0)) == 0x8000
            assert image.getpixel((2, 1)) == 0xffff

    @pytest.mark.parametrize("fmt", ['colour24', 'terrain24'])
    def test_rgb(self, tmp_path, fmt):
        data = quantize(ELEVATION, fmt)
        path = write_png(str(tmp_path / f"{fmt}.png"), data, 3, 2, fmt)
        with Image.open(path) as image:
            assert image.mode == 'RGB'
            assert image.tobytes() == data

    def test_missing_directory(self, tmp_path):
        with pytest.raises(EncodingError):
            write_png(str(tmp_path / "missing" / "out.png"), bytes(6), 3, 2, 'greyscale8')

    def test_wrong_length(self):
        with pytest.raises(EncodingError):
            to_image(bytes(5), 3, 2, 'greyscale8')
