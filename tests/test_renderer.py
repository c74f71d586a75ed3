"""
Tests for sampling and the threaded renderer.
"""

import os

import numpy as np
import pytest
from PIL import Image

from planet_generator import config as DEFAULTS
from planet_generator.color_maps import quantize
from planet_generator.config import PlanetSettings
from planet_generator.errors import ConfigurationError, EncodingError
from planet_generator.planet import build_planet
from planet_generator.renderer import (
    generate_cube, generate_rect, sample_cube_face, sample_rect,
)
from planet_generator.projection import CUBE_FACE_NAMES


@pytest.fixture(scope="module")
def planet():
    return build_planet(0)


class TestSampling:

    def test_rect_is_reproducible(self, planet):
        first = quantize(sample_rect(planet.session(), 4), 'greyscale8')
        second = quantize(sample_rect(build_planet(0).session(), 4), 'greyscale8')
        assert first == second
        assert first == bytes([134, 130, 124, 131, 129, 129, 129, 129])

    def test_rect_rows_are_flipped(self, planet):
        elevation = sample_rect(planet.session(), 4)
        # The first grid row is the south pole; it ends up at the bottom.
        south_pole = planet.session().get_value(0.0, -1.0, 0.0)
        assert elevation[-1, 0] == pytest.approx(south_pole, abs=1e-9)

    def test_cube_face_shape_and_range(self, planet):
        elevation = sample_cube_face(planet.session(), 'yp', 5)
        assert elevation.shape == (5, 5)
        assert np.all((elevation >= -1.0) & (elevation <= 1.0))

    def test_layer_sampling(self, planet):
        final = sample_rect(planet.session(), 4)
        layer = sample_rect(planet.session(), 4, layer='continent_def')
        assert not np.array_equal(final, layer)


class TestGenerateRect:

    def test_writes_image(self, tmp_path):
        path = generate_rect(0, 8, 'greyscale16', output_dir=str(tmp_path))
        assert path == os.path.join(str(tmp_path), DEFAULTS.RECT_FILENAME)
        with Image.open(path) as image:
            assert image.size == (8, 4)

    def test_width_too_small(self, tmp_path):
        with pytest.raises(ConfigurationError):
            generate_rect(0, 1, output_dir=str(tmp_path))

    def test_unknown_layer(self, tmp_path):
        with pytest.raises(ConfigurationError):
            generate_rect(0, 4, layer='oceans', output_dir=str(tmp_path))

    def test_terrain_colours_follow_sea_level(self, tmp_path):
        settings = PlanetSettings.from_config({'sea_level': 0.2, 'shelf_level': -0.1})
        path = generate_rect(0, 4, 'terrain24', settings, output_dir=str(tmp_path))
        expected = quantize(sample_rect(build_planet(0, settings).session(), 4), 'terrain24', sea_level=0.2)
        with Image.open(path) as image:
            assert image.tobytes() == expected


class TestGenerateCube:

    def test_writes_six_faces(self, tmp_path):
        paths = generate_cube(0, 4, 'greyscale8', output_dir=str(tmp_path), progress=False)
        assert sorted(os.listdir(tmp_path)) == sorted(DEFAULTS.CUBE_FACE_FILENAMES.values())
        assert len(paths) == 6
        for path in paths:
            with Image.open(path) as image:
                assert image.size == (4, 4)

    def test_threaded_faces_match_sequential(self, tmp_path, planet):
        generate_cube(0, 4, 'greyscale8', output_dir=str(tmp_path), progress=False)
        for face in CUBE_FACE_NAMES:
            expected = quantize(sample_cube_face(planet.session(), face, 4), 'greyscale8')
            with Image.open(tmp_path / DEFAULTS.CUBE_FACE_FILENAMES[face]) as image:
                assert image.tobytes() == expected

    def test_worker_failure_fails_run(self, tmp_path):
        with pytest.raises(EncodingError):
            generate_cube(0, 4, output_dir=str(tmp_path / "missing"), progress=False)
