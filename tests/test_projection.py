"""
Tests for cube-map and equirectangular sampling.
"""

import numpy as np
import pytest

from planet_generator.projection import (
    CUBE_FACE_NAMES, coord_to_pos, cube_face_rows, lat_lon_to_pos, rect_rows,
)


class TestCubeFaces:

    # Corners in the order (0, 0), (max, 0), (0, max), (max, max).
    FACE_CORNERS = {
        'xp': [(1, -1, 1), (1, -1, -1), (1, 1, 1), (1, 1, -1)],
        'xn': [(-1, -1, -1), (-1, -1, 1), (-1, 1, -1), (-1, 1, 1)],
        'yp': [(-1, 1, 1), (1, 1, 1), (-1, 1, -1), (1, 1, -1)],
        'yn': [(-1, -1, -1), (1, -1, -1), (-1, -1, 1), (1, -1, 1)],
        'zp': [(-1, -1, 1), (1, -1, 1), (-1, 1, 1), (1, 1, 1)],
        'zn': [(1, -1, -1), (-1, -1, -1), (1, 1, -1), (-1, 1, -1)],
    }

    @pytest.mark.parametrize("face, a, b, corner", [
        (face, a, b, corners[i])
        for face, corners in FACE_CORNERS.items()
        for i, (a, b) in enumerate([(0, 0), (15, 0), (0, 15), (15, 15)])
    ])
    def test_corners(self, face, a, b, corner):
        assert coord_to_pos(face, a, b, 15) == tuple(float(c) for c in corner)

    def test_every_cube_corner_is_reached_three_times(self):
        corners = [c for face_corners in self.FACE_CORNERS.values() for c in face_corners]
        assert len(set(corners)) == 8
        assert all(corners.count(c) == 3 for c in set(corners))

    def test_face_centre(self):
        assert coord_to_pos('zp', 2, 2, 4) == (0.0, 0.0, 1.0)

    def test_unknown_face(self):
        with pytest.raises(ValueError):
            coord_to_pos('wp', 0, 0, 4)

    @pytest.mark.parametrize("face", CUBE_FACE_NAMES)
    def test_rows_are_unit_vectors(self, face):
        rows = list(cube_face_rows(face, 5))
        assert [b for b, _, _, _ in rows] == list(range(5))
        for _, x, y, z in rows:
            np.testing.assert_allclose(x * x + y * y + z * z, np.ones(5))

    def test_adjacent_faces_share_edges(self):
        xp_rows = list(cube_face_rows('xp', 6))
        zp_rows = list(cube_face_rows('zp', 6))
        for (_, x0, y0, z0), (_, x1, y1, z1) in zip(xp_rows, zp_rows):
            # Column 0 of xp is the last column of zp.
            assert (x0[0], y0[0], z0[0]) == (x1[-1], y1[-1], z1[-1])

    def test_size_too_small(self):
        with pytest.raises(ValueError):
            list(cube_face_rows('xp', 1))


class TestRect:

    def test_poles(self):
        x, y, z = lat_lon_to_pos(np.array([90.0, -90.0]), np.array([0.0, 0.0]))
        np.testing.assert_allclose(y, [1.0, -1.0])
        np.testing.assert_allclose(x, [0.0, 0.0], atol=1e-15)

    def test_grid(self):
        rows = list(rect_rows(4))
        assert len(rows) == 2

        row, x, y, z = rows[0]
        assert row == 0
        np.testing.assert_allclose(y, -np.ones(4))

        row, x, y, z = rows[1]
        # Equator, longitudes -180, -90, 0, 90.
        np.testing.assert_allclose(x, [-1.0, 0.0, 1.0, 0.0], atol=1e-15)
        np.testing.assert_allclose(y, np.zeros(4), atol=1e-15)
        np.testing.assert_allclose(z, [0.0, -1.0, 0.0, 1.0], atol=1e-15)

    @pytest.mark.parametrize("width", [4, 8, 64])
    def test_far_corner_is_one_step_short(self, width):
        height = width // 2
        row, x, y, z = list(rect_rows(width))[-1]
        assert row == height - 1

        lat = np.degrees(np.arcsin(y[-1]))
        lon = np.degrees(np.arctan2(z[-1], x[-1]))
        assert lat == pytest.approx(90.0 - 180.0 / height)
        assert lon == pytest.approx(180.0 - 360.0 / width)

        expected = lat_lon_to_pos(90.0 - 180.0 / height, 180.0 - 360.0 / width)
        np.testing.assert_allclose((x[-1], y[-1], z[-1]), expected, atol=1e-12)
