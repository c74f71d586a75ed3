"""
Shared fixtures and helper modules for the planet generator tests.
"""

import numpy as np
import pytest

from planet_generator.modules import Module


class XSource(Module):
    """Outputs the x coordinate, so tests can feed exact values into a module."""

    def get_value(self, x, y, z, session=None):
        return np.array(x, dtype=np.float64)


class CountingSource(Module):
    """Outputs x + y + z and counts how many batches it was asked for."""

    def __init__(self):
        super().__init__()
        self.calls = 0

    def get_value(self, x, y, z, session=None):
        self.calls += 1
        return x + y + z


@pytest.fixture
def x_source():
    return XSource()


@pytest.fixture
def counter():
    return CountingSource()


@pytest.fixture
def sphere_points():
    """A reproducible batch of points on the unit sphere."""
    rng = np.random.default_rng(1234)
    points = rng.normal(size=(64, 3))
    points /= np.linalg.norm(points, axis=1)[:, np.newaxis]
    return points[:, 0].copy(), points[:, 1].copy(), points[:, 2].copy()
