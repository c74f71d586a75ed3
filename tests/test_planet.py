"""
Tests for the assembled planet graph.
"""

import numpy as np
import pytest

from planet_generator.config import PlanetSettings
from planet_generator.modules import Cache
from planet_generator.planet import (
    FINAL_PLANET, SUBGROUP_NAMES, SUBGROUPS, build_planet, planet_descriptors,
)


@pytest.fixture(scope="module")
def planet():
    return build_planet(0)


class TestDescriptors:

    def test_names_are_unique(self):
        names = [spec.name for spec in planet_descriptors()]
        assert len(names) == len(set(names))

    def test_seed_offsets_are_unique(self):
        offsets = [spec.params['seed_offset'] for spec in planet_descriptors() if 'seed_offset' in spec.params]
        assert len(offsets) == len(set(offsets))
        assert min(offsets) == 0
        assert max(offsets) == 140

    def test_every_subgroup_ends_in_a_cache(self):
        specs = {spec.name: spec for spec in planet_descriptors()}
        for name in SUBGROUP_NAMES:
            assert specs[name].kind == 'cache'

    def test_settings_flow_into_descriptors(self):
        settings = PlanetSettings.from_config({'river_depth': 0.05})
        specs = {spec.name: spec for spec in planet_descriptors(settings)}
        assert specs['continents_with_rivers_sb'].params['scale'] == 0.025


class TestPlanetGraph:

    def test_structure(self, planet):
        assert len(planet) == len(planet_descriptors())
        assert len(planet) > 80
        assert planet.cache_count == len(SUBGROUPS)
        assert planet.root is planet.module(FINAL_PLANET)
        assert isinstance(planet.root, Cache)

    def test_bounded(self, planet, sphere_points):
        values = planet.session().get_value(*sphere_points)
        assert np.all(np.isfinite(values))
        assert np.all(values >= -1.0)
        assert np.all(values <= 1.0)

    def test_pure(self, planet, sphere_points):
        first = planet.session().get_value(*sphere_points)
        second = planet.session().get_value(*sphere_points)
        rebuilt = build_planet(0).session().get_value(*sphere_points)
        np.testing.assert_array_equal(first, second)
        np.testing.assert_array_equal(first, rebuilt)

    def test_cache_does_not_change_values(self, planet, sphere_points):
        cached = planet.session().get_value(*sphere_points)
        uncached = planet.root.get_value(*sphere_points)
        np.testing.assert_array_equal(cached, uncached)

    def test_point_order_does_not_matter(self, planet, sphere_points):
        x, y, z = sphere_points
        batch = planet.session().get_value(x, y, z)
        single = planet.session().get_value(x[5], y[5], z[5])
        assert single == pytest.approx(batch[5], abs=1e-9)

    def test_seed_changes_planet(self, planet, sphere_points):
        other = build_planet(1).session().get_value(*sphere_points)
        assert not np.array_equal(planet.session().get_value(*sphere_points), other)

    def test_settings_change_planet(self, planet, sphere_points):
        wet = build_planet(0, PlanetSettings.from_config({'sea_level': 0.5, 'shelf_level': 0.1}))
        assert not np.array_equal(planet.session().get_value(*sphere_points),
                                  wet.session().get_value(*sphere_points))

    @pytest.mark.parametrize("layer", ['continent_def', 'terrain_type_def', 'river_positions'])
    def test_layers_evaluate(self, planet, sphere_points, layer):
        values = planet.session().get_value(*sphere_points, name=layer)
        assert values.shape == sphere_points[0].shape
        assert np.all(np.isfinite(values))

    @pytest.mark.parametrize("sea_level, shelf_level", [
        (-0.5, -0.7), (0.0, -0.375), (0.3, 0.0), (0.5, 0.1), (0.9, 0.5),
    ])
    def test_builds_across_sea_levels(self, sphere_points, sea_level, shelf_level):
        settings = PlanetSettings.from_config({'sea_level': sea_level, 'shelf_level': shelf_level})
        values = build_planet(0, settings).session().get_value(*sphere_points)
        assert np.all(np.isfinite(values))
        assert np.all(np.abs(values) <= 1.0)
