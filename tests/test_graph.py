"""
Tests for the module graph arena, sessions and descriptor builder.
"""

import numpy as np
import pytest

from planet_generator.errors import ConfigurationError
from planet_generator.graph import ModuleGraph, NodeSpec, build_graph, node
from planet_generator.modules import Add, Cache, Constant, Perlin


SIMPLE_TABLE = [
    node('base', 'perlin', seed_offset=5, frequency=2.0, octaves=3),
    node('base_cache', 'cache', 'base'),
    node('offset', 'constant', value=0.5),
    node('sum', 'add', 'base_cache', 'offset'),
]


class TestBuildGraph:

    def test_node_shorthand(self):
        spec = node('sum', 'add', 'a', 'b')
        assert spec == NodeSpec('sum', 'add', ('a', 'b'), {})

    def test_builds_in_order(self):
        graph = build_graph(SIMPLE_TABLE, seed=10)
        assert len(graph) == 4
        assert [m.index for m in graph.modules] == [0, 1, 2, 3]
        assert graph.root is graph.module('sum')
        assert graph.cache_count == 1

    def test_named_root(self):
        graph = build_graph(SIMPLE_TABLE, root='base_cache')
        assert graph.root is graph.module('base_cache')

    def test_seed_offsets(self):
        graph = build_graph(SIMPLE_TABLE, seed=10)
        assert graph.module('base').seed == 15

    @pytest.mark.parametrize("seed", [2 ** 31, -2 ** 31 - 1, 10 ** 20])
    def test_seed_outside_32_bits(self, seed):
        with pytest.raises(ConfigurationError, match="32-bit"):
            build_graph(SIMPLE_TABLE, seed=seed)

    def test_extreme_32_bit_seeds_evaluate(self):
        xs = np.array([0.3, -0.7])
        for seed in (2 ** 31 - 1, -2 ** 31):
            values = build_graph(SIMPLE_TABLE, seed=seed).session().get_value(xs, xs, xs)
            assert np.all(np.isfinite(values))

    def test_sources_are_shared_modules(self):
        graph = build_graph(SIMPLE_TABLE)
        assert graph.module('sum').sources[0] is graph.module('base_cache')

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError, match="unknown kind"):
            build_graph([node('a', 'fractal')])

    def test_source_defined_later(self):
        with pytest.raises(ConfigurationError, match="before it is defined"):
            build_graph([node('a', 'cache', 'b'), node('b', 'constant')])

    def test_invalid_parameters(self):
        with pytest.raises(ConfigurationError, match="'a'"):
            build_graph([node('a', 'constant', colour='red')])

    def test_constructor_errors_name_the_node(self):
        with pytest.raises(ConfigurationError, match="'bad_curve'"):
            build_graph([
                node('c', 'constant'),
                node('bad_curve', 'curve', 'c', control_points=[(0.0, 0.0)]),
            ])

    def test_duplicate_names(self):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            build_graph([node('a', 'constant'), node('a', 'constant')])

    def test_empty(self):
        with pytest.raises(ConfigurationError):
            build_graph([])

    def test_unknown_module_name(self):
        graph = build_graph(SIMPLE_TABLE)
        assert 'base' in graph
        assert 'missing' not in graph
        with pytest.raises(ConfigurationError):
            graph.module('missing')


class TestModuleGraph:

    def test_module_belongs_to_one_graph(self):
        constant = Constant(1.0)
        ModuleGraph().add(constant)
        with pytest.raises(ConfigurationError):
            ModuleGraph().add(constant)


class TestSession:

    def test_named_evaluation(self):
        graph = build_graph(SIMPLE_TABLE)
        session = graph.session()
        assert session.get_value(0.0, 0.0, 0.0, name='offset') == 0.5

    def test_matches_uncached_evaluation(self):
        graph = build_graph(SIMPLE_TABLE, seed=3)
        xs = np.linspace(-1.0, 1.0, 20)
        session = graph.session()
        cached = session.get_value(xs, xs, xs)
        plain = graph.root.get_value(xs, xs, xs)
        np.testing.assert_array_equal(cached, plain)

    def test_counts_hits_and_misses(self):
        graph = build_graph(SIMPLE_TABLE)
        session = graph.session()
        xs = np.array([0.1, 0.2])
        session.get_value(xs, xs, xs)
        session.get_value(xs, xs, xs)
        assert (session.hits, session.misses) == (1, 1)

    def test_stored_coordinates_are_copied(self):
        graph = ModuleGraph()
        perlin = graph.add(Perlin(), 'perlin')
        graph.root = graph.add(Cache(perlin), 'cache')
        session = graph.session()

        xs = np.array([0.25, 0.5])
        first = session.get_value(xs, xs, xs)
        xs += 1.0
        second = session.get_value(xs, xs, xs)
        assert session.misses == 2
        assert not np.array_equal(first, second)

    def test_clear(self):
        graph = build_graph(SIMPLE_TABLE)
        session = graph.session()
        xs = np.array([0.1])
        session.get_value(xs, xs, xs)
        session.clear()
        session.get_value(xs, xs, xs)
        assert session.misses == 2

    def test_add_accepts_graph_modules(self):
        graph = ModuleGraph()
        a = graph.add(Constant(1.0), 'a')
        b = graph.add(Constant(2.0), 'b')
        graph.root = graph.add(Add(a, b), 'sum')
        assert graph.session().get_value(0.0, 0.0, 0.0) == 3.0
