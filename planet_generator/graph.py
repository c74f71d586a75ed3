# planet_generator/graph.py

"""
================================================================================
MODULE GRAPH ARENA, SESSIONS AND BUILDER
================================================================================
A planet's elevation field is a directed acyclic graph of noise modules. This
module stores that graph as an arena (a list of modules addressed by index),
builds it from a declarative table of node descriptors, and evaluates it
through sessions.

Data Contract:
---------------
- Inputs (build_graph):
    - specs: An ordered sequence of NodeSpec descriptors. A descriptor may
      only reference sources defined earlier in the sequence.
    - seed: The 32-bit signed planet seed; each seeded descriptor gets
      seed + its seed_offset.
- Outputs:
    - A ModuleGraph whose modules are immutable and may be shared between
      threads.
- Side Effects: None outside the graph being built.
- Invariants: All mutable evaluation state (cache entries) is owned by a
  Session. One session must never be used by two threads at once; any number
  of sessions may evaluate the same graph concurrently.
================================================================================
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from . import config as DEFAULTS
from . import modules
from .errors import ConfigurationError

# Maps descriptor kinds to module classes.
MODULE_TYPES = {
    'constant': modules.Constant,
    'perlin': modules.Perlin,
    'ridged_multi': modules.RidgedMulti,
    'billow': modules.Billow,
    'voronoi': modules.Voronoi,
    'scale_bias': modules.ScaleBias,
    'clamp': modules.Clamp,
    'curve': modules.Curve,
    'terrace': modules.Terrace,
    'exponent': modules.Exponent,
    'turbulence': modules.Turbulence,
    'add': modules.Add,
    'multiply': modules.Multiply,
    'min': modules.Min,
    'max': modules.Max,
    'blend': modules.Blend,
    'select': modules.Select,
    'cache': modules.Cache,
}


@dataclass(frozen=True)
class NodeSpec:
    """
    Declarative description of one graph node.

    params are passed to the module constructor as keyword arguments, except
    'seed_offset', which build_graph turns into an absolute 'seed'.
    """
    name: str
    kind: str
    sources: tuple = ()
    params: dict = field(default_factory=dict)


def node(name, kind, *sources, **params) -> NodeSpec:
    """Shorthand used by descriptor tables."""
    return NodeSpec(name, kind, tuple(sources), params)


class Session:
    """
    One evaluation context over a graph: the graph plus a private cache table
    keyed by module index.
    """

    def __init__(self, graph: 'ModuleGraph'):
        self.graph = graph
        self._cache_table = {}
        self.hits = 0
        self.misses = 0

    def lookup(self, index, x, y, z):
        """Returns the cached values for this exact batch of points, or None."""
        entry = self._cache_table.get(index)
        if entry is not None:
            cached_x, cached_y, cached_z, value = entry
            if (np.array_equal(cached_x, x) and np.array_equal(cached_y, y)
                    and np.array_equal(cached_z, z)):
                self.hits += 1
                return value
        self.misses += 1
        return None

    def store(self, index, x, y, z, value):
        # Copies guard against callers reusing their coordinate buffers.
        self._cache_table[index] = (x.copy(), y.copy(), z.copy(), value)

    def clear(self):
        self._cache_table.clear()

    def get_value(self, x, y, z, name=None):
        """Evaluates the root (or the named module) at scalar or array coordinates."""
        module = self.graph.root if name is None else self.graph.module(name)
        return modules.evaluate(module, x, y, z, self)


class ModuleGraph:
    """Arena of modules. Each module's index is its position in the arena."""

    def __init__(self):
        self.modules = []
        self.names = {}
        self.root = None

    def add(self, module: modules.Module, name: str = None) -> modules.Module:
        if module.index is not None:
            raise ConfigurationError(f"{module!r} already belongs to a graph")
        if name is not None and name in self.names:
            raise ConfigurationError(f"Duplicate module name '{name}'")
        module.index = len(self.modules)
        self.modules.append(module)
        if name is not None:
            self.names[name] = module.index
        return module

    def module(self, name: str) -> modules.Module:
        try:
            return self.modules[self.names[name]]
        except KeyError:
            raise ConfigurationError(f"Unknown module name '{name}'") from None

    def session(self) -> Session:
        return Session(self)

    @property
    def cache_count(self) -> int:
        return sum(1 for m in self.modules if isinstance(m, modules.Cache))

    def __len__(self):
        return len(self.modules)

    def __contains__(self, name):
        return name in self.names


def build_graph(specs, seed: int = 0, root: str = None, logger: logging.Logger = None) -> ModuleGraph:
    """
    Interprets a descriptor table into a ModuleGraph.

    The root is the named node, or the last descriptor when no name is given.
    Any malformed descriptor raises ConfigurationError.
    """
    if not DEFAULTS.SEED_MIN <= seed <= DEFAULTS.SEED_MAX:
        raise ConfigurationError(f"Seed {seed} is outside the 32-bit signed range")
    graph = ModuleGraph()

    for spec in specs:
        module_type = MODULE_TYPES.get(spec.kind)
        if module_type is None:
            raise ConfigurationError(f"Node '{spec.name}' has unknown kind '{spec.kind}'")

        sources = []
        for source_name in spec.sources:
            if source_name not in graph:
                raise ConfigurationError(
                    f"Node '{spec.name}' references '{source_name}' before it is defined"
                )
            sources.append(graph.module(source_name))

        params = dict(spec.params)
        if 'seed_offset' in params:
            params['seed'] = seed + params.pop('seed_offset')

        try:
            module = module_type(*sources, **params)
        except ConfigurationError as e:
            raise ConfigurationError(f"Node '{spec.name}': {e}") from e
        except TypeError as e:
            raise ConfigurationError(f"Node '{spec.name}' has invalid parameters: {e}") from e
        graph.add(module, spec.name)

    if not graph.modules:
        raise ConfigurationError("Cannot build an empty graph")
    graph.root = graph.module(root) if root is not None else graph.modules[-1]

    if logger is not None:
        logger.debug(f"Built graph of {len(graph)} modules ({graph.cache_count} caches) with seed {seed}.")
    return graph
