# planet_generator/planet.py

"""
================================================================================
PLANET GRAPH ASSEMBLY
================================================================================
This module describes the complex planet as a declarative table of noise
modules, grouped into named subgroups, and builds it into a ModuleGraph.

Data Contract:
---------------
- Inputs:
    - seed (int): The planet seed. Every noise source uses seed plus a fixed
      offset that is unique within the table.
    - settings (PlanetSettings): The terrain constants.
- Outputs:
    - A ModuleGraph whose root is the final planet elevation, in planetary
      elevation units [-1, 1]. Each subgroup's output node is reachable by
      name (see SUBGROUPS).
- Side Effects: Logs the graph size when a logger is given.
- Invariants: Given the same seed and settings, the graph is identical.
================================================================================
"""

import logging
import time

from .config import DEFAULT_SETTINGS, PlanetSettings
from .graph import ModuleGraph, build_graph, node
from .noise import NoiseQuality

STANDARD = NoiseQuality.STANDARD
BEST = NoiseQuality.BEST

# Selection bands that are only bounded on one side use this as "infinity".
_UNBOUNDED = 1000.0

# Name of the root node.
FINAL_PLANET = 'final_planet'


def _base_continent_definition(s: PlanetSettings):
    """Positions and base elevations of the continents, before terrain features."""
    sea = s.sea_level
    return [
        # Continents; many octaves so detail survives at high zoom levels.
        node('base_continent_def_pe0', 'perlin', seed_offset=0, frequency=s.continent_frequency,
             persistence=0.5, lacunarity=s.continent_lacunarity, octaves=14, quality=STANDARD),
        # Very high values appear near sea level: the mountain ranges.
        node('base_continent_def_cu', 'curve', 'base_continent_def_pe0', control_points=[
            (-2.0000 + sea, -1.625 + sea),
            (-1.0000 + sea, -1.375 + sea),
            (0.0000 + sea, -0.375 + sea),
            (0.0625 + sea, 0.125 + sea),
            (0.1250 + sea, 0.250 + sea),
            (0.2500 + sea, 1.000 + sea),
            (0.5000 + sea, 0.250 + sea),
            (0.7500 + sea, 0.250 + sea),
            (1.0000 + sea, 0.500 + sea),
            (2.0000 + sea, 0.500 + sea),
        ]),
        # Carver: carves chunks out of the ranges so they stay passable.
        node('base_continent_def_pe1', 'perlin', seed_offset=1, frequency=s.continent_frequency * 4.34375,
             persistence=0.5, lacunarity=s.continent_lacunarity, octaves=11, quality=STANDARD),
        node('base_continent_def_sb', 'scale_bias', 'base_continent_def_pe1', scale=0.375, bias=0.625),
        node('base_continent_def_mi', 'min', 'base_continent_def_sb', 'base_continent_def_cu'),
        node('base_continent_def_cl', 'clamp', 'base_continent_def_mi', lower_bound=-1.0, upper_bound=1.0),
        node('base_continent_def', 'cache', 'base_continent_def_cl'),
    ]


def _continent_definition(s: PlanetSettings):
    """Warps the base continents so that only land above the coast gets rugged."""
    freq = s.continent_frequency
    return [
        node('continent_def_tu0', 'turbulence', 'base_continent_def', seed_offset=10,
             frequency=freq * 15.25, power=freq / 113.75, roughness=13),
        node('continent_def_tu1', 'turbulence', 'continent_def_tu0', seed_offset=11,
             frequency=freq * 47.25, power=freq / 433.75, roughness=12),
        node('continent_def_tu2', 'turbulence', 'continent_def_tu1', seed_offset=12,
             frequency=freq * 95.25, power=freq / 1019.75, roughness=11),
        node('continent_def_se', 'select', 'base_continent_def', 'continent_def_tu2', 'base_continent_def',
             lower_bound=s.sea_level - 0.0375, upper_bound=s.sea_level + _UNBOUNDED + 0.0375,
             edge_falloff=0.0625),
        node('continent_def', 'cache', 'continent_def_se'),
    ]


def _terrain_type_definition(s: PlanetSettings):
    """
    Where plains, hills and mountains go: -1.0 is the smoothest terrain, +1.0
    the roughest. Rough terrain mostly follows high ground, but the warp lets
    some of it reach the sea as rocky islands and fjords.
    """
    freq = s.continent_frequency
    return [
        node('terrain_type_def_tu', 'turbulence', 'continent_def', seed_offset=20,
             frequency=freq * 18.125, power=freq / 20.59375 * s.terrain_offset, roughness=3),
        node('terrain_type_def_te', 'terrace', 'terrain_type_def_tu',
             control_points=[-1.0, s.shelf_level + s.sea_level / 2.0, 1.0]),
        node('terrain_type_def', 'cache', 'terrain_type_def_te'),
    ]


def _mountain_base_definition(s: PlanetSettings):
    twist = s.mountains_twist
    return [
        node('mountain_base_def_rm0', 'ridged_multi', seed_offset=30, frequency=1723.0,
             lacunarity=s.mountain_lacunarity, octaves=4, quality=STANDARD),
        node('mountain_base_def_sb0', 'scale_bias', 'mountain_base_def_rm0', scale=0.5, bias=0.375),
        # River valleys; one octave, so the range is stretched and inverted below.
        node('mountain_base_def_rm1', 'ridged_multi', seed_offset=31, frequency=367.0,
             lacunarity=s.mountain_lacunarity, octaves=1, quality=BEST),
        node('mountain_base_def_sb1', 'scale_bias', 'mountain_base_def_rm1', scale=-2.0, bias=-0.5),
        node('mountain_base_def_co', 'constant', value=-1.0),
        node('mountain_base_def_bl', 'blend',
             'mountain_base_def_co', 'mountain_base_def_sb0', 'mountain_base_def_sb1'),
        node('mountain_base_def_tu0', 'turbulence', 'mountain_base_def_bl', seed_offset=32,
             frequency=1337.0, power=1.0 / 6730.0 * twist, roughness=4),
        node('mountain_base_def_tu1', 'turbulence', 'mountain_base_def_tu0', seed_offset=33,
             frequency=21221.0, power=1.0 / 120157.0 * twist, roughness=6),
        node('mountain_base_def', 'cache', 'mountain_base_def_tu1'),
    ]


def _high_mountainous_terrain(s: PlanetSettings):
    return [
        node('mountainous_high_rm0', 'ridged_multi', seed_offset=40, frequency=2371.0,
             lacunarity=s.mountain_lacunarity, octaves=3, quality=BEST),
        node('mountainous_high_rm1', 'ridged_multi', seed_offset=41, frequency=2341.0,
             lacunarity=s.mountain_lacunarity, octaves=3, quality=BEST),
        node('mountainous_high_ma', 'max', 'mountainous_high_rm0', 'mountainous_high_rm1'),
        node('mountainous_high_tu', 'turbulence', 'mountainous_high_ma', seed_offset=42,
             frequency=31511.0, power=1.0 / 180371.0 * s.mountains_twist, roughness=4),
        node('mountainous_high', 'cache', 'mountainous_high_tu'),
    ]


def _low_mountainous_terrain(s: PlanetSettings):
    return [
        node('mountainous_low_rm0', 'ridged_multi', seed_offset=50, frequency=1381.0,
             lacunarity=s.mountain_lacunarity, octaves=8, quality=BEST),
        node('mountainous_low_rm1', 'ridged_multi', seed_offset=51, frequency=1427.0,
             lacunarity=s.mountain_lacunarity, octaves=8, quality=BEST),
        node('mountainous_low_mu', 'multiply', 'mountainous_low_rm0', 'mountainous_low_rm1'),
        node('mountainous_low', 'cache', 'mountainous_low_mu'),
    ]


def _mountainous_terrain(s: PlanetSettings):
    return [
        node('mountainous_terrain_sb0', 'scale_bias', 'mountainous_low', scale=0.03125, bias=-0.96875),
        node('mountainous_terrain_sb1', 'scale_bias', 'mountainous_high', scale=0.25, bias=0.25),
        node('mountainous_terrain_ad', 'add', 'mountainous_terrain_sb1', 'mountain_base_def'),
        # High mountains only appear where the base definition is high.
        node('mountainous_terrain_se', 'select',
             'mountainous_terrain_sb0', 'mountainous_terrain_ad', 'mountain_base_def',
             lower_bound=-0.5, upper_bound=_UNBOUNDED - 0.5, edge_falloff=0.5),
        node('mountainous_terrain_sb2', 'scale_bias', 'mountainous_terrain_se', scale=0.8, bias=0.0),
        node('mountainous_terrain_ex', 'exponent', 'mountainous_terrain_sb2', exponent=s.mountain_glaciation),
        node('mountainous_terrain', 'cache', 'mountainous_terrain_ex'),
    ]


def _hilly_terrain(s: PlanetSettings):
    twist = s.hills_twist
    return [
        node('hilly_terrain_bi', 'billow', seed_offset=60, frequency=1663.0, persistence=0.5,
             lacunarity=s.hills_lacunarity, octaves=6, quality=BEST),
        node('hilly_terrain_sb0', 'scale_bias', 'hilly_terrain_bi', scale=0.5, bias=0.5),
        node('hilly_terrain_rm', 'ridged_multi', seed_offset=61, frequency=367.5,
             lacunarity=s.hills_lacunarity, octaves=1, quality=BEST),
        node('hilly_terrain_sb1', 'scale_bias', 'hilly_terrain_rm', scale=-2.0, bias=-0.5),
        node('hilly_terrain_co', 'constant', value=-1.0),
        node('hilly_terrain_bl', 'blend', 'hilly_terrain_co', 'hilly_terrain_sb1', 'hilly_terrain_sb0'),
        node('hilly_terrain_sb2', 'scale_bias', 'hilly_terrain_bl', scale=0.75, bias=-0.25),
        node('hilly_terrain_ex', 'exponent', 'hilly_terrain_sb2', exponent=1.375),
        node('hilly_terrain_tu0', 'turbulence', 'hilly_terrain_ex', seed_offset=62,
             frequency=1531.0, power=1.0 / 16921.0 * twist, roughness=4),
        node('hilly_terrain_tu1', 'turbulence', 'hilly_terrain_tu0', seed_offset=63,
             frequency=21617.0, power=1.0 / 117529.0 * twist, roughness=6),
        node('hilly_terrain', 'cache', 'hilly_terrain_tu1'),
    ]


def _plains_terrain(s: PlanetSettings):
    return [
        node('plains_terrain_bi0', 'billow', seed_offset=70, frequency=1097.5, persistence=0.5,
             lacunarity=s.plains_lacunarity, octaves=8, quality=BEST),
        node('plains_terrain_sb0', 'scale_bias', 'plains_terrain_bi0', scale=0.5, bias=0.5),
        node('plains_terrain_bi1', 'billow', seed_offset=71, frequency=1319.5, persistence=0.5,
             lacunarity=s.plains_lacunarity, octaves=8, quality=BEST),
        node('plains_terrain_sb1', 'scale_bias', 'plains_terrain_bi1', scale=0.5, bias=0.5),
        node('plains_terrain_mu', 'multiply', 'plains_terrain_sb0', 'plains_terrain_sb1'),
        node('plains_terrain_sb2', 'scale_bias', 'plains_terrain_mu', scale=2.0, bias=-1.0),
        node('plains_terrain', 'cache', 'plains_terrain_sb2'),
    ]


def _badlands_sand(s: PlanetSettings):
    return [
        # Sand dunes.
        node('badlands_sand_rm', 'ridged_multi', seed_offset=80, frequency=6163.5,
             lacunarity=s.badlands_lacunarity, octaves=1, quality=BEST),
        node('badlands_sand_sb0', 'scale_bias', 'badlands_sand_rm', scale=0.875, bias=0.0),
        # Dune texture: small pits.
        node('badlands_sand_vo', 'voronoi', seed_offset=81, frequency=16183.25,
             displacement=0.0, enable_distance=True),
        node('badlands_sand_sb1', 'scale_bias', 'badlands_sand_vo', scale=0.25, bias=0.25),
        node('badlands_sand_ad', 'add', 'badlands_sand_sb0', 'badlands_sand_sb1'),
        node('badlands_sand', 'cache', 'badlands_sand_ad'),
    ]


def _badlands_cliffs(s: PlanetSettings):
    twist = s.badlands_twist
    return [
        node('badlands_cliffs_pe', 'perlin', seed_offset=90, frequency=s.continent_frequency * 839.0,
             persistence=0.5, lacunarity=s.badlands_lacunarity, octaves=6, quality=STANDARD),
        node('badlands_cliffs_cu', 'curve', 'badlands_cliffs_pe', control_points=[
            (-2.0000, -2.0000),
            (-1.0000, -1.2500),
            (-0.0000, -0.7500),
            (0.5000, -0.2500),
            (0.6250, 0.8750),
            (0.7500, 1.0000),
            (2.0000, 1.2500),
        ]),
        node('badlands_cliffs_cl', 'clamp', 'badlands_cliffs_cu', lower_bound=-999.125, upper_bound=0.875),
        node('badlands_cliffs_te', 'terrace', 'badlands_cliffs_cl',
             control_points=[-1.0000, -0.8750, -0.7500, -0.5000, 0.0000, 1.0000]),
        node('badlands_cliffs_tu0', 'turbulence', 'badlands_cliffs_te', seed_offset=91,
             frequency=16111.0, power=1.0 / 141539.0 * twist, roughness=3),
        node('badlands_cliffs_tu1', 'turbulence', 'badlands_cliffs_tu0', seed_offset=92,
             frequency=36107.0, power=1.0 / 211543.0 * twist, roughness=3),
        node('badlands_cliffs', 'cache', 'badlands_cliffs_tu1'),
    ]


def _badlands_terrain(s: PlanetSettings):
    return [
        node('badlands_terrain_sb', 'scale_bias', 'badlands_sand', scale=0.25, bias=-0.75),
        node('badlands_terrain_ma', 'max', 'badlands_cliffs', 'badlands_terrain_sb'),
        node('badlands_terrain', 'cache', 'badlands_terrain_ma'),
    ]


def _river_positions(s: PlanetSettings):
    """Large and small river channels; low values are river beds."""
    return [
        node('river_positions_rm0', 'ridged_multi', seed_offset=100, frequency=18.75,
             lacunarity=s.continent_lacunarity, octaves=1, quality=BEST),
        node('river_positions_cu0', 'curve', 'river_positions_rm0', control_points=[
            (-2.000, 2.000),
            (-1.000, 1.000),
            (-0.125, 0.875),
            (0.000, -1.000),
            (1.000, -1.500),
            (2.000, -2.000),
        ]),
        node('river_positions_rm1', 'ridged_multi', seed_offset=101, frequency=43.25,
             lacunarity=s.continent_lacunarity, octaves=1, quality=BEST),
        node('river_positions_cu1', 'curve', 'river_positions_rm1', control_points=[
            (-2.000, 2.0000),
            (-1.000, 1.5000),
            (-0.125, 1.4375),
            (0.000, 0.5000),
            (1.000, 0.2500),
            (2.000, 0.0000),
        ]),
        node('river_positions_mi', 'min', 'river_positions_cu0', 'river_positions_cu1'),
        node('river_positions_tu', 'turbulence', 'river_positions_mi', seed_offset=102,
             frequency=9.25, power=1.0 / 57.75, roughness=6),
        node('river_positions', 'cache', 'river_positions_tu'),
    ]


def _scaled_mountainous_terrain(s: PlanetSettings):
    """Mountains in planetary elevation units, almost always positive."""
    return [
        node('scaled_mountainous_terrain_sb0', 'scale_bias', 'mountainous_terrain', scale=0.125, bias=0.125),
        # Varies the height of the peaks.
        node('scaled_mountainous_terrain_pe', 'perlin', seed_offset=110, frequency=14.5, persistence=0.5,
             lacunarity=s.mountain_lacunarity, octaves=6, quality=STANDARD),
        node('scaled_mountainous_terrain_ex', 'exponent', 'scaled_mountainous_terrain_pe', exponent=1.25),
        node('scaled_mountainous_terrain_sb1', 'scale_bias', 'scaled_mountainous_terrain_ex',
             scale=0.25, bias=1.0),
        node('scaled_mountainous_terrain_mu', 'multiply',
             'scaled_mountainous_terrain_sb0', 'scaled_mountainous_terrain_sb1'),
        node('scaled_mountainous_terrain', 'cache', 'scaled_mountainous_terrain_mu'),
    ]


def _scaled_hilly_terrain(s: PlanetSettings):
    return [
        node('scaled_hilly_terrain_sb0', 'scale_bias', 'hilly_terrain', scale=0.0625, bias=0.0625),
        node('scaled_hilly_terrain_pe', 'perlin', seed_offset=120, frequency=13.5, persistence=0.5,
             lacunarity=s.hills_lacunarity, octaves=6, quality=STANDARD),
        node('scaled_hilly_terrain_ex', 'exponent', 'scaled_hilly_terrain_pe', exponent=1.25),
        node('scaled_hilly_terrain_sb1', 'scale_bias', 'scaled_hilly_terrain_ex', scale=0.5, bias=1.5),
        node('scaled_hilly_terrain_mu', 'multiply', 'scaled_hilly_terrain_sb0', 'scaled_hilly_terrain_sb1'),
        node('scaled_hilly_terrain', 'cache', 'scaled_hilly_terrain_mu'),
    ]


def _scaled_plains_terrain(s: PlanetSettings):
    return [
        node('scaled_plains_terrain_sb', 'scale_bias', 'plains_terrain', scale=0.00390625, bias=0.0078125),
        node('scaled_plains_terrain', 'cache', 'scaled_plains_terrain_sb'),
    ]


def _scaled_badlands_terrain(s: PlanetSettings):
    return [
        node('scaled_badlands_terrain_sb', 'scale_bias', 'badlands_terrain', scale=0.0625, bias=0.0625),
        node('scaled_badlands_terrain', 'cache', 'scaled_badlands_terrain_sb'),
    ]


def _continental_shelf(s: PlanetSettings):
    return [
        node('continental_shelf_te', 'terrace', 'continent_def',
             control_points=[-1.0, -0.75, s.shelf_level, 1.0]),
        # Oceanic trenches.
        node('continental_shelf_rm', 'ridged_multi', seed_offset=130, frequency=s.continent_frequency * 4.375,
             lacunarity=s.continent_lacunarity, octaves=16, quality=BEST),
        node('continental_shelf_sb', 'scale_bias', 'continental_shelf_rm', scale=-0.125, bias=-0.125),
        node('continental_shelf_cl', 'clamp', 'continental_shelf_te', lower_bound=-0.75, upper_bound=s.sea_level),
        node('continental_shelf_ad', 'add', 'continental_shelf_sb', 'continental_shelf_cl'),
        node('continental_shelf', 'cache', 'continental_shelf_ad'),
    ]


def _base_continent_elevation(s: PlanetSettings):
    return [
        node('base_continent_elev_sb', 'scale_bias', 'continent_def', scale=s.continent_height_scale, bias=0.0),
        # Below the shelf level the continental shelf takes over.
        node('base_continent_elev_se', 'select', 'base_continent_elev_sb', 'continental_shelf', 'continent_def',
             lower_bound=s.shelf_level - _UNBOUNDED, upper_bound=s.shelf_level, edge_falloff=0.03125),
        node('base_continent_elev', 'cache', 'base_continent_elev_se'),
    ]


def _continents_with_plains(s: PlanetSettings):
    return [
        node('continents_with_plains_ad', 'add', 'base_continent_elev', 'scaled_plains_terrain'),
        node('continents_with_plains', 'cache', 'continents_with_plains_ad'),
    ]


def _continents_with_hills(s: PlanetSettings):
    return [
        node('continents_with_hills_ad', 'add', 'base_continent_elev', 'scaled_hilly_terrain'),
        node('continents_with_hills_se', 'select',
             'continents_with_plains', 'continents_with_hills_ad', 'terrain_type_def',
             lower_bound=1.0 - s.hills_amount, upper_bound=_UNBOUNDED + 1.0 - s.hills_amount,
             edge_falloff=0.25),
        node('continents_with_hills', 'cache', 'continents_with_hills_se'),
    ]


def _continents_with_mountains(s: PlanetSettings):
    return [
        node('continents_with_mountains_ad0', 'add', 'base_continent_elev', 'scaled_mountainous_terrain'),
        # Mountains get taller towards the continent interiors.
        node('continents_with_mountains_cu', 'curve', 'continent_def', control_points=[
            (-1.0, -0.0625),
            (0.0, 0.0000),
            (1.0 - s.mountains_amount, 0.0625),
            (1.0, 0.2500),
        ]),
        node('continents_with_mountains_ad1', 'add',
             'continents_with_mountains_ad0', 'continents_with_mountains_cu'),
        node('continents_with_mountains_se', 'select',
             'continents_with_hills', 'continents_with_mountains_ad1', 'terrain_type_def',
             lower_bound=1.0 - s.mountains_amount, upper_bound=_UNBOUNDED + 1.0 - s.mountains_amount,
             edge_falloff=0.25),
        node('continents_with_mountains', 'cache', 'continents_with_mountains_se'),
    ]


def _continents_with_badlands(s: PlanetSettings):
    return [
        # Where the badlands appear.
        node('continents_with_badlands_pe', 'perlin', seed_offset=140, frequency=16.5, persistence=0.5,
             lacunarity=s.continent_lacunarity, octaves=2, quality=STANDARD),
        node('continents_with_badlands_ad', 'add', 'base_continent_elev', 'scaled_badlands_terrain'),
        node('continents_with_badlands_se', 'select',
             'continents_with_mountains', 'continents_with_badlands_ad', 'continents_with_badlands_pe',
             lower_bound=1.0 - s.badlands_amount, upper_bound=_UNBOUNDED + 1.0 - s.badlands_amount,
             edge_falloff=0.25),
        # Badlands never lower the terrain they are placed on.
        node('continents_with_badlands_ma', 'max', 'continents_with_mountains', 'continents_with_badlands_se'),
        node('continents_with_badlands', 'cache', 'continents_with_badlands_ma'),
    ]


def _continents_with_rivers(s: PlanetSettings):
    return [
        node('continents_with_rivers_sb', 'scale_bias', 'river_positions',
             scale=s.river_depth / 2.0, bias=-s.river_depth / 2.0),
        node('continents_with_rivers_ad', 'add', 'continents_with_badlands', 'continents_with_rivers_sb'),
        # Rivers are only carved into land, fading out towards the coast.
        node('continents_with_rivers_se', 'select',
             'continents_with_badlands', 'continents_with_rivers_ad', 'continents_with_badlands',
             lower_bound=s.sea_level, upper_bound=s.continent_height_scale + s.sea_level,
             edge_falloff=s.continent_height_scale - s.sea_level),
        node('continents_with_rivers', 'cache', 'continents_with_rivers_se'),
    ]


def _final_planet(s: PlanetSettings):
    return [
        node('final_planet_cl', 'clamp', 'continents_with_rivers', lower_bound=-1.0, upper_bound=1.0),
        node(FINAL_PLANET, 'cache', 'final_planet_cl'),
    ]


# Subgroups in dependency order. The name of each subgroup is also the name
# of its output node.
SUBGROUPS = (
    ('base_continent_def', _base_continent_definition),
    ('continent_def', _continent_definition),
    ('terrain_type_def', _terrain_type_definition),
    ('mountain_base_def', _mountain_base_definition),
    ('mountainous_high', _high_mountainous_terrain),
    ('mountainous_low', _low_mountainous_terrain),
    ('mountainous_terrain', _mountainous_terrain),
    ('hilly_terrain', _hilly_terrain),
    ('plains_terrain', _plains_terrain),
    ('badlands_sand', _badlands_sand),
    ('badlands_cliffs', _badlands_cliffs),
    ('badlands_terrain', _badlands_terrain),
    ('river_positions', _river_positions),
    ('scaled_mountainous_terrain', _scaled_mountainous_terrain),
    ('scaled_hilly_terrain', _scaled_hilly_terrain),
    ('scaled_plains_terrain', _scaled_plains_terrain),
    ('scaled_badlands_terrain', _scaled_badlands_terrain),
    ('continental_shelf', _continental_shelf),
    ('base_continent_elev', _base_continent_elevation),
    ('continents_with_plains', _continents_with_plains),
    ('continents_with_hills', _continents_with_hills),
    ('continents_with_mountains', _continents_with_mountains),
    ('continents_with_badlands', _continents_with_badlands),
    ('continents_with_rivers', _continents_with_rivers),
    (FINAL_PLANET, _final_planet),
)

SUBGROUP_NAMES = tuple(name for name, _ in SUBGROUPS)


def planet_descriptors(settings: PlanetSettings = DEFAULT_SETTINGS) -> list:
    """Returns the full descriptor table for a planet with the given settings."""
    specs = []
    for _, subgroup in SUBGROUPS:
        specs.extend(subgroup(settings))
    return specs


def build_planet(seed: int, settings: PlanetSettings = None, logger: logging.Logger = None) -> ModuleGraph:
    """Builds the complete planet graph for one seed."""
    settings = settings if settings is not None else DEFAULT_SETTINGS
    start_time = time.perf_counter()

    graph = build_graph(planet_descriptors(settings), seed=seed, root=FINAL_PLANET, logger=logger)

    if logger is not None:
        logger.info(
            f"Planet graph built for seed {seed}: {len(graph)} modules, "
            f"{graph.cache_count} caches ({time.perf_counter() - start_time:.3f}s)."
        )
    return graph
