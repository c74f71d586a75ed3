# planet_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the planet
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC PLANET.
Instead, pass a configuration dictionary to PlanetSettings.from_config().

Note: "Planetary elevation units" range from -1.0 (for the lowest underwater
trenches) to +1.0 (for the highest mountain peaks.)
================================================================================
"""

import logging
from dataclasses import dataclass, fields

from .errors import ConfigurationError

# --- Command-Line Defaults ---
DEFAULT_SEED = 0
# Seeds are 32-bit signed integers.
SEED_MIN = -2 ** 31
SEED_MAX = 2 ** 31 - 1
DEFAULT_WIDTH = 1024
DEFAULT_PROJECTION = 'cube'
DEFAULT_OUTPUT_FORMAT = 'greyscale8'

# --- Output Files ---
CUBE_FACE_FILENAMES = {
    'xp': 'xp.png',
    'xn': 'xn.png',
    'yp': 'yp.png',
    'yn': 'yn.png',
    'zp': 'zp.png',
    'zn': 'zn.png',
}
RECT_FILENAME = 'lat_lon.png'

# --- Continents ---
# Frequency of the planet's continents. Higher frequency produces smaller,
# more numerous continents. This value is measured in radians.
CONTINENT_FREQUENCY = 1.0

# Lacunarities are kept random-looking but close to 2.0 so that the octaves
# of the different terrain types never line up.
CONTINENT_LACUNARITY = 2.208984375
MOUNTAIN_LACUNARITY = 2.142578125
HILLS_LACUNARITY = 2.162109375
PLAINS_LACUNARITY = 2.314453125
BADLANDS_LACUNARITY = 2.212890625

# --- Terrain "twistiness" ---
MOUNTAINS_TWIST = 1.0
HILLS_TWIST = 1.0
BADLANDS_TWIST = 1.0

# --- Levels (planetary elevation units) ---
# Must be between -1.0 and +1.0.
SEA_LEVEL = 0.0
# Level at which continental shelves appear. Must be less than SEA_LEVEL.
SHELF_LEVEL = -0.375

# --- Terrain Amounts (0.0 = none, 1.0 = everywhere) ---
# Mountainous terrain overlaps hilly terrain, and badlands overlap both.
MOUNTAINS_AMOUNT = 0.5
# Hills are placed wherever the terrain type exceeds 1.0 - HILLS_AMOUNT, so
# this must be larger than MOUNTAINS_AMOUNT for hills to surround mountains.
HILLS_AMOUNT = (1.0 + MOUNTAINS_AMOUNT) / 2.0
BADLANDS_AMOUNT = 0.03125

# Offset applied to the terrain type definition. Low values (< 1.0) cause
# rough areas to appear only at high elevations; high values (> 2.0) cause
# them to appear at any elevation.
TERRAIN_OFFSET = 1.0

# Amount of "glaciation" on the mountains. Close to, and greater than, 1.0.
MOUNTAIN_GLACIATION = 1.375

# Scaling applied to the base continent elevations.
CONTINENT_HEIGHT_SCALE = (1.0 - SEA_LEVEL) / 4.0

# Maximum depth of the rivers.
RIVER_DEPTH = 0.0234375


@dataclass(frozen=True)
class PlanetSettings:
    """
    The complete, immutable set of terrain constants for one planet.

    A settings value is validated on construction, so any instance that
    exists is safe to hand to the graph builder.
    """
    continent_frequency: float = CONTINENT_FREQUENCY
    continent_lacunarity: float = CONTINENT_LACUNARITY
    mountain_lacunarity: float = MOUNTAIN_LACUNARITY
    hills_lacunarity: float = HILLS_LACUNARITY
    plains_lacunarity: float = PLAINS_LACUNARITY
    badlands_lacunarity: float = BADLANDS_LACUNARITY
    mountains_twist: float = MOUNTAINS_TWIST
    hills_twist: float = HILLS_TWIST
    badlands_twist: float = BADLANDS_TWIST
    sea_level: float = SEA_LEVEL
    shelf_level: float = SHELF_LEVEL
    mountains_amount: float = MOUNTAINS_AMOUNT
    hills_amount: float = HILLS_AMOUNT
    badlands_amount: float = BADLANDS_AMOUNT
    terrain_offset: float = TERRAIN_OFFSET
    mountain_glaciation: float = MOUNTAIN_GLACIATION
    continent_height_scale: float = CONTINENT_HEIGHT_SCALE
    river_depth: float = RIVER_DEPTH

    def __post_init__(self):
        if not self.shelf_level < self.sea_level:
            raise ConfigurationError(
                f"shelf_level ({self.shelf_level}) must be less than sea_level ({self.sea_level})"
            )
        if not -1.0 <= self.sea_level <= 1.0:
            raise ConfigurationError(f"sea_level ({self.sea_level}) must be within [-1, 1]")
        # The continental shelf terraces start at -0.75.
        if self.shelf_level <= -0.75:
            raise ConfigurationError(f"shelf_level ({self.shelf_level}) must be greater than -0.75")
        if self.shelf_level + self.sea_level / 2.0 in (-1.0, 1.0):
            raise ConfigurationError(
                f"shelf_level + sea_level / 2 must not be exactly -1 or 1, got "
                f"{self.shelf_level + self.sea_level / 2.0}"
            )
        if self.continent_height_scale <= 0.0:
            raise ConfigurationError(
                f"continent_height_scale ({self.continent_height_scale}) must be positive"
            )
        if not 0.0 < self.mountains_amount < 1.0:
            raise ConfigurationError(f"mountains_amount ({self.mountains_amount}) must be within (0, 1)")
        if not self.mountains_amount < self.hills_amount <= 1.0:
            raise ConfigurationError(
                f"hills_amount ({self.hills_amount}) must be greater than mountains_amount "
                f"({self.mountains_amount}) and at most 1.0"
            )
        if not 0.0 <= self.badlands_amount <= 1.0:
            raise ConfigurationError(f"badlands_amount ({self.badlands_amount}) must be within [0, 1]")
        if self.continent_frequency <= 0.0:
            raise ConfigurationError("continent_frequency must be positive")

    @classmethod
    def from_config(cls, config: dict, logger: logging.Logger = None) -> 'PlanetSettings':
        """
        Consolidates user overrides with the internal defaults.

        Values derived from other settings (hills_amount, continent_height_scale)
        follow the overridden values unless they are given explicitly.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown and logger is not None:
            logger.warning(f"Ignoring unknown planet parameters: {', '.join(unknown)}")

        for name in known & set(config):
            value = config[name]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"Planet parameter '{name}' must be a number, got {value!r}")

        sea_level = config.get('sea_level', SEA_LEVEL)
        mountains_amount = config.get('mountains_amount', MOUNTAINS_AMOUNT)

        settings = {
            'continent_frequency': config.get('continent_frequency', CONTINENT_FREQUENCY),
            'continent_lacunarity': config.get('continent_lacunarity', CONTINENT_LACUNARITY),
            'mountain_lacunarity': config.get('mountain_lacunarity', MOUNTAIN_LACUNARITY),
            'hills_lacunarity': config.get('hills_lacunarity', HILLS_LACUNARITY),
            'plains_lacunarity': config.get('plains_lacunarity', PLAINS_LACUNARITY),
            'badlands_lacunarity': config.get('badlands_lacunarity', BADLANDS_LACUNARITY),
            'mountains_twist': config.get('mountains_twist', MOUNTAINS_TWIST),
            'hills_twist': config.get('hills_twist', HILLS_TWIST),
            'badlands_twist': config.get('badlands_twist', BADLANDS_TWIST),
            'sea_level': sea_level,
            'shelf_level': config.get('shelf_level', SHELF_LEVEL),
            'mountains_amount': mountains_amount,
            'hills_amount': config.get('hills_amount', (1.0 + mountains_amount) / 2.0),
            'badlands_amount': config.get('badlands_amount', BADLANDS_AMOUNT),
            'terrain_offset': config.get('terrain_offset', TERRAIN_OFFSET),
            'mountain_glaciation': config.get('mountain_glaciation', MOUNTAIN_GLACIATION),
            'continent_height_scale': config.get('continent_height_scale', (1.0 - sea_level) / 4.0),
            'river_depth': config.get('river_depth', RIVER_DEPTH),
        }

        return cls(**{name: float(value) for name, value in settings.items()})


DEFAULT_SETTINGS = PlanetSettings()
