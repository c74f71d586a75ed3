# planet_generator/__init__.py

"""Procedural generator for complex planetary elevation maps."""

from .config import PlanetSettings
from .errors import PlanetGeneratorError, ConfigurationError, EncodingError
from .planet import build_planet
from .renderer import generate_cube, generate_rect

__version__ = "1.0.0"
