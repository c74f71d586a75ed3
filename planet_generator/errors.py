# planet_generator/errors.py

"""Exception types raised by the planet generator."""


class PlanetGeneratorError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(PlanetGeneratorError):
    """A setting, control-point table or graph description is malformed.

    Always raised before any field evaluation starts.
    """


class EncodingError(PlanetGeneratorError):
    """The image codec could not write an output file."""
