# generate_planet.py

"""
================================================================================
PLANET MAP GENERATOR
================================================================================
Command-line tool that generates elevation maps of a complex procedural
planet: either the six faces of a cube map (xp.png ... zn.png) or a single
equirectangular map (lat_lon.png).

Usage:
    python generate_planet.py --seed 42 --type cube --width 1024
    python generate_planet.py --type rect --width 2048 --format greyscale16
    python generate_planet.py --config my_planet.json --layer river_positions
================================================================================
"""
import os
import sys
import json
import logging
import argparse

from planet_generator import config as DEFAULTS
from planet_generator.color_maps import OUTPUT_FORMAT_NAMES
from planet_generator.config import PlanetSettings
from planet_generator.errors import PlanetGeneratorError, ConfigurationError
from planet_generator.planet import SUBGROUP_NAMES
from planet_generator.renderer import generate_cube, generate_rect


def load_planet_config(config_path: str) -> dict:
    """
    Reads planet parameter overrides from a JSON file. The file holds either a
    flat mapping or a 'planet_parameters' section.
    """
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to load or parse config file: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError("Config file must contain a JSON object")
    section = config.get('planet_parameters', config)
    if not isinstance(section, dict):
        raise ConfigurationError("'planet_parameters' must be a JSON object")
    return section


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate maps for a complex planetary surface, based on the libnoise "
                    "complexplanet example."
    )
    # Seed and width are parsed by hand so that bad values get the exact
    # error message and exit status below.
    parser.add_argument("-s", "--seed", default=str(DEFAULTS.DEFAULT_SEED),
                        help="Seed used to generate the planet; different seeds give different planets.")
    parser.add_argument("--type", choices=("cube", "rect"), default=DEFAULTS.DEFAULT_PROJECTION,
                        help="Output projection.")
    parser.add_argument("--width", default=str(DEFAULTS.DEFAULT_WIDTH),
                        help="Width of the images to generate (cube face edge, or map width).")
    parser.add_argument("--format", choices=OUTPUT_FORMAT_NAMES, default=DEFAULTS.DEFAULT_OUTPUT_FORMAT,
                        help="Pixel format of the output images.")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON file overriding planet parameters.")
    parser.add_argument("--output-dir", type=str, default=".",
                        help="Directory the images are written to.")
    parser.add_argument("--layer", choices=SUBGROUP_NAMES, default=None,
                        help="Render an intermediate terrain layer instead of the final planet.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        seed = int(args.seed)
    except ValueError:
        seed = None
    if seed is None or not DEFAULTS.SEED_MIN <= seed <= DEFAULTS.SEED_MAX:
        print("Seed must be an integer")
        return 1

    try:
        width = int(args.width)
    except ValueError:
        print("Width must be an integer")
        return 1

    # --- Setup Logging ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("PlanetGenerator")

    try:
        overrides = {}
        if args.config:
            logger.info(f"Loading configuration from: {args.config}")
            overrides = load_planet_config(args.config)
        settings = PlanetSettings.from_config(overrides, logger=logger)

        if not os.path.isdir(args.output_dir):
            raise ConfigurationError(f"Output directory does not exist: {args.output_dir}")

        logger.info(f"Generating planet with seed {seed} (sea level {settings.sea_level}, "
                    f"mountains {settings.mountains_amount}, hills {settings.hills_amount}).")
        if args.type == "cube":
            generate_cube(seed, width, args.format, settings, args.output_dir, args.layer, logger)
        else:
            generate_rect(seed, width, args.format, settings, args.output_dir, args.layer, logger)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except PlanetGeneratorError as e:
        logger.error(f"Generation failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
