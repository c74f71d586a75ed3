# planet_generator/renderer.py

"""
================================================================================
PARALLEL PLANET RENDERER
================================================================================
Samples the planet's elevation field into raster images and writes them as
PNG files: six cube-map faces rendered concurrently, or one equirectangular
latitude/longitude map.

Data Contract:
---------------
- Inputs:
    - seed (int), width (int >= 2), an OutputFormat and optional
      PlanetSettings.
    - layer (str, optional): The name of a graph subgroup to render instead of
      the final planet.
    - output_dir (str): Existing directory the images are written to.
- Outputs:
    - The paths of the written images.
- Side Effects: Writes xp/xn/yp/yn/zp/zn.png or lat_lon.png into output_dir.
- Invariants: The graph is built once per run and shared by every worker.
  Each worker evaluates through its own Session, so no cache state is
  shared between threads. Grid row b is stored in image row height-1-b.
================================================================================
"""

import logging
import os
import time
from functools import partial
from multiprocessing.pool import ThreadPool

import numpy as np
from tqdm import tqdm

from . import config as DEFAULTS
from .codec import write_png
from .color_maps import OutputFormat, quantize
from .config import DEFAULT_SETTINGS
from .errors import ConfigurationError
from .graph import ModuleGraph, Session
from .planet import build_planet
from .projection import CUBE_FACE_NAMES, cube_face_rows, rect_rows


# --- Sampling ---
def sample_cube_face(session: Session, face: str, size: int, layer: str = None) -> np.ndarray:
    """Evaluates one cube face into a (size, size) elevation array."""
    elevation = np.empty((size, size))
    for b, x, y, z in cube_face_rows(face, size):
        elevation[size - 1 - b] = session.get_value(x, y, z, name=layer)
    return elevation


def sample_rect(session: Session, width: int, layer: str = None) -> np.ndarray:
    """Evaluates the equirectangular map into a (width // 2, width) elevation array."""
    height = width // 2
    elevation = np.empty((height, width))
    for row, x, y, z in rect_rows(width):
        elevation[height - 1 - row] = session.get_value(x, y, z, name=layer)
    return elevation


# --- Rendering ---
def render_cube_face(graph: ModuleGraph, face: str, size: int, fmt, output_dir: str = '.',
                     layer: str = None, logger: logging.Logger = None,
                     sea_level: float = DEFAULTS.SEA_LEVEL) -> str:
    """Samples, quantizes and writes one face. Safe to run concurrently on a shared graph."""
    logger = logger or logging.getLogger(f"Worker-{face}")
    start_time = time.perf_counter()

    session = graph.session()
    elevation = sample_cube_face(session, face, size, layer)
    path = os.path.join(output_dir, DEFAULTS.CUBE_FACE_FILENAMES[face])
    write_png(path, quantize(elevation, fmt, sea_level), size, size, fmt)

    logger.debug(f"Face {face}: {session.hits} cache hits, {session.misses} misses.")
    logger.info(f"Face {face} written to {path} ({time.perf_counter() - start_time:.2f}s).")
    return path


def render_rect(graph: ModuleGraph, width: int, fmt, output_dir: str = '.',
                layer: str = None, logger: logging.Logger = None,
                sea_level: float = DEFAULTS.SEA_LEVEL) -> str:
    logger = logger or logging.getLogger("PlanetGenerator")
    start_time = time.perf_counter()

    session = graph.session()
    elevation = sample_rect(session, width, layer)
    path = os.path.join(output_dir, DEFAULTS.RECT_FILENAME)
    write_png(path, quantize(elevation, fmt, sea_level), width, width // 2, fmt)

    logger.debug(f"Rect map: {session.hits} cache hits, {session.misses} misses.")
    logger.info(f"Rect map written to {path} ({time.perf_counter() - start_time:.2f}s).")
    return path


def _render_face_task(graph, size, fmt, output_dir, layer, sea_level, face):
    return render_cube_face(graph, face, size, fmt, output_dir, layer,
                            logger=logging.getLogger(f"Worker-{face}"), sea_level=sea_level)


def _prepare(seed, width, fmt, settings, layer, logger):
    if width < 2:
        raise ConfigurationError(f"Width must be at least 2, got {width}")
    fmt = OutputFormat(fmt)
    settings = settings if settings is not None else DEFAULT_SETTINGS
    graph = build_planet(seed, settings, logger=logger)
    if layer is not None:
        # Fails before any worker starts.
        graph.module(layer)
    return graph, fmt, settings


def generate_cube(seed: int, width: int, fmt=DEFAULTS.DEFAULT_OUTPUT_FORMAT, settings=None,
                  output_dir: str = '.', layer: str = None, logger: logging.Logger = None,
                  progress: bool = True) -> list:
    """
    Renders all six cube faces, one worker thread per face.

    An exception raised in any worker is re-raised here once its result is
    consumed, failing the whole run.
    """
    logger = logger or logging.getLogger("PlanetGenerator")
    graph, fmt, settings = _prepare(seed, width, fmt, settings, layer, logger)

    logger.info(f"Rendering cube map: {width}x{width} per face, format {fmt.value}, "
                f"layer {layer or 'final planet'}.")
    start_time = time.perf_counter()

    task = partial(_render_face_task, graph, width, fmt, output_dir, layer, settings.sea_level)
    paths = []
    with ThreadPool(processes=len(CUBE_FACE_NAMES)) as pool:
        results_iterator = pool.imap_unordered(task, CUBE_FACE_NAMES)
        for path in tqdm(results_iterator, total=len(CUBE_FACE_NAMES), desc="Rendering Faces",
                         disable=not progress):
            paths.append(path)

    logger.info(f"Cube map complete! Total time: {time.perf_counter() - start_time:.2f} seconds.")
    return sorted(paths)


def generate_rect(seed: int, width: int, fmt=DEFAULTS.DEFAULT_OUTPUT_FORMAT, settings=None,
                  output_dir: str = '.', layer: str = None, logger: logging.Logger = None) -> str:
    """Renders the equirectangular map synchronously on the calling thread."""
    logger = logger or logging.getLogger("PlanetGenerator")
    graph, fmt, settings = _prepare(seed, width, fmt, settings, layer, logger)

    logger.info(f"Rendering rect map: {width}x{width // 2}, format {fmt.value}, "
                f"layer {layer or 'final planet'}.")
    return render_rect(graph, width, fmt, output_dir, layer, logger, sea_level=settings.sea_level)
