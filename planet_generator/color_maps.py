# planet_generator/color_maps.py

"""
================================================================================
ELEVATION QUANTIZATION AND COLOR MAPPING
================================================================================
This module converts raw elevation arrays (planetary elevation units, -1.0 to
+1.0) into the raw pixel bytes of each supported output format.

It is designed to be a pure, stateless utility with no dependency on the
image codec, so the same bytes can be inspected by tests or handed to any
encoder.

Data Contract:
---------------
- Inputs:
    - elevation: A float NumPy array of any shape, in row-major image order.
    - fmt: An OutputFormat (or its string value).
    - sea_level: The planet's sea level, where the terrain24 ramp turns
      from water to land.
- Outputs:
    - A bytes object of elevation.size * fmt.bytes_per_pixel bytes.
- Side Effects: None.
- Invariants: Values outside [-1, 1] saturate; the mapping is monotonic
  non-decreasing in elevation for the greyscale formats.
================================================================================
"""

from enum import Enum

import numpy as np

from . import config as DEFAULTS


class OutputFormat(str, Enum):
    GREYSCALE8 = 'greyscale8'
    GREYSCALE16 = 'greyscale16'
    COLOUR24 = 'colour24'
    TERRAIN24 = 'terrain24'

    @property
    def bytes_per_pixel(self) -> int:
        return _BYTES_PER_PIXEL[self]

    @property
    def image_mode(self) -> str:
        """Pillow mode of the decoded image."""
        return _IMAGE_MODES[self]


_BYTES_PER_PIXEL = {
    OutputFormat.GREYSCALE8: 1,
    OutputFormat.GREYSCALE16: 2,
    OutputFormat.COLOUR24: 3,
    OutputFormat.TERRAIN24: 3,
}

_IMAGE_MODES = {
    OutputFormat.GREYSCALE8: 'L',
    OutputFormat.GREYSCALE16: 'I;16',
    OutputFormat.COLOUR24: 'RGB',
    OutputFormat.TERRAIN24: 'RGB',
}

OUTPUT_FORMAT_NAMES = tuple(f.value for f in OutputFormat)

# --- Terrain Color Ramp ---
# (elevation, color) stops in planetary elevation units, relative to sea level.
TERRAIN_GRADIENT = (
    (-1.0, (0, 0, 50)),                # deep ocean
    (-0.25, (10, 20, 80)),
    (DEFAULTS.SHELF_LEVEL / 4.0, (20, 40, 120)),  # continental shelf
    (-0.0001, (26, 102, 255)),         # coast
    (0.0, (240, 230, 140)),            # beach
    (0.03125, (34, 139, 34)),          # lowland
    (0.125, (154, 205, 50)),
    (0.25, (139, 69, 19)),             # highland
    (0.375, (112, 128, 144)),          # mountain
    (0.5, (255, 255, 255)),            # snow
    (1.0, (255, 255, 255)),
)

TERRAIN_LUT_SIZE = 1024


def _normalize(elevation) -> np.ndarray:
    """Maps [-1, 1] onto [0, 1], saturating outside."""
    return np.clip((np.asarray(elevation, dtype=np.float64) + 1.0) / 2.0, 0.0, 1.0)


def _scale_to_int(elevation, max_value: int) -> np.ndarray:
    # floor(x + 0.5) rounds halves upwards; inputs are never negative here.
    scaled = np.floor(_normalize(elevation) * max_value + 0.5)
    return np.clip(scaled, 0, max_value).astype(np.uint32)


def create_terrain_lut(sea_level: float = DEFAULTS.SEA_LEVEL) -> np.ndarray:
    """Creates a TERRAIN_LUT_SIZE-entry RGB LUT covering elevations -1.0 to +1.0."""
    t = np.linspace(-1.0, 1.0, TERRAIN_LUT_SIZE)
    stops = np.array([level for level, _ in TERRAIN_GRADIENT]) + sea_level
    colors = np.array([color for _, color in TERRAIN_GRADIENT], dtype=np.float64)

    lut = np.empty((TERRAIN_LUT_SIZE, 3))
    for channel in range(3):
        lut[:, channel] = np.interp(t, stops, colors[:, channel])
    return np.rint(lut).astype(np.uint8)


_TERRAIN_LUT = create_terrain_lut()


def quantize(elevation, fmt, sea_level: float = DEFAULTS.SEA_LEVEL) -> bytes:
    """
    Converts an elevation array into raw pixel bytes for the given format.
    sea_level only affects terrain24, whose colour ramp is anchored to it.
    """
    fmt = OutputFormat(fmt)
    elevation = np.ravel(elevation)

    if fmt is OutputFormat.GREYSCALE8:
        return _scale_to_int(elevation, 0xff).astype(np.uint8).tobytes()

    if fmt is OutputFormat.GREYSCALE16:
        return _scale_to_int(elevation, 0xffff).astype('>u2').tobytes()

    if fmt is OutputFormat.COLOUR24:
        value = _scale_to_int(elevation, 0xffffff)
        rgb = np.stack([(value >> 16) & 0xff, (value >> 8) & 0xff, value & 0xff], axis=-1)
        return rgb.astype(np.uint8).tobytes()

    # TERRAIN24
    index = _scale_to_int(elevation, TERRAIN_LUT_SIZE - 1)
    lut = _TERRAIN_LUT if sea_level == DEFAULTS.SEA_LEVEL else create_terrain_lut(sea_level)
    return lut[index].tobytes()
