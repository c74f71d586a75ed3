# planet_generator/codec.py

"""
================================================================================
PNG CODEC BOUNDARY
================================================================================
Writes quantized pixel bytes to PNG files with Pillow.

Data Contract:
---------------
- Inputs: Raw pixel bytes as produced by color_maps.quantize, the image width
  and height, the OutputFormat and a file path.
- Outputs: The path of the written file.
- Side Effects: Creates or overwrites one file.
- Invariants: Any failure to write is raised as EncodingError.
================================================================================
"""

import numpy as np
from PIL import Image

from .color_maps import OutputFormat
from .errors import EncodingError


def to_image(data: bytes, width: int, height: int, fmt) -> Image.Image:
    """Wraps raw pixel bytes in a Pillow image."""
    fmt = OutputFormat(fmt)
    expected = width * height * fmt.bytes_per_pixel
    if len(data) != expected:
        raise EncodingError(
            f"Expected {expected} bytes for a {width}x{height} {fmt.value} image, got {len(data)}"
        )

    if fmt is OutputFormat.GREYSCALE16:
        # Pillow takes 16-bit greyscale as native integers, not raw big-endian bytes.
        pixels = np.frombuffer(data, dtype='>u2').astype(np.uint16).reshape(height, width)
        return Image.fromarray(pixels)

    return Image.frombytes(fmt.image_mode, (width, height), data)


def write_png(path: str, data: bytes, width: int, height: int, fmt) -> str:
    image = to_image(data, width, height, fmt)
    try:
        image.save(path, 'PNG')
    except OSError as e:
        raise EncodingError(f"Failed to write '{path}': {e}") from e
    return path
