# planet_generator/projection.py

"""
================================================================================
SPHERE SAMPLING
================================================================================
Maps 2-D image grids onto points of the unit sphere, either as the six faces
of a cube map or as one equirectangular latitude/longitude rectangle.

Data Contract:
---------------
- Inputs: A face name or rectangle width and grid indices.
- Outputs: Sphere coordinates as float64 NumPy arrays, produced one grid row
  at a time so that callers never hold a whole tile of coordinates.
- Side Effects: None.
- Invariants: Cube samples always have unit magnitude. Cube faces share their
  edge samples exactly.
================================================================================
"""

import numpy as np

# Each face maps grid index (a, b) to cube coordinates. Per axis the entry is
# (k, ca, cb), giving  coord = k * max_coord + ca * a + cb * b.
CUBE_FACES = {
    'xp': ((1, 0, 0), (0, 0, 1), (1, -1, 0)),
    'xn': ((0, 0, 0), (0, 0, 1), (0, 1, 0)),
    'yp': ((0, 1, 0), (1, 0, 0), (1, 0, -1)),
    'yn': ((0, 1, 0), (0, 0, 0), (0, 0, 1)),
    'zp': ((0, 1, 0), (0, 0, 1), (1, 0, 0)),
    'zn': ((1, -1, 0), (0, 0, 1), (0, 0, 0)),
}

CUBE_FACE_NAMES = tuple(CUBE_FACES)


def _face_table(face: str):
    try:
        return CUBE_FACES[face]
    except KeyError:
        raise ValueError(f"Unknown cube face '{face}'") from None


def coord_to_pos(face: str, a, b, max_coord: int):
    """
    Converts grid indices on a cube face to un-normalized coordinates in
    [-1, 1]^3. a and b may be scalars or arrays.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    position = []
    for k, ca, cb in _face_table(face):
        c = k * max_coord + ca * a + cb * b
        position.append(-1.0 + c * 2.0 / max_coord)
    return tuple(position)


def cube_face_rows(face: str, size: int):
    """
    Yields (b, x, y, z) for every grid row b of a cube face, with the points of
    the row projected onto the unit sphere.
    """
    if size < 2:
        raise ValueError("Cube faces need a size of at least 2")
    max_coord = size - 1
    a = np.arange(size, dtype=np.float64)

    for b in range(size):
        x, y, z = coord_to_pos(face, a, np.full(size, float(b)), max_coord)
        magnitude = np.sqrt(x * x + y * y + z * z)
        yield b, x / magnitude, y / magnitude, z / magnitude


def lat_lon_to_pos(lat, lon):
    """Converts latitude and longitude in degrees to a point on the unit sphere."""
    lat = np.radians(lat)
    lon = np.radians(lon)
    r = np.cos(lat)
    return r * np.cos(lon), np.sin(lat), r * np.sin(lon)


def rect_rows(width: int):
    """
    Yields (y, x, y, z) for every grid row of a width x width/2 equirectangular
    image. Row 0 is the south pole; the last column stops short of +180
    degrees longitude.
    """
    height = width // 2
    lon = -180.0 + np.arange(width, dtype=np.float64) / width * 360.0

    for row in range(height):
        lat = np.full(width, -90.0 + row / height * 180.0)
        px, py, pz = lat_lon_to_pos(lat, lon)
        yield row, px, py, pz
