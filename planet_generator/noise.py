# planet_generator/noise.py

"""
================================================================================
NOISE PRIMITIVES
================================================================================
This module provides the coherent-noise kernels that the planet's module graph
is built from: multi-octave gradient ("Perlin") noise, ridged multifractal
noise, billow noise and cellular (Voronoi) noise, all in three dimensions.
It is designed to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - xs, ys, zs: 1-D float64 NumPy arrays of equal length.
    - seed: An integer; only its low 32 bits are used.
    - Octave parameters (frequency, persistence, lacunarity, octaves) and a
      NoiseQuality tier.
- Outputs:
    - A new 1-D float64 NumPy array, one value per input point (typically in
      the range [-1, 1]; ridged noise may overshoot).
- Side Effects: None.
- Invariants: Deterministic for identical inputs. The kernels release the
  GIL, so they may run concurrently from several threads.
================================================================================
"""

import math
from enum import IntEnum

import numpy as np
from numba import njit


class NoiseQuality(IntEnum):
    """Interpolation used between lattice points."""
    FAST = 0      # linear
    STANDARD = 1  # cubic s-curve
    BEST = 2      # quintic s-curve


# Lattice hashing constants. Each coordinate gets its own odd multiplier so
# that the hash is not symmetric in x, y and z.
X_NOISE_GEN = 1619
Y_NOISE_GEN = 31337
Z_NOISE_GEN = 6971
SEED_NOISE_GEN = 1013

# Gradient directions: the 12 cube edge midpoints, padded to 16 entries so
# that a 4-bit hash selects one without bias.
_GRADIENT_VECTORS = np.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
    [1, 1, 0], [0, -1, 1], [-1, 1, 0], [0, -1, -1],
], dtype=np.float64)

# Coordinates are folded into this range before being floored to lattice
# integers.
_INT32_RANGE = 1073741824.0

SQRT_3 = 1.7320508075688772

# Ridged multifractal constants.
RIDGED_OFFSET = 1.0
RIDGED_GAIN = 2.0
RIDGED_SPECTRAL_EXPONENT = 1.0

MAX_OCTAVES = 30


@njit(nogil=True)
def _lerp(a, b, t):
    return a + t * (b - a)


@njit(nogil=True)
def _s_curve3(t):
    return t * t * (3.0 - 2.0 * t)


@njit(nogil=True)
def _s_curve5(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@njit(nogil=True)
def _make_int32_range(n):
    if n >= _INT32_RANGE:
        return 2.0 * np.fmod(n, _INT32_RANGE) - _INT32_RANGE
    elif n <= -_INT32_RANGE:
        return 2.0 * np.fmod(n, _INT32_RANGE) + _INT32_RANGE
    return n


@njit(nogil=True)
def _int_value_noise(ix, iy, iz, seed):
    """Hashes a lattice point into a 31-bit integer."""
    n = (X_NOISE_GEN * ix + Y_NOISE_GEN * iy + Z_NOISE_GEN * iz + SEED_NOISE_GEN * seed) & 0x7fffffff
    n = (n >> 13) ^ n
    return (n * (n * n * 60493 + 19990303) + 1376312589) & 0x7fffffff


@njit(nogil=True)
def _value_noise(ix, iy, iz, seed):
    """Returns a pseudo-random value in (-1, 1] for a lattice point."""
    return 1.0 - _int_value_noise(ix, iy, iz, seed) / _INT32_RANGE


@njit(nogil=True)
def _gradient_noise(fx, fy, fz, ix, iy, iz, seed):
    """Dot product of the lattice point's gradient and the offset to (fx, fy, fz)."""
    g = _GRADIENT_VECTORS[(_int_value_noise(ix, iy, iz, seed) >> 8) & 0x0f]
    return g[0] * (fx - ix) + g[1] * (fy - iy) + g[2] * (fz - iz)


@njit(nogil=True)
def _coherent_noise(x, y, z, seed, quality):
    """Single-octave gradient noise at one point."""
    x0 = int(math.floor(x))
    y0 = int(math.floor(y))
    z0 = int(math.floor(z))
    x1 = x0 + 1
    y1 = y0 + 1
    z1 = z0 + 1

    if quality == 0:
        xs = x - x0
        ys = y - y0
        zs = z - z0
    elif quality == 1:
        xs = _s_curve3(x - x0)
        ys = _s_curve3(y - y0)
        zs = _s_curve3(z - z0)
    else:
        xs = _s_curve5(x - x0)
        ys = _s_curve5(y - y0)
        zs = _s_curve5(z - z0)

    n0 = _gradient_noise(x, y, z, x0, y0, z0, seed)
    n1 = _gradient_noise(x, y, z, x1, y0, z0, seed)
    ix0 = _lerp(n0, n1, xs)
    n0 = _gradient_noise(x, y, z, x0, y1, z0, seed)
    n1 = _gradient_noise(x, y, z, x1, y1, z0, seed)
    ix1 = _lerp(n0, n1, xs)
    iy0 = _lerp(ix0, ix1, ys)

    n0 = _gradient_noise(x, y, z, x0, y0, z1, seed)
    n1 = _gradient_noise(x, y, z, x1, y0, z1, seed)
    ix0 = _lerp(n0, n1, xs)
    n0 = _gradient_noise(x, y, z, x0, y1, z1, seed)
    n1 = _gradient_noise(x, y, z, x1, y1, z1, seed)
    ix1 = _lerp(n0, n1, xs)
    iy1 = _lerp(ix0, ix1, ys)

    return _lerp(iy0, iy1, zs)


@njit(nogil=True)
def perlin_3d(xs, ys, zs, seed, frequency, persistence, lacunarity, octaves, quality):
    """
    Multi-octave gradient noise. Each octave is seeded separately so that
    octaves never repeat each other's lattice.
    """
    count = xs.shape[0]
    out = np.empty(count)

    for i in range(count):
        x = xs[i] * frequency
        y = ys[i] * frequency
        z = zs[i] * frequency
        value = 0.0
        amplitude = 1.0

        for octave in range(octaves):
            octave_seed = (seed + octave) & 0xffffffff
            signal = _coherent_noise(
                _make_int32_range(x), _make_int32_range(y), _make_int32_range(z),
                octave_seed, quality
            )
            value += signal * amplitude

            x *= lacunarity
            y *= lacunarity
            z *= lacunarity
            amplitude *= persistence

        out[i] = value

    return out


@njit(nogil=True)
def ridged_multi_3d(xs, ys, zs, seed, frequency, lacunarity, octaves, quality):
    """
    Ridged multifractal noise. Each octave's signal is |n| folded into a ridge
    and weighted by the previous octave, so ridges stay sharp while valleys
    stay smooth.
    """
    spectral_weights = np.empty(octaves)
    octave_frequency = 1.0
    for octave in range(octaves):
        spectral_weights[octave] = octave_frequency ** -RIDGED_SPECTRAL_EXPONENT
        octave_frequency *= lacunarity

    count = xs.shape[0]
    out = np.empty(count)

    for i in range(count):
        x = xs[i] * frequency
        y = ys[i] * frequency
        z = zs[i] * frequency
        value = 0.0
        weight = 1.0

        for octave in range(octaves):
            octave_seed = (seed + octave) & 0x7fffffff
            signal = _coherent_noise(
                _make_int32_range(x), _make_int32_range(y), _make_int32_range(z),
                octave_seed, quality
            )
            signal = RIDGED_OFFSET - abs(signal)
            signal *= signal
            signal *= weight

            weight = signal * RIDGED_GAIN
            if weight > 1.0:
                weight = 1.0
            elif weight < 0.0:
                weight = 0.0

            value += signal * spectral_weights[octave]

            x *= lacunarity
            y *= lacunarity
            z *= lacunarity

        out[i] = value * 1.25 - 1.0

    return out


@njit(nogil=True)
def billow_3d(xs, ys, zs, seed, frequency, persistence, lacunarity, octaves, quality):
    """Multi-octave noise built from absolute-valued octaves."""
    count = xs.shape[0]
    out = np.empty(count)

    for i in range(count):
        x = xs[i] * frequency
        y = ys[i] * frequency
        z = zs[i] * frequency
        value = 0.0
        amplitude = 1.0

        for octave in range(octaves):
            octave_seed = (seed + octave) & 0xffffffff
            signal = _coherent_noise(
                _make_int32_range(x), _make_int32_range(y), _make_int32_range(z),
                octave_seed, quality
            )
            signal = 2.0 * abs(signal) - 1.0
            value += signal * amplitude

            x *= lacunarity
            y *= lacunarity
            z *= lacunarity
            amplitude *= persistence

        out[i] = value + 0.5

    return out


@njit(nogil=True)
def voronoi_3d(xs, ys, zs, seed, frequency, displacement, enable_distance):
    """
    Cellular noise. Every unit cube of the lattice holds one jittered seed
    point; the nearest seed point to the query decides the output.
    """
    count = xs.shape[0]
    out = np.empty(count)
    seed = seed & 0xffffffff

    for i in range(count):
        x = xs[i] * frequency
        y = ys[i] * frequency
        z = zs[i] * frequency

        x_int = int(math.floor(x))
        y_int = int(math.floor(y))
        z_int = int(math.floor(z))

        min_dist = 2147483647.0
        x_candidate = 0.0
        y_candidate = 0.0
        z_candidate = 0.0

        # Seed points may be displaced by up to one cell, so the two
        # neighbouring cells on each side have to be inspected.
        for z_cur in range(z_int - 2, z_int + 3):
            for y_cur in range(y_int - 2, y_int + 3):
                for x_cur in range(x_int - 2, x_int + 3):
                    x_pos = x_cur + _value_noise(x_cur, y_cur, z_cur, seed)
                    y_pos = y_cur + _value_noise(x_cur, y_cur, z_cur, seed + 1)
                    z_pos = z_cur + _value_noise(x_cur, y_cur, z_cur, seed + 2)
                    x_dist = x_pos - x
                    y_dist = y_pos - y
                    z_dist = z_pos - z
                    dist = x_dist * x_dist + y_dist * y_dist + z_dist * z_dist

                    if dist < min_dist:
                        min_dist = dist
                        x_candidate = x_pos
                        y_candidate = y_pos
                        z_candidate = z_pos

        if enable_distance:
            x_dist = x_candidate - x
            y_dist = y_candidate - y
            z_dist = z_candidate - z
            value = math.sqrt(x_dist * x_dist + y_dist * y_dist + z_dist * z_dist) * SQRT_3 - 1.0
        else:
            value = 0.0

        out[i] = value + displacement * _value_noise(
            int(math.floor(x_candidate)),
            int(math.floor(y_candidate)),
            int(math.floor(z_candidate)),
            0
        )

    return out
