# planet_generator/modules.py

"""
================================================================================
NOISE MODULES
================================================================================
This module contains the node types that a planet's elevation field is
composed from. Every node maps a batch of 3D points to one scalar per point.

Data Contract:
---------------
- Inputs (get_value):
    - x, y, z: 1-D float64 NumPy arrays of equal length.
    - session: An optional Session. Only Cache nodes use it; every other node
      simply passes it on to its sources.
- Outputs:
    - A new 1-D float64 NumPy array. Returned arrays are never modified
      afterwards, so they may be shared between consumers.
- Side Effects: None. Nodes are immutable once constructed; the only mutable
  state (cache entries) lives in the session.
- Invariants: Malformed parameters raise ConfigurationError in the
  constructor, never during evaluation.
================================================================================
"""

import numpy as np

from . import noise
from .errors import ConfigurationError
from .noise import NoiseQuality

# libnoise-style defaults for the generator modules.
DEFAULT_FREQUENCY = 1.0
DEFAULT_PERSISTENCE = 0.5
DEFAULT_LACUNARITY = 2.0
DEFAULT_OCTAVE_COUNT = 6
DEFAULT_QUALITY = NoiseQuality.STANDARD

# Offsets added to the query point before sampling the three turbulence
# fields, so that the x, y and z displacements are uncorrelated.
_TURBULENCE_X_OFFSETS = (12414.0 / 65536.0, 65124.0 / 65536.0, 31337.0 / 65536.0)
_TURBULENCE_Y_OFFSETS = (26519.0 / 65536.0, 18128.0 / 65536.0, 60493.0 / 65536.0)
_TURBULENCE_Z_OFFSETS = (53820.0 / 65536.0, 11213.0 / 65536.0, 44845.0 / 65536.0)

CURVE_MIN_CONTROL_POINTS = 4
TERRACE_MIN_CONTROL_POINTS = 2


def evaluate(module, x, y, z, session=None):
    """
    Evaluates a module at scalar or array coordinates of any broadcastable
    shape. Returns a float for scalar input, otherwise an array of the
    broadcast shape.
    """
    x, y, z = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    shape = x.shape
    values = module.get_value(
        np.ascontiguousarray(x).ravel(),
        np.ascontiguousarray(y).ravel(),
        np.ascontiguousarray(z).ravel(),
        session,
    )
    if shape == ():
        return float(values[0])
    return values.reshape(shape)


def _lerp(a, b, t):
    return a + t * (b - a)


def _s_curve3(t):
    return t * t * (3.0 - 2.0 * t)


def _cubic_interp(n0, n1, n2, n3, t):
    """Cubic interpolation between n1 and n2; n0 and n3 shape the tangents."""
    p = (n3 - n2) - (n0 - n1)
    q = (n0 - n1) - p
    r = n2 - n0
    return p * t * t * t + q * t * t + r * t + n1


class Module:
    """
    Base class for every node of the field graph.

    Subclasses declare how many sources they take; the sources are given to
    the constructor so that a node can never be evaluated half-wired.
    """
    source_count = 0

    def __init__(self, *sources):
        if len(sources) != self.source_count:
            raise ConfigurationError(
                f"{type(self).__name__} takes {self.source_count} source module(s), got {len(sources)}"
            )
        for source in sources:
            if not isinstance(source, Module):
                raise ConfigurationError(f"{type(self).__name__} source must be a Module, got {source!r}")
        self.sources = tuple(sources)
        # Assigned by ModuleGraph.add(); identifies the node's cache slot.
        self.index = None

    def get_value(self, x, y, z, session=None):
        raise NotImplementedError

    def __repr__(self):
        return f"<{type(self).__name__} index={self.index}>"


# --- Generator Modules ---

class Constant(Module):
    """Outputs the same value everywhere."""

    def __init__(self, value=0.0):
        super().__init__()
        self.value = float(value)

    def get_value(self, x, y, z, session=None):
        return np.full(x.shape, self.value)


def _check_octaves(name, octaves):
    if not 1 <= octaves <= noise.MAX_OCTAVES:
        raise ConfigurationError(f"{name} octave count must be within [1, {noise.MAX_OCTAVES}], got {octaves}")


class Perlin(Module):
    """Multi-octave coherent gradient noise."""

    def __init__(self, seed=0, frequency=DEFAULT_FREQUENCY, persistence=DEFAULT_PERSISTENCE,
                 lacunarity=DEFAULT_LACUNARITY, octaves=DEFAULT_OCTAVE_COUNT, quality=DEFAULT_QUALITY):
        super().__init__()
        _check_octaves(type(self).__name__, octaves)
        self.seed = int(seed)
        self.frequency = float(frequency)
        self.persistence = float(persistence)
        self.lacunarity = float(lacunarity)
        self.octaves = int(octaves)
        self.quality = NoiseQuality(quality)

    def get_value(self, x, y, z, session=None):
        return noise.perlin_3d(
            x, y, z, self.seed, self.frequency, self.persistence,
            self.lacunarity, self.octaves, int(self.quality)
        )


class Billow(Perlin):
    """Like Perlin, but every octave is |n|, giving rounded, puffy shapes."""

    def get_value(self, x, y, z, session=None):
        return noise.billow_3d(
            x, y, z, self.seed, self.frequency, self.persistence,
            self.lacunarity, self.octaves, int(self.quality)
        )


class RidgedMulti(Module):
    """
    Ridged multifractal noise. The output can exceed [-1, 1] as the octave
    count grows, so consumers are expected to rescale it.
    """

    def __init__(self, seed=0, frequency=DEFAULT_FREQUENCY, lacunarity=DEFAULT_LACUNARITY,
                 octaves=DEFAULT_OCTAVE_COUNT, quality=DEFAULT_QUALITY):
        super().__init__()
        _check_octaves(type(self).__name__, octaves)
        self.seed = int(seed)
        self.frequency = float(frequency)
        self.lacunarity = float(lacunarity)
        self.octaves = int(octaves)
        self.quality = NoiseQuality(quality)

    def get_value(self, x, y, z, session=None):
        return noise.ridged_multi_3d(
            x, y, z, self.seed, self.frequency, self.lacunarity, self.octaves, int(self.quality)
        )


class Voronoi(Module):
    """
    Cellular noise. With enable_distance the output grows with the distance
    to the nearest cell centre (pits); otherwise each cell is flat, with a
    per-cell random value scaled by displacement.
    """

    def __init__(self, seed=0, frequency=DEFAULT_FREQUENCY, displacement=1.0, enable_distance=False):
        super().__init__()
        self.seed = int(seed)
        self.frequency = float(frequency)
        self.displacement = float(displacement)
        self.enable_distance = bool(enable_distance)

    def get_value(self, x, y, z, session=None):
        return noise.voronoi_3d(
            x, y, z, self.seed, self.frequency, self.displacement, self.enable_distance
        )


# --- Modifier Modules ---

class ScaleBias(Module):
    source_count = 1

    def __init__(self, source, scale=1.0, bias=0.0):
        super().__init__(source)
        self.scale = float(scale)
        self.bias = float(bias)

    def get_value(self, x, y, z, session=None):
        return self.sources[0].get_value(x, y, z, session) * self.scale + self.bias


class Clamp(Module):
    source_count = 1

    def __init__(self, source, lower_bound=-1.0, upper_bound=1.0):
        super().__init__(source)
        if lower_bound > upper_bound:
            raise ConfigurationError(f"Clamp lower bound {lower_bound} exceeds upper bound {upper_bound}")
        self.lower_bound = float(lower_bound)
        self.upper_bound = float(upper_bound)

    def get_value(self, x, y, z, session=None):
        return np.clip(self.sources[0].get_value(x, y, z, session), self.lower_bound, self.upper_bound)


class Curve(Module):
    """
    Maps the source through a cubic spline defined by (input, output)
    control points. Inputs outside the table follow the straight line through
    the two outermost points on that side.
    """
    source_count = 1

    def __init__(self, source, control_points):
        super().__init__(source)
        points = sorted((float(i), float(o)) for i, o in control_points)
        if len(points) < CURVE_MIN_CONTROL_POINTS:
            raise ConfigurationError(
                f"Curve needs at least {CURVE_MIN_CONTROL_POINTS} control points, got {len(points)}"
            )
        inputs = np.array([p[0] for p in points])
        if np.any(np.diff(inputs) <= 0.0):
            raise ConfigurationError(f"Curve control point inputs must be unique: {inputs.tolist()}")
        self.inputs = inputs
        self.outputs = np.array([p[1] for p in points])
        self.inputs.flags.writeable = False
        self.outputs.flags.writeable = False

    @property
    def control_points(self):
        return list(zip(self.inputs.tolist(), self.outputs.tolist()))

    def get_value(self, x, y, z, session=None):
        value = self.sources[0].get_value(x, y, z, session)
        inputs, outputs = self.inputs, self.outputs
        last = len(inputs) - 1

        # Index of the first control point whose input exceeds the value.
        index_pos = np.searchsorted(inputs, value, side='right')
        index0 = np.clip(index_pos - 2, 0, last)
        index1 = np.clip(index_pos - 1, 0, last)
        index2 = np.clip(index_pos, 0, last)
        index3 = np.clip(index_pos + 1, 0, last)

        input0 = inputs[index1]
        span = inputs[index2] - input0
        alpha = (value - input0) / np.where(span == 0.0, 1.0, span)
        result = _cubic_interp(outputs[index0], outputs[index1], outputs[index2], outputs[index3], alpha)

        below = value < inputs[0]
        above = value > inputs[last]
        low_slope = (outputs[1] - outputs[0]) / (inputs[1] - inputs[0])
        high_slope = (outputs[last] - outputs[last - 1]) / (inputs[last] - inputs[last - 1])
        result = np.where(below, outputs[0] + (value - inputs[0]) * low_slope, result)
        result = np.where(above, outputs[last] + (value - inputs[last]) * high_slope, result)
        return result


class Terrace(Module):
    """
    Maps the source onto a stair-stepped curve. Between two terrace values
    the output rises with the square of the relative position, so each step
    has a flat tread and a steep riser; invert flips which end is flat.
    """
    source_count = 1

    def __init__(self, source, control_points, invert=False):
        super().__init__(source)
        values = np.array(sorted(float(v) for v in control_points))
        if len(values) < TERRACE_MIN_CONTROL_POINTS:
            raise ConfigurationError(
                f"Terrace needs at least {TERRACE_MIN_CONTROL_POINTS} control points, got {len(values)}"
            )
        if np.any(np.diff(values) <= 0.0):
            raise ConfigurationError(f"Terrace control points must be unique: {values.tolist()}")
        self.control_points = values
        self.control_points.flags.writeable = False
        self.invert = bool(invert)

    def get_value(self, x, y, z, session=None):
        value = self.sources[0].get_value(x, y, z, session)
        points = self.control_points
        last = len(points) - 1

        index_pos = np.searchsorted(points, value, side='right')
        index0 = np.clip(index_pos - 1, 0, last)
        index1 = np.clip(index_pos, 0, last)
        same = index0 == index1

        value0 = points[index0]
        value1 = points[index1]
        alpha = (value - value0) / np.where(same, 1.0, value1 - value0)
        if self.invert:
            alpha = 1.0 - alpha
            value0, value1 = value1, value0
        alpha = alpha * alpha

        return np.where(same, points[index1], _lerp(value0, value1, alpha))


class Exponent(Module):
    """Applies a power curve to the source after mapping it to [0, 1]."""
    source_count = 1

    def __init__(self, source, exponent=1.0):
        super().__init__(source)
        self.exponent = float(exponent)

    def get_value(self, x, y, z, session=None):
        value = (self.sources[0].get_value(x, y, z, session) + 1.0) / 2.0
        return np.sign(value) * np.power(np.abs(value), self.exponent) * 2.0 - 1.0


# --- Transformer Modules ---

class Turbulence(Module):
    """
    Randomly displaces the point fed to the source. roughness is the octave
    count of the three displacement fields, frequency their base frequency
    and power the maximum displacement.
    """
    source_count = 1

    def __init__(self, source, seed=0, frequency=DEFAULT_FREQUENCY, power=1.0, roughness=3):
        super().__init__(source)
        self.power = float(power)
        self.x_distort = Perlin(seed=seed, frequency=frequency, octaves=roughness)
        self.y_distort = Perlin(seed=seed + 1, frequency=frequency, octaves=roughness)
        self.z_distort = Perlin(seed=seed + 2, frequency=frequency, octaves=roughness)

    @property
    def seed(self):
        return self.x_distort.seed

    @property
    def frequency(self):
        return self.x_distort.frequency

    @property
    def roughness(self):
        return self.x_distort.octaves

    def get_value(self, x, y, z, session=None):
        ox, oy, oz = _TURBULENCE_X_OFFSETS
        x_distort = x + self.x_distort.get_value(x + ox, y + oy, z + oz) * self.power
        ox, oy, oz = _TURBULENCE_Y_OFFSETS
        y_distort = y + self.y_distort.get_value(x + ox, y + oy, z + oz) * self.power
        ox, oy, oz = _TURBULENCE_Z_OFFSETS
        z_distort = z + self.z_distort.get_value(x + ox, y + oy, z + oz) * self.power
        return self.sources[0].get_value(x_distort, y_distort, z_distort, session)


# --- Combiner Modules ---

class Add(Module):
    source_count = 2

    def get_value(self, x, y, z, session=None):
        return self.sources[0].get_value(x, y, z, session) + self.sources[1].get_value(x, y, z, session)


class Multiply(Module):
    source_count = 2

    def get_value(self, x, y, z, session=None):
        return self.sources[0].get_value(x, y, z, session) * self.sources[1].get_value(x, y, z, session)


class Min(Module):
    source_count = 2

    def get_value(self, x, y, z, session=None):
        return np.minimum(self.sources[0].get_value(x, y, z, session),
                          self.sources[1].get_value(x, y, z, session))


class Max(Module):
    source_count = 2

    def get_value(self, x, y, z, session=None):
        return np.maximum(self.sources[0].get_value(x, y, z, session),
                          self.sources[1].get_value(x, y, z, session))


# --- Selector Modules ---

class Blend(Module):
    """Mixes source0 and source1, weighted by (control + 1) / 2."""
    source_count = 3

    def get_value(self, x, y, z, session=None):
        value0 = self.sources[0].get_value(x, y, z, session)
        value1 = self.sources[1].get_value(x, y, z, session)
        alpha = np.clip((self.sources[2].get_value(x, y, z, session) + 1.0) / 2.0, 0.0, 1.0)
        return _lerp(value0, value1, alpha)


class Select(Module):
    """
    Outputs source1 where the control value lies within [lower_bound,
    upper_bound] and source0 elsewhere. A positive edge_falloff replaces the
    hard boundary with an s-curve blend of that half-width; zero or less keeps
    the hard boundary.
    """
    source_count = 3

    def __init__(self, source0, source1, control, lower_bound=-1.0, upper_bound=1.0, edge_falloff=0.0):
        super().__init__(source0, source1, control)
        if lower_bound >= upper_bound:
            raise ConfigurationError(f"Select lower bound {lower_bound} must be below upper bound {upper_bound}")
        self.lower_bound = float(lower_bound)
        self.upper_bound = float(upper_bound)
        # A negative falloff means hard edges; the two bands may not overlap.
        self.edge_falloff = min(max(float(edge_falloff), 0.0), (self.upper_bound - self.lower_bound) / 2.0)

    def get_value(self, x, y, z, session=None):
        control = self.sources[2].get_value(x, y, z, session)
        lower, upper, falloff = self.lower_bound, self.upper_bound, self.edge_falloff

        if falloff > 0.0:
            conditions = [
                control < lower - falloff,
                control < lower + falloff,
                control < upper - falloff,
                control < upper + falloff,
            ]
            needs_source0 = conditions[1] | ~conditions[2]
            needs_source1 = ~conditions[0] & conditions[3]
        else:
            conditions = [control < lower, control <= upper]
            needs_source0 = conditions[0] | ~conditions[1]
            needs_source1 = ~conditions[0] & conditions[1]

        # Skip a source entirely when no point of the batch needs it.
        if not needs_source1.any():
            return self.sources[0].get_value(x, y, z, session)
        if not needs_source0.any():
            return self.sources[1].get_value(x, y, z, session)
        value0 = self.sources[0].get_value(x, y, z, session)
        value1 = self.sources[1].get_value(x, y, z, session)

        if falloff > 0.0:
            lower_alpha = _s_curve3(np.clip((control - (lower - falloff)) / (2.0 * falloff), 0.0, 1.0))
            upper_alpha = _s_curve3(np.clip((control - (upper - falloff)) / (2.0 * falloff), 0.0, 1.0))
            choices = [
                value0,
                _lerp(value0, value1, lower_alpha),
                value1,
                _lerp(value1, value0, upper_alpha),
            ]
        else:
            choices = [value0, value1]
        return np.select(conditions, choices, default=value0)


# --- Caching ---

class Cache(Module):
    """
    Remembers, per session, the last batch of points queried and the
    resulting values, so a subgraph shared by several consumers is evaluated
    once per batch. Without a session (or outside a graph) it passes through.
    """
    source_count = 1

    def get_value(self, x, y, z, session=None):
        if session is None or self.index is None:
            return self.sources[0].get_value(x, y, z, session)
        value = session.lookup(self.index, x, y, z)
        if value is None:
            value = self.sources[0].get_value(x, y, z, session)
            session.store(self.index, x, y, z, value)
        return value
