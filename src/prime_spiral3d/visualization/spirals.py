"""Parametric 3D spirals that place the integers 1..N in space.

Four families are supported:

- Helix: the number line wrapped around a cylinder of fixed radius, height
  rising linearly with the angle.
- Spherical: a spiral over the unit sphere with z spaced uniformly in
  [-1, 1], giving near-uniform surface coverage for any N.
- Conical: a planar Archimedean spiral (r = a + b*t) lifted along z = c*t.
- Layered: consecutive integers grouped into blocks, each block drawn as a
  ring at integer height.

Every generator is a pure function of (N, params) returning a PointCloud
whose indices are exactly 1..N.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Union

import numpy as np

from prime_spiral3d.core.sieve import prime_sieve_mask

logger = logging.getLogger(__name__)

DEFAULT_STEP_ANGLE = 0.35


class SpiralMode(str, enum.Enum):
    """Supported spiral families."""

    HELIX = "helix"
    SPHERICAL = "spherical"
    CONICAL = "conical"
    LAYERED = "layered"


MODE_DESCRIPTIONS = {
    SpiralMode.HELIX: "Cylindrical helix - numbers wrap around a cylinder",
    SpiralMode.SPHERICAL: "Spiral on a sphere - approximately uniform coverage",
    SpiralMode.CONICAL: "3D Archimedean spiral - radius grows with height",
    SpiralMode.LAYERED: "Layered spiral - numbers in block-based levels",
}


@dataclass(frozen=True)
class HelixParams:
    step_angle: float = DEFAULT_STEP_ANGLE
    radius: float = 1.0
    pitch: float = 0.08


@dataclass(frozen=True)
class SphericalParams:
    step_angle: float = DEFAULT_STEP_ANGLE


@dataclass(frozen=True)
class ConicalParams:
    """Conical Archimedean spiral parameters.

    Attributes:
        step_angle: Angle advanced per integer.
        a: Base radius.
        b: Radius growth per radian.
        c: Height growth per radian.
    """

    step_angle: float = DEFAULT_STEP_ANGLE
    a: float = 0.8
    b: float = 0.04
    c: float = 0.03


@dataclass(frozen=True)
class LayeredParams:
    """Layered-time spiral parameters.

    Attributes:
        step_angle: Angle between consecutive integers within a ring.
        block_size: Integers per layer (values below 1 are treated as 1).
        layer_radius: Radius shared by every ring.
    """

    step_angle: float = DEFAULT_STEP_ANGLE
    block_size: int = 200
    layer_radius: float = 6.0


GeometryParams = Union[HelixParams, SphericalParams, ConicalParams, LayeredParams]

PARAMS_BY_MODE: dict[SpiralMode, type] = {
    SpiralMode.HELIX: HelixParams,
    SpiralMode.SPHERICAL: SphericalParams,
    SpiralMode.CONICAL: ConicalParams,
    SpiralMode.LAYERED: LayeredParams,
}


class Point3D(NamedTuple):
    """An integer placed in 3D space."""

    index: int
    x: float
    y: float
    z: float


@dataclass(frozen=True, eq=False)
class PointCloud:
    """Immutable, ordered coordinates for the integers 1..N.

    Attributes:
        index: int64 array of the integers, always 1..N in order.
        x, y, z: float64 coordinate arrays of the same length.
    """

    index: np.ndarray
    x: np.ndarray
    y: np.ndarray
    z: np.ndarray

    def __post_init__(self):
        for arr in (self.index, self.x, self.y, self.z):
            arr.setflags(write=False)

    @classmethod
    def from_arrays(cls, index: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> "PointCloud":
        return cls(
            np.ascontiguousarray(index, dtype=np.int64),
            np.ascontiguousarray(x, dtype=np.float64),
            np.ascontiguousarray(y, dtype=np.float64),
            np.ascontiguousarray(z, dtype=np.float64),
        )

    @classmethod
    def empty(cls) -> "PointCloud":
        return cls.from_arrays(
            np.array([], dtype=np.int64),
            np.array([]), np.array([]), np.array([]),
        )

    def __len__(self) -> int:
        return len(self.index)

    def __getitem__(self, i: int) -> Point3D:
        return Point3D(int(self.index[i]), float(self.x[i]), float(self.y[i]), float(self.z[i]))

    def __iter__(self) -> Iterator[Point3D]:
        for i in range(len(self)):
            yield self[i]


def _validate_count(n: int) -> int:
    """Check that n is a non-negative integer and return it as int."""
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"n must be an integer, got {n!r}")
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    return int(n)


def helix_coordinates(n: int, step_angle: float = DEFAULT_STEP_ANGLE, radius: float = 1.0, pitch: float = 0.08) -> PointCloud:
    """Wrap 1..n around a cylinder.

    Position of integer k: t = k * step_angle, (R cos t, R sin t, pitch * t).
    """
    n = _validate_count(n)
    if n == 0:
        return PointCloud.empty()

    k = np.arange(1, n + 1, dtype=np.int64)
    t = k * step_angle

    return PointCloud.from_arrays(k, radius * np.cos(t), radius * np.sin(t), pitch * t)


def spherical_coordinates(n: int, step_angle: float = DEFAULT_STEP_ANGLE) -> PointCloud:
    """Spiral 1..n over the unit sphere.

    z runs uniformly from -1 to 1 across the sequence, the ring radius is
    sqrt(1 - z^2) and the azimuth advances by step_angle per integer. A
    single point sits at the south pole.
    """
    n = _validate_count(n)
    if n == 0:
        return PointCloud.empty()

    k = np.arange(1, n + 1, dtype=np.int64)
    z = 2.0 * (k - 1) / max(n - 1, 1) - 1.0
    r = np.sqrt(np.maximum(0.0, 1.0 - z * z))
    theta = k * step_angle

    return PointCloud.from_arrays(k, r * np.cos(theta), r * np.sin(theta), z)


def conical_coordinates(
    n: int,
    step_angle: float = DEFAULT_STEP_ANGLE,
    a: float = 0.8,
    b: float = 0.04,
    c: float = 0.03,
) -> PointCloud:
    """Archimedean spiral r = a + b*t lifted along z = c*t."""
    n = _validate_count(n)
    if n == 0:
        return PointCloud.empty()

    k = np.arange(1, n + 1, dtype=np.int64)
    t = k * step_angle
    r = a + b * t

    return PointCloud.from_arrays(k, r * np.cos(t), r * np.sin(t), c * t)


def layered_coordinates(
    n: int,
    step_angle: float = DEFAULT_STEP_ANGLE,
    block_size: int = 200,
    layer_radius: float = 6.0,
) -> PointCloud:
    """Stack consecutive blocks of integers as rings at integer heights.

    Integer k lands in layer (k - 1) // block_size at position
    (k - 1) % block_size around the ring.
    """
    n = _validate_count(n)
    if n == 0:
        return PointCloud.empty()

    size = max(int(block_size), 1)
    k = np.arange(1, n + 1, dtype=np.int64)
    layer = (k - 1) // size
    theta = ((k - 1) % size) * step_angle

    return PointCloud.from_arrays(
        k,
        layer_radius * np.cos(theta),
        layer_radius * np.sin(theta),
        layer.astype(np.float64),
    )


def default_params(mode: SpiralMode | str) -> GeometryParams:
    """Return the default parameters for a spiral mode."""
    return PARAMS_BY_MODE[SpiralMode(mode)]()


def generate_points(mode: SpiralMode | str, n: int, params: GeometryParams | None = None) -> PointCloud:
    """Generate the point cloud for 1..n in the given mode.

    Args:
        mode: Spiral family (SpiralMode or its string value).
        n: Number of integers to place.
        params: Parameters matching the mode; defaults when None.

    Returns:
        PointCloud of length n.

    Raises:
        ValueError: If mode is unknown or n is negative.
        TypeError: If params belong to another spiral family.
    """
    mode = SpiralMode(mode)
    if params is None:
        params = default_params(mode)
    expected = PARAMS_BY_MODE[mode]
    if not isinstance(params, expected):
        raise TypeError(f"{mode.value} mode needs {expected.__name__}, got {type(params).__name__}")

    if mode is SpiralMode.HELIX:
        cloud = helix_coordinates(n, params.step_angle, params.radius, params.pitch)
    elif mode is SpiralMode.SPHERICAL:
        cloud = spherical_coordinates(n, params.step_angle)
    elif mode is SpiralMode.CONICAL:
        cloud = conical_coordinates(n, params.step_angle, params.a, params.b, params.c)
    else:
        cloud = layered_coordinates(n, params.step_angle, params.block_size, params.layer_radius)

    logger.debug("Generated %d points in %s mode", len(cloud), mode.value)
    return cloud


def layer_statistics(max_n: int, block_size: int = 200) -> list[dict]:
    """Calculate prime statistics for each layer of the layered spiral.

    Args:
        max_n: Largest integer placed.
        block_size: Integers per layer (values below 1 are treated as 1).

    Returns:
        List of dicts with layer bounds, size, prime count and density.
    """
    max_n = _validate_count(max_n)
    size = max(int(block_size), 1)
    mask = prime_sieve_mask(max_n)
    stats = []

    for layer, start in enumerate(range(1, max_n + 1, size)):
        end = min(start + size - 1, max_n)
        count = int(mask[start:end + 1].sum())
        layer_size = end - start + 1
        stats.append({
            'layer': layer,
            'start': start,
            'end': end,
            'size': layer_size,
            'primes': count,
            'density': count / layer_size,
        })

    return stats
