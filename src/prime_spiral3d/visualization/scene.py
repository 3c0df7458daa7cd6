"""Scene assembly: filter, project and depth-sort the point cloud.

The result is ordered back to front so a renderer can paint it in sequence
(painter's algorithm) without a depth buffer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, NamedTuple

import numpy as np

from prime_spiral3d.visualization.projection import (
    CameraState,
    ProjectedPoint,
    Viewport,
    project,
    project_arrays,
)
from prime_spiral3d.visualization.spirals import Point3D, PointCloud

logger = logging.getLogger(__name__)

# Half-length of the reference axes in world units.
AXIS_HALF_LENGTH = 8.0


@dataclass(frozen=True)
class SceneFilters:
    """Display switches that shape the scene.

    Attributes:
        show_all_numbers: Keep composites (and 1) as well as primes.
        show_axes: Emit X/Y/Z reference segments.
        perspective: Apply the perspective factor when projecting.
        dot_size: Base dot radius in pixels before perspective scaling.
    """

    show_all_numbers: bool = False
    show_axes: bool = False
    perspective: bool = True
    dot_size: float = 3.0


class RenderablePoint(NamedTuple):
    screen_x: float
    screen_y: float
    depth: float
    perspective_scale: float
    index: int
    is_prime: bool
    radius: float


class AxisSegment(NamedTuple):
    label: str
    start: ProjectedPoint
    end: ProjectedPoint


@dataclass(frozen=True)
class Scene:
    """Depth-sorted renderables plus optional axis overlay."""

    points: tuple[RenderablePoint, ...] = ()
    axes: tuple[AxisSegment, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    @property
    def prime_count(self) -> int:
        """Number of visible prime dots."""
        return sum(1 for p in self.points if p.is_prime)


@dataclass(frozen=True)
class SceneStatistics:
    total: int
    prime_count: int
    density: float = 0.0


def scene_statistics(n: int, primes: Iterable[int]) -> SceneStatistics:
    """Prime count and density |primes| / n for the integers 1..n."""
    count = sum(1 for p in primes if 1 <= p <= n)
    density = count / n if n > 0 else 0.0
    return SceneStatistics(total=n, prime_count=count, density=density)


def build_axes(camera: CameraState, viewport: Viewport, perspective: bool = True) -> tuple[AxisSegment, ...]:
    """Project the three world axes from -L to +L."""
    length = AXIS_HALF_LENGTH
    ends = {
        'X': (Point3D(0, -length, 0.0, 0.0), Point3D(0, length, 0.0, 0.0)),
        'Y': (Point3D(0, 0.0, -length, 0.0), Point3D(0, 0.0, length, 0.0)),
        'Z': (Point3D(0, 0.0, 0.0, -length), Point3D(0, 0.0, 0.0, length)),
    }
    return tuple(
        AxisSegment(
            label,
            project(a, camera, viewport, perspective),
            project(b, camera, viewport, perspective),
        )
        for label, (a, b) in ends.items()
    )


def build_scene(
    points: PointCloud,
    primes: set[int],
    camera: CameraState,
    viewport: Viewport,
    filters: SceneFilters | None = None,
) -> Scene:
    """Build the renderable scene for the current camera and filters.

    Args:
        points: Generated point cloud.
        primes: Prime set covering at least the cloud's indices.
        camera: Current camera state (read only).
        viewport: Drawing surface size.
        filters: Display switches; defaults when None.

    Returns:
        Scene whose points are sorted ascending by depth.
    """
    if filters is None:
        filters = SceneFilters()

    axes = build_axes(camera, viewport, filters.perspective) if filters.show_axes else ()

    if len(points) == 0:
        return Scene(points=(), axes=axes)

    prime_values = np.fromiter(primes, dtype=np.int64, count=len(primes))
    is_prime = np.isin(points.index, prime_values)
    keep = np.ones(len(points), dtype=bool) if filters.show_all_numbers else is_prime

    sx, sy, depth, persp = project_arrays(
        points.x[keep], points.y[keep], points.z[keep],
        camera, viewport, filters.perspective,
    )
    radius = np.maximum(1.0, filters.dot_size * persp)
    index = points.index[keep]
    flags = is_prime[keep]

    order = np.argsort(depth, kind="stable")
    renderables = tuple(
        RenderablePoint(
            float(sx[i]), float(sy[i]), float(depth[i]), float(persp[i]),
            int(index[i]), bool(flags[i]), float(radius[i]),
        )
        for i in order
    )

    logger.debug("Built scene with %d points (%d axes)", len(renderables), len(axes))
    return Scene(points=renderables, axes=axes)


def pick_point(scene: Scene, x: float, y: float) -> RenderablePoint | None:
    """Frontmost dot whose disc contains the screen position (x, y)."""
    for point in reversed(scene.points):
        if (point.screen_x - x) ** 2 + (point.screen_y - y) ** 2 <= point.radius ** 2:
            return point
    return None


def point_label(point: RenderablePoint) -> str:
    return f"Prime: {point.index}" if point.is_prime else str(point.index)
