"""Camera state and 3D to 2D projection.

The camera rotates the world about the X axis and then about the Y axis
(fixed order, not a composed rotation matrix), scales by a fraction of the
smaller viewport side and optionally applies a fake perspective factor.
The constants below are tuned for visual parity and kept as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

# Fraction of min(width, height) covered by one world unit at zoom 1.
VIEW_SCALE = 0.12
# Depth coefficient of the perspective factor 1 / (1 + z * k).
PERSPECTIVE_STRENGTH = 0.1

ZOOM_MIN = 0.1
ZOOM_MAX = 5.0


def clamp_zoom(zoom: float) -> float:
    """Clamp a zoom factor into [ZOOM_MIN, ZOOM_MAX]."""
    return max(ZOOM_MIN, min(ZOOM_MAX, zoom))


@dataclass
class CameraState:
    """Rotation (radians) and zoom of the view.

    Attributes:
        rotation_x: Rotation about the world X axis.
        rotation_y: Rotation about the world Y axis, applied after X.
        zoom: Scale multiplier, kept within [ZOOM_MIN, ZOOM_MAX].
    """

    rotation_x: float = 0.0
    rotation_y: float = 0.0
    zoom: float = 1.0

    def reset(self) -> None:
        self.rotation_x = 0.0
        self.rotation_y = 0.0
        self.zoom = 1.0

    def copy(self) -> "CameraState":
        return CameraState(self.rotation_x, self.rotation_y, self.zoom)


@dataclass(frozen=True)
class Viewport:
    """Pixel size of the drawing surface."""

    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must be positive, got {self.width}x{self.height}")

    @property
    def scale(self) -> float:
        """World-to-pixel scale at zoom 1."""
        return min(self.width, self.height) * VIEW_SCALE


class ProjectedPoint(NamedTuple):
    screen_x: float
    screen_y: float
    depth: float
    perspective_scale: float


def project_arrays(
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    camera: CameraState,
    viewport: Viewport,
    perspective: bool = True,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Project arrays of world coordinates onto the viewport.

    Args:
        x, y, z: World coordinates (broadcastable arrays).
        camera: Rotation and zoom to apply.
        viewport: Target surface size.
        perspective: Apply the 1 / (1 + 0.1 * depth) factor when True.

    Returns:
        Tuple of (screen_x, screen_y, depth, perspective_scale) arrays.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)

    scale = viewport.scale * camera.zoom
    cos_x, sin_x = np.cos(camera.rotation_x), np.sin(camera.rotation_x)
    cos_y, sin_y = np.cos(camera.rotation_y), np.sin(camera.rotation_y)

    y1 = y * cos_x - z * sin_x
    z1 = y * sin_x + z * cos_x
    x2 = x * cos_y + z1 * sin_y
    z2 = -x * sin_y + z1 * cos_y

    if perspective:
        persp = 1.0 / (1.0 + z2 * PERSPECTIVE_STRENGTH)
    else:
        persp = np.ones_like(z2)

    screen_x = viewport.width / 2 + x2 * scale * persp
    screen_y = viewport.height / 2 + y1 * scale * persp

    return screen_x, screen_y, z2, persp


def project(point, camera: CameraState, viewport: Viewport, perspective: bool = True) -> ProjectedPoint:
    """Project a single point (anything with x, y, z attributes)."""
    sx, sy, depth, persp = project_arrays(point.x, point.y, point.z, camera, viewport, perspective)
    return ProjectedPoint(float(sx), float(sy), float(depth), float(persp))
