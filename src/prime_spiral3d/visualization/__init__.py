"""Spiral geometry, projection, scene assembly and camera interaction."""

from prime_spiral3d.visualization.spirals import (
    MODE_DESCRIPTIONS,
    ConicalParams,
    HelixParams,
    LayeredParams,
    Point3D,
    PointCloud,
    SphericalParams,
    SpiralMode,
    conical_coordinates,
    default_params,
    generate_points,
    helix_coordinates,
    layer_statistics,
    layered_coordinates,
    spherical_coordinates,
)
from prime_spiral3d.visualization.projection import (
    CameraState,
    ProjectedPoint,
    Viewport,
    clamp_zoom,
    project,
    project_arrays,
)
from prime_spiral3d.visualization.scene import (
    AxisSegment,
    RenderablePoint,
    Scene,
    SceneFilters,
    SceneStatistics,
    build_scene,
    pick_point,
    point_label,
    scene_statistics,
)
from prime_spiral3d.visualization.interaction import (
    AnimationClock,
    GestureMode,
    InteractionController,
)
from prime_spiral3d.visualization.renderer import render_scene, save_scene

__all__ = [
    # Geometry
    "SpiralMode",
    "MODE_DESCRIPTIONS",
    "HelixParams",
    "SphericalParams",
    "ConicalParams",
    "LayeredParams",
    "Point3D",
    "PointCloud",
    "helix_coordinates",
    "spherical_coordinates",
    "conical_coordinates",
    "layered_coordinates",
    "default_params",
    "generate_points",
    "layer_statistics",
    # Projection
    "CameraState",
    "Viewport",
    "ProjectedPoint",
    "clamp_zoom",
    "project",
    "project_arrays",
    # Scene
    "SceneFilters",
    "RenderablePoint",
    "AxisSegment",
    "Scene",
    "SceneStatistics",
    "build_scene",
    "pick_point",
    "point_label",
    "scene_statistics",
    # Interaction
    "InteractionController",
    "AnimationClock",
    "GestureMode",
    # Rendering
    "render_scene",
    "save_scene",
]
