"""prime_spiral3d - prime numbers on parametric 3D spirals with an interactive camera."""

__version__ = "0.1.0"

from prime_spiral3d.core.sieve import sieve, generate_primes, is_prime
from prime_spiral3d.visualization.spirals import SpiralMode, generate_points
from prime_spiral3d.visualization.projection import CameraState, Viewport, project
from prime_spiral3d.visualization.scene import SceneFilters, build_scene
from prime_spiral3d.visualization.interaction import AnimationClock, InteractionController

__all__ = [
    "sieve",
    "generate_primes",
    "is_prime",
    "SpiralMode",
    "generate_points",
    "CameraState",
    "Viewport",
    "project",
    "SceneFilters",
    "build_scene",
    "InteractionController",
    "AnimationClock",
]
