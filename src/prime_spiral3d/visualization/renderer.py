"""Matplotlib rendering of depth-sorted spiral scenes."""

from __future__ import annotations

import colorsys
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from prime_spiral3d.visualization.projection import Viewport
from prime_spiral3d.visualization.scene import Scene, SceneStatistics

if TYPE_CHECKING:
    import matplotlib.axes
    import matplotlib.figure

BACKGROUND_COLOR = "#111827"
COMPOSITE_RGBA = (1.0, 1.0, 1.0, 0.1)
PRIME_ALPHA = 0.9
AXIS_ALPHA = 0.35


def prime_color(index: int) -> tuple[float, float, float]:
    """RGB color for a prime dot: hue index mod 360, 70% saturation, 60% lightness."""
    return colorsys.hls_to_rgb((index % 360) / 360.0, 0.6, 0.7)


def scene_colors(scene: Scene) -> np.ndarray:
    """RGBA array with one row per scene point, in scene order."""
    colors = np.empty((len(scene.points), 4), dtype=np.float64)
    for row, point in enumerate(scene.points):
        if point.is_prime:
            colors[row, :3] = prime_color(point.index)
            colors[row, 3] = PRIME_ALPHA
        else:
            colors[row] = COMPOSITE_RGBA
    return colors


def draw_scene(
    ax: "matplotlib.axes.Axes",
    scene: Scene,
    viewport: Viewport,
    dpi: float = 100,
    stats: SceneStatistics | None = None,
) -> None:
    """Paint a scene onto an axes laid out in viewport pixel coordinates.

    Points are drawn in scene order (back to front), axes underneath them.

    Args:
        ax: Target axes; it is cleared first.
        scene: Depth-sorted scene.
        viewport: Pixel size the scene was projected for.
        dpi: Figure resolution, used to convert pixel radii to marker sizes.
        stats: Optional totals for the "Primes: visible / total" overlay.
    """
    ax.clear()
    ax.set_facecolor(BACKGROUND_COLOR)
    ax.set_xlim(0, viewport.width)
    ax.set_ylim(viewport.height, 0)
    ax.set_aspect("equal")
    ax.axis("off")

    for segment in scene.axes:
        ax.plot(
            [segment.start.screen_x, segment.end.screen_x],
            [segment.start.screen_y, segment.end.screen_y],
            color="white", alpha=AXIS_ALPHA, linewidth=1,
        )
        ax.text(
            segment.end.screen_x + 6, segment.end.screen_y - 6, segment.label,
            color="white", alpha=0.6, fontsize=8,
        )

    if scene.points:
        xs = np.fromiter((p.screen_x for p in scene.points), dtype=np.float64)
        ys = np.fromiter((p.screen_y for p in scene.points), dtype=np.float64)
        radii_pt = np.fromiter((p.radius for p in scene.points), dtype=np.float64) * 72.0 / dpi
        ax.scatter(
            xs, ys,
            s=(2 * radii_pt) ** 2,
            c=scene_colors(scene),
            marker="o",
            linewidths=0,
        )

    if stats is not None:
        ax.text(
            8, 8, f"Primes: {scene.prime_count} / {stats.total}",
            color="white", fontsize=9, va="top",
            bbox=dict(facecolor="black", alpha=0.7, edgecolor="none"),
        )


def render_scene(
    scene: Scene,
    viewport: Viewport,
    title: str | None = None,
    stats: SceneStatistics | None = None,
    dpi: int = 100,
) -> "matplotlib.figure.Figure":
    """Render a scene to a new matplotlib figure sized to the viewport.

    Args:
        scene: Depth-sorted scene.
        viewport: Pixel size; the figure is width x height pixels at dpi.
        title: Optional title drawn at the top of the canvas.
        stats: Optional totals for the prime count overlay.
        dpi: Figure resolution.

    Returns:
        Matplotlib Figure object.
    """
    import matplotlib.pyplot as plt

    fig = plt.figure(figsize=(viewport.width / dpi, viewport.height / dpi), dpi=dpi)
    fig.patch.set_facecolor(BACKGROUND_COLOR)
    ax = fig.add_axes((0, 0, 1, 1))

    draw_scene(ax, scene, viewport, dpi=dpi, stats=stats)

    if title:
        ax.text(
            viewport.width / 2, 8, title,
            color="white", fontsize=11, ha="center", va="top",
        )

    return fig


def save_scene(
    scene: Scene,
    viewport: Viewport,
    path: str | Path,
    dpi: int = 100,
    **kwargs,
) -> Path:
    """Save a scene snapshot; the format follows the extension (PNG, SVG, PDF).

    Args:
        scene: Depth-sorted scene.
        viewport: Pixel size the scene was projected for.
        path: Output file path.
        dpi: Resolution in dots per inch.
        **kwargs: Additional arguments passed to render_scene.

    Returns:
        The output path.
    """
    import matplotlib.pyplot as plt

    path = Path(path)
    fig = render_scene(scene, viewport, dpi=dpi, **kwargs)
    fig.savefig(path, dpi=dpi, facecolor=fig.get_facecolor())
    plt.close(fig)
    return path
