"""Interactive matplotlib viewer for 3D prime spirals.

Mouse drag rotates, the scroll wheel zooms (hold ctrl for faster zoom).
Hovering a dot shows its value.
Keys:
    a       toggle auto-rotation
    r       reset view
    arrows  rotate by a fixed step
    + / -   zoom in / out
    p       toggle perspective
    x       toggle axes
    n       toggle showing all numbers
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from prime_spiral3d.config import SpiralConfig
from prime_spiral3d.core.sieve import sieve
from prime_spiral3d.visualization.interaction import (
    AnimationClock,
    InteractionController,
    now_ms,
)
from prime_spiral3d.visualization.renderer import BACKGROUND_COLOR, draw_scene
from prime_spiral3d.visualization.scene import (
    RenderablePoint,
    Scene,
    build_scene,
    pick_point,
    point_label,
    scene_statistics,
)
from prime_spiral3d.visualization.spirals import generate_points

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16
MOUSE_POINTER = "mouse"


class MatplotlibFrameScheduler:
    """FrameScheduler backed by single-shot canvas timers."""

    def __init__(self, canvas, interval_ms: int = FRAME_INTERVAL_MS):
        self.canvas = canvas
        self.interval_ms = interval_ms

    def request(self, callback: Callable[[float], None]) -> Any:
        timer = self.canvas.new_timer(interval=self.interval_ms)
        timer.single_shot = True
        timer.add_callback(lambda: callback(now_ms()))
        timer.start()
        return timer

    def cancel(self, handle: Any) -> None:
        handle.stop()


class SpiralViewer:
    """Window showing one spiral, driven by an InteractionController.

    Points and primes are computed once on construction; the scene is
    rebuilt after every camera or filter change.
    """

    def __init__(self, config: SpiralConfig):
        import matplotlib.pyplot as plt

        self.config = config
        self.points = generate_points(config.mode, config.max_n, config.params_for_mode())
        self.primes = sieve(config.max_n)
        self.stats = scene_statistics(config.max_n, self.primes)
        self.viewport = config.viewport()
        self.controller = InteractionController(animation_speed=config.animation_speed)
        self.reset_signal = 0
        self._button = None
        self._hover_xy: tuple[float, float] | None = None
        self.hovered: RenderablePoint | None = None
        self.scene = Scene()
        self.controller.apply_reset_signal(self.reset_signal)

        dpi = 100
        self.dpi = dpi
        self.fig = plt.figure(figsize=(config.width / dpi, config.height / dpi), dpi=dpi)
        self.fig.patch.set_facecolor(BACKGROUND_COLOR)
        self.ax = self.fig.add_axes((0, 0, 1, 1))
        manager = self.fig.canvas.manager
        if manager is not None:
            manager.set_window_title(f"{config.mode} spiral - prime numbers")
            # Our key bindings replace the default navigation shortcuts.
            if getattr(manager, "key_press_handler_id", None) is not None:
                self.fig.canvas.mpl_disconnect(manager.key_press_handler_id)

        self.clock = AnimationClock(
            self.controller,
            MatplotlibFrameScheduler(self.fig.canvas),
            on_frame=self.redraw,
        )

        canvas = self.fig.canvas
        canvas.mpl_connect("button_press_event", self._on_press)
        canvas.mpl_connect("motion_notify_event", self._on_motion)
        canvas.mpl_connect("button_release_event", self._on_release)
        canvas.mpl_connect("scroll_event", self._on_scroll)
        canvas.mpl_connect("key_press_event", self._on_key)
        canvas.mpl_connect("figure_leave_event", self._on_leave)
        canvas.mpl_connect("close_event", self._on_close)

        logger.info(
            "%s spiral: %d numbers, %d primes (%.1f%%)",
            config.mode, self.stats.total, self.stats.prime_count, self.stats.density * 100,
        )
        if config.animate:
            self.clock.start()
        self.redraw()

    def _screen_xy(self, event) -> tuple[float, float]:
        # Display coordinates grow upward; the scene's y grows downward.
        return event.x, self.fig.bbox.height - event.y

    def _on_press(self, event) -> None:
        if self._button is not None:
            return
        self._button = event.button
        self._hover_xy = None
        x, y = self._screen_xy(event)
        self.controller.pointer_down(MOUSE_POINTER, x, y)

    def _on_motion(self, event) -> None:
        x, y = self._screen_xy(event)
        if self._button is None:
            self._hover(x, y)
            return
        self.controller.pointer_move(MOUSE_POINTER, x, y)
        self.redraw()

    def _on_release(self, event) -> None:
        if event.button != self._button:
            return
        self._button = None
        self.controller.pointer_up(MOUSE_POINTER)

    def _on_leave(self, event) -> None:
        self._hover(None, None)

    def _hover(self, x: float | None, y: float | None) -> None:
        self._hover_xy = None if x is None else (x, y)
        picked = None if x is None else pick_point(self.scene, x, y)
        if picked != self.hovered:
            self.redraw()

    def _on_scroll(self, event) -> None:
        modifier = bool(event.key) and "control" in event.key
        # One notch up is step +1, a browser reports it as deltaY = -100.
        self.controller.wheel(-100.0 * event.step, modifier=modifier)
        self.redraw()

    def _on_key(self, event) -> None:
        actions = {
            "a": self.clock.toggle,
            "r": self.reset,
            "left": self.controller.rotate_left,
            "right": self.controller.rotate_right,
            "up": self.controller.rotate_up,
            "down": self.controller.rotate_down,
            "+": self.controller.zoom_in,
            "=": self.controller.zoom_in,
            "-": self.controller.zoom_out,
            "p": lambda: self._toggle("perspective"),
            "x": lambda: self._toggle("show_axes"),
            "n": lambda: self._toggle("show_all_numbers"),
        }
        action = actions.get(event.key)
        if action is None:
            return
        action()
        self.redraw()

    def _on_close(self, event) -> None:
        self.clock.stop()

    def _toggle(self, flag: str) -> None:
        setattr(self.config, flag, not getattr(self.config, flag))

    def reset(self) -> None:
        """Stop animating and return the camera to its initial pose."""
        self.clock.stop()
        self.reset_signal += 1
        self.controller.apply_reset_signal(self.reset_signal)

    def redraw(self) -> None:
        scene = build_scene(
            self.points, self.primes, self.controller.camera, self.viewport, self.config.filters(),
        )
        draw_scene(self.ax, scene, self.viewport, dpi=self.dpi, stats=self.stats)
        self.scene = scene

        # Dots move under a still pointer while animating, so pick again.
        self.hovered = pick_point(scene, *self._hover_xy) if self._hover_xy else None
        if self.hovered is not None:
            self.ax.text(
                self.hovered.screen_x + 10, self.hovered.screen_y + 10, point_label(self.hovered),
                color="white", fontsize=9, va="top",
                bbox={"facecolor": "black", "alpha": 0.7, "edgecolor": "none", "pad": 3},
            )
        self.fig.canvas.draw_idle()

    def show(self) -> None:
        import matplotlib.pyplot as plt

        plt.show()
        self.clock.stop()
