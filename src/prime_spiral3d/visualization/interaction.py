"""Pointer, wheel and frame-clock handling for the camera.

InteractionController is a small state machine over CameraState:

    IDLE --1 contact--> DRAGGING --2nd contact--> PINCHING
    PINCHING --contacts < 2--> DRAGGING --contacts == 0--> IDLE

Dragging rotates the camera by the pointer delta, pinching scales the zoom
by the ratio of finger distances, and the wheel nudges the zoom at any
time. AnimationClock advances an automatic rotation once per frame through
a FrameScheduler and can always be cancelled.

All handlers run on one thread and return immediately.
"""

from __future__ import annotations

import enum
import logging
import math
import time
from typing import Any, Callable, Protocol

from prime_spiral3d.visualization.projection import CameraState, clamp_zoom

logger = logging.getLogger(__name__)

DRAG_SENSITIVITY = 0.01
WHEEL_ZOOM_RATE = 0.001
WHEEL_ZOOM_RATE_MODIFIED = 0.0025
AUTO_ROTATE_X_RATE = 0.001
AUTO_ROTATE_Y_RATE = 0.0005
MAX_FRAME_MS = 32.0
ZOOM_STEP = 0.15
ROTATION_STEP = 0.12


class GestureMode(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    PINCHING = "pinching"


class InteractionController:
    """Translate gestures into camera rotation and zoom.

    Attributes:
        camera: The camera state owned by this controller.
        animating: Whether frame ticks rotate the camera.
        animation_speed: Multiplier applied to the auto-rotation rates.
    """

    def __init__(
        self,
        camera: CameraState | None = None,
        animating: bool = False,
        animation_speed: float = 1.0,
    ):
        self.camera = camera if camera is not None else CameraState()
        self.animating = animating
        self.animation_speed = animation_speed

        self._contacts: dict[Any, tuple[float, float]] = {}
        self._last_pos: tuple[float, float] | None = None
        self._pinch: tuple[float, float] | None = None
        self._reset_signal: int | None = None

    @property
    def mode(self) -> GestureMode:
        if self._pinch is not None or len(self._contacts) > 2:
            return GestureMode.PINCHING
        if self._last_pos is not None:
            return GestureMode.DRAGGING
        return GestureMode.IDLE

    @property
    def contact_count(self) -> int:
        return len(self._contacts)

    def _contact_distance(self) -> float:
        (ax, ay), (bx, by) = list(self._contacts.values())[:2]
        return math.hypot(ax - bx, ay - by)

    def pointer_down(self, pointer_id: Any, x: float, y: float) -> None:
        """Register a new contact at (x, y)."""
        self._contacts[pointer_id] = (x, y)

        if len(self._contacts) == 1:
            self._last_pos = (x, y)
        elif len(self._contacts) == 2:
            self._pinch = (self._contact_distance(), self.camera.zoom)
        else:
            # Zoom is frozen while three or more contacts are down.
            self._pinch = None

    def pointer_move(self, pointer_id: Any, x: float, y: float) -> None:
        """Update a known contact and apply drag or pinch."""
        if pointer_id not in self._contacts:
            return
        self._contacts[pointer_id] = (x, y)

        if len(self._contacts) == 1 and self._last_pos is not None:
            dx = x - self._last_pos[0]
            dy = y - self._last_pos[1]
            self._last_pos = (x, y)
            self.camera.rotation_x += dy * DRAG_SENSITIVITY
            self.camera.rotation_y += dx * DRAG_SENSITIVITY
        elif len(self._contacts) == 2 and self._pinch is not None:
            start_distance, start_zoom = self._pinch
            factor = self._contact_distance() / max(1.0, start_distance)
            self.camera.zoom = clamp_zoom(start_zoom * factor)

    def pointer_up(self, pointer_id: Any) -> None:
        """Forget a contact; leftover gesture state is cleared or re-seeded."""
        self._contacts.pop(pointer_id, None)

        if len(self._contacts) == 2:
            # The remaining pair starts a fresh pinch at the current zoom.
            self._pinch = (self._contact_distance(), self.camera.zoom)
        elif len(self._contacts) < 2:
            self._pinch = None
        if len(self._contacts) == 1:
            # Continue dragging from where the remaining finger is now.
            self._last_pos = next(iter(self._contacts.values()))
        elif not self._contacts:
            self._last_pos = None

    pointer_cancel = pointer_up

    def wheel(self, delta_y: float, modifier: bool = False) -> None:
        """Zoom by a wheel step; scrolling up (negative delta) zooms in."""
        rate = WHEEL_ZOOM_RATE_MODIFIED if modifier else WHEEL_ZOOM_RATE
        self.camera.zoom = clamp_zoom(self.camera.zoom - delta_y * rate)

    def advance_animation(self, dt_ms: float) -> None:
        """Apply one frame of auto-rotation if animating.

        dt_ms is capped at MAX_FRAME_MS so a slow frame cannot jump.
        """
        if not self.animating:
            return
        dt = max(0.0, min(MAX_FRAME_MS, dt_ms))
        self.camera.rotation_x += AUTO_ROTATE_X_RATE * self.animation_speed * dt
        self.camera.rotation_y += AUTO_ROTATE_Y_RATE * self.animation_speed * dt

    def zoom_in(self) -> None:
        self.camera.zoom = clamp_zoom(self.camera.zoom + ZOOM_STEP)

    def zoom_out(self) -> None:
        self.camera.zoom = clamp_zoom(self.camera.zoom - ZOOM_STEP)

    def rotate_left(self) -> None:
        self.camera.rotation_y -= ROTATION_STEP

    def rotate_right(self) -> None:
        self.camera.rotation_y += ROTATION_STEP

    def rotate_up(self) -> None:
        self.camera.rotation_x -= ROTATION_STEP

    def rotate_down(self) -> None:
        self.camera.rotation_x += ROTATION_STEP

    def reset(self) -> None:
        """Return the camera to its initial pose and drop gesture state."""
        self.camera.reset()
        self._contacts.clear()
        self._last_pos = None
        self._pinch = None
        logger.debug("Camera reset")

    def apply_reset_signal(self, value: int) -> bool:
        """Reset when the externally supplied reset counter changes.

        Returns:
            True if a reset was performed.
        """
        if value == self._reset_signal:
            return False
        self._reset_signal = value
        self.reset()
        return True


class FrameScheduler(Protocol):
    """Something that can call back once on the next frame."""

    def request(self, callback: Callable[[float], None]) -> Any:
        """Schedule callback(now_ms) for the next frame and return a handle."""

    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback."""


def now_ms() -> float:
    return time.perf_counter() * 1000.0


class AnimationClock:
    """Recurring frame task driving InteractionController auto-rotation.

    At most one frame is pending at any time. stop() cancels it, and a tick
    that finds the controller no longer animating stops the clock instead
    of re-arming it.
    """

    def __init__(
        self,
        controller: InteractionController,
        scheduler: FrameScheduler,
        now: Callable[[], float] = now_ms,
        on_frame: Callable[[], None] | None = None,
    ):
        self.controller = controller
        self.scheduler = scheduler
        self.on_frame = on_frame
        self._now = now
        self._handle: Any = None
        self._last: float | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Set the controller animating and begin ticking."""
        self.controller.animating = True
        if self.running:
            return
        self._last = self._now()
        self._handle = self.scheduler.request(self._tick)
        logger.debug("Animation clock started")

    def stop(self) -> None:
        """Stop animating and cancel the pending frame."""
        self.controller.animating = False
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
            logger.debug("Animation clock stopped")

    def toggle(self) -> bool:
        if self.running:
            self.stop()
        else:
            self.start()
        return self.running

    def _tick(self, now_ms: float) -> None:
        self._handle = None
        if not self.controller.animating:
            logger.debug("Animation clock halted")
            return

        last = self._last if self._last is not None else now_ms
        self._last = now_ms
        self.controller.advance_animation(now_ms - last)
        if self.on_frame is not None:
            self.on_frame()

        if self.controller.animating and self._handle is None:
            self._handle = self.scheduler.request(self._tick)
