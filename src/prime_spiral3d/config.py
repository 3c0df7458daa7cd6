"""Viewer configuration with JSON load/save.

A config file holds every externally supplied parameter: the integer
bound, the spiral mode, the per-mode geometry parameters, dot size,
animation speed, viewport size and display flags. Missing keys take the
defaults below, unknown keys are ignored.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict

from prime_spiral3d.visualization.projection import Viewport
from prime_spiral3d.visualization.scene import SceneFilters
from prime_spiral3d.visualization.spirals import (
    ConicalParams,
    GeometryParams,
    HelixParams,
    LayeredParams,
    SphericalParams,
    SpiralMode,
)

logger = logging.getLogger(__name__)

_PARAM_FIELDS = {
    "helix": HelixParams,
    "spherical": SphericalParams,
    "conical": ConicalParams,
    "layered": LayeredParams,
}


@dataclass
class SpiralConfig:
    """Everything needed to build and view one spiral.

    Attributes:
        mode: Spiral family name.
        max_n: Largest integer placed (the bound N).
        helix, spherical, conical, layered: Per-mode geometry parameters.
        dot_size: Base dot radius in pixels.
        animation_speed: Auto-rotation speed multiplier.
        width, height: Viewport size in pixels.
        show_all_numbers: Show composites as well as primes.
        show_axes: Draw the reference axes.
        perspective: Perspective (True) or orthographic (False) projection.
        animate: Start with auto-rotation enabled.
    """

    mode: str = SpiralMode.HELIX.value
    max_n: int = 2000
    helix: HelixParams = field(default_factory=HelixParams)
    spherical: SphericalParams = field(default_factory=SphericalParams)
    conical: ConicalParams = field(default_factory=ConicalParams)
    layered: LayeredParams = field(default_factory=LayeredParams)
    dot_size: float = 3.0
    animation_speed: float = 1.0
    width: int = 800
    height: int = 600
    show_all_numbers: bool = False
    show_axes: bool = False
    perspective: bool = True
    animate: bool = False

    def __post_init__(self):
        try:
            self.mode = SpiralMode(self.mode).value
        except ValueError:
            choices = ", ".join(m.value for m in SpiralMode)
            raise ValueError(f"Unknown mode {self.mode!r}, expected one of: {choices}") from None
        if self.max_n < 0:
            raise ValueError(f"max_n must be >= 0, got {self.max_n}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must be positive, got {self.width}x{self.height}")

    def params_for_mode(self, mode: str | None = None) -> GeometryParams:
        """Geometry parameters of the given (default: active) mode."""
        return getattr(self, SpiralMode(mode or self.mode).value)

    def with_params(self, **overrides: Any) -> "SpiralConfig":
        """Copy with geometry parameters replaced in every mode that has them.

        None values are skipped, so argparse defaults can be passed as is.
        """
        changes = {}
        for name in _PARAM_FIELDS:
            params = getattr(self, name)
            known = {f.name for f in fields(params)}
            updates = {k: v for k, v in overrides.items() if k in known and v is not None}
            if updates:
                changes[name] = replace(params, **updates)
        if not changes:
            return self
        return replace(self, **changes)

    def filters(self) -> SceneFilters:
        return SceneFilters(
            show_all_numbers=self.show_all_numbers,
            show_axes=self.show_axes,
            perspective=self.perspective,
            dot_size=self.dot_size,
        )

    def viewport(self) -> Viewport:
        return Viewport(self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SpiralConfig":
        kwargs = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}
        for name, params_cls in _PARAM_FIELDS.items():
            if isinstance(kwargs.get(name), dict):
                known = {f.name for f in fields(params_cls)}
                kwargs[name] = params_cls(**{k: v for k, v in kwargs[name].items() if k in known})
        return cls(**kwargs)


def load_config(path: str | Path) -> SpiralConfig:
    """Load a SpiralConfig from a JSON file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    logger.debug("Loaded config from %s", path)
    return SpiralConfig.from_dict(data)


def save_config(config: SpiralConfig, path: str | Path) -> Path:
    """Write a SpiralConfig to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.debug("Saved config to %s", path)
    return path
