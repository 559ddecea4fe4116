from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from glyphglow.scene.transforms import perspective, translation

DEFAULT_FOV_DEGREES = 75.0
DEFAULT_NEAR = 0.1
DEFAULT_FAR = 1000.0
DEFAULT_DISTANCE = 5.0


@dataclass
class PerspectiveCamera:
    """Camera looking down -z from ``position`` with no rotation."""

    aspect: float
    fov_degrees: float = DEFAULT_FOV_DEGREES
    near: float = DEFAULT_NEAR
    far: float = DEFAULT_FAR
    position: np.ndarray = field(
        default_factory=lambda: np.array([0.0, 0.0, DEFAULT_DISTANCE])
    )

    @classmethod
    def for_viewport(cls, size: tuple[int, int]) -> "PerspectiveCamera":
        width, height = size
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must be non-empty, got {size}")
        return cls(aspect=width / height)

    def view_matrix(self) -> np.ndarray:
        return translation(-np.asarray(self.position, dtype=np.float64))

    def projection_matrix(self) -> np.ndarray:
        return perspective(self.fov_degrees, self.aspect, self.near, self.far)
