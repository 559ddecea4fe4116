"""4x4 homogeneous transforms in column-vector convention."""

from __future__ import annotations

import math

import numpy as np


def translation(offset: np.ndarray | tuple[float, float, float]) -> np.ndarray:
    matrix = np.eye(4, dtype=np.float64)
    matrix[:3, 3] = np.asarray(offset, dtype=np.float64)
    return matrix


def perspective(fov_degrees: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL-style projection for a vertical field of view."""
    if aspect <= 0.0:
        raise ValueError("Aspect ratio must be positive")
    if not 0.0 < near < far:
        raise ValueError("Clip planes must satisfy 0 < near < far")

    f = 1.0 / math.tan(math.radians(fov_degrees) / 2.0)
    matrix = np.zeros((4, 4), dtype=np.float64)
    matrix[0, 0] = f / aspect
    matrix[1, 1] = f
    matrix[2, 2] = (far + near) / (near - far)
    matrix[2, 3] = (2.0 * far * near) / (near - far)
    matrix[3, 2] = -1.0
    return matrix


def normal_matrix(model_view: np.ndarray) -> np.ndarray:
    """Inverse-transpose of the upper 3x3 of ``model_view``."""
    return np.linalg.inv(np.asarray(model_view, dtype=np.float64)[:3, :3]).T
