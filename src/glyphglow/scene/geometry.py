from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

# Corner order (-u-v, +u-v, +u+v, -u+v) is counter-clockwise seen from u x v
_CORNER_SIGNS = np.array([[-1.0, -1.0], [1.0, -1.0], [1.0, 1.0], [-1.0, 1.0]])
_QUAD_TRIANGLES = [0, 1, 2, 0, 2, 3]

FLOATS_PER_VERTEX = 6


@dataclass(frozen=True)
class Mesh:
    """Non-indexed triangle list with one normal per vertex."""

    positions: np.ndarray
    normals: np.ndarray

    def __post_init__(self) -> None:
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            raise ValueError(f"positions must have shape (N, 3), got {self.positions.shape}")
        if self.normals.shape != self.positions.shape:
            raise ValueError("normals must match positions")
        if self.positions.shape[0] % 3 != 0:
            raise ValueError("vertex count must be a multiple of three")

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return self.vertex_count // 3

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        if self.vertex_count == 0:
            zero = np.zeros(3)
            return zero, zero
        return self.positions.min(axis=0), self.positions.max(axis=0)

    def interleaved(self) -> np.ndarray:
        """``(N, 6)`` float32 array of position then normal, ready for upload."""
        return np.ascontiguousarray(
            np.hstack([self.positions, self.normals]), dtype=np.float32
        )


def empty_mesh() -> Mesh:
    return Mesh(
        positions=np.zeros((0, 3), dtype=np.float32),
        normals=np.zeros((0, 3), dtype=np.float32),
    )


def quads(
    centers: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
) -> Mesh:
    """Build one quad per row of ``centers`` spanning ``±u`` and ``±v``.

    Quads face ``u x v``.
    """
    centers = np.asarray(centers, dtype=np.float64).reshape(-1, 3)
    u = np.asarray(u, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)
    if centers.shape[0] == 0:
        return empty_mesh()

    offsets = _CORNER_SIGNS[:, 0, None] * u + _CORNER_SIGNS[:, 1, None] * v
    corners = centers[:, None, :] + offsets[None, :, :]
    positions = corners[:, _QUAD_TRIANGLES, :].reshape(-1, 3)

    normal = np.cross(u, v)
    normal = normal / np.linalg.norm(normal)
    normals = np.broadcast_to(normal, positions.shape)
    return Mesh(
        positions=positions.astype(np.float32),
        normals=np.array(normals, dtype=np.float32),
    )


def merge_meshes(meshes: Iterable[Mesh]) -> Mesh:
    meshes = [mesh for mesh in meshes if mesh.vertex_count]
    if not meshes:
        return empty_mesh()
    return Mesh(
        positions=np.concatenate([mesh.positions for mesh in meshes]),
        normals=np.concatenate([mesh.normals for mesh in meshes]),
    )


def box_mesh(width: float = 1.0, height: float = 1.0, depth: float = 1.0) -> Mesh:
    """Axis-aligned box centred on the origin."""
    hx = np.array([width / 2.0, 0.0, 0.0])
    hy = np.array([0.0, height / 2.0, 0.0])
    hz = np.array([0.0, 0.0, depth / 2.0])

    faces = (
        (hx, hy, hz),
        (-hx, hz, hy),
        (hy, hz, hx),
        (-hy, hx, hz),
        (hz, hx, hy),
        (-hz, hy, hx),
    )
    return merge_meshes(quads(center[None, :], u, v) for center, u, v in faces)
