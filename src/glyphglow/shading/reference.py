"""CPU mirrors of the fragment programs.

Each function takes per-fragment inputs as ``(N, 3)`` arrays and returns
``(N, 4)`` RGBA values clamped to ``[0, 1]``, as they would land in a
normalized framebuffer. Directions and positions are in view space.
"""

from __future__ import annotations

import numpy as np

from glyphglow.shading.materials import (AMBIENT_INTENSITY, GLOW_BRIGHTNESS,
                                         HALF_VECTOR_SHININESS,
                                         INTENSE_GLOW, REFLECT_SHININESS,
                                         REFLECT_SPECULAR_STRENGTH,
                                         GlowProfile)

VIEW_AXIS = np.array([0.0, 0.0, 1.0], dtype=np.float64)


def safe_normalize(vectors: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    vectors = np.asarray(vectors, dtype=np.float64)
    lengths = np.linalg.norm(vectors, axis=-1, keepdims=True)
    return vectors / np.maximum(lengths, eps)


def reflect(incident: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """GLSL ``reflect``: ``I - 2 * dot(N, I) * N``."""
    ndoti = (normal * incident).sum(axis=-1, keepdims=True)
    return incident - 2.0 * ndoti * normal


def _with_alpha(rgb: np.ndarray, alpha: np.ndarray | float) -> np.ndarray:
    rgb = np.clip(rgb, 0.0, 1.0)
    alpha_column = np.broadcast_to(
        np.clip(np.asarray(alpha, dtype=np.float64), 0.0, 1.0), (rgb.shape[0],)
    )
    return np.concatenate([rgb, alpha_column[:, None]], axis=1)


def shade_flat(color: tuple[float, float, float], count: int) -> np.ndarray:
    rgb = np.tile(np.asarray(color, dtype=np.float64), (count, 1))
    return _with_alpha(rgb, 1.0)


def shade_gradient(local_positions: np.ndarray) -> np.ndarray:
    local_positions = np.asarray(local_positions, dtype=np.float64)
    return _with_alpha(local_positions * 0.5 + 0.5, 1.0)


def _lambert(
    color: np.ndarray,
    ambient_intensity: float,
    normals: np.ndarray,
    light_dirs: np.ndarray,
) -> np.ndarray:
    ambient = ambient_intensity * color
    diff = np.maximum((normals * light_dirs).sum(axis=1, keepdims=True), 0.0)
    return ambient + diff * color


def shade_phong_reflect(
    color: tuple[float, float, float],
    light_position: tuple[float, float, float],
    normals: np.ndarray,
    view_positions: np.ndarray,
    *,
    ambient_intensity: float = AMBIENT_INTENSITY,
    shininess: float = REFLECT_SHININESS,
    specular_strength: float = REFLECT_SPECULAR_STRENGTH,
) -> np.ndarray:
    base = np.asarray(color, dtype=np.float64)
    normals = safe_normalize(normals)
    view_positions = np.asarray(view_positions, dtype=np.float64)

    light_dirs = safe_normalize(np.asarray(light_position) - view_positions)
    view_dirs = safe_normalize(-view_positions)
    reflect_dirs = reflect(-light_dirs, normals)

    spec = np.maximum((view_dirs * reflect_dirs).sum(axis=1, keepdims=True), 0.0)
    specular = specular_strength * spec**shininess
    return _with_alpha(_lambert(base, ambient_intensity, normals, light_dirs) + specular, 1.0)


def shade_phong_half_vector(
    color: tuple[float, float, float],
    light_position: tuple[float, float, float],
    normals: np.ndarray,
    view_positions: np.ndarray,
    *,
    ambient_intensity: float = AMBIENT_INTENSITY,
    shininess: float = HALF_VECTOR_SHININESS,
) -> np.ndarray:
    base = np.asarray(color, dtype=np.float64)
    normals = safe_normalize(normals)
    view_positions = np.asarray(view_positions, dtype=np.float64)

    light_dirs = safe_normalize(np.asarray(light_position) - view_positions)
    view_dirs = safe_normalize(-view_positions)
    half_dirs = safe_normalize(light_dirs + view_dirs)

    spec = np.maximum((normals * half_dirs).sum(axis=1, keepdims=True), 0.0)
    specular = base * spec**shininess
    return _with_alpha(_lambert(base, ambient_intensity, normals, light_dirs) + specular, 1.0)


def glow_alpha(time: float | np.ndarray, profile: GlowProfile = INTENSE_GLOW) -> np.ndarray:
    return profile.base_alpha + profile.alpha_amplitude * np.sin(np.asarray(time, dtype=np.float64))


def shade_rim_glow(
    normals: np.ndarray,
    time: float,
    profile: GlowProfile = INTENSE_GLOW,
) -> np.ndarray:
    normals = safe_normalize(normals)
    rim = np.maximum(0.5 - normals @ VIEW_AXIS, 0.0)
    intensity = rim**profile.falloff_power
    rgb = GLOW_BRIGHTNESS * np.repeat(intensity[:, None], 3, axis=1)
    return _with_alpha(rgb, glow_alpha(time, profile))
