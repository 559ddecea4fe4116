"""Rasterise font glyphs with pygame and extrude them into closed meshes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import numpy as np
import pygame
import reactivex
from reactivex.abc import SchedulerBase
from scipy import ndimage

from glyphglow.scene.geometry import Mesh, merge_meshes, quads
from glyphglow.utilities.logging import get_logger

logger = get_logger(__name__)

PIXELS_PER_CURVE_SEGMENT = 8
COVERAGE_THRESHOLD = 128

_X = np.array([1.0, 0.0, 0.0])
_Y = np.array([0.0, 1.0, 0.0])
_Z = np.array([0.0, 0.0, 1.0])


@dataclass(frozen=True)
class ExtrusionSettings:
    size: float = 1.0
    depth: float = 0.2
    curve_segments: int = 12
    bevel_enabled: bool = True
    bevel_thickness: float = 0.03
    bevel_size: float = 0.02
    bevel_offset: float = 0.0
    bevel_segments: int = 5

    def __post_init__(self) -> None:
        if self.size <= 0.0:
            raise ValueError("size must be positive")
        if self.depth < 0.0:
            raise ValueError("depth must not be negative")
        if self.curve_segments < 1:
            raise ValueError("curve_segments must be at least 1")
        if self.bevel_enabled and self.bevel_segments < 1:
            raise ValueError("bevel_segments must be at least 1 when bevels are enabled")

    @property
    def pixels_per_unit(self) -> int:
        """Raster resolution; more curve segments give smoother outlines."""
        return self.curve_segments * PIXELS_PER_CURVE_SEGMENT

    @property
    def font_size_px(self) -> int:
        return max(1, round(self.size * self.pixels_per_unit))


@dataclass(frozen=True)
class GlyphMask:
    """Coverage of one glyph; row 0 is the top of the rendered line."""

    character: str
    coverage: np.ndarray
    baseline_row: int


@dataclass(frozen=True)
class _Layer:
    coverage: np.ndarray
    z_min: float
    z_max: float


def rasterize_glyph(font: pygame.font.Font, character: str) -> GlyphMask:
    if len(character) != 1:
        raise ValueError(f"Expected a single character, got {character!r}")

    surface = font.render(character, True, (255, 255, 255))
    # surfarray is indexed (x, y)
    alpha = pygame.surfarray.array_alpha(surface).T
    coverage = alpha >= COVERAGE_THRESHOLD
    if not coverage.any():
        raise ValueError(f"Glyph {character!r} has no visible coverage")
    return GlyphMask(
        character=character,
        coverage=coverage,
        baseline_row=font.get_ascent(),
    )


def _disk(radius: int) -> np.ndarray:
    yy, xx = np.ogrid[-radius : radius + 1, -radius : radius + 1]
    return xx * xx + yy * yy <= radius * radius


def _grow(coverage: np.ndarray, radius: int) -> np.ndarray:
    if radius <= 0:
        return coverage
    return ndimage.binary_dilation(coverage, structure=_disk(radius))


def _layers(coverage: np.ndarray, settings: ExtrusionSettings) -> list[_Layer]:
    """Slices ordered from back (-z) to front (+z)."""
    ppu = settings.pixels_per_unit
    depth = settings.depth
    if not settings.bevel_enabled:
        return [_Layer(coverage, 0.0, depth)]

    offset_px = settings.bevel_offset * ppu
    size_px = settings.bevel_size * ppu
    thickness = settings.bevel_thickness
    segments = settings.bevel_segments

    core = _Layer(_grow(coverage, round(size_px + offset_px)), 0.0, depth)
    front: list[_Layer] = []
    back: list[_Layer] = []
    for step in range(1, segments + 1):
        # Quarter-ellipse profile: full bevel size at the wall, none at the cap
        height = step / segments
        inset = math.sqrt(max(0.0, 1.0 - height * height))
        grown = _grow(coverage, round(size_px * inset + offset_px))
        z_low = thickness * (step - 1) / segments
        z_high = thickness * height
        front.append(_Layer(grown, depth + z_low, depth + z_high))
        back.append(_Layer(grown, -z_high, -z_low))

    return list(reversed(back)) + [core] + front


def _cell_centers(
    selected: np.ndarray, baseline_row: int, ppu: int, z: float
) -> np.ndarray:
    rows, cols = np.nonzero(selected)
    x = (cols + 0.5) / ppu
    y = (baseline_row - rows - 0.5) / ppu
    return np.column_stack([x, y, np.full(x.shape, z)])


def _shift(coverage: np.ndarray, rows: int, cols: int) -> np.ndarray:
    """Return the neighbour coverage at ``(row + rows, col + cols)``."""
    padded = np.pad(coverage, 1)
    height, width = coverage.shape
    return padded[1 + rows : 1 + rows + height, 1 + cols : 1 + cols + width]


def _layer_mesh(
    layer: _Layer,
    behind: np.ndarray,
    in_front: np.ndarray,
    baseline_row: int,
    ppu: int,
) -> Mesh:
    coverage = layer.coverage
    half = 0.5 / ppu
    half_depth = (layer.z_max - layer.z_min) / 2.0
    z_mid = layer.z_min + half_depth
    pieces: list[Mesh] = []

    front_caps = coverage & ~in_front
    pieces.append(
        quads(
            _cell_centers(front_caps, baseline_row, ppu, layer.z_max),
            _X * half,
            _Y * half,
        )
    )
    back_caps = coverage & ~behind
    pieces.append(
        quads(
            _cell_centers(back_caps, baseline_row, ppu, layer.z_min),
            _Y * half,
            _X * half,
        )
    )

    if half_depth > 0.0:
        walls = (
            # (row step, col step, outward direction, u, v) with u x v outward
            (0, 1, _X, _Y * half, _Z * half_depth),
            (0, -1, -_X, _Z * half_depth, _Y * half),
            (-1, 0, _Y, _Z * half_depth, _X * half),
            (1, 0, -_Y, _X * half, _Z * half_depth),
        )
        for rows, cols, outward, u, v in walls:
            exposed = coverage & ~_shift(coverage, rows, cols)
            centers = _cell_centers(exposed, baseline_row, ppu, z_mid)
            centers[:, :2] += outward[:2] * half
            pieces.append(quads(centers, u, v))

    return merge_meshes(pieces)


def extrude_glyph(mask: GlyphMask, settings: ExtrusionSettings) -> Mesh:
    """Extrude ``mask`` into a closed mesh whose origin is the left baseline."""
    ppu = settings.pixels_per_unit
    pad = math.ceil((settings.bevel_size + max(settings.bevel_offset, 0.0)) * ppu) + 1
    coverage = np.pad(mask.coverage, pad)
    baseline_row = mask.baseline_row + pad

    layers = _layers(coverage, settings)
    empty = np.zeros_like(coverage)
    pieces = []
    for index, layer in enumerate(layers):
        behind = layers[index - 1].coverage if index > 0 else empty
        in_front = layers[index + 1].coverage if index + 1 < len(layers) else empty
        pieces.append(_layer_mesh(layer, behind, in_front, baseline_row, ppu))

    mesh = merge_meshes(pieces)
    # Undo the padding so x = 0 stays at the left edge of the rendered glyph
    positions = mesh.positions.copy()
    positions[:, 0] -= pad / ppu
    return Mesh(positions=positions, normals=mesh.normals)


class GlyphLoader:
    """Load a font and turn characters into extruded meshes."""

    def __init__(
        self,
        font_path: Path | None = None,
        settings: ExtrusionSettings | None = None,
    ) -> None:
        self.font_path = font_path
        self.settings = settings or ExtrusionSettings()

    def _open_font(self) -> pygame.font.Font:
        pygame.font.init()
        if self.font_path is not None and not self.font_path.is_file():
            raise FileNotFoundError(f"Font file not found: {self.font_path}")
        path = str(self.font_path) if self.font_path is not None else None
        return pygame.font.Font(path, self.settings.font_size_px)

    def load_meshes(self, characters: Iterable[str]) -> dict[str, Mesh]:
        font = self._open_font()
        meshes: dict[str, Mesh] = {}
        for character in characters:
            mask = rasterize_glyph(font, character)
            meshes[character] = extrude_glyph(mask, self.settings)
            logger.info(
                "Extruded glyph %r into %s triangles",
                character,
                meshes[character].triangle_count,
            )
        return meshes

    def load(
        self,
        characters: Iterable[str],
        scheduler: SchedulerBase | None = None,
    ) -> reactivex.Observable[dict[str, Mesh]]:
        """Emit the meshes once, on ``scheduler`` when one is given."""
        requested = tuple(characters)
        source = self.font_path or "pygame default font"
        logger.info("Loading glyphs %s from %s", requested, source)
        return reactivex.from_callable(
            lambda: self.load_meshes(requested), scheduler=scheduler
        )
