from __future__ import annotations

from typing import Mapping

from glyphglow.scene.camera import PerspectiveCamera
from glyphglow.scene.geometry import Mesh, box_mesh
from glyphglow.scene.objects import Scene, SceneObject
from glyphglow.shading.color import COMPLEMENTARY_PURPLE, LIME_GREEN
from glyphglow.shading.materials import (INTENSE_GLOW, SUBTLE_GLOW, Material,
                                         flat_material, gradient_material,
                                         phong_half_vector_material,
                                         phong_reflect_material,
                                         rim_glow_material)
from glyphglow.utilities.env import SceneVariant
from glyphglow.utilities.logging import get_logger

logger = get_logger(__name__)

GLYPH_OFFSETS: dict[str, float] = {"e": -2.0, "4": 2.0}
GLYPH_CHARACTERS = tuple(GLYPH_OFFSETS)
GLOW_OBJECT_NAME = "glow"


def _glyph_materials(variant: SceneVariant) -> tuple[Material, Material]:
    match variant:
        case SceneVariant.LIT | SceneVariant.LIT_SUBTLE:
            return (
                phong_reflect_material("glyph-e", LIME_GREEN),
                phong_half_vector_material("glyph-4", COMPLEMENTARY_PURPLE),
            )
        case SceneVariant.FLAT:
            return (
                flat_material("glyph-e", LIME_GREEN),
                flat_material("glyph-4", COMPLEMENTARY_PURPLE),
            )
        case SceneVariant.GRADIENT:
            shared = gradient_material("glyph-gradient")
            return shared, shared
    raise ValueError(f"Unknown scene variant: {variant}")


def _glow_material(variant: SceneVariant) -> Material | None:
    match variant:
        case SceneVariant.LIT:
            return rim_glow_material(GLOW_OBJECT_NAME, INTENSE_GLOW)
        case SceneVariant.LIT_SUBTLE:
            return rim_glow_material(GLOW_OBJECT_NAME, SUBTLE_GLOW)
    return None


def build_scene(
    variant: SceneVariant,
    glyph_meshes: Mapping[str, Mesh],
    viewport_size: tuple[int, int],
) -> Scene:
    """Assemble the two glyphs, and the glow cube when ``variant`` has one."""
    missing = [c for c in GLYPH_CHARACTERS if c not in glyph_meshes]
    if missing:
        raise ValueError(f"Missing glyph meshes for {missing}")

    materials = dict(zip(GLYPH_CHARACTERS, _glyph_materials(variant)))
    objects = [
        SceneObject(
            name=character,
            mesh=glyph_meshes[character],
            material=materials[character],
            position=(offset, 0.0, 0.0),
        )
        for character, offset in GLYPH_OFFSETS.items()
    ]

    glow = None
    glow_material = _glow_material(variant)
    if glow_material is not None:
        glow = SceneObject(name=GLOW_OBJECT_NAME, mesh=box_mesh(), material=glow_material)
        objects.append(glow)

    logger.info(
        "Built %s scene with %s objects (glow: %s)",
        variant.value,
        len(objects),
        glow is not None,
    )
    return Scene(
        camera=PerspectiveCamera.for_viewport(viewport_size),
        objects=objects,
        glow=glow,
    )
