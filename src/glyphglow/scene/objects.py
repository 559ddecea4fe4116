from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from glyphglow.scene.camera import PerspectiveCamera
from glyphglow.scene.geometry import Mesh
from glyphglow.scene.transforms import translation
from glyphglow.shading.materials import (LIGHT_POSITION_UNIFORM, TIME_UNIFORM,
                                         Material)


@dataclass
class SceneObject:
    name: str
    mesh: Mesh
    material: Material
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=np.float64).reshape(3)

    def model_matrix(self) -> np.ndarray:
        return translation(self.position)


@dataclass
class Scene:
    camera: PerspectiveCamera
    objects: list[SceneObject]
    glow: SceneObject | None = None

    def find(self, name: str) -> SceneObject:
        for scene_object in self.objects:
            if scene_object.name == name:
                return scene_object
        raise KeyError(f"No scene object named {name!r}")

    def materials(self) -> list[Material]:
        """Distinct materials in object order; shared instances appear once."""
        seen: set[int] = set()
        materials = []
        for scene_object in self.objects:
            if id(scene_object.material) not in seen:
                seen.add(id(scene_object.material))
                materials.append(scene_object.material)
        return materials

    def light_observers(self) -> list[Material]:
        return [m for m in self.materials() if m.has_uniform(LIGHT_POSITION_UNIFORM)]

    def animated_materials(self) -> list[Material]:
        return [m for m in self.materials() if m.has_uniform(TIME_UNIFORM)]

    def draw_order(self) -> list[SceneObject]:
        """Opaque objects first so blended ones composite over them."""
        opaque = [o for o in self.objects if not o.material.transparent]
        transparent = [o for o in self.objects if o.material.transparent]
        return opaque + transparent
