import numpy as np
import pytest

from glyphglow.scene.variants import GLYPH_OFFSETS, build_scene
from glyphglow.shading.materials import ShadingModel
from glyphglow.utilities.env import SceneVariant


class TestSceneVariants:
    """Every variant keeps the glyph layout and differs only in materials."""

    @pytest.mark.parametrize("variant", list(SceneVariant))
    def test_glyph_positions_are_fixed(self, variant, glyph_meshes, viewport_size) -> None:
        scene = build_scene(variant, glyph_meshes, viewport_size)

        assert np.array_equal(scene.find("e").position, [-2.0, 0.0, 0.0])
        assert np.array_equal(scene.find("4").position, [2.0, 0.0, 0.0])
        assert GLYPH_OFFSETS == {"e": -2.0, "4": 2.0}

    @pytest.mark.parametrize(
        "variant, e_model, four_model, has_glow",
        [
            (SceneVariant.LIT, ShadingModel.PHONG_REFLECT, ShadingModel.PHONG_HALF_VECTOR, True),
            (SceneVariant.LIT_SUBTLE, ShadingModel.PHONG_REFLECT, ShadingModel.PHONG_HALF_VECTOR, True),
            (SceneVariant.FLAT, ShadingModel.FLAT, ShadingModel.FLAT, False),
            (SceneVariant.GRADIENT, ShadingModel.GRADIENT, ShadingModel.GRADIENT, False),
        ],
        ids=["lit", "lit-subtle", "flat", "gradient"],
    )
    def test_variant_materials(
        self, variant, e_model, four_model, has_glow, glyph_meshes, viewport_size
    ) -> None:
        scene = build_scene(variant, glyph_meshes, viewport_size)

        assert scene.find("e").material.model == e_model
        assert scene.find("4").material.model == four_model
        assert (scene.glow is not None) == has_glow

    def test_gradient_glyphs_share_one_material(self, glyph_meshes, viewport_size) -> None:
        scene = build_scene(SceneVariant.GRADIENT, glyph_meshes, viewport_size)

        assert scene.find("e").material is scene.find("4").material
        assert len(scene.materials()) == 1

    def test_flat_glyphs_own_distinct_materials(self, glyph_meshes, viewport_size) -> None:
        scene = build_scene(SceneVariant.FLAT, glyph_meshes, viewport_size)

        e_material = scene.find("e").material
        four_material = scene.find("4").material
        assert e_material is not four_material
        assert e_material.uniforms["color"] != four_material.uniforms["color"]

    def test_glow_cube_is_a_transparent_unit_cube_drawn_last(
        self, glyph_meshes, viewport_size
    ) -> None:
        scene = build_scene(SceneVariant.LIT, glyph_meshes, viewport_size)

        assert scene.glow is not None
        lower, upper = scene.glow.mesh.bounds()
        assert np.allclose(upper - lower, 1.0)
        assert np.array_equal(scene.glow.position, [0.0, 0.0, 0.0])
        assert scene.glow.material.transparent
        assert scene.draw_order()[-1] is scene.glow

    def test_camera_uses_viewport_aspect(self, glyph_meshes) -> None:
        scene = build_scene(SceneVariant.FLAT, glyph_meshes, (800, 400))
        assert scene.camera.aspect == pytest.approx(2.0)

    def test_missing_glyph_is_rejected(self, glyph_meshes, viewport_size) -> None:
        del glyph_meshes["4"]
        with pytest.raises(ValueError, match="Missing glyph meshes"):
            build_scene(SceneVariant.LIT, glyph_meshes, viewport_size)
