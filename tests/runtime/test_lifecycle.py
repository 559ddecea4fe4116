import numpy as np
import pytest

from glyphglow.runtime.lifecycle import LifecyclePhase, SceneLifecycle
from glyphglow.utilities.env import SceneVariant


class TestSceneLifecycle:
    """Idle until assets arrive, then Running with per-tick uniform updates."""

    def test_starts_idle_and_refuses_ticks(self, viewport_size) -> None:
        lifecycle = SceneLifecycle(SceneVariant.LIT, viewport_size)

        assert lifecycle.phase == LifecyclePhase.IDLE
        assert lifecycle.scene is None
        with pytest.raises(RuntimeError, match="before the scene is running"):
            lifecycle.tick()

    def test_assets_move_lifecycle_to_running_once(self, glyph_meshes, viewport_size) -> None:
        lifecycle = SceneLifecycle(SceneVariant.LIT, viewport_size)

        scene = lifecycle.complete_load(glyph_meshes)

        assert lifecycle.phase == LifecyclePhase.RUNNING
        assert lifecycle.scene is scene
        assert lifecycle.state.ticks == 0
        assert lifecycle.state.time == 0.0
        with pytest.raises(RuntimeError, match="already delivered"):
            lifecycle.complete_load(glyph_meshes)

    def test_lit_scene_after_twenty_ticks(self, glyph_meshes, viewport_size) -> None:
        """Time reaches 1.0 and the light tracks where the glow cube is now."""
        lifecycle = SceneLifecycle(SceneVariant.LIT, viewport_size)
        scene = lifecycle.complete_load(glyph_meshes)

        for _ in range(20):
            state = lifecycle.tick()

        assert state.ticks == 20
        assert state.time == pytest.approx(1.0)
        assert scene.glow.material.uniforms["time"] == pytest.approx(1.0)
        for name in ("e", "4"):
            light = scene.find(name).material.uniforms["lightPosition"]
            assert np.allclose(light, scene.glow.position)

        scene.glow.position = np.array([0.0, 1.5, -1.0])
        lifecycle.tick()

        for name in ("e", "4"):
            assert scene.find(name).material.uniforms["lightPosition"] == (0.0, 1.5, -1.0)

    def test_light_position_is_not_aliased_to_the_cube(
        self, glyph_meshes, viewport_size
    ) -> None:
        """Moving the cube between ticks does not leak into the current frame."""
        lifecycle = SceneLifecycle(SceneVariant.LIT, viewport_size)
        scene = lifecycle.complete_load(glyph_meshes)
        lifecycle.tick()

        scene.glow.position[0] = 4.0

        assert scene.find("e").material.uniforms["lightPosition"] == (0.0, 0.0, 0.0)

    def test_flat_scene_never_gains_animated_uniforms(
        self, glyph_meshes, viewport_size
    ) -> None:
        lifecycle = SceneLifecycle(SceneVariant.FLAT, viewport_size)
        scene = lifecycle.complete_load(glyph_meshes)
        before = [dict(material.uniforms) for material in scene.materials()]

        for _ in range(37):
            state = lifecycle.tick()

        assert state.ticks == 37
        assert state.time is None
        assert state.light_position is None
        for material in scene.materials():
            assert "time" not in material.uniforms
            assert "lightPosition" not in material.uniforms
        assert [material.uniforms for material in scene.materials()] == before

    def test_subtle_variant_uses_configured_time_step(
        self, glyph_meshes, viewport_size
    ) -> None:
        lifecycle = SceneLifecycle(SceneVariant.LIT_SUBTLE, viewport_size, time_step=0.25)
        scene = lifecycle.complete_load(glyph_meshes)

        lifecycle.tick()
        lifecycle.tick()

        assert scene.glow.material.uniforms["time"] == 0.5

    def test_dispose_stops_updates(self, glyph_meshes, viewport_size) -> None:
        lifecycle = SceneLifecycle(SceneVariant.LIT, viewport_size)
        lifecycle.complete_load(glyph_meshes)
        lifecycle.tick()

        lifecycle.dispose()
        lifecycle.tick()

        assert lifecycle.state.ticks == 1
