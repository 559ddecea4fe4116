import numpy as np
import pygame
import pytest

from glyphglow.scene.glyphs import (ExtrusionSettings, GlyphLoader, GlyphMask,
                                    extrude_glyph, rasterize_glyph)


def _square_mask(size: int = 8) -> GlyphMask:
    coverage = np.zeros((size + 4, size + 4), dtype=bool)
    coverage[2 : 2 + size, 2 : 2 + size] = True
    return GlyphMask(character="#", coverage=coverage, baseline_row=size + 2)


class TestExtrusion:
    """Extrusion follows the original text geometry parameters."""

    def test_default_settings(self) -> None:
        settings = ExtrusionSettings()
        assert settings.depth == 0.2
        assert settings.bevel_thickness == 0.03
        assert settings.bevel_size == 0.02
        assert settings.curve_segments == 12
        assert settings.bevel_segments == 5
        assert settings.pixels_per_unit == 96

    def test_bevel_extends_caps_past_depth(self) -> None:
        """Caps sit bevel_thickness beyond both faces of the extruded body."""
        mesh = extrude_glyph(_square_mask(), ExtrusionSettings())

        lower, upper = mesh.bounds()
        assert lower[2] == pytest.approx(-0.03)
        assert upper[2] == pytest.approx(0.23)

    def test_flat_extrusion_without_bevel(self) -> None:
        settings = ExtrusionSettings(bevel_enabled=False, curve_segments=1)
        mesh = extrude_glyph(_square_mask(8), settings)

        lower, upper = mesh.bounds()
        assert np.allclose(lower, [0.25, 0.0, 0.0])
        assert np.allclose(upper, [1.25, 1.0, 0.2])
        # 64 cells on each cap plus 8 wall quads per side
        assert mesh.triangle_count == 2 * (64 * 2 + 8 * 4)

    def test_bevel_grows_the_outline(self) -> None:
        settings = ExtrusionSettings(curve_segments=1, bevel_size=2 / 8)
        mesh = extrude_glyph(_square_mask(8), settings)

        lower, upper = mesh.bounds()
        assert lower[0] == pytest.approx(0.0)
        assert upper[0] == pytest.approx(1.5)

    def test_mesh_is_closed(self) -> None:
        """Outward normals of a closed surface weighted by area sum to zero."""
        mesh = extrude_glyph(_square_mask(), ExtrusionSettings())

        triangles = mesh.positions.reshape(-1, 3, 3).astype(np.float64)
        area_vectors = np.cross(
            triangles[:, 1] - triangles[:, 0], triangles[:, 2] - triangles[:, 0]
        )
        assert np.allclose(area_vectors.sum(axis=0), 0.0, atol=1e-5)

    def test_settings_validation(self) -> None:
        with pytest.raises(ValueError, match="curve_segments"):
            ExtrusionSettings(curve_segments=0)


class TestGlyphLoader:
    def test_rasterize_rejects_blank_glyph(self) -> None:
        pygame.font.init()
        font = pygame.font.Font(None, 32)
        with pytest.raises(ValueError, match="no visible coverage"):
            rasterize_glyph(font, " ")

    def test_rasterize_rejects_strings(self) -> None:
        pygame.font.init()
        font = pygame.font.Font(None, 32)
        with pytest.raises(ValueError, match="single character"):
            rasterize_glyph(font, "e4")

    def test_load_meshes_with_default_font(self) -> None:
        loader = GlyphLoader(settings=ExtrusionSettings(curve_segments=4))

        meshes = loader.load_meshes(("e", "4"))

        assert set(meshes) == {"e", "4"}
        for mesh in meshes.values():
            lower, upper = mesh.bounds()
            assert mesh.triangle_count > 0
            assert lower[0] >= -0.1
            assert upper[1] > 0.0

    def test_load_emits_once_then_completes(self) -> None:
        loader = GlyphLoader(settings=ExtrusionSettings(curve_segments=2))
        received = []
        completed = []

        loader.load(("e",)).subscribe(
            on_next=received.append, on_completed=lambda: completed.append(True)
        )

        assert len(received) == 1
        assert set(received[0]) == {"e"}
        assert completed == [True]

    def test_missing_font_reaches_on_error(self, tmp_path) -> None:
        loader = GlyphLoader(font_path=tmp_path / "missing.ttf")
        errors = []

        loader.load(("e",)).subscribe(on_next=lambda _: None, on_error=errors.append)

        assert len(errors) == 1
        assert isinstance(errors[0], FileNotFoundError)
