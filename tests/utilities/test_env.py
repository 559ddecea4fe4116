"""Tests for :mod:`glyphglow.utilities.env`."""

from __future__ import annotations

from pathlib import Path

import pytest

from glyphglow.utilities.env import Configuration, SceneVariant

_ENV_VARS = (
    "GLYPHGLOW_VARIANT",
    "GLYPHGLOW_WINDOW_WIDTH",
    "GLYPHGLOW_WINDOW_HEIGHT",
    "GLYPHGLOW_VSYNC",
    "GLYPHGLOW_MAX_FPS",
    "GLYPHGLOW_TIME_STEP",
    "GLYPHGLOW_MAX_FRAMES",
    "GLYPHGLOW_FONT_PATH",
    "GLYPHGLOW_ASYNC_FONT_LOAD",
    "GLYPHGLOW_FONT_LOAD_WORKERS",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


class TestConfigurationDefaults:
    """Unset variables fall back to the demo's stock settings."""

    def test_rendering_defaults(self) -> None:
        assert Configuration.scene_variant() is SceneVariant.LIT
        assert Configuration.window_size() == (1280, 720)
        assert Configuration.vsync() is True
        assert Configuration.max_fps() == 0
        assert Configuration.time_step() == pytest.approx(0.05)
        assert Configuration.max_frames() is None

    def test_asset_defaults(self) -> None:
        assert Configuration.font_path() is None
        assert Configuration.async_font_load() is True
        assert Configuration.font_load_workers() == 1


class TestConfigurationOverrides:
    """Environment values are parsed, normalised, and bounds checked."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("flat", SceneVariant.FLAT),
            (" Gradient ", SceneVariant.GRADIENT),
            ("LIT_SUBTLE", SceneVariant.LIT_SUBTLE),
        ],
    )
    def test_scene_variant_is_case_insensitive(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: SceneVariant
    ) -> None:
        monkeypatch.setenv("GLYPHGLOW_VARIANT", raw)

        assert Configuration.scene_variant() is expected

    def test_unknown_variant_lists_the_options(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GLYPHGLOW_VARIANT", "wireframe")

        with pytest.raises(ValueError, match="lit, lit_subtle, flat, gradient"):
            Configuration.scene_variant()

    def test_window_size_rejects_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GLYPHGLOW_WINDOW_HEIGHT", "0")

        with pytest.raises(ValueError, match="at least 1"):
            Configuration.window_size()

    def test_non_numeric_time_step(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GLYPHGLOW_TIME_STEP", "fast")

        with pytest.raises(ValueError, match="must be a float"):
            Configuration.time_step()

    @pytest.mark.parametrize("raw", ["0", "false", "off", "nope"])
    def test_vsync_flag_false_values(
        self, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        monkeypatch.setenv("GLYPHGLOW_VSYNC", raw)

        assert Configuration.vsync() is False

    def test_blank_max_frames_means_unbounded(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GLYPHGLOW_MAX_FRAMES", "  ")
        assert Configuration.max_frames() is None

        monkeypatch.setenv("GLYPHGLOW_MAX_FRAMES", "120")
        assert Configuration.max_frames() == 120

    def test_font_path_expands_user(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GLYPHGLOW_FONT_PATH", "~/fonts/helvetiker.ttf")

        assert Configuration.font_path() == Path.home() / "fonts" / "helvetiker.ttf"
