import pygame
import pytest
from hypothesis import HealthCheck, settings

from glyphglow.scene.geometry import Mesh, box_mesh

settings.register_profile(
    "default",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("default")


@pytest.fixture(autouse=True)
def dummy_sdl_video_driver(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    yield


@pytest.fixture(autouse=True)
def isolated_log_dir(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep log files from tests out of the home directory."""

    monkeypatch.setenv("GLYPHGLOW_LOG_DIR", str(tmp_path / "logs"))
    yield


@pytest.fixture(autouse=True)
def init_pygame() -> None:
    pygame.init()
    yield


@pytest.fixture()
def glyph_meshes() -> dict[str, Mesh]:
    """Stand-in glyph meshes so scene tests do not depend on font rasterisation."""

    slab = box_mesh(0.6, 0.8, 0.2)
    return {
        "e": slab,
        "4": Mesh(positions=slab.positions.copy(), normals=slab.normals.copy()),
    }


@pytest.fixture()
def viewport_size() -> tuple[int, int]:
    return (640, 480)

