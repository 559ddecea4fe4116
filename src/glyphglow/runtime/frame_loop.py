from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

import pygame
from reactivex.abc import DisposableBase

from glyphglow.runtime.lifecycle import SceneLifecycle
from glyphglow.scene.geometry import Mesh
from glyphglow.scene.glyphs import GlyphLoader
from glyphglow.scene.variants import GLYPH_CHARACTERS
from glyphglow.utilities.env import Configuration, SceneVariant
from glyphglow.utilities.logging import get_logger
from glyphglow.utilities.reactivex_threads import asset_scheduler

if TYPE_CHECKING:
    from glyphglow.renderers.scene_renderer import SceneRenderer

logger = get_logger(__name__)

# Posted from the loader thread; handled on the main thread
ASSETS_LOADED = pygame.event.custom_type()
WINDOW_TITLE = "glyphglow"


class FrameLoop:
    """Own the window and drive the scene once per display refresh."""

    def __init__(
        self,
        variant: SceneVariant | None = None,
        *,
        loader: GlyphLoader | None = None,
        renderer: "SceneRenderer" | None = None,
        viewport_size: tuple[int, int] | None = None,
        max_fps: int | None = None,
        max_frames: int | None = None,
        vsync: bool | None = None,
        time_step: float | None = None,
    ) -> None:
        self.variant = variant or Configuration.scene_variant()
        self.viewport_size = viewport_size or Configuration.window_size()
        self.max_fps = Configuration.max_fps() if max_fps is None else max_fps
        self.max_frames = Configuration.max_frames() if max_frames is None else max_frames
        self.vsync = Configuration.vsync() if vsync is None else vsync
        self.lifecycle = SceneLifecycle(
            self.variant,
            self.viewport_size,
            Configuration.time_step() if time_step is None else time_step,
        )
        self.loader = loader or GlyphLoader(Configuration.font_path())
        if renderer is None:
            from glyphglow.renderers.scene_renderer import SceneRenderer

            renderer = SceneRenderer()
        self.renderer = renderer

        self.screen: pygame.Surface | None = None
        self.clock: pygame.time.Clock | None = None
        self.frames_rendered = 0
        self.running = False
        self._load_subscription: DisposableBase | None = None

    def _initialize_display(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode(
            self.viewport_size,
            pygame.OPENGL | pygame.DOUBLEBUF,
            vsync=1 if self.vsync else 0,
        )
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.renderer.initialize()

    def request_assets(self) -> None:
        observable = self.loader.load(GLYPH_CHARACTERS, scheduler=asset_scheduler())
        self._load_subscription = observable.subscribe(
            on_next=self._post_assets,
            on_error=self._on_load_error,
        )

    def _post_assets(self, meshes: Mapping[str, Mesh]) -> None:
        pygame.event.post(pygame.event.Event(ASSETS_LOADED, meshes=meshes))

    def _on_load_error(self, error: Exception) -> None:
        logger.error("Glyph loading failed; scene stays idle", exc_info=error)

    def on_assets_loaded(self, meshes: Mapping[str, Mesh]) -> None:
        scene = self.lifecycle.complete_load(meshes)
        self.renderer.prepare(scene)

    def handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == ASSETS_LOADED:
                self.on_assets_loaded(event.meshes)
        return True

    def one_frame(self) -> bool:
        """Tick and draw when running; just clear while idle."""
        if not self.lifecycle.running:
            self.renderer.clear()
            return False

        assert self.lifecycle.scene is not None
        self.lifecycle.tick()
        self.renderer.render(self.lifecycle.scene, self.viewport_size)
        self.frames_rendered += 1
        return True

    def _frame_limit_reached(self) -> bool:
        return self.max_frames is not None and self.frames_rendered >= self.max_frames

    def start(self) -> None:
        logger.info("Starting FrameLoop with the %s variant", self.variant.value)
        self._initialize_display()
        self.request_assets()
        self.running = True
        try:
            self._run_main_loop()
        finally:
            self.stop()

    def _run_main_loop(self) -> None:
        if self.clock is None:
            raise RuntimeError("FrameLoop failed to initialize display clock")
        clock = self.clock
        while self.running:
            self.running = self.handle_events()
            if not self.running:
                break
            self.one_frame()
            pygame.display.flip()
            if self._frame_limit_reached():
                logger.info("Rendered %s frames; stopping", self.frames_rendered)
                self.running = False
            clock.tick(self.max_fps)

    def stop(self) -> None:
        logger.info("Stopping FrameLoop after %s frames", self.frames_rendered)
        self.running = False
        if self._load_subscription is not None:
            self._load_subscription.dispose()
            self._load_subscription = None
        self.lifecycle.dispose()
        pygame.quit()
