from __future__ import annotations

from enum import StrEnum
from typing import Mapping

from reactivex.abc import DisposableBase
from reactivex.subject import Subject

from glyphglow.runtime.providers import FrameStateProvider
from glyphglow.runtime.state import FrameState, apply_frame_state
from glyphglow.scene.geometry import Mesh
from glyphglow.scene.objects import Scene
from glyphglow.scene.variants import build_scene
from glyphglow.utilities.env import SceneVariant
from glyphglow.utilities.env.rendering import DEFAULT_TIME_STEP
from glyphglow.utilities.logging import get_logger

logger = get_logger(__name__)


class LifecyclePhase(StrEnum):
    IDLE = "idle"
    RUNNING = "running"


class SceneLifecycle:
    """Idle until the glyph meshes arrive, then Running for good.

    Each ``tick`` pushes through the frame-state stream, so the scene's
    uniforms are updated before ``tick`` returns.
    """

    def __init__(
        self,
        variant: SceneVariant,
        viewport_size: tuple[int, int],
        time_step: float = DEFAULT_TIME_STEP,
    ) -> None:
        self.variant = variant
        self.viewport_size = viewport_size
        self.time_step = time_step
        self.phase = LifecyclePhase.IDLE
        self.scene: Scene | None = None
        self.state: FrameState | None = None
        self._ticks: Subject[int] = Subject()
        self._subscription: DisposableBase | None = None

    @property
    def running(self) -> bool:
        return self.phase == LifecyclePhase.RUNNING

    def complete_load(self, glyph_meshes: Mapping[str, Mesh]) -> Scene:
        if self.phase != LifecyclePhase.IDLE:
            raise RuntimeError("Scene assets were already delivered")

        self.scene = build_scene(self.variant, glyph_meshes, self.viewport_size)
        provider = FrameStateProvider(self.scene, self._ticks, self.time_step)
        self._subscription = provider.observable().subscribe(on_next=self._set_state)
        self.phase = LifecyclePhase.RUNNING
        logger.info("Scene lifecycle is now %s", self.phase.value)
        return self.scene

    def _set_state(self, state: FrameState) -> None:
        assert self.scene is not None
        apply_frame_state(self.scene, state)
        self.state = state

    def tick(self) -> FrameState:
        if not self.running or self.state is None:
            raise RuntimeError("Cannot tick before the scene is running")
        self._ticks.on_next(self.state.ticks + 1)
        return self.state

    def dispose(self) -> None:
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
