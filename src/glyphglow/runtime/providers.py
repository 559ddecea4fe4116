from __future__ import annotations

from abc import abstractmethod
from typing import Generic, TypeVar

import reactivex
from reactivex import operators as ops

from glyphglow.runtime.state import FrameState, advance_frame_state
from glyphglow.scene.objects import Scene
from glyphglow.utilities.env.rendering import DEFAULT_TIME_STEP

T = TypeVar("T")


class ObservableProvider(Generic[T]):
    @abstractmethod
    def observable(self) -> reactivex.Observable[T]:
        raise NotImplementedError("")


class FrameStateProvider(ObservableProvider[FrameState]):
    """Fold display ticks into frame states for ``scene``."""

    def __init__(
        self,
        scene: Scene,
        ticks: reactivex.Observable[int],
        time_step: float = DEFAULT_TIME_STEP,
    ) -> None:
        self._scene = scene
        self._ticks = ticks
        self._time_step = time_step

    def observable(self) -> reactivex.Observable[FrameState]:
        initial_state = FrameState.initial(self._scene)

        def advance_state(state: FrameState, _tick: int) -> FrameState:
            glow = self._scene.glow
            return advance_frame_state(
                state,
                None if glow is None else glow.position,
                self._time_step,
            )

        return self._ticks.pipe(
            ops.scan(advance_state, seed=initial_state),
            ops.start_with(initial_state),
            ops.share(),
        )
