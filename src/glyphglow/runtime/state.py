from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from glyphglow.shading.materials import LIGHT_POSITION_UNIFORM, TIME_UNIFORM
from glyphglow.utilities.env.rendering import DEFAULT_TIME_STEP

if TYPE_CHECKING:
    from glyphglow.scene.objects import Scene

Vector3 = tuple[float, float, float]


@dataclass(frozen=True)
class FrameState:
    """Uniform values for one frame.

    ``time`` and ``light_position`` are ``None`` in scenes without a glow
    object, which have nothing animated.
    """

    ticks: int = 0
    time: float | None = None
    light_position: Vector3 | None = None

    @classmethod
    def initial(cls, scene: "Scene") -> "FrameState":
        if scene.glow is None:
            return cls()
        return cls(time=0.0, light_position=_copy_position(scene.glow.position))


def _copy_position(position: Sequence[float]) -> Vector3:
    x, y, z = (float(component) for component in position)
    return (x, y, z)


def advance_frame_state(
    state: FrameState,
    glow_position: Sequence[float] | None,
    time_step: float = DEFAULT_TIME_STEP,
) -> FrameState:
    """Advance one display tick.

    ``time`` accumulates ``time_step`` with no reset, and the light position
    is a fresh copy of the glow object's position.
    """
    time = None if state.time is None else state.time + time_step
    light_position = None if glow_position is None else _copy_position(glow_position)
    return FrameState(
        ticks=state.ticks + 1,
        time=time,
        light_position=light_position,
    )


def apply_frame_state(scene: "Scene", state: FrameState) -> None:
    if state.time is not None:
        for material in scene.animated_materials():
            material.set_uniform(TIME_UNIFORM, state.time)
    if state.light_position is not None:
        for material in scene.light_observers():
            material.set_uniform(LIGHT_POSITION_UNIFORM, state.light_position)
