from glyphglow.utilities.env.enums import SceneVariant
from glyphglow.utilities.env.parsing import (_env_enum, _env_flag, _env_float,
                                             _env_int, _env_optional_int)

DEFAULT_VARIANT = SceneVariant.LIT
DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 720
DEFAULT_TIME_STEP = 0.05


class RenderingConfiguration:
    @classmethod
    def scene_variant(cls) -> SceneVariant:
        return _env_enum("GLYPHGLOW_VARIANT", SceneVariant, default=DEFAULT_VARIANT)

    @classmethod
    def window_size(cls) -> tuple[int, int]:
        width = _env_int("GLYPHGLOW_WINDOW_WIDTH", default=DEFAULT_WINDOW_WIDTH, minimum=1)
        height = _env_int(
            "GLYPHGLOW_WINDOW_HEIGHT", default=DEFAULT_WINDOW_HEIGHT, minimum=1
        )
        return width, height

    @classmethod
    def vsync(cls) -> bool:
        return _env_flag("GLYPHGLOW_VSYNC", default=True)

    @classmethod
    def max_fps(cls) -> int:
        return _env_int("GLYPHGLOW_MAX_FPS", default=0, minimum=0)

    @classmethod
    def time_step(cls) -> float:
        return _env_float("GLYPHGLOW_TIME_STEP", default=DEFAULT_TIME_STEP, minimum=0.0)

    @classmethod
    def max_frames(cls) -> int | None:
        return _env_optional_int("GLYPHGLOW_MAX_FRAMES", minimum=1)
