import os
from pathlib import Path

from glyphglow.utilities.env.parsing import _env_flag, _env_int


class AssetsConfiguration:
    @classmethod
    def font_path(cls) -> Path | None:
        value = os.environ.get("GLYPHGLOW_FONT_PATH")
        if not value:
            return None
        return Path(value).expanduser()

    @classmethod
    def async_font_load(cls) -> bool:
        return _env_flag("GLYPHGLOW_ASYNC_FONT_LOAD", default=True)

    @classmethod
    def font_load_workers(cls) -> int:
        return _env_int("GLYPHGLOW_FONT_LOAD_WORKERS", default=1, minimum=1)
