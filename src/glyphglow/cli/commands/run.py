from typing import Annotated, Optional

import typer

from glyphglow.runtime.frame_loop import FrameLoop
from glyphglow.utilities.env import Configuration, SceneVariant
from glyphglow.utilities.logging import get_logger

logger = get_logger(__name__)


def run_command(
    variant: Annotated[
        Optional[SceneVariant],
        typer.Option("--variant", help="Scene variant; defaults to GLYPHGLOW_VARIANT"),
    ] = None,
    frames: Annotated[
        Optional[int],
        typer.Option("--frames", min=1, help="Stop after this many rendered frames"),
    ] = None,
) -> None:
    try:
        selected = variant or Configuration.scene_variant()
        loop = FrameLoop(selected, max_frames=frames)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        raise typer.Exit(code=1) from exc
    loop.start()
