from __future__ import annotations

from dataclasses import dataclass
from threading import Lock

from reactivex.scheduler import ThreadPoolScheduler

from glyphglow.utilities.env import Configuration
from glyphglow.utilities.logging import get_logger

logger = get_logger(__name__)


@dataclass
class _SchedulerState:
    lock: Lock
    scheduler: ThreadPoolScheduler | None = None


_ASSET_SCHEDULER = _SchedulerState(lock=Lock())


def asset_scheduler() -> ThreadPoolScheduler | None:
    """Return the shared scheduler for asset loading, or ``None`` to load inline."""

    if not Configuration.async_font_load():
        return None

    state = _ASSET_SCHEDULER
    if state.scheduler is None:
        with state.lock:
            if state.scheduler is None:
                workers = Configuration.font_load_workers()
                logger.info("Building asset scheduler with %s workers", workers)
                state.scheduler = ThreadPoolScheduler(max_workers=workers)
    return state.scheduler
