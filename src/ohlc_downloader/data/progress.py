"""Progress reporting for long downloads."""
from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

PROGRESS_EVENT = "download_progress"

ProgressCallback = Callable[[int], None]


class LoggingProgress:
    """Log each change in download percentage."""

    def __init__(self, label: str) -> None:
        self._label = label
        self._last: Optional[int] = None

    def __call__(self, percent: int) -> None:
        if percent == self._last:
            return
        self._last = percent
        logger.info("{event} {label}: {percent}%", event=PROGRESS_EVENT, label=self._label, percent=percent)
