"""Pacing between embedding calls."""

from __future__ import annotations

import time
from typing import Callable, Protocol


class Throttle(Protocol):
    """Called by the pipeline between two consecutive chunks."""

    def wait(self) -> None: ...


class FixedDelayThrottle:
    """Sleep a fixed number of seconds to stay under provider rate limits."""

    def __init__(self, seconds: float = 1.0, sleep: Callable[[float], None] = time.sleep) -> None:
        if seconds < 0:
            raise ValueError(f"delay must be >= 0, got {seconds}")
        self.seconds = seconds
        self._sleep = sleep

    def wait(self) -> None:
        if self.seconds:
            self._sleep(self.seconds)


class NoThrottle:
    """Never waits."""

    def wait(self) -> None:
        return None
