"""Stopwatch for measuring processing time."""

from __future__ import annotations

import time
from typing import Callable


class TimeCost:
    """Measures time from construction (or :meth:`restart`) to :meth:`finish`."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._start = 0.0
        self._end = 0.0
        self._duration = 0.0
        self._finished = False
        self.restart()

    def restart(self) -> None:
        self._start = self._clock()
        self._finished = False

    def finish(self) -> None:
        self._end = self._clock()
        self._duration = self._end - self._start
        self._finished = True

    def cost_in_second(self) -> float:
        """Elapsed seconds; stops the watch if it is still running."""
        if not self._finished:
            self.finish()
        return self._duration

    def cost_in_millisecond(self) -> float:
        """Elapsed milliseconds; stops the watch if it is still running."""
        return self.cost_in_second() * 1000.0

    def format_seconds(self, header: str) -> str:
        return f"{header} {self.cost_in_second():.6f} seconds"

    def format_milliseconds(self, header: str) -> str:
        return f"{header} {self.cost_in_millisecond():.3f} milliseconds"