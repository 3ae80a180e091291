"""Frame pacing and a rolling frames-per-second average."""

from __future__ import annotations

import time
from collections import deque
from typing import Callable

__all__ = ["FpsCounter", "TARGET_FPS", "SAMPLE_LIMIT", "UPDATE_INTERVAL"]

SAMPLE_LIMIT = 120
TARGET_FPS = 60
UPDATE_INTERVAL = 60


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


def _sleep_ms(ms: int) -> None:
    time.sleep(ms / 1000)


class FpsCounter:
    """Keeps frames at 60 per second and reports the measured rate.

    ``clock`` returns the current time in milliseconds; ``sleep`` waits a
    number of milliseconds.
    """

    def __init__(
        self,
        clock: Callable[[], int] = _now_ms,
        sleep: Callable[[int], None] = _sleep_ms,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._samples: deque[int] = deque(maxlen=SAMPLE_LIMIT)
        self._counter = 0
        self.fps = 0.0
        self.visible = False

    @property
    def samples(self) -> tuple[int, ...]:
        """Timestamps of the most recent frames, oldest first."""
        return tuple(self._samples)

    def wait(self) -> None:
        """Sleep until the next frame is due and record it."""
        self._counter += 1
        self._sleep(self.wait_time())
        self._samples.append(self._clock())
        if self._counter == UPDATE_INTERVAL:
            self._update_average()
            self._counter = 0

    def wait_time(self) -> int:
        """Milliseconds to wait so that frames keep to the target rate."""
        if not self._samples:
            return 0
        should_take = int(1000 / float(TARGET_FPS) * len(self._samples))
        actually_took = self._clock() - self._samples[0]
        return max(should_take - actually_took, 0)

    def _update_average(self) -> None:
        if len(self._samples) < SAMPLE_LIMIT:
            return
        took = self._samples[-1] - self._samples[0]
        average = took / (len(self._samples) - 1.0)
        if average == 0:
            return
        self.fps = 1000 / average

    def text(self) -> str | None:
        """The rate as shown on screen, or None when hidden or not yet measured."""
        if self.fps == 0 or not self.visible:
            return None
        return f"{self.fps:04.1f}fps"