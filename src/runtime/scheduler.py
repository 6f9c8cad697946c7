"""Cancellable repeating task polled by the single-threaded runtime loop."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional


class RepeatingTask:
    """Runs ``callback`` once per elapsed interval while installed.

    Nothing runs on its own thread: the owner calls ``poll`` from its loop, so
    callbacks never overlap with each other or with commands. ``start`` is
    idempotent and ``cancel`` drops the pending deadline immediately.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        *,
        interval_seconds: float = 1.0,
        max_catch_up: int = 5,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        if max_catch_up < 1:
            raise ValueError("max_catch_up must be at least 1")

        self._callback = callback
        self._interval = float(interval_seconds)
        self._max_catch_up = max_catch_up
        self._clock = clock
        self._logger = logger or logging.getLogger("runtime.scheduler")
        self._next_due: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return self._next_due is not None

    def start(self) -> bool:
        """Install the task; returns ``False`` when it was already installed."""
        if self._next_due is not None:
            return False
        self._next_due = self._clock() + self._interval
        return True

    def cancel(self) -> None:
        self._next_due = None

    def seconds_until_due(self) -> Optional[float]:
        if self._next_due is None:
            return None
        return max(0.0, self._next_due - self._clock())

    def poll(self) -> int:
        """Fire every interval that has elapsed and return how many fired.

        A loop that fell more than ``max_catch_up`` intervals behind skips
        the remainder and re-anchors on the current time.
        """
        if self._next_due is None:
            return 0

        now = self._clock()
        fired = 0
        while self._next_due is not None and now >= self._next_due:
            if fired >= self._max_catch_up:
                self._logger.warning(
                    "Scheduler fell behind; skipping %.1fs of ticks",
                    now - self._next_due,
                )
                self._next_due = now + self._interval
                break
            self._next_due += self._interval
            self._callback()
            fired += 1
        return fired
