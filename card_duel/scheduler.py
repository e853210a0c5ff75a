"""Cancellable single-shot deferred callbacks.

``ThreadingScheduler`` runs callbacks on ``threading.Timer`` threads for
interactive hosts. ``ManualScheduler`` is a fake clock: nothing fires until
``advance()`` is called, which keeps headless tests deterministic.
"""

from __future__ import annotations

import heapq
import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable

Callback = Callable[[], None]


class TimerHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        ...

    @property
    @abstractmethod
    def active(self) -> bool:
        """True until the callback has fired or been cancelled."""
        ...


class Scheduler(ABC):
    @abstractmethod
    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        ...


# ---------------------------------------------------------------------------
# Real timers
# ---------------------------------------------------------------------------

class _ThreadTimerHandle(TimerHandle):
    def __init__(self, delay: float, callback: Callback) -> None:
        self._callback = callback
        self._done = threading.Event()
        self._timer = threading.Timer(delay, self._fire)
        self._timer.daemon = True

    def _fire(self) -> None:
        if self._done.is_set():
            return
        self._done.set()
        self._callback()

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        self._done.set()
        self._timer.cancel()

    @property
    def active(self) -> bool:
        return not self._done.is_set()


class ThreadingScheduler(Scheduler):
    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        handle = _ThreadTimerHandle(delay, callback)
        handle.start()
        return handle


# ---------------------------------------------------------------------------
# Fake clock
# ---------------------------------------------------------------------------

class _ManualTimerHandle(TimerHandle):
    def __init__(self, due: float, callback: Callback) -> None:
        self.due = due
        self.callback = callback
        self._active = True

    def cancel(self) -> None:
        self._active = False

    def _fire(self) -> None:
        self._active = False
        self.callback()

    @property
    def active(self) -> bool:
        return self._active


class ManualScheduler(Scheduler):
    """Deterministic scheduler driven by ``advance(seconds)``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, _ManualTimerHandle]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        handle = _ManualTimerHandle(self.now + delay, callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if h.active)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every callback that comes due.

        Callbacks scheduled while advancing fire too if they fall inside the
        window. Returns how many callbacks ran.
        """
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self.now = due
            handle._fire()
            fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        """Fire everything pending, however far in the future."""
        fired = 0
        while self._queue:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self.now = max(self.now, due)
            handle._fire()
            fired += 1
        return fired
