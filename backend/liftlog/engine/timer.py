# liftlog/engine/timer.py
from __future__ import annotations
import asyncio
import heapq
import itertools
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol

log = logging.getLogger(__name__)

TICK_SECONDS = 1.0

Clock = Callable[[], datetime]

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class TimerHandle(Protocol):
    def cancel(self) -> None: ...

class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...

class AsyncioScheduler:
    """Schedules callbacks on the running event loop (must be called from the loop thread)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)

class _ManualCall:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

class ManualScheduler:
    """
    Deterministic scheduler for tests: time only moves on ``advance()``.

    Also works as a clock (``now``) so that timestamps and ticks share one timeline.
    """

    def __init__(self, start: Optional[datetime] = None):
        self._start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._elapsed = 0.0
        self._seq = itertools.count()
        self._queue: list[tuple[float, int, _ManualCall]] = []

    def now(self) -> datetime:
        return self._start + timedelta(seconds=self._elapsed)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualCall:
        call = _ManualCall(self._elapsed + max(0.0, delay), callback)
        heapq.heappush(self._queue, (call.due, next(self._seq), call))
        return call

    @property
    def pending(self) -> int:
        return sum(1 for _, _, c in self._queue if not c.cancelled)

    def advance(self, seconds: float) -> None:
        target = self._elapsed + seconds
        # callbacks may schedule new calls inside the window; keep draining
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            self._elapsed = due
            if not call.cancelled:
                call.callback()
        self._elapsed = target

class RestTimer:
    """
    Single rest countdown. ``stop()`` is synchronous: after it returns no tick
    can change ``remaining``, even one already handed to the scheduler.
    """

    def __init__(self, scheduler: Scheduler, on_change: Optional[Callable[[], None]] = None):
        self._scheduler = scheduler
        self._on_change = on_change
        self._handle: Optional[TimerHandle] = None
        self._generation = 0
        self.remaining = 0
        self.is_running = False

    def start(self, seconds: int) -> None:
        if seconds <= 0:
            self.stop()
            return
        self._cancel()
        self.remaining = int(seconds)
        self.is_running = True
        log.debug("rest timer started seconds=%s", seconds)
        self._arm()
        self._changed()

    def stop(self) -> None:
        was_running = self.is_running
        self._cancel()
        self._set_stopped()
        if was_running:
            log.debug("rest timer stopped")
            self._changed()

    def extend(self, delta_seconds: int) -> None:
        if not self.is_running:
            return
        self.remaining = max(0, self.remaining + int(delta_seconds))
        if self.remaining == 0:
            self.stop()
            return
        self._changed()

    def _arm(self) -> None:
        generation = self._generation
        self._handle = self._scheduler.call_later(TICK_SECONDS, lambda: self._tick(generation))

    def _tick(self, generation: int) -> None:
        if generation != self._generation or not self.is_running:
            return
        if self.remaining > 0:
            self.remaining -= 1
        if self.remaining == 0:
            self._handle = None
            self._generation += 1
            self.is_running = False
            log.debug("rest timer finished")
        else:
            self._arm()
        self._changed()

    def _cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _set_stopped(self) -> None:
        self.remaining = 0
        self.is_running = False

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
