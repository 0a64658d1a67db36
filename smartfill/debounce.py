"""
smartfill.debounce

Debounced evaluation on top of a pluggable scheduler.

A scheduler exposes call_later(delay_ms, fn) returning a handle with cancel().
ManualScheduler runs on a virtual clock driven by advance(); the GUI supplies
a QTimer-backed one.
"""

import heapq
import itertools
import logging
from typing import Any, Callable, List, Optional, Tuple

log = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 150


class ScheduledCall:
    def __init__(self, due: float, fn: Callable[[], Any]):
        self.due = due
        self.fn = fn
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler. Nothing runs until advance() is called."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: float, fn: Callable[[], Any]) -> ScheduledCall:
        call = ScheduledCall(self.now + delay_ms, fn)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    def advance(self, ms: float) -> int:
        """Move the clock forward by ms, running due calls in order. Returns how many ran."""
        target = self.now + ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            self.now = due
            if call.cancelled:
                continue
            call.fn()
            ran += 1
        self.now = target
        return ran

    @property
    def pending(self) -> int:
        return sum(1 for _, _, c in self._queue if not c.cancelled)


class Debouncer:
    """
    Collapse bursts of submissions into one call.

    Every submit() cancels the outstanding call and schedules a new one
    delay_ms later. Each submission is tagged with a sequence number and a
    call only runs if its number is still the latest, so a timer that fires
    after being cancelled is discarded too.
    """

    def __init__(self, scheduler, delay_ms: float = DEFAULT_DELAY_MS):
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self._seq = 0
        self._handle: Optional[Any] = None

    def submit(self, fn: Callable[..., Any], *args: Any) -> int:
        self.cancel()
        self._seq += 1
        seq = self._seq

        def run():
            if seq != self._seq:
                log.debug("Dropping stale evaluation #%d", seq)
                return
            self._handle = None
            fn(*args)

        self._handle = self.scheduler.call_later(self.delay_ms, run)
        return seq

    def cancel(self) -> None:
        if self._handle is not None:
            log.debug("Cancelling pending evaluation #%d", self._seq)
            self._handle.cancel()
            self._handle = None
            # invalidate anything already in flight in the scheduler
            self._seq += 1

    @property
    def pending(self) -> bool:
        return self._handle is not None
