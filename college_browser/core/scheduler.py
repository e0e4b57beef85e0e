"""Deferred-callback schedulers for the reveal settling delay."""

from __future__ import annotations

import heapq
import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple


class ScheduledTask(ABC):
    """Handle to a callback scheduled with a Scheduler."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Idempotent; a no-op once it ran."""
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class Scheduler(ABC):
    """
    Abstract source of one-shot deferred callbacks.

    call_later() never blocks the caller; the callback runs later on whatever
    execution context the implementation uses.
    """

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        pass


# -----------------------------------------------------------------------------
# Wall clock
# -----------------------------------------------------------------------------
class _TimerTask(ScheduledTask):
    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler(Scheduler):
    """Runs callbacks on daemon threading.Timer threads."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(max(delay_ms, 0) / 1000.0, callback)
        timer.daemon = True
        task = _TimerTask(timer)
        timer.start()
        return task


# -----------------------------------------------------------------------------
# Virtual clock (tests, deterministic replays)
# -----------------------------------------------------------------------------
class _VirtualTask(ScheduledTask):
    def __init__(self, due_ms: int, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.done = False
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class VirtualScheduler(Scheduler):
    """
    Scheduler driven by explicit calls to advance().

    Callbacks run synchronously inside advance(), in due-time order (ties in
    scheduling order). Callbacks may schedule further tasks; those run in the
    same advance() call if they fall due within it.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: List[Tuple[int, int, _VirtualTask]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        task = _VirtualTask(self.now_ms + max(delay_ms, 0), callback)
        heapq.heappush(self._queue, (task.due_ms, next(self._seq), task))
        return task

    @property
    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if not t.cancelled and not t.done)

    def next_due_ms(self) -> Optional[int]:
        for due, _, task in sorted(self._queue):
            if not task.cancelled:
                return due
        return None

    def advance(self, delay_ms: int) -> int:
        """Move virtual time forward, running every task that falls due. Returns tasks run."""
        target = self.now_ms + delay_ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            self.now_ms = max(self.now_ms, due)
            if task.cancelled:
                continue
            task.done = True
            task.callback()
            ran += 1
        self.now_ms = target
        return ran
