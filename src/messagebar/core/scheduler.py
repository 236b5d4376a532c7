"""Cancellable deferred callbacks.

The visibility controller never sleeps or polls: it asks a scheduler to
run a callback after a delay and keeps the returned task so it can cancel
it. Two implementations are provided, one on ``threading.Timer`` for hosts
without an event loop and one on ``loop.call_later`` for asyncio hosts.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable

log = logging.getLogger("messagebar.core.scheduler")


class ScheduledTask:
    """Handle to a pending callback. ``cancel()`` is safe to call repeatedly."""

    def __init__(self, cancel_fn: Callable[[], None]):
        self._cancel_fn = cancel_fn
        self._cancelled = False
        self._lock = threading.Lock()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
        self._cancel_fn()


class Scheduler:
    """Base class for deferred-callback schedulers."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        """Run ``callback`` once after ``delay_ms`` milliseconds."""
        raise NotImplementedError


class ThreadingScheduler(Scheduler):
    """Runs each callback on its own daemon timer thread."""

    def __init__(self, name: str = "messagebar-timer"):
        self.name = name

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(max(delay_ms, 0) / 1000.0, callback)
        timer.name = self.name
        timer.daemon = True
        task = ScheduledTask(timer.cancel)
        timer.start()
        log.debug("Scheduled %s in %d ms", self.name, delay_ms)
        return task


class AsyncioScheduler(Scheduler):
    """Runs callbacks on an asyncio event loop via ``call_later``.

    Must be used from the loop's own thread; callbacks run there too.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        handle = self.loop.call_later(max(delay_ms, 0) / 1000.0, callback)
        log.debug("Scheduled loop callback in %d ms", delay_ms)
        return ScheduledTask(handle.cancel)
