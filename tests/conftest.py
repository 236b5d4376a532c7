import heapq
import itertools

import pytest

from messagebar.core.scheduler import ScheduledTask, Scheduler
from messagebar.state import MessageState


class ManualScheduler(Scheduler):
    """Fake clock: callbacks fire only when ``advance`` moves time past them."""

    def __init__(self):
        self.now = 0
        self._queue = []
        self._seq = itertools.count()

    def schedule(self, delay_ms, callback):
        entry = [self.now + delay_ms, next(self._seq), callback, True]
        heapq.heappush(self._queue, entry)

        def cancel():
            entry[3] = False

        return ScheduledTask(cancel)

    @property
    def pending(self) -> int:
        return sum(1 for e in self._queue if e[3])

    def advance(self, ms):
        target = self.now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, callback, live = heapq.heappop(self._queue)
            self.now = due
            if live:
                callback()
        self.now = target


@pytest.fixture
def clock():
    return ManualScheduler()


@pytest.fixture
def state():
    return MessageState()


@pytest.fixture
def anyio_backend():
    return "asyncio"
