"""Deferred execution of blink phases and morse pulses.

All deferred work runs on a single event loop, so callbacks never overlap
with request handling or with each other. Times are milliseconds on the
scheduler's own clock.
"""

import asyncio
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Set

from ..common.exceptions import SchedulerError

logger = logging.getLogger(__name__)

_task_ids = itertools.count(1)


class ScheduledTask:
    """One callback armed for an absolute trigger time"""

    def __init__(
        self,
        scheduler: "PulseScheduler",
        when_ms: float,
        callback: Callable[..., Any],
        args: tuple,
        name: Optional[str] = None,
    ):
        self.id = next(_task_ids)
        self.when_ms = when_ms
        self.callback = callback
        self.args = args
        self.name = name or getattr(callback, "__qualname__", "task")
        self.cancelled = False
        self.done = False
        self._scheduler = scheduler
        self._timer: Optional[Any] = None

    def cancel(self) -> None:
        """Disarm the task; no-op once it has run"""
        if self.done or self.cancelled:
            return
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        self._scheduler._discard(self)

    def run(self) -> None:
        if self.cancelled or self.done:
            return
        self.done = True
        self._scheduler._discard(self)
        try:
            self.callback(*self.args)
        except Exception as e:
            logger.error(f"Scheduled task {self.name} failed: {e}")

    def __repr__(self) -> str:
        return f"<ScheduledTask {self.id} {self.name} at {self.when_ms:.1f}ms>"


class PulseScheduler(ABC):
    """Timer facility for time-based animations"""

    def __init__(self):
        self._pending: Set[ScheduledTask] = set()

    @abstractmethod
    def now_ms(self) -> float:
        """Current time on the scheduler clock"""
        pass

    @abstractmethod
    def _arm(self, task: ScheduledTask) -> None:
        """Arrange for task.run() to be called at task.when_ms"""
        pass

    def call_at(
        self,
        when_ms: float,
        callback: Callable[..., Any],
        *args: Any,
        name: Optional[str] = None,
    ) -> ScheduledTask:
        """Schedule callback(*args) at an absolute time"""
        task = ScheduledTask(self, when_ms, callback, args, name=name)
        self._arm(task)
        self._pending.add(task)
        return task

    def call_later(
        self,
        delay_ms: float,
        callback: Callable[..., Any],
        *args: Any,
        name: Optional[str] = None,
    ) -> ScheduledTask:
        """Schedule callback(*args) delay_ms from now"""
        return self.call_at(
            self.now_ms() + max(delay_ms, 0), callback, *args, name=name
        )

    def cancel_all(self) -> int:
        """Cancel every pending task, returning how many were dropped"""
        tasks = list(self._pending)
        for task in tasks:
            task.cancel()
        if tasks:
            logger.info(f"Cancelled {len(tasks)} pending tasks")
        return len(tasks)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def _discard(self, task: ScheduledTask) -> None:
        self._pending.discard(task)

    def get_state(self) -> Dict[str, Any]:
        """Get scheduler state"""
        return {"pending": self.pending}


class AsyncioPulseScheduler(PulseScheduler):
    """Scheduler backed by the running asyncio event loop"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        super().__init__()
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            pass
        if self._loop is None or self._loop.is_closed():
            raise SchedulerError("No running event loop to schedule on")
        return self._loop

    def now_ms(self) -> float:
        return self.loop.time() * 1000

    def _arm(self, task: ScheduledTask) -> None:
        task._timer = self.loop.call_at(task.when_ms / 1000, task.run)
