"""Clock and timer abstractions used by the scheduler."""
import asyncio
from datetime import datetime
from typing import Awaitable, Callable, Optional, Set

Callback = Callable[[], Awaitable[None]]


class Clock:
    """Wall-clock source."""

    def now(self) -> datetime:
        return datetime.now()


class ScheduledTask:
    """A callback armed for a wall-clock time."""

    def __init__(self, when: datetime, callback: Callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        """Disarm the task; idempotent."""
        self.cancelled = True

    def reschedule(self, when: datetime) -> None:
        """Move the task to a new time and re-arm it."""
        self.when = when
        self.cancelled = False


class Timer:
    """Arms scheduled tasks."""

    def schedule(self, when: datetime, callback: Callback) -> ScheduledTask:
        raise NotImplementedError


class AsyncioScheduledTask(ScheduledTask):
    """Scheduled task driven by the running event loop."""

    def __init__(self, timer: "AsyncioTimer", when: datetime, callback: Callback):
        super().__init__(when, callback)
        self._timer = timer
        self._handle: Optional[asyncio.TimerHandle] = None
        self._arm()

    def _arm(self) -> None:
        delay = max(0.0, (self.when - self._timer.clock.now()).total_seconds())
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if not self.cancelled:
            self._timer.spawn(self.callback())

    def cancel(self) -> None:
        super().cancel()
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def reschedule(self, when: datetime) -> None:
        self.cancel()
        super().reschedule(when)
        self._arm()


class AsyncioTimer(Timer):
    """Timer backed by ``loop.call_later``.

    Must be used from within a running event loop. Fired callbacks run as
    tasks; references are held until they finish.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or Clock()
        self._running: Set[asyncio.Task] = set()

    def schedule(self, when: datetime, callback: Callback) -> ScheduledTask:
        return AsyncioScheduledTask(self, when, callback)

    def spawn(self, coro: Awaitable[None]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._running.add(task)
        task.add_done_callback(self._running.discard)
        return task
