"""
Fixed-interval schedulers that drive diggers and runners.

The core never owns a timer. Entities hand a ``step`` callback to a
scheduler and keep the returned task so they can cancel it once they are
done. Two schedulers are provided:

- ManualScheduler: callbacks run only when ``tick()`` is called. Used for
  synchronous driving and in tests.
- AsyncioScheduler: each callback runs in its own asyncio task, sleeping
  ``interval_ms`` between calls.
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

StepCallback = Callable[[], object]


class ScheduledTask(Protocol):
    """Handle returned by a scheduler for one registered callback."""

    @property
    def cancelled(self) -> bool:
        ...

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Fixed-interval tick source."""

    def schedule(self, callback: StepCallback, interval_ms: int) -> ScheduledTask:
        ...


class ManualTask:
    """Task registered on a ManualScheduler."""

    def __init__(self, callback: StepCallback, interval_ms: int):
        self.callback = callback
        self.interval_ms = interval_ms
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualScheduler:
    """
    Scheduler advanced explicitly by the caller.

    Each ``tick()`` invokes every live callback exactly once, in
    registration order. The interval is recorded but not waited on.
    """

    def __init__(self):
        self._tasks: list[ManualTask] = []
        self.tick_count = 0

    def schedule(self, callback: StepCallback, interval_ms: int) -> ManualTask:
        task = ManualTask(callback, interval_ms)
        self._tasks.append(task)
        return task

    @property
    def active(self) -> int:
        """Number of callbacks still scheduled."""
        return sum(1 for task in self._tasks if not task.cancelled)

    def tick(self) -> int:
        """
        Run every live callback once.

        Returns:
            Number of callbacks invoked.
        """
        self.tick_count += 1
        invoked = 0
        for task in list(self._tasks):
            if task.cancelled:
                continue
            task.callback()
            invoked += 1
        self._tasks = [task for task in self._tasks if not task.cancelled]
        return invoked

    def run_until_idle(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick until every callback has cancelled itself.

        Args:
            max_ticks: Optional cap on the number of ticks.

        Returns:
            Number of ticks performed.
        """
        ticks = 0
        while self.active and (max_ticks is None or ticks < max_ticks):
            self.tick()
            ticks += 1
        return ticks


class AsyncioTask:
    """Task registered on an AsyncioScheduler."""

    def __init__(self, callback: StepCallback, interval_ms: int):
        self.callback = callback
        self.interval_ms = interval_ms
        self._cancelled = False
        self._task: Optional[asyncio.Task] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()

    async def _loop(self) -> None:
        while not self._cancelled:
            await asyncio.sleep(self.interval_ms / 1000)
            if self._cancelled:
                break
            try:
                self.callback()
            except Exception:
                logger.exception("Scheduled callback failed, cancelling")
                self._cancelled = True
                raise


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self):
        self._tasks: list[AsyncioTask] = []

    def schedule(self, callback: StepCallback, interval_ms: int) -> AsyncioTask:
        task = AsyncioTask(callback, interval_ms)
        task._task = asyncio.get_running_loop().create_task(task._loop())
        task._task.add_done_callback(lambda _: self._forget(task))
        self._tasks.append(task)
        return task

    @property
    def active(self) -> int:
        """Number of tasks whose loop has not exited yet."""
        return len(self._tasks)

    async def wait(self) -> None:
        """Wait until every scheduled task has finished or been cancelled."""
        pending = [task._task for task in self._tasks if task._task is not None]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    def _forget(self, task: AsyncioTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)
