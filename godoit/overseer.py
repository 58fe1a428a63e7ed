"""The overseer: registers task functions, books tasks and runs them."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional

from godoit.chronicler import Chronicler
from godoit.idmaker import IdMaker, default_id_maker
from godoit.tasks import RetryConfig, Status, Task

TASK_DOES_NOT_EXIST = "task does not exist"

TaskFunc = Callable[[bytes], Awaitable[None]]

_log = logging.getLogger(__name__)


class OverseerError(Exception):
    """Raised when the overseer cannot do what was asked."""


class TaskDoesNotExistError(OverseerError):
    """Raised when booking a task whose name was never registered."""

    def __init__(self, message: str = TASK_DOES_NOT_EXIST) -> None:
        super().__init__(message)


def _seconds(value: float | timedelta) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


class Overseer:
    """Books tasks into a chronicler and runs due tasks concurrently."""

    def __init__(
        self,
        chronicler: Chronicler,
        retry_config: Optional[RetryConfig],
        id_maker: Optional[IdMaker],
        thread_limit: int,
    ) -> None:
        if chronicler is None:
            raise ValueError("chronicler must not be None")
        if thread_limit <= 0:
            raise ValueError("thread limit must be greater than zero")
        self._chronicler = chronicler
        self.retry_config = retry_config
        self._id_maker: IdMaker = id_maker or default_id_maker
        self.thread_limit = thread_limit
        self._tasks: dict[str, TaskFunc] = {}
        self._started = False
        self._stopping = asyncio.Event()
        self._running = 0

    def put_task_info(self, task_name: str, task_func: TaskFunc) -> None:
        """Register the coroutine function that runs tasks of this name."""
        if task_name in self._tasks:
            raise OverseerError("task name already utilized")
        self._tasks[task_name] = task_func

    def get_task(self, task_name: str) -> Optional[TaskFunc]:
        """Return the function registered under this name, or None."""
        return self._tasks.get(task_name)

    async def book_task(self, task_name: str, scheduled: datetime, args: bytes) -> None:
        """Record a pending task to be run at or after ``scheduled``."""
        if task_name not in self._tasks:
            raise TaskDoesNotExistError()
        task_id = self._id_maker(task_name, scheduled)
        now = datetime.now(timezone.utc)
        task = Task(
            id=task_id,
            name=task_name,
            created=now,
            scheduled=scheduled.astimezone(timezone.utc),
            updated=now,
            status=Status.PENDING,
            args=args,
        )
        await self._chronicler.record_task(task)

    async def setup(self) -> None:
        """Prepare the chronicler's store."""
        await self._chronicler.set_up_chronicle()

    def stop(self) -> None:
        """Ask a running ``start`` loop to finish."""
        self._stopping.set()

    async def start(self, query_interval: float | timedelta, task_timeout: float | timedelta) -> None:
        """Query and run due tasks every ``query_interval`` until stopped.

        Each task is given ``task_timeout`` to finish. The loop ends by
        raising OverseerError once ``stop`` is called, after waiting for
        tasks already started; a query failure is raised as it is.
        """
        if self._started:
            raise OverseerError("already started")
        self._started = True
        interval = _seconds(query_interval)
        if interval <= 0:
            raise ValueError("query interval must be positive")
        timeout = _seconds(task_timeout)
        in_flight: set[asyncio.Task] = set()
        try:
            while True:
                if await self._wait_for_tick(interval):
                    raise OverseerError("overseer stopped")
                limit = self.thread_limit - self._running
                _log.debug("querying up to %d tasks", limit)
                tasks = await self._chronicler.query_tasks(limit)
                _log.debug("received %d tasks", len(tasks))
                for task in tasks:
                    runner = asyncio.ensure_future(self._run(task, timeout))
                    in_flight.add(runner)
                    runner.add_done_callback(in_flight.discard)
        finally:
            if in_flight:
                await asyncio.gather(*list(in_flight), return_exceptions=True)

    async def _wait_for_tick(self, interval: float) -> bool:
        """Wait one interval; return True if a stop was requested."""
        try:
            await asyncio.wait_for(self._stopping.wait(), interval)
        except asyncio.TimeoutError:
            return False
        return True

    async def _run(self, task: Task, timeout: float) -> None:
        func = self._tasks.get(task.name)
        if func is None:
            _log.warning("no function registered for task %r", task.name)
            return
        self._running += 1
        try:
            await asyncio.wait_for(func(task.args), timeout)
            status = Status.DONE
        except Exception as exc:
            _log.warning("task %s failed: %s", task.id, exc)
            status = Status.FAILED
        finally:
            self._running -= 1
        updated = task.with_status(status, datetime.now(timezone.utc))
        try:
            await self._chronicler.update_task(updated)
        except Exception:
            _log.exception("could not update task %s", task.id)