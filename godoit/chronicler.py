"""The storage interface an overseer records and fetches tasks through."""

from __future__ import annotations

from abc import ABC, abstractmethod

from godoit.tasks import Task


class Chronicler(ABC):
    """Persistent store for tasks."""

    @abstractmethod
    async def set_up_chronicle(self) -> None:
        """Prepare the store, for example by creating the tables it needs."""

    @abstractmethod
    async def record_task(self, task: Task) -> None:
        """Store a task so that it can be run later."""

    @abstractmethod
    async def query_tasks(self, limit: int) -> list[Task]:
        """Claim and return up to ``limit`` tasks that are due to run."""

    @abstractmethod
    async def update_task(self, task: Task) -> None:
        """Store the new status of a task."""