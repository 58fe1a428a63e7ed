"""Task records and their lifecycle statuses."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Callable


class Status(str, Enum):
    """Lifecycle state of a booked task."""

    PENDING = "PENDING"
    GOING = "GOING"
    DONE = "DONE"
    FAILED = "FAILED"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Task:
    """A unit of work stored by a chronicler and run by an overseer."""

    id: str
    name: str
    created: datetime
    scheduled: datetime
    updated: datetime
    status: Status
    args: bytes

    def with_status(self, status: Status, updated: datetime) -> Task:
        """Return a copy of this task with a new status and update time."""
        return replace(self, status=Status(status), updated=updated)


@dataclass(frozen=True)
class RecurringTaskInfo:
    """A task name paired with the cron expression it repeats on."""

    name: str
    cron: str


RetryConfig = Callable[[Task], datetime]
"""Given a failed task, return when it should next be attempted."""