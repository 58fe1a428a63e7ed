"""Functions that produce identifiers for booked tasks."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable

IdMaker = Callable[[str, datetime], str]


def default_id_maker(task_name: str, when: datetime) -> str:
    """Return a fresh time-based UUID as a string."""
    return str(uuid.uuid1())


def example_id_maker(task_name: str, when: datetime) -> str:
    """Return an id built from the task name and its scheduled time."""
    return f"{task_name}~{when.isoformat()}"