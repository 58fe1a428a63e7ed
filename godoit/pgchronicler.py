"""A chronicler that keeps tasks in a PostgreSQL table.

The connection is any object offering the asynchronous interface
``execute(query, *args)``, ``fetch(query, *args)`` returning mapping rows,
and ``transaction()`` returning an async context manager that commits on a
clean exit and rolls back when an exception escapes it.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from godoit.chronicler import Chronicler
from godoit.logger import DefaultLogger
from godoit.pgcommands import (
    create_insert_task_command,
    create_select_tasks_command,
    create_task_table_command,
    create_update_task_command,
    time_check_string,
)
from godoit.tasks import Status, Task


def _naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def _aware_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _args_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    return json.dumps(value).encode("utf-8")


def _row_to_task(row: Mapping[str, Any]) -> Task:
    return Task(
        id=row["id"],
        name=row["taskname"],
        created=_aware_utc(row["created"]),
        scheduled=_aware_utc(row["scheduled"]),
        updated=_aware_utc(row["updated"]),
        status=Status(row["status"]),
        args=_args_bytes(row["args"]),
    )


class PgChronicler(Chronicler):
    """Stores tasks in a single PostgreSQL table."""

    def __init__(
        self,
        conn: Any,
        logger: Optional[DefaultLogger] = None,
        table_name: str = "",
    ) -> None:
        if conn is None:
            raise ValueError("conn cannot be None")
        self._conn = conn
        self._logger = logger
        self.table_name = table_name

    async def set_up_chronicle(self) -> None:
        """Create the task table if it does not exist yet."""
        await self._conn.execute(create_task_table_command(self.table_name))

    async def record_task(self, task: Task) -> None:
        """Insert a task row."""
        await self._conn.execute(
            create_insert_task_command(self.table_name),
            task.id,
            task.name,
            _naive_utc(task.created),
            _naive_utc(task.scheduled),
            _naive_utc(task.updated),
            Status(task.status).value,
            task.args.decode("utf-8"),
        )

    async def query_tasks(self, limit: int) -> list[Task]:
        """Claim up to ``limit`` due pending tasks, marking them as going."""
        if limit <= 0:
            return []
        select = create_select_tasks_command(self.table_name, limit)
        if self._logger is not None:
            self._logger.debug(select)
        async with self._conn.transaction():
            rows = await self._conn.fetch(select)
            tasks = [_row_to_task(row) for row in rows]
            if not tasks:
                return []
            updated = time_check_string()
            update = create_update_task_command(self.table_name)
            for task in tasks:
                await self._conn.execute(update, task.id, Status.GOING.value, updated)
        return tasks

    async def update_task(self, task: Task) -> None:
        """Store a task's status with the current time as its update time."""
        await self._conn.execute(
            create_update_task_command(self.table_name),
            task.id,
            Status(task.status).value,
            time_check_string(),
        )