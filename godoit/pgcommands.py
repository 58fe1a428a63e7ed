"""SQL statements used by the PostgreSQL chronicler."""

from __future__ import annotations

from datetime import datetime, timezone

DEFAULT_TASK_TABLE_NAME = "tasks"

CREATE_TASK_TABLE = (
    "CREATE TABLE IF NOT EXISTS {table} ("
    "id TEXT PRIMARY KEY,"
    "taskname TEXT NOT NULL,"
    "created TIMESTAMP WITHOUT TIME ZONE NOT NULL,"
    "scheduled TIMESTAMP WITHOUT TIME ZONE NOT NULL,"
    "updated TIMESTAMP WITHOUT TIME ZONE NOT NULL,"
    "status TEXT NOT NULL,"
    "args JSONB NOT NULL"
    ")"
)

SELECT_TASKS_TO_RUN = (
    "SELECT * FROM {table} WHERE (scheduled <= '{now}' AND status = 'PENDING') LIMIT {limit}"
)

INSERT_TASK = (
    "INSERT INTO {table}(id, taskname, created, scheduled, updated, status, args) "
    "VALUES($1, $2, $3, $4, $5, $6, $7)"
)

UPDATE_TASK = "UPDATE {table} SET status = $2, updated = $3 WHERE id = $1"

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _table(name: str | None) -> str:
    return name or DEFAULT_TASK_TABLE_NAME


def create_task_table_command(name: str | None) -> str:
    """Return the statement that creates the task table if it is missing."""
    return CREATE_TASK_TABLE.format(table=_table(name))


def create_insert_task_command(name: str | None) -> str:
    """Return the parameterised statement that inserts one task."""
    return INSERT_TASK.format(table=_table(name))


def create_select_tasks_command(name: str | None, limit: int) -> str:
    """Return the statement selecting up to ``limit`` pending tasks that are due now."""
    return SELECT_TASKS_TO_RUN.format(table=_table(name), now=time_check_string(), limit=limit)


def create_update_task_command(name: str | None) -> str:
    """Return the parameterised statement that sets a task's status and update time."""
    return UPDATE_TASK.format(table=_table(name))


def time_check_string() -> str:
    """Return the current UTC time to the second, as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now(timezone.utc).strftime(_TIME_FORMAT)