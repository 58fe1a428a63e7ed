import re
from datetime import datetime, timedelta, timezone

import pytest

from godoit.pgcommands import (
    CREATE_TASK_TABLE,
    DEFAULT_TASK_TABLE_NAME,
    create_insert_task_command,
    create_select_tasks_command,
    create_task_table_command,
    create_update_task_command,
    time_check_string,
)


def test_create_table_uses_default_name():
    command = create_task_table_command("")
    assert command.startswith("CREATE TABLE IF NOT EXISTS tasks (")
    assert command == CREATE_TASK_TABLE.format(table=DEFAULT_TASK_TABLE_NAME)


def test_create_table_lists_columns():
    command = create_task_table_command("jobs")
    assert command.startswith("CREATE TABLE IF NOT EXISTS jobs (")
    for column in ("id TEXT PRIMARY KEY", "taskname TEXT NOT NULL", "args JSONB NOT NULL"):
        assert column in command
    assert command.endswith(")")


@pytest.mark.parametrize("name", ["", None])
def test_insert_uses_default_name(name):
    assert create_insert_task_command(name) == (
        "INSERT INTO tasks(id, taskname, created, scheduled, updated, status, args) "
        "VALUES($1, $2, $3, $4, $5, $6, $7)"
    )


def test_insert_custom_name():
    assert create_insert_task_command("jobs").startswith("INSERT INTO jobs(")


def test_update_command():
    assert create_update_task_command("") == (
        "UPDATE tasks SET status = $2, updated = $3 WHERE id = $1"
    )
    assert create_update_task_command("jobs").startswith("UPDATE jobs SET")


def test_select_command_shape():
    command = create_select_tasks_command("", 5)
    match = re.fullmatch(
        r"SELECT \* FROM tasks WHERE \(scheduled <= '(.+)' AND status = 'PENDING'\) LIMIT 5",
        command,
    )
    assert match is not None
    stamp = datetime.strptime(match.group(1), "%Y-%m-%d %H:%M:%S").replace(tzinfo=timezone.utc)
    assert abs(datetime.now(timezone.utc) - stamp) < timedelta(minutes=1)


def test_select_command_custom_table_and_limit():
    command = create_select_tasks_command("jobs", 12)
    assert command.startswith("SELECT * FROM jobs WHERE")
    assert command.endswith("LIMIT 12")


def test_time_check_string_is_now_to_the_second():
    before = datetime.now(timezone.utc).replace(microsecond=0)
    value = time_check_string()
    after = datetime.now(timezone.utc)
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", value)
    parsed = datetime.strptime(value, "%Y-%m-%d %H:%M:%S").replace(tzinfo=timezone.utc)
    assert before <= parsed <= after