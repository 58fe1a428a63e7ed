# godoit

A small asyncio task scheduler. You register named coroutine functions with
an `Overseer`, book runs of them for a point in time, and let the overseer
poll a store for tasks that are due and run them, up to a fixed number at
once.

Where tasks are kept is up to a `Chronicler`: any object that can set up its
storage, record a task, hand out due tasks and record how a run ended. A
PostgreSQL-backed chronicler, `PgChronicler`, is included.

## Installing

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Concepts

- `godoit.tasks.Task` is a frozen dataclass holding one booked run: `id`,
  `name`, `created`, `scheduled`, `updated`, `status` and `args` (the JSON
  arguments as bytes). `Task.with_status(status, updated)` returns a copy
  with a new status and update time.
- `godoit.tasks.Status` is one of `PENDING`, `GOING`, `DONE`, `FAILED` or
  `UNKNOWN`. A booked task starts as `PENDING`; `PgChronicler` marks it
  `GOING` when it hands it out; after a run it is recorded as `DONE`, or as
  `FAILED` if its function raised or ran past its timeout.
- `godoit.tasks.RecurringTaskInfo` pairs a task name with a cron string.
- Task ids come from an id maker (`godoit.idmaker`). `default_id_maker`
  gives a time-based UUID; `example_id_maker` joins the task name and the
  ISO-formatted scheduled time with a `~`. Any callable taking
  `(task_name, when)` and returning a string will do.
- `godoit.logger.DefaultLogger` wraps a standard `logging.Logger` (by
  default the one named `godoit`) with `trace`, `debug`, `info`, `warn`,
  `error` and `fatal`. `fatal` logs at critical level and does not stop the
  process.

## Using it

```python
from datetime import datetime, timedelta, timezone

from godoit.overseer import Overseer
from godoit.pgchronicler import PgChronicler


async def send_report(args):
    print("sending report for", args)


async def main(conn):
    chronicler = PgChronicler(conn, None, "tasks")
    overseer = Overseer(chronicler, None, None, 4)

    overseer.put_task_info("send_report", send_report)
    await overseer.setup()

    await overseer.book_task(
        "send_report",
        datetime.now(timezone.utc) + timedelta(minutes=5),
        b'{"team": "sales"}',
    )

    # Polls for due tasks every second; each run may take up to 30 seconds.
    await overseer.start(timedelta(seconds=1), timedelta(seconds=30))
```

`start` accepts the interval and the timeout as `timedelta` values or as
seconds. On every tick it asks the chronicler for as many tasks as there are
free slots (`thread_limit` minus the tasks still running) and runs each in
its own asyncio task. It runs until `stop()` is called, at which point it
waits for the tasks already started and raises `OverseerError`; a failure
from the chronicler's `query_tasks` is raised as it is. It may be started
only once.

`get_task(name)` returns the registered function, or `None`.

Errors you can expect:

- registering a task name twice with `put_task_info` raises `OverseerError`;
- booking a name that was never registered raises `TaskDoesNotExistError`
  (a subclass of `OverseerError`);
- calling `start` a second time raises `OverseerError`;
- creating an overseer without a chronicler, or with a thread limit of zero
  or less, raises `ValueError`, as does a query interval of zero or less.

## The PostgreSQL chronicler

`PgChronicler(conn, logger, table_name)` works with any asynchronous
connection object offering `execute(query, *args)`, `fetch(query, *args)`
returning mapping rows, and `transaction()` returning an async context
manager. An empty table name means `tasks`. `query_tasks` selects due
pending tasks and marks them `GOING` inside one transaction.

The SQL is built by the helpers in `godoit.pgcommands`
(`create_task_table_command`, `create_insert_task_command`,
`create_select_tasks_command`, `create_update_task_command`,
`time_check_string`).

## Writing your own chronicler

Subclass `godoit.chronicler.Chronicler` and implement the coroutines
`set_up_chronicle()`, `record_task(task)`, `query_tasks(limit)` and
`update_task(task)`. `query_tasks` should return at most `limit` tasks that
are due and still pending, and mark them as going so that no other overseer
picks them up.

## What it does not do

- It ships no database driver; you supply the connection for `PgChronicler`.
- There is no command-line program; the package is a library.
- The `retry_config` given to an `Overseer` is kept but not acted on: failed
  tasks are not rescheduled.
- `RecurringTaskInfo` is only a record; cron schedules are not run.
- Tasks left in `GOING` or finished tasks are never cleaned up.