import uuid
from datetime import datetime, timezone

from godoit.idmaker import default_id_maker, example_id_maker

WHEN = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_default_id_is_time_based_uuid():
    value = default_id_maker("job", WHEN)
    assert uuid.UUID(value).version == 1


def test_default_id_round_trips_through_uuid():
    value = default_id_maker("job", WHEN)
    assert str(uuid.UUID(value)) == value


def test_default_ids_are_unique():
    ids = {default_id_maker("job", WHEN) for _ in range(100)}
    assert len(ids) == 100


def test_example_id_joins_name_and_time():
    assert example_id_maker("job", WHEN) == "job~2024-01-02T03:04:05+00:00"


def test_example_id_uses_given_name():
    assert example_id_maker("report", WHEN) == "report~2024-01-02T03:04:05+00:00"


def test_example_id_starts_with_name():
    assert example_id_maker("report", WHEN).split("~", 1)[0] == "report"