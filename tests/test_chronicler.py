import pytest

from godoit.chronicler import Chronicler

METHODS = ("set_up_chronicle", "record_task", "query_tasks", "update_task")


async def _set_up_chronicle(self):
    return None


async def _record_task(self, task):
    return None


async def _query_tasks(self, limit):
    return []


async def _update_task(self, task):
    return None


IMPLEMENTATIONS = {
    "set_up_chronicle": _set_up_chronicle,
    "record_task": _record_task,
    "query_tasks": _query_tasks,
    "update_task": _update_task,
}


def _implementation(*missing):
    body = {name: func for name, func in IMPLEMENTATIONS.items() if name not in missing}
    return type("Impl", (Chronicler,), body)


@pytest.mark.parametrize("missing", METHODS)
def test_interface_methods(missing):
    cls = _implementation(missing)
    with pytest.raises(TypeError, match=missing):
        Chronicler.__new__(cls)


def test_interface_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Chronicler()


def test_incomplete_implementation_rejected():
    cls = _implementation("query_tasks", "update_task")
    with pytest.raises(TypeError, match="query_tasks"):
        Chronicler.__new__(cls)


def test_complete_implementation_has_no_abstract_methods():
    cls = _implementation()
    instance = Chronicler.__new__(cls)
    assert type(instance) is cls
    assert cls.__abstractmethods__ == frozenset()