import logging

import pytest

from todo import config
from todo.models import Task
from todo.store import TaskStore


@pytest.fixture
def workspace(monkeypatch, tmp_path):
    """Isolated working directory per test.

    The config cache is reset on entry and exit so .todo.yaml files written by
    one test never leak into another.
    """
    config._clear_cache()
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    config._clear_cache()


@pytest.fixture
def tasks_path(workspace):
    return workspace / "tasks.json"


@pytest.fixture
def store(tasks_path):
    return TaskStore(tasks_path)


@pytest.fixture
def seeded_store(store):
    store.save(
        [
            Task(id=1, description="Buy milk"),
            Task(id=2, description="Walk dog", completed=True),
            Task(id=5, description="Call mum"),
        ]
    )
    return store


@pytest.fixture(autouse=True)
def reset_todo_logger():
    """Drop handlers bound to per-test capture streams."""
    yield
    logger = logging.getLogger("todo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
