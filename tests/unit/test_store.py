import json

import pytest

from todo.errors import DataFormatError, StorageError
from todo.models import Task
from todo.store import TaskStore, decode, encode


def test_load_missing_file_is_empty(store, tasks_path):
    """No file means first run: empty list, not an error."""
    assert not tasks_path.exists()
    assert store.load() == []
    assert store.exists() is False


def test_save_writes_pretty_json(store, tasks_path):
    store.save([Task(id=1, description="Buy milk")])
    text = tasks_path.read_text(encoding="utf-8")
    assert text == (
        "[\n"
        "  {\n"
        '    "id": 1,\n'
        '    "description": "Buy milk",\n'
        '    "completed": false\n'
        "  }\n"
        "]\n"
    )


def test_save_empty_list(store, tasks_path):
    store.save([])
    assert json.loads(tasks_path.read_text()) == []
    assert store.load() == []


def test_round_trip_preserves_order_and_fields(store):
    tasks = [
        Task(id=3, description="third first", completed=True),
        Task(id=1, description="Grüße, ünïcode ✓"),
        Task(id=2, description='quotes " and \\ slashes'),
    ]
    store.save(tasks)
    store.save(store.load())
    assert store.load() == tasks


def test_save_keeps_non_ascii_verbatim(store, tasks_path):
    store.save([Task(id=1, description="café")])
    assert "café" in tasks_path.read_text(encoding="utf-8")


def test_save_creates_parent_directory(workspace):
    store = TaskStore(workspace / "nested" / "dir" / "tasks.json")
    store.save([Task(id=1, description="x")])
    assert store.load() == [Task(id=1, description="x")]


def test_save_leaves_no_temp_files(store, workspace):
    store.save([Task(id=1, description="x")])
    store.save([Task(id=1, description="y")])
    assert sorted(p.name for p in workspace.iterdir()) == ["tasks.json"]


def test_save_failure_raises_storage_error(workspace):
    blocker = workspace / "blocker"
    blocker.write_text("not a directory")
    store = TaskStore(blocker / "tasks.json")
    with pytest.raises(StorageError):
        store.save([])


def test_save_failure_keeps_previous_file(store, tasks_path, monkeypatch):
    store.save([Task(id=1, description="keep me")])
    before = tasks_path.read_bytes()

    def boom(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("todo.store.os.replace", boom)
    with pytest.raises(StorageError, match="disk full"):
        store.save([])
    assert tasks_path.read_bytes() == before
    assert [p.name for p in tasks_path.parent.iterdir()] == ["tasks.json"]


def test_load_directory_raises_storage_error(workspace):
    (workspace / "tasks.json").mkdir()
    with pytest.raises(StorageError):
        TaskStore(workspace / "tasks.json").load()


def test_load_invalid_json(store, tasks_path):
    tasks_path.write_text("{not json")
    with pytest.raises(DataFormatError, match="invalid JSON"):
        store.load()


def test_load_non_utf8(store, tasks_path):
    tasks_path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(DataFormatError):
        store.load()


@pytest.mark.parametrize(
    "payload",
    [
        {"id": 1, "description": "x", "completed": False},
        [1, 2],
        [{"description": "x", "completed": False}],
        [{"id": "1", "description": "x", "completed": False}],
        [{"id": True, "description": "x", "completed": False}],
        [{"id": -1, "description": "x", "completed": False}],
        [{"id": 1, "description": 5, "completed": False}],
        [{"id": 1, "description": "x", "completed": "no"}],
        [{"id": 1, "description": "x"}],
    ],
)
def test_decode_rejects_bad_structure(payload):
    with pytest.raises(DataFormatError):
        decode(json.dumps(payload))


def test_decode_ignores_unknown_keys():
    tasks = decode('[{"id": 7, "description": "x", "completed": true, "extra": 1}]')
    assert tasks == [Task(id=7, description="x", completed=True)]


def test_encode_field_order():
    data = json.loads(encode([Task(id=2, description="d", completed=True)]))
    assert list(data[0].keys()) == ["id", "description", "completed"]


def test_save_undecodable_text_raises_data_format_error(store, tasks_path, workspace):
    """Lone surrogates from non-UTF-8 argv never reach disk."""
    store.save([Task(id=1, description="keep me")])
    before = tasks_path.read_bytes()
    with pytest.raises(DataFormatError, match="not valid UTF-8"):
        store.save([Task(id=2, description="caf\udce9")])
    assert tasks_path.read_bytes() == before
    assert sorted(p.name for p in workspace.iterdir()) == ["tasks.json"]


def test_save_removes_temp_file_on_any_error(store, workspace, monkeypatch):
    def boom(fd):
        raise RuntimeError("unexpected")

    monkeypatch.setattr("todo.store.os.fsync", boom)
    with pytest.raises(RuntimeError, match="unexpected"):
        store.save([Task(id=1, description="x")])
    assert list(workspace.iterdir()) == []
