# tests/test_task_store.py

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from task_console.tasks.errors import (
    DuplicateTaskError,
    TaskIOError,
    TaskNotFoundError,
    TaskParseError,
)
from task_console.tasks.task_models import Priority, Task
from task_console.tasks.task_store import TaskStore

TZ = timezone(timedelta(hours=2))


def _task(name: str, description: str = "", priority: Priority = Priority.LOW, minute: int = 0) -> Task:
    return Task(
        name=name,
        description=description,
        priority=priority,
        created_at=datetime(2024, 5, 1, 9, minute, 15, 123456, tzinfo=TZ),
    )


def test_serialize_round_trip_keeps_every_field() -> None:
    tasks = [
        _task("Bread", "Buy bread", Priority.LOW, 1),
        _task("Milk", "2%", Priority.MEDIUM, 2),
        _task("Taxes", "Ünïcode ✓", Priority.HIGH, 3),
        _task("Deploy", "", Priority.VERY_HIGH, 4),
        Task("Whole second", "x", Priority.LOW, datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)),
    ]
    store = TaskStore(tasks)

    assert TaskStore.deserialize(store.serialize()) == tasks


def test_round_trip_with_naive_timestamp() -> None:
    tasks = [Task("Bread", "Buy bread", Priority.LOW, datetime(2024, 5, 1, 9, 30, 15))]

    restored = TaskStore.deserialize(TaskStore(tasks).serialize())

    assert restored == tasks
    assert restored[0].created_at.tzinfo is not None


def test_serialize_uses_documented_schema() -> None:
    store = TaskStore([_task("Deploy", "friday", Priority.VERY_HIGH)])

    raw = json.loads(store.serialize().decode("utf-8"))

    assert raw == [
        {
            "name": "Deploy",
            "description": "friday",
            "priority": "VeryHigh",
            "createdAt": "2024-05-01T09:00:15.123456+02:00",
        }
    ]


def test_deserialize_naive_timestamp_is_local_time() -> None:
    data = '[{"name": "a", "description": "", "priority": "Low", "createdAt": "2024-05-01T09:00:00"}]'

    (task,) = TaskStore.deserialize(data)

    assert task.created_at.tzinfo is not None
    assert task.created_at.replace(tzinfo=None) == datetime(2024, 5, 1, 9, 0, 0)


@pytest.mark.parametrize(
    "data",
    [
        "not json",
        '{"name": "a"}',
        "[1, 2]",
        '[{"name": "a", "description": "", "priority": "Low"}]',
        '[{"name": 5, "description": "", "priority": "Low", "createdAt": "2024-05-01T09:00:00"}]',
        '[{"name": "a", "description": "", "priority": "Unset", "createdAt": "2024-05-01T09:00:00"}]',
        '[{"name": "a", "description": "", "priority": "Very High", "createdAt": "2024-05-01T09:00:00"}]',
        '[{"name": "a", "description": "", "priority": "Low", "createdAt": "yesterday"}]',
        b"\xff\xfe\x00",
        pytest.param("[" * 100000, id="deeply-nested"),
    ],
)
def test_deserialize_rejects_malformed_input(data) -> None:
    with pytest.raises(TaskParseError):
        TaskStore.deserialize(data)


def test_append_then_find_returns_index() -> None:
    store = TaskStore()
    store.append(_task("Bread"))
    store.append(_task("Milk"))

    assert store.find("Milk") == 1
    assert store.find("mILK") == 1
    assert store.find("Eggs") is None
    assert store.get(1).name == "Milk"


def test_remove_is_case_insensitive_and_removes_one() -> None:
    store = TaskStore([_task("Groceries"), _task("Laundry")])

    removed = store.remove("groceries")

    assert removed.name == "Groceries"
    assert [t.name for t in store] == ["Laundry"]


def test_remove_missing_raises_without_mutating() -> None:
    store = TaskStore([_task("Laundry")])

    with pytest.raises(TaskNotFoundError) as exc:
        store.remove("Groceries")

    assert exc.value.name == "Groceries"
    assert str(exc.value) == 'Task "Groceries" not found'
    assert len(store) == 1


def test_pop_last_empty_and_non_empty() -> None:
    store = TaskStore()
    assert store.pop_last() is None

    store.append(_task("first"))
    store.append(_task("second"))

    assert store.pop_last().name == "second"
    assert len(store) == 1


def test_clear_and_snapshot_is_a_copy() -> None:
    store = TaskStore([_task("a"), _task("b")])
    snapshot = store.tasks()

    store.clear()

    assert len(store) == 0
    assert [t.name for t in snapshot] == ["a", "b"]


def test_duplicate_names_allowed_by_default_first_match_wins() -> None:
    store = TaskStore()
    store.append(_task("Bread", "first"))
    store.append(_task("bread", "second"))

    assert len(store) == 2
    assert store.find("BREAD") == 0
    assert store.remove("bread").description == "first"
    assert store.tasks()[0].description == "second"


def test_duplicate_names_rejected_when_unique() -> None:
    store = TaskStore(unique_names=True)
    store.append(_task("Bread"))

    with pytest.raises(DuplicateTaskError):
        store.append(_task("BREAD"))

    assert len(store) == 1


def test_save_without_overwrite_leaves_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_bytes(b"keep me")
    store = TaskStore([_task("Bread")])

    assert store.save_to_file(path, overwrite=False) is False
    assert path.read_bytes() == b"keep me"


def test_save_overwrites_by_default(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_bytes(b"stale")
    store = TaskStore([_task("Bread")])

    assert store.save_to_file(path) is True
    assert path.read_bytes() == store.serialize()
    assert list(tmp_path.iterdir()) == [path]


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    tasks = [_task("Bread", "Buy bread"), _task("Milk", "2%", Priority.MEDIUM, 5)]
    TaskStore(tasks).save_to_file(path)

    other = TaskStore([_task("old")])
    assert other.load_from_file(path) is True
    assert other.tasks() == tasks


def test_save_into_missing_directory_raises_io_error(tmp_path: Path) -> None:
    path = tmp_path / "nope" / "tasks.json"

    with pytest.raises(TaskIOError) as exc:
        TaskStore([_task("Bread")]).save_to_file(path)

    assert exc.value.path == path
    assert not path.exists()


def test_load_missing_file_leaves_store_unchanged(tmp_path: Path) -> None:
    store = TaskStore([_task("Bread")])

    assert store.load_from_file(tmp_path / "missing.json") is False
    assert [t.name for t in store] == ["Bread"]


def test_load_malformed_file_leaves_store_unchanged(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("[{", "utf-8")
    store = TaskStore([_task("Bread")])

    with pytest.raises(TaskParseError):
        store.load_from_file(path)

    assert [t.name for t in store] == ["Bread"]


def test_load_directory_raises_io_error(tmp_path: Path) -> None:
    with pytest.raises(TaskIOError):
        TaskStore().load_from_file(tmp_path)


def test_bread_and_milk_scenario() -> None:
    store = TaskStore()
    bread = Task.new("Bread", "Buy bread", Priority.LOW)
    milk = Task.new("Milk", "2%", Priority.MEDIUM)

    store.append(bread)
    store.append(milk)
    assert store.tasks() == [bread, milk]

    assert store.remove("bread") is bread
    assert store.tasks() == [milk]


def test_save_leaves_neighbouring_tmp_file_alone(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    neighbour = tmp_path / "tasks.json.tmp"
    neighbour.write_bytes(b"user data")

    TaskStore([_task("Bread")]).save_to_file(path)

    assert neighbour.read_bytes() == b"user data"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.json", "tasks.json.tmp"]
