# tests/test_task_store.py

"""Behaviour shared by both backends (parametrized via the open_store fixture)."""

from __future__ import annotations

import pytest

from tasker.errors import InvalidInput
from tasker.tasks.task_models import Outcome, Task


def _reopen(open_store, store):
    store.save()
    store.close()
    return open_store()


def test_fresh_store_is_empty_and_creates_file(open_store) -> None:
    store = open_store()
    assert store.list_tasks() == []
    assert store.count_tasks() == 0
    assert open_store.path.exists()


def test_add_then_list(store) -> None:
    task_id = store.add("buy milk")
    assert task_id == 1
    assert store.list_tasks() == [Task(id=1, description="buy milk", completed=False)]


def test_complete_then_delete(store) -> None:
    store.add("buy milk")

    assert store.complete(1) is Outcome.FOUND
    assert store.list_tasks() == [Task(id=1, description="buy milk", completed=True)]

    assert store.delete(1) is Outcome.FOUND
    assert store.list_tasks() == []


def test_complete_missing_on_fresh_store(store) -> None:
    assert store.complete(99) is Outcome.NOT_FOUND
    assert store.list_tasks() == []


def test_ids_are_never_reused(store) -> None:
    assert store.add("a") == 1
    assert store.add("b") == 2
    assert store.delete(1) is Outcome.FOUND
    assert store.add("c") == 3


def test_deleting_highest_id_does_not_free_it(open_store) -> None:
    store = open_store()
    store.add("a")
    store.add("b")
    store.delete(2)
    store = _reopen(open_store, store)
    assert store.add("c") == 3


def test_ids_strictly_increase(store) -> None:
    ids = []
    for i in range(6):
        ids.append(store.add(f"task {i}"))
        if i % 2:
            store.delete(ids[-1])
    assert ids == sorted(set(ids))


def test_round_trip_through_reopen(open_store) -> None:
    store = open_store()
    store.add("first")
    store.add("second")
    store.complete(2)

    store = _reopen(open_store, store)
    assert store.list_tasks() == [
        Task(id=1, description="first", completed=False),
        Task(id=2, description="second", completed=True),
    ]


def test_complete_is_idempotent(store) -> None:
    store.add("x")
    assert store.complete(1) is Outcome.FOUND
    assert store.complete(1) is Outcome.FOUND
    assert store.get(1) == Task(id=1, description="x", completed=True)


def test_delete_removes_exactly_one(store) -> None:
    for name in ("a", "b", "c"):
        store.add(name)
    store.complete(3)
    before = store.list_tasks()

    assert store.delete(2) is Outcome.FOUND

    after = store.list_tasks()
    assert len(after) == len(before) - 1
    assert after == [t for t in before if t.id != 2]


def test_delete_missing_reports_not_found(store) -> None:
    store.add("keep me")
    assert store.delete(42) is Outcome.NOT_FOUND
    assert store.list_tasks() == [Task(id=1, description="keep me", completed=False)]


def test_not_found_leaves_file_unchanged(open_store) -> None:
    store = open_store()
    store.add("a")
    store.complete(1)
    store = _reopen(open_store, store)
    before = open_store.path.read_bytes()

    assert store.complete(7) is Outcome.NOT_FOUND
    assert store.delete(7) is Outcome.NOT_FOUND
    store.save()

    assert open_store.path.read_bytes() == before


@pytest.mark.parametrize("description", ["", "   ", "\t\n"])
def test_empty_description_rejected(store, description: str) -> None:
    with pytest.raises(InvalidInput):
        store.add(description)
    assert store.count_tasks() == 0


def test_description_is_stripped(store) -> None:
    store.add("  water plants  ")
    assert store.get(1).description == "water plants"


def test_get_missing_returns_none(store) -> None:
    assert store.get(5) is None


def test_unicode_description_survives_reopen(open_store) -> None:
    store = open_store()
    store.add("купить молоко ☕")
    store = _reopen(open_store, store)
    assert store.get(1).description == "купить молоко ☕"
