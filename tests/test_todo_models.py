# tests/test_todo_models.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from todo_app.errors import TodoValidationError
from todo_app.todos.todo_models import Todo


def test_new_assigns_unique_ids() -> None:
    due = datetime(2030, 1, 2, 9, 30, tzinfo=timezone.utc)
    a = Todo.new("A", due)
    b = Todo.new("B", due)
    assert a.id and b.id and a.id != b.id
    assert a.should_notify is False and a.memo is None


def test_naive_due_is_taken_as_local_time() -> None:
    todo = Todo(id="1", title="t", due=datetime(2030, 1, 2, 9, 30))
    assert todo.due.tzinfo is not None
    assert (todo.due.hour, todo.due.minute) == (9, 30)


def test_to_dict_uses_wire_names_and_iso_due() -> None:
    due = datetime(2030, 1, 2, 9, 30, tzinfo=timezone(timedelta(hours=9)))
    data = Todo(id="x", title="Buy milk", due=due, memo=None, should_notify=True).to_dict()
    assert data == {
        "title": "Buy milk",
        "due": "2030-01-02T09:30:00+09:00",
        "memo": None,
        "shouldNotify": True,
        "id": "x",
    }


def test_from_dict_accepts_missing_memo() -> None:
    todo = Todo.from_dict(
        {"id": "x", "title": "t", "due": "2030-01-02T09:30:00+00:00", "shouldNotify": False}
    )
    assert todo.memo is None
    assert todo.due == datetime(2030, 1, 2, 9, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"title": "t", "due": "2030-01-02T09:30:00", "shouldNotify": True},
        {"id": "", "title": "t", "due": "2030-01-02T09:30:00", "shouldNotify": True},
        {"id": "1", "title": 3, "due": "2030-01-02T09:30:00", "shouldNotify": True},
        {"id": "1", "title": "t", "due": "soon", "shouldNotify": True},
        {"id": "1", "title": "t", "due": "2030-01-02T09:30:00", "shouldNotify": "yes"},
        {"id": "1", "title": "t", "due": "2030-01-02T09:30:00", "shouldNotify": True, "memo": 5},
    ],
)
def test_from_dict_rejects_bad_entries(data) -> None:
    with pytest.raises(TodoValidationError):
        Todo.from_dict(data)


def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Todo.from_dict({"id": "1"})
