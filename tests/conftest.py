# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_app.cli.bootstrap import create_initial_state
from todo_app.core.state import AppState
from todo_app.todos.todo_models import Todo

from .fakes import RecordingPresenter


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and the user's data dir.
    """
    return SimpleNamespace(
        app_name="todos-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        todos_path=tmp_path / "todos.json",
        log_dir=tmp_path / "logs",
        notifications_enabled=True,
        reminder_title="To-do reminder",
        reminder_poll_seconds=0.01,
        console_enabled=False,
    )


@pytest.fixture()
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture()
def state(settings: SimpleNamespace, presenter: RecordingPresenter) -> AppState:
    """
    AppState wired the way the CLI wires it.

    NOTE: the real TodoStore and LocalNotificationCenter are used here because
    their behaviour is part of what we want to test.
    """
    return create_initial_state(settings=settings, presenter=presenter)


@pytest.fixture()
def tomorrow() -> datetime:
    return (datetime.now().astimezone() + timedelta(days=1)).replace(second=0, microsecond=0)


@pytest.fixture()
def make_todo(tomorrow: datetime):
    def _make(
        todo_id: str = "1",
        title: str = "Buy milk",
        *,
        due: datetime | None = None,
        memo: str | None = None,
        should_notify: bool = True,
    ) -> Todo:
        return Todo(
            id=todo_id,
            title=title,
            due=due or tomorrow,
            memo=memo,
            should_notify=should_notify,
        )

    return _make
