# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from todo_app.config import Settings


def test_paths_follow_data_dir(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODOS_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("TODOS_TODOS_PATH", raising=False)
    monkeypatch.delenv("TODOS_LOG_DIR", raising=False)

    s = Settings.from_env()
    assert s.data_dir == tmp_path / "data"
    assert s.todos_path == tmp_path / "data" / "todos.json"
    assert s.log_dir == tmp_path / "data" / "logs"


def test_flags_and_numbers(monkeypatch) -> None:
    monkeypatch.setenv("TODOS_NOTIFICATIONS_ENABLED", "off")
    monkeypatch.setenv("TODOS_CONSOLE_ENABLED", "yes")
    monkeypatch.setenv("TODOS_REMINDER_POLL_SECONDS", "0.1")
    monkeypatch.setenv("TODOS_REMINDER_TITLE", "Ping")

    s = Settings.from_env()
    assert s.notifications_enabled is False
    assert s.console_enabled is True
    assert s.reminder_poll_seconds == 0.5
    assert s.reminder_title == "Ping"


def test_bad_number_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("TODOS_REMINDER_POLL_SECONDS", "soon")
    assert Settings.from_env().reminder_poll_seconds == 5.0
