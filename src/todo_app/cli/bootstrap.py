# src/todo_app/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local directories exist,
- wires concrete implementations into AppState (store/notification center/reminders).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TodoPresenter
from ..core.state import AppState
from ..reminders.notification_center import LocalNotificationCenter
from ..reminders.reminder_models import AuthorizationOption
from ..reminders.reminder_scheduler import ReminderScheduler
from ..todos.todo_store import TodoStore

logger = logging.getLogger(__name__)

AUTH_OPTIONS = (AuthorizationOption.ALERT, AuthorizationOption.SOUND, AuthorizationOption.BADGE)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.todos_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, presenter: TodoPresenter | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TodoStore(settings.todos_path)
    center = LocalNotificationCenter()

    if getattr(settings, "notifications_enabled", True):
        granted = center.request_authorization(AUTH_OPTIONS)
        if not granted:
            logger.warning("Notifications were not authorized; reminders stay off.")
    else:
        logger.info("Notifications disabled via settings.")

    reminders = ReminderScheduler(
        center,
        store,
        presenter=presenter,
        title=getattr(settings, "reminder_title", "To-do reminder"),
    )

    return AppState(
        settings=settings,
        store=store,
        notifications=center,
        reminders=reminders,
    )
