# src/todo_app/todos/todo_api.py

from __future__ import annotations

import logging

from ..core.state import AppState
from ..reminders.reminder_models import NotificationResponse
from .todo_models import Todo

logger = logging.getLogger(__name__)


def save_todo(state: AppState, todo: Todo) -> bool:
    """
    Upsert a to-do and, once it is on disk, bring its reminder in line.
    Returns False if the record could not be persisted (nothing else changes).
    """
    if not state.store.save(todo):
        logger.warning("Todo not saved id=%s", todo.id)
        return False

    state.reminders.sync(todo)
    return True


def remove_todo(state: AppState, todo_id: str) -> bool:
    """
    Delete a to-do. Returns False if the id is unknown or the write failed.
    """
    if state.store.lookup(todo_id) is None:
        return False

    # Reminder goes before (or alongside) the record.
    state.reminders.cancel(todo_id)
    ok = state.store.remove(todo_id)
    if not ok:
        logger.warning("Todo not removed id=%s", todo_id)
        todo = state.store.lookup(todo_id)
        if todo is not None:
            # Still stored: put its reminder back.
            state.reminders.sync(todo)
    return ok


def handle_notification_response(state: AppState, response: NotificationResponse) -> Todo | None:
    """Dispatch point for NotificationResponse events from the delivery loop."""
    with state.lock:
        todo = state.reminders.on_triggered(response.identifier)
        if todo is None:
            return None
        try:
            state.notifications.set_badge_count(0)
        except Exception:
            logger.debug("set_badge_count failed.", exc_info=True)
        return todo


def resync_reminders(state: AppState) -> int:
    """
    Re-sync every stored to-do with the notification center.
    Returns how many have should_notify set.
    """
    n = 0
    for todo in state.store.all():
        state.reminders.sync(todo)
        if todo.should_notify:
            n += 1
    logger.info("Reminders resynced: %d of %d todos notify", n, len(state.store.all()))
    return n
