# src/todo_app/reminders/reminder_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

Keeps exactly one pending reminder per to-do whose should_notify flag is set,
keyed by the to-do id:
- sync(todo): cancel whatever is pending for the id, then schedule anew if needed
- cancel(id): drop the pending reminder (idempotent)
- on_triggered(id): resolve a fired reminder back to its record for the UI

How a reminder is shown belongs to the presenter, not the scheduler.
"""

import logging

from ..core.ports import NotificationCenter, TodoPresenter, TodoRepo
from ..todos.todo_models import Todo
from .reminder_models import CalendarTrigger, NotificationContent, NotificationRequest

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_TITLE = "To-do reminder"


def build_request(todo: Todo, *, title: str = DEFAULT_REMINDER_TITLE) -> NotificationRequest:
    """
    Convert a stored Todo into a notification request.

    identifier = todo id, body = todo title, one-shot trigger at the due minute,
    default sound and a badge of 1.
    """
    return NotificationRequest(
        identifier=todo.id,
        content=NotificationContent(title=title, body=todo.title),
        trigger=CalendarTrigger.matching(todo.due, repeats=False),
        due=todo.due,
    )


class ReminderScheduler:
    def __init__(
            self,
            center: NotificationCenter,
            repo: TodoRepo,
            *,
            presenter: TodoPresenter | None = None,
            title: str = DEFAULT_REMINDER_TITLE,
    ) -> None:
        self._center = center
        self._repo = repo
        self._title = title
        self.presenter = presenter

    def sync(self, todo: Todo) -> None:
        # Cancel first: an edited due date or a disabled flag must not leave
        # the old reminder behind.
        self.cancel(todo.id)

        if not todo.should_notify:
            return

        request = build_request(todo, title=self._title)

        def _completion(error: Exception | None) -> None:
            if error is not None:
                logger.warning("Reminder registration failed id=%s: %s", todo.id, error)
            else:
                logger.debug("Reminder scheduled id=%s fire_at=%s", todo.id, request.fire_at)

        try:
            self._center.add(request, _completion)
        except Exception:
            # Registration errors never fail the originating save.
            logger.exception("Notification center add() crashed id=%s", todo.id)

    def cancel(self, todo_id: str) -> None:
        try:
            self._center.remove_pending([todo_id])
        except Exception:
            logger.exception("Notification center remove_pending() crashed id=%s", todo_id)

    def on_triggered(self, identifier: str) -> Todo | None:
        todo = self._repo.lookup(identifier)
        if todo is None:
            # Record deleted after the reminder was scheduled.
            logger.debug("Triggered reminder id=%s no longer resolves", identifier)
            return None

        if self.presenter is not None:
            self.presenter.show_todo(todo)
        return todo
