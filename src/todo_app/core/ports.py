# src/todo_app/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the notification service and the UI swappable and makes testing easier.
"""

from collections.abc import Callable, Iterable
from typing import Awaitable, Protocol

from ..reminders.reminder_models import AuthorizationOption, NotificationRequest
from ..todos.todo_models import Todo

CompletionHandler = Callable[[Exception | None], None]


class TodoRepo(Protocol):
    def load(self) -> list[Todo]: ...
    def all(self) -> list[Todo]: ...
    def lookup(self, todo_id: str) -> Todo | None: ...
    def save(self, todo: Todo) -> bool: ...
    def remove(self, todo_id: str) -> bool: ...


class NotificationCenter(Protocol):
    """
    Host notification service.

    add() is fire-and-forget: errors are reported through `completion`
    (used only for logging), never raised to the caller.
    """

    def request_authorization(self, options: Iterable[AuthorizationOption]) -> bool: ...

    def add(
            self,
            request: NotificationRequest,
            completion: CompletionHandler | None = None,
    ) -> None: ...

    def remove_pending(self, identifiers: Iterable[str]) -> None: ...
    def pending_requests(self) -> list[NotificationRequest]: ...
    def set_badge_count(self, count: int) -> None: ...


class TodoPresenter(Protocol):
    """
    UI-side port.

    The UI decides how to render a delivered notification and how to show a
    record the user opened from one.
    """

    def show_todo(self, todo: Todo) -> None: ...
    def deliver(self, request: NotificationRequest) -> Awaitable[None]: ...
