# src/todo_app/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..reminders.reminder_scheduler import ReminderScheduler
from .ports import NotificationCenter, TodoRepo


@dataclass
class AppState:
    """
    Everything one application session owns.

    Built once by the composition root (cli/bootstrap.py) and passed to every
    caller; nothing in the core keeps module-level mutable state.
    """

    settings: Any
    store: TodoRepo
    notifications: NotificationCenter
    reminders: ReminderScheduler

    # Serializes console commands with notification responses (delivery thread).
    lock: threading.RLock = field(default_factory=threading.RLock)
