"""todos: a local to-do list with JSON persistence and due-date reminders."""

__version__ = "0.1.0"
