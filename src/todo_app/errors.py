# src/todo_app/errors.py

from __future__ import annotations


class TodoError(Exception):
    """Base class for errors raised by the to-do core."""


class TodoValidationError(TodoError, ValueError):
    """A record (or its JSON form) is missing a field or has a bad value."""


class NotificationError(TodoError):
    """The notification center refused to register a request."""
