# src/todo_app/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import cast

from ..core.state import AppState
from ..todos.todo_api import remove_todo, save_todo
from ..todos.todo_models import Todo

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

DUE_INPUT_FORMAT = "%Y-%m-%d %H:%M"

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_due(due: datetime) -> str:
    """Medium date + short time, e.g. 'Nov 9, 2022 15:30'."""
    local = due.astimezone()
    return f"{local:%b} {local.day}, {local.year} {local:%H:%M}"


def parse_due_input(date_part: str, time_part: str) -> datetime:
    # Typed in local wall-clock time.
    return datetime.strptime(f"{date_part} {time_part}", DUE_INPUT_FORMAT).astimezone()


def render_row(index: int, todo: Todo) -> str:
    bell = " [!]" if todo.should_notify else ""
    return f"{index}. {todo.title} - {format_due(todo.due)}{bell}"


def render_detail(todo: Todo) -> str:
    return (
        f"Title: {todo.title}\n"
        f"  Due: {format_due(todo.due)}\n"
        f"  Memo: {todo.memo or '-'}\n"
        f"  Notify: {'ON' if todo.should_notify else 'OFF'}\n"
        f"  Id: {todo.id}"
    )


def resolve_ref(state: AppState, ref: str) -> Todo | None:
    """A row number from /list (1-based) or a to-do id."""
    todo = state.store.lookup(ref)
    if todo is not None:
        return todo
    if ref.isdigit():
        rows = state.store.all()
        idx = int(ref) - 1
        if 0 <= idx < len(rows):
            return rows[idx]
    return None


def _save_reply(state: AppState, todo: Todo, verb: str) -> str:
    if not save_todo(state, todo):
        return "Could not save the to-do (see log)."
    return f"{verb}: {todo.title} ({format_due(todo.due)})"


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    todos = state.store.all()
    if not todos:
        return "No to-dos yet. Add one with /add YYYY-MM-DD HH:MM <title>."
    return "\n".join(render_row(i, t) for i, t in enumerate(todos, start=1))


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /show <n|id>"
    todo = resolve_ref(state, args[0])
    if todo is None:
        return f"No to-do {args[0]}."
    return render_detail(todo)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add YYYY-MM-DD HH:MM <title...>   -> new to-do with a reminder at the due time
    """
    if len(args) < 3:
        return "Usage: /add YYYY-MM-DD HH:MM <title>"
    try:
        due = parse_due_input(args[0], args[1])
    except ValueError:
        return "Bad due date. Use YYYY-MM-DD HH:MM."

    todo = Todo.new(" ".join(args[2:]), due, should_notify=True)
    return _save_reply(state, todo, "Added")


def cmd_title(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /title <n|id> <new title>"
    todo = resolve_ref(state, args[0])
    if todo is None:
        return f"No to-do {args[0]}."
    return _save_reply(state, replace(todo, title=" ".join(args[1:])), "Updated")


def cmd_due(state: AppState, args: list[str]) -> str:
    if len(args) < 3:
        return "Usage: /due <n|id> YYYY-MM-DD HH:MM"
    todo = resolve_ref(state, args[0])
    if todo is None:
        return f"No to-do {args[0]}."
    try:
        due = parse_due_input(args[1], args[2])
    except ValueError:
        return "Bad due date. Use YYYY-MM-DD HH:MM."
    return _save_reply(state, replace(todo, due=due), "Rescheduled")


def cmd_memo(state: AppState, args: list[str]) -> str:
    """
    /memo <n|id> <text...>  -> set memo
    /memo <n|id>            -> clear memo
    """
    if not args:
        return "Usage: /memo <n|id> [text]"
    todo = resolve_ref(state, args[0])
    if todo is None:
        return f"No to-do {args[0]}."
    memo = " ".join(args[1:]) or None
    return _save_reply(state, replace(todo, memo=memo), "Updated")


def cmd_notify(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /notify <n|id> on|off"
    todo = resolve_ref(state, args[0])
    if todo is None:
        return f"No to-do {args[0]}."

    arg = args[1].lower()
    if arg in ("on", "1", "true", "yes"):
        flag = True
    elif arg in ("off", "0", "false", "no"):
        flag = False
    else:
        return "Usage: /notify <n|id> on|off"

    if not save_todo(state, replace(todo, should_notify=flag)):
        return "Could not save the to-do (see log)."
    return f"Reminder {'ON' if flag else 'OFF'}: {todo.title}"


def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /rm <n|id>"
    todo = resolve_ref(state, args[0])
    if todo is None:
        return f"No to-do {args[0]}."

    if emit:
        with contextlib.suppress(Exception):
            emit(f"Removing {todo.title}...")

    if not remove_todo(state, todo.id):
        return "Could not remove the to-do (see log)."
    return f"Removed: {todo.title}"


def cmd_pending(state: AppState, args: list[str]) -> str:
    pending = state.notifications.pending_requests()
    if not pending:
        return "No pending reminders."
    lines = ["Pending reminders:"]
    for req in pending:
        lines.append(f"  {format_due(req.fire_at)} - {req.content.body}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List to-dos with their due dates.", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show one to-do: /show <n|id>.")
registry.register("add", cmd_add, help_text="Add a to-do: /add YYYY-MM-DD HH:MM <title>.")
registry.register("title", cmd_title, help_text="Rename a to-do: /title <n|id> <title>.")
registry.register("due", cmd_due, help_text="Reschedule: /due <n|id> YYYY-MM-DD HH:MM.")
registry.register("memo", cmd_memo, help_text="Set or clear a memo: /memo <n|id> [text].")
registry.register("notify", cmd_notify, help_text="Toggle the reminder: /notify <n|id> on|off.")
registry.register("rm", cmd_rm, help_text="Delete a to-do: /rm <n|id>.", aliases=["del"])
registry.register("pending", cmd_pending, help_text="Show pending reminders.")
