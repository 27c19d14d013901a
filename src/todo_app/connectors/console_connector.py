# src/todo_app/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import format_due, registry as command_registry, render_detail
from ..core.state import AppState
from ..reminders.reminder_models import NotificationRequest
from ..todos.todo_models import Todo

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class ConsolePresenter:
    """TodoPresenter for the terminal: prints reminders and opened to-dos."""

    async def deliver(self, request: NotificationRequest) -> None:
        _print_ts(
            f"[REMINDER] {request.content.title}: {request.content.body} "
            f"(due {format_due(request.fire_at)})"
        )

    def show_todo(self, todo: Todo) -> None:
        _print_ts(render_detail(todo))


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (todos=%d).", len(state.store.all()))
    _print_ts("[CONSOLE] Use /help for commands, /list to see your to-dos, /exit to quit.\n")

    def emit(text: str) -> None:
        _print_ts(text)

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            with state.lock:
                response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list them."

        _print_ts(response)

    logger.info("Console connector finished.")
