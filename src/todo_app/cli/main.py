# src/todo_app/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- reminder delivery in a background thread (optional),
- console REPL in the main thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading
from functools import partial

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsolePresenter, run_console_loop
from ..logging_setup import setup_logging
from ..reminders.notification_center import (
    LocalNotificationCenter,
    NotificationBackgroundRunner,
    start_notifications_in_background,
)
from ..todos.todo_api import handle_notification_response, resync_reminders

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # Every mutation is already on disk; close() is a hook only.
    try:
        store = getattr(state, "store", None)
        if store is not None and hasattr(store, "close"):
            store.close()
    except Exception:
        logger.debug("Store close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    presenter = ConsolePresenter()
    state = create_initial_state(settings=settings, presenter=presenter)

    runner: NotificationBackgroundRunner | None = None
    if settings.notifications_enabled and isinstance(state.notifications, LocalNotificationCenter):
        resync_reminders(state)
        runner = start_notifications_in_background(
            state.notifications,
            presenter,
            on_response=partial(handle_notification_response, state),
            interval_seconds=settings.reminder_poll_seconds,
        )

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            # Only the headless wait needs them; the console REPL keeps the
            # default Ctrl+C behaviour.
            signal.signal(signal.SIGINT, _handle_signal)
            try:
                signal.signal(signal.SIGTERM, _handle_signal)
            except (ValueError, OSError, AttributeError):
                # Some platforms may not support SIGTERM.
                pass
            logger.info("Console disabled. Delivering reminders only. Press Ctrl+C to stop.")
            stop_main.wait()
    finally:
        if runner is not None:
            runner.stop()
            runner.join(timeout=10.0)

        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
