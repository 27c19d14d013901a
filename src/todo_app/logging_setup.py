# src/todo_app/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todos.log"

_DELIVERY_LOGGER = "todo_app.reminders.notification_center"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keeps stderr readable while the to-do prompt is open.

    Store, scheduler and command logs pass. The delivery loop logs from its
    own thread, so only its warnings reach the prompt. Anything outside
    todo_app (captured warnings included) needs ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == _DELIVERY_LOGGER or name.startswith(_DELIVERY_LOGGER + "."):
            return record.levelno >= logging.WARNING
        if name.startswith("todo_app."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/todos",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send todo_app logs to stderr (filtered) and to <log_dir>/todos.log (unfiltered).

    Replaces any handlers already on the root logger, so repeated calls
    do not duplicate lines. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # warnings.warn(...) arrives as 'py.warnings' and is filtered like third-party code.
    logging.captureWarnings(True)
    return log_file
