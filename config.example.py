# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/todo_app/config.py.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODOS_APP_NAME": "App display name (default: todos).",
    "TODOS_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths
    "TODOS_DATA_DIR": (
        "Application data directory (default: per-user app-data dir, "
        "e.g. ~/.local/share/todos)."
    ),
    "TODOS_TODOS_PATH": "To-do JSON file (default: <data_dir>/todos.json).",
    "TODOS_LOG_DIR": "Log directory (default: <data_dir>/logs).",
    # Reminders
    "TODOS_NOTIFICATIONS_ENABLED": "Schedule and deliver reminders (true/false, default: true).",
    "TODOS_REMINDER_TITLE": "Notification title (default: To-do reminder).",
    "TODOS_REMINDER_POLL_SECONDS": "Delivery loop interval in seconds (default: 5, min 0.5).",
    # Connectors
    "TODOS_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
}
