# src/todo_app/todos/todo_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from .todo_models import Todo

logger = logging.getLogger(__name__)


class TodoStore:
    """
    JSON-file to-do store.

    The whole collection lives in memory as an id -> Todo dict (insertion
    ordered, so an upsert of an existing id keeps its position) and is written
    back in full on every mutation:
    - serialize to <file>.tmp
    - os.replace() over the real file (readers never see a partial write)

    A failed write rolls the in-memory change back, so memory and disk agree.
    """

    def __init__(self, path: str | Path = "todos.json") -> None:
        self._path = Path(path)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            # Saves will fail and roll back; loading still starts empty.
            logger.exception("Cannot create todo directory %s", self._path.parent)
        self._todos: dict[str, Todo] = {}
        self.load()
        logger.info("TodoStore ready path=%s total=%s", self._path, len(self._todos))

    @property
    def path(self) -> Path:
        return self._path

    def close(self) -> None:
        """Compatibility hook for shutdown (every mutation is already on disk)."""
        return

    # ---- low-level helpers ----

    def _read_file(self) -> dict[str, Todo]:
        raw = self._path.read_text("utf-8")
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")

        out: dict[str, Todo] = {}
        for entry in data:
            todo = Todo.from_dict(entry)
            # Hand-edited files may repeat an id; the last one wins.
            out[todo.id] = todo
        return out

    def _write_file(self) -> bool:
        payload = [t.to_dict() for t in self._todos.values()]
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to write todos to %s", self._path)
            with contextlib.suppress(OSError):
                tmp.unlink()
            return False

        with contextlib.suppress(OSError):
            # Best-effort: memos are personal, keep the file private on disk.
            os.chmod(self._path, 0o600)
        logger.debug("Saved %d todos to %s", len(self._todos), self._path)
        return True

    # ---- public API ----

    def load(self) -> list[Todo]:
        """
        (Re)load the collection from disk.

        A missing or malformed file is not fatal: the store starts empty and
        the error is logged.
        """
        if not self._path.exists():
            logger.warning("No todo file at %s; starting empty.", self._path)
            self._todos = {}
            return []

        try:
            self._todos = self._read_file()
        except (OSError, ValueError):
            logger.exception("Failed to load todos from %s; starting empty.", self._path)
            self._todos = {}

        logger.debug("Loaded %d todos from %s", len(self._todos), self._path)
        return self.all()

    def all(self) -> list[Todo]:
        return list(self._todos.values())

    def count(self) -> int:
        return len(self._todos)

    def __len__(self) -> int:
        return len(self._todos)

    def __contains__(self, todo_id: object) -> bool:
        return todo_id in self._todos

    def lookup(self, todo_id: str) -> Todo | None:
        return self._todos.get(todo_id)

    def save(self, todo: Todo) -> bool:
        """
        Upsert by id and persist the whole collection.

        Existing id -> replaced in place; new id -> appended.
        Returns False (with the in-memory change undone) if the write fails.
        """
        previous = self._todos.get(todo.id)
        self._todos[todo.id] = todo

        if self._write_file():
            logger.debug("Todo saved id=%s replaced=%s", todo.id, previous is not None)
            return True

        if previous is None:
            del self._todos[todo.id]
        else:
            self._todos[todo.id] = previous
        return False

    def remove(self, todo_id: str) -> bool:
        """
        Remove by id and persist. Unknown id -> False, file untouched.
        """
        if todo_id not in self._todos:
            return False

        snapshot = dict(self._todos)
        del self._todos[todo_id]

        if self._write_file():
            logger.debug("Todo removed id=%s", todo_id)
            return True

        # dict order matters (display order), so restore the whole snapshot
        self._todos = snapshot
        return False
