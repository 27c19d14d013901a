# src/todo_app/todos/todo_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..errors import TodoValidationError


def ensure_aware(dt: datetime) -> datetime:
    """Naive datetimes are taken as local time."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.astimezone()
    return dt


def parse_due(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return ensure_aware(raw)
    if not isinstance(raw, str) or not raw.strip():
        raise TodoValidationError(f"due must be an ISO-8601 string, got {raw!r}")
    try:
        return ensure_aware(datetime.fromisoformat(raw.strip()))
    except ValueError as e:
        raise TodoValidationError(f"invalid due timestamp: {raw!r}") from e


@dataclass(frozen=True, slots=True)
class Todo:
    """
    A single to-do record.

    JSON form (one element of the on-disk array):
        {"title": str, "due": ISO-8601, "memo": str | null,
         "shouldNotify": bool, "id": str}
    """

    id: str
    title: str
    due: datetime
    memo: str | None = None
    should_notify: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise TodoValidationError("id is required")
        if not isinstance(self.title, str):
            raise TodoValidationError("title must be a string")
        if not isinstance(self.due, datetime):
            raise TodoValidationError("due must be a datetime")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "due", ensure_aware(self.due))

    @classmethod
    def new(
        cls,
        title: str,
        due: datetime,
        *,
        memo: str | None = None,
        should_notify: bool = False,
    ) -> Todo:
        return cls(
            id=uuid.uuid4().hex,
            title=title,
            due=due,
            memo=memo,
            should_notify=should_notify,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "due": self.due.isoformat(),
            "memo": self.memo,
            "shouldNotify": self.should_notify,
            "id": self.id,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Todo:
        if not isinstance(data, dict):
            raise TodoValidationError(f"todo entry must be an object, got {type(data).__name__}")

        for key in ("id", "title", "due", "shouldNotify"):
            if key not in data:
                raise TodoValidationError(f"todo entry is missing {key!r}")

        memo = data.get("memo")
        if memo is not None and not isinstance(memo, str):
            raise TodoValidationError("memo must be a string or null")

        should_notify = data["shouldNotify"]
        if not isinstance(should_notify, bool):
            raise TodoValidationError("shouldNotify must be a boolean")

        return cls(
            id=data["id"],
            title=data["title"],
            due=parse_due(data["due"]),
            memo=memo,
            should_notify=should_notify,
        )
