# src/todo_app/reminders/reminder_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import StrEnum


class AuthorizationOption(StrEnum):
    ALERT = "alert"
    SOUND = "sound"
    BADGE = "badge"


DEFAULT_SOUND = "default"


@dataclass(slots=True, frozen=True)
class CalendarTrigger:
    """
    One-shot trigger matching a wall-clock minute.

    Only year/month/day/hour/minute take part; seconds are dropped, so a
    reminder fires at the start of the due minute.
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int
    tz: tzinfo | None = None
    repeats: bool = False

    @classmethod
    def matching(cls, when: datetime, *, repeats: bool = False) -> CalendarTrigger:
        return cls(
            year=when.year,
            month=when.month,
            day=when.day,
            hour=when.hour,
            minute=when.minute,
            tz=when.tzinfo,
            repeats=repeats,
        )

    def fire_date(self) -> datetime:
        return datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            tzinfo=self.tz,
        )


@dataclass(slots=True, frozen=True)
class NotificationContent:
    title: str
    body: str
    sound: str | None = DEFAULT_SOUND
    badge: int | None = 1


@dataclass(slots=True, frozen=True)
class NotificationRequest:
    """What gets registered with the notification center, keyed by identifier."""

    identifier: str
    content: NotificationContent
    trigger: CalendarTrigger
    # Exact due time; the trigger only keeps the minute.
    due: datetime | None = None

    @property
    def fire_at(self) -> datetime:
        return self.trigger.fire_date()


@dataclass(slots=True, frozen=True)
class NotificationResponse:
    """
    Event emitted when the user acts on a delivered notification.

    Passed from the notification subsystem into the app's dispatch point
    (todo_api.handle_notification_response).
    """

    identifier: str
    delivered_at: datetime | None = None
