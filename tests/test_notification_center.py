# tests/test_notification_center.py

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from todo_app.reminders.notification_center import (
    DELIVERED_HISTORY,
    LocalNotificationCenter,
    run_notification_loop,
)
from todo_app.reminders.reminder_models import NotificationResponse
from todo_app.reminders.reminder_scheduler import build_request
from todo_app.todos.todo_api import handle_notification_response, save_todo

from .fakes import RecordingPresenter


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_add_replaces_same_identifier(make_todo, tomorrow: datetime) -> None:
    center = LocalNotificationCenter(authorized=True)
    center.add(build_request(make_todo("1", due=tomorrow)))
    center.add(build_request(make_todo("1", due=tomorrow + timedelta(hours=1))))

    pending = center.pending_requests()
    assert len(pending) == 1
    assert pending[0].fire_at == tomorrow + timedelta(hours=1)


def test_add_reports_errors_through_completion(make_todo) -> None:
    center = LocalNotificationCenter()
    errors: list[Exception | None] = []

    center.add(build_request(make_todo("1")), errors.append)

    assert len(errors) == 1 and errors[0] is not None
    assert "not authorized" in str(errors[0])


def test_due_later_in_current_minute_is_scheduled_for_next_tick(make_todo) -> None:
    clock = FakeClock(datetime(2030, 1, 1, 12, 30, 10, tzinfo=timezone.utc))
    center = LocalNotificationCenter(authorized=True, clock=clock)
    errors: list[Exception | None] = []

    center.add(build_request(make_todo("1", due=clock.now + timedelta(seconds=35))), errors.append)

    assert errors == [None]
    assert [r.identifier for r in center.pending_requests()] == ["1"]
    assert [r.identifier for r in center.pop_due()] == ["1"]


def test_due_earlier_in_current_minute_is_refused(make_todo) -> None:
    clock = FakeClock(datetime(2030, 1, 1, 12, 30, 40, tzinfo=timezone.utc))
    center = LocalNotificationCenter(authorized=True, clock=clock)
    errors: list[Exception | None] = []

    center.add(build_request(make_todo("1", due=clock.now - timedelta(seconds=20))), errors.append)

    assert len(errors) == 1 and "in the past" in str(errors[0])
    assert center.pending_requests() == []


def test_pop_due_returns_oldest_first(make_todo, tomorrow: datetime) -> None:
    clock = FakeClock(tomorrow - timedelta(hours=1))
    center = LocalNotificationCenter(authorized=True, clock=clock)
    center.add(build_request(make_todo("late", due=tomorrow + timedelta(minutes=5))))
    center.add(build_request(make_todo("early", due=tomorrow)))
    center.add(build_request(make_todo("later", due=tomorrow + timedelta(days=1))))

    assert center.pop_due() == []

    clock.now = tomorrow + timedelta(minutes=10)
    due = center.pop_due()
    assert [r.identifier for r in due] == ["early", "late"]
    assert [r.identifier for r in center.pending_requests()] == ["later"]


@pytest.mark.asyncio
async def test_loop_delivers_due_reminder_once(make_todo, tomorrow: datetime) -> None:
    clock = FakeClock(tomorrow - timedelta(minutes=1))
    center = LocalNotificationCenter(authorized=True, clock=clock)
    center.add(build_request(make_todo("1", "Buy milk", due=tomorrow)))
    clock.now = tomorrow + timedelta(seconds=1)

    presenter = RecordingPresenter()
    responses: list[NotificationResponse] = []

    runner = asyncio.create_task(
        run_notification_loop(center, presenter, on_response=responses.append, interval_seconds=0.01)
    )
    await asyncio.sleep(0.05)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert [r.identifier for r in presenter.delivered] == ["1"]
    assert [r.identifier for r in responses] == ["1"]
    assert center.badge_count == 1
    assert center.pending_requests() == []


@pytest.mark.asyncio
async def test_failed_delivery_does_not_stop_loop(make_todo, tomorrow: datetime) -> None:
    clock = FakeClock(tomorrow - timedelta(minutes=1))
    center = LocalNotificationCenter(authorized=True, clock=clock)
    center.add(build_request(make_todo("a", due=tomorrow)))
    center.add(build_request(make_todo("b", due=tomorrow + timedelta(seconds=30))))
    clock.now = tomorrow + timedelta(minutes=1)

    presenter = RecordingPresenter(fail_deliveries=1)
    stop = asyncio.Event()
    runner = asyncio.create_task(
        run_notification_loop(center, presenter, interval_seconds=0.01, stop_event=stop)
    )
    await asyncio.sleep(0.05)
    stop.set()
    await asyncio.wait_for(runner, timeout=1.0)

    assert [r.identifier for r in presenter.delivered] == ["b"]
    assert [r.identifier for r in center.delivered] == ["b"]


def test_response_dispatch_shows_record_and_clears_badge(state, presenter, make_todo) -> None:
    todo = make_todo("1")
    save_todo(state, todo)
    state.notifications.badge_count = 3

    resolved = handle_notification_response(state, NotificationResponse(identifier="1"))

    assert resolved == todo
    assert presenter.shown == [todo]
    assert state.notifications.badge_count == 0


def test_response_for_unknown_record_is_noop(state, presenter) -> None:
    assert handle_notification_response(state, NotificationResponse(identifier="gone")) is None
    assert presenter.shown == []
    assert state.notifications.badge_count == 0


def test_response_for_unknown_record_keeps_badge(state) -> None:
    state.notifications.badge_count = 3

    handle_notification_response(state, NotificationResponse(identifier="gone"))

    assert state.notifications.badge_count == 3


def test_delivered_history_is_capped(make_todo, tomorrow: datetime) -> None:
    center = LocalNotificationCenter(authorized=True)
    for i in range(DELIVERED_HISTORY + 5):
        center.mark_delivered(build_request(make_todo(str(i), due=tomorrow)))

    assert len(center.delivered) == DELIVERED_HISTORY
    assert center.delivered[0].identifier == "5"
    assert center.badge_count == DELIVERED_HISTORY + 5
