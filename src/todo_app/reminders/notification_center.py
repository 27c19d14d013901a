# src/todo_app/reminders/notification_center.py

from __future__ import annotations

"""
In-process notification center.

Stands in for the host OS notification service:
- holds pending requests keyed by identifier (adding replaces),
- hands out the ones that are due,
- keeps a delivered list and a badge count.

run_notification_loop() is the delivery side: a small polling loop that pops
due requests, shows them through the presenter and emits a
NotificationResponse for each one into the app's dispatch point.
"""

import asyncio
import contextlib
import logging
import threading
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from ..core.ports import CompletionHandler, TodoPresenter
from ..errors import NotificationError
from .reminder_models import AuthorizationOption, NotificationRequest, NotificationResponse

logger = logging.getLogger(__name__)

ResponseHandler = Callable[[NotificationResponse], object]

DELIVERED_HISTORY = 50


def _now() -> datetime:
    return datetime.now().astimezone()


class LocalNotificationCenter:
    """
    Thread-safe: the delivery loop runs on a background thread while the
    console mutates reminders from the main thread.
    """

    def __init__(self, *, authorized: bool = False, clock: Callable[[], datetime] = _now) -> None:
        self._lock = threading.Lock()
        self._pending: dict[str, NotificationRequest] = {}
        self._authorized = authorized
        self._options: frozenset[AuthorizationOption] = frozenset()
        self._clock = clock
        self.delivered: deque[NotificationRequest] = deque(maxlen=DELIVERED_HISTORY)
        self.badge_count = 0

    @property
    def authorized(self) -> bool:
        return self._authorized

    def request_authorization(self, options: Iterable[AuthorizationOption]) -> bool:
        # A local center has nobody to ask; granting is immediate.
        with self._lock:
            self._options = frozenset(options)
            self._authorized = True
        logger.info(
            "Notification authorization granted=%s options=%s",
            True,
            ",".join(sorted(o.value for o in self._options)) or "-",
        )
        return True

    def add(self, request: NotificationRequest, completion: CompletionHandler | None = None) -> None:
        error: Exception | None = None

        if not self._authorized:
            error = NotificationError("notifications are not authorized")
        elif (request.due or request.fire_at) <= self._clock():
            error = NotificationError(
                f"trigger date {(request.due or request.fire_at).isoformat()} is in the past"
            )
        else:
            # The exact due time decides; one later in the current minute has a
            # trigger minute that already started, so the next pop_due() takes it.
            with self._lock:
                self._pending[request.identifier] = request

        if completion is not None:
            try:
                completion(error)
            except Exception:
                logger.exception("Notification completion handler failed id=%s", request.identifier)
        elif error is not None:
            logger.warning("Notification not scheduled id=%s: %s", request.identifier, error)

    def remove_pending(self, identifiers: Iterable[str]) -> None:
        with self._lock:
            for identifier in identifiers:
                if self._pending.pop(identifier, None) is not None:
                    logger.debug("Pending notification removed id=%s", identifier)

    def pending_requests(self) -> list[NotificationRequest]:
        with self._lock:
            return sorted(self._pending.values(), key=lambda r: r.fire_at)

    def set_badge_count(self, count: int) -> None:
        with self._lock:
            self.badge_count = max(0, int(count))

    def pop_due(self, now: datetime | None = None) -> list[NotificationRequest]:
        """Remove and return requests whose fire time has come, oldest first."""
        now = now or self._clock()
        with self._lock:
            due = [r for r in self._pending.values() if r.fire_at <= now]
            for r in due:
                del self._pending[r.identifier]
        due.sort(key=lambda r: r.fire_at)
        return due

    def mark_delivered(self, request: NotificationRequest) -> None:
        with self._lock:
            self.delivered.append(request)
            if request.content.badge:
                self.badge_count += int(request.content.badge)


async def run_notification_loop(
        center: LocalNotificationCenter,
        presenter: TodoPresenter,
        *,
        on_response: ResponseHandler | None = None,
        interval_seconds: float = 5.0,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Simple polling delivery loop.

    Every interval_seconds:
    - pop due requests from the center
    - await presenter.deliver(request)
    - emit NotificationResponse(identifier) into on_response

    A failing delivery is logged and does not stop the loop.
    To stop, cancel the coroutine or set stop_event.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while stop_event is None or not stop_event.is_set():
        try:
            due = center.pop_due()
        except Exception:
            logger.exception("pop_due failed")
            due = []

        for request in due:
            try:
                await presenter.deliver(request)
                center.mark_delivered(request)
                logger.info("Reminder delivered id=%s", request.identifier)
            except Exception:
                logger.exception("Reminder delivery failed id=%s", request.identifier)
                continue

            if on_response is None:
                continue

            try:
                on_response(NotificationResponse(identifier=request.identifier, delivered_at=_now()))
            except Exception:
                logger.exception("Notification response handler failed id=%s", request.identifier)

        if stop_event is None:
            await asyncio.sleep(sleep_s)
        else:
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)


@dataclass
class NotificationBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal notification loop stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_notifications_in_background(
        center: LocalNotificationCenter,
        presenter: TodoPresenter,
        *,
        on_response: ResponseHandler | None = None,
        interval_seconds: float = 5.0,
) -> NotificationBackgroundRunner | None:
    """
    Start the delivery loop in a background thread with its own event loop,
    so the blocking console REPL can run in the main thread.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                run_notification_loop(
                    center,
                    presenter,
                    on_response=on_response,
                    interval_seconds=interval_seconds,
                    stop_event=stop_event,
                )
            )
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="todos-notifications", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Notification thread did not initialize properly.")
        return None

    logger.info("Notification delivery thread started (interval=%ss).", interval_seconds)
    return NotificationBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
