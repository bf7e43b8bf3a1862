"""Synchronous publish/subscribe hub for the users table.

The viewmodel publishes lifecycle and ``STATE_CHANGED`` events here; the view
subscribes to redraw. Handlers run on the publishing thread, outside the
lock, and an exception in one handler is recorded in ``errors`` without
stopping delivery to the rest.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Callable, Dict, List, Tuple

__all__ = ["GUIEvent", "Event", "EventBus", "Subscription"]


class GUIEvent(str, Enum):
    STARTUP_COMPLETE = "startup_complete"
    FETCH_STARTED = "fetch_started"
    USERS_LOADED = "users_loaded"
    FETCH_FAILED = "fetch_failed"
    SORT_CHANGED = "sort_changed"
    STATE_CHANGED = "state_changed"
    LOG_RECORD_ADDED = "log_record_added"
    UNCAUGHT_EXCEPTION = "uncaught_exception"


@dataclass(frozen=True)
class Event:
    name: str
    payload: Any
    timestamp: float


@dataclass
class Subscription:
    event: str
    handler: Callable[[Event], None]
    once: bool = False
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _event_key(name: str | GUIEvent) -> str:
    return name.value if isinstance(name, GUIEvent) else name


class EventBus:
    def __init__(self) -> None:
        self._lock = RLock()
        self._handlers: Dict[str, List[Subscription]] = {}
        self._errors: List[Tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | GUIEvent, handler: Callable[[Event], None], *, once: bool = False
    ) -> Subscription:
        sub = Subscription(_event_key(name), handler, once)
        with self._lock:
            self._handlers.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        sub.cancel()
        with self._lock:
            remaining = [s for s in self._handlers.get(sub.event, []) if s is not sub]
            if remaining:
                self._handlers[sub.event] = remaining
            else:
                self._handlers.pop(sub.event, None)

    def clear(self) -> None:
        with self._lock:
            self._handlers.clear()
            self._errors.clear()

    def publish(self, name: str | GUIEvent, payload: Any = None) -> Event:
        event = Event(_event_key(name), payload, perf_counter())
        with self._lock:
            targets = list(self._handlers.get(event.name, []))
        for sub in targets:
            if not sub.active:
                continue
            if sub.once:
                self.unsubscribe(sub)
            try:
                sub.handler(event)
            except Exception as exc:  # noqa: BLE001
                with self._lock:
                    self._errors.append((event, exc))
        return event

    @property
    def errors(self) -> List[Tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
