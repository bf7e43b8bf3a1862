"""Last-resort capture of exceptions that escape a Qt slot or a thread.

Fetch failures never get here; the worker turns them into an error string.
What does arrive is logged with its traceback, kept in a short history and
announced as ``GUIEvent.UNCAUGHT_EXCEPTION``.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import sys
import threading
import traceback
from typing import Any, Deque, List, Optional

from .event_bus import EventBus, GUIEvent

__all__ = ["ErrorRecord", "ErrorHandlingService"]


@dataclass(frozen=True)
class ErrorRecord:
    exc_type: type
    exc_value: BaseException
    traceback_str: str
    iso_time: str
    thread_name: str

    def summary(self) -> str:
        return f"{self.exc_type.__name__}: {self.exc_value}"


class ErrorHandlingService:
    def __init__(
        self,
        *,
        capacity: int = 20,
        logger: logging.Logger | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._history: Deque[ErrorRecord] = deque(maxlen=max(1, capacity))
        self._log = logger or logging.getLogger(__name__)
        self._bus = event_bus
        self._saved_hooks: Optional[tuple[Any, Any]] = None

    @property
    def installed(self) -> bool:
        return self._saved_hooks is not None

    def install(self) -> None:
        if self.installed:
            return
        self._saved_hooks = (sys.excepthook, threading.excepthook)
        sys.excepthook = self._on_main_thread_error
        threading.excepthook = self._on_thread_error

    def uninstall(self) -> None:
        if self._saved_hooks is None:
            return
        sys.excepthook, threading.excepthook = self._saved_hooks
        self._saved_hooks = None

    def _on_main_thread_error(self, exc_type, exc_value, tb) -> None:  # pragma: no cover
        self.handle_exception(exc_type, exc_value, tb)

    def _on_thread_error(self, args) -> None:  # pragma: no cover
        self.handle_exception(args.exc_type, args.exc_value, args.exc_traceback, thread=args.thread)

    def handle_exception(
        self, exc_type, exc_value, tb, *, thread: Optional[threading.Thread] = None
    ) -> ErrorRecord:
        record = ErrorRecord(
            exc_type=exc_type,
            exc_value=exc_value,
            traceback_str="".join(traceback.format_exception(exc_type, exc_value, tb)),
            iso_time=datetime.now(timezone.utc).isoformat(),
            thread_name=(thread or threading.current_thread()).name,
        )
        self._history.append(record)
        self._log.error(
            "Uncaught exception in %s: %s",
            record.thread_name,
            record.summary(),
            exc_info=(exc_type, exc_value, tb),
        )
        if self._bus is not None:
            self._bus.publish(
                GUIEvent.UNCAUGHT_EXCEPTION,
                {
                    "type": exc_type.__name__,
                    "message": str(exc_value),
                    "thread": record.thread_name,
                },
            )
        return record

    def recent_errors(self) -> List[ErrorRecord]:
        return list(self._history)

    def clear(self) -> None:
        self._history.clear()
