"""Keeps the last few hundred log records in memory.

Attached to the root logger at bootstrap. Every captured record is also
published as ``GUIEvent.LOG_RECORD_ADDED``, which can happen on the
``UsersLoadWorker`` thread.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import Lock
from typing import Deque, List, Optional

from .event_bus import EventBus, GUIEvent

__all__ = ["LogEntry", "LoggingService"]

MESSAGE_PREVIEW_CHARS = 120


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _CaptureHandler(logging.Handler):
    def __init__(self, sink: "LoggingService") -> None:
        super().__init__(logging.DEBUG)
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._sink.capture(record)
        except Exception:  # noqa: BLE001
            self.handleError(record)


class LoggingService:
    def __init__(self, capacity: int = 500, *, event_bus: EventBus | None = None) -> None:
        self._buffer: Deque[LogEntry] = deque(maxlen=max(1, capacity))
        self._buffer_lock = Lock()
        self._bus = event_bus
        self._handler = _CaptureHandler(self)

    @property
    def attached(self) -> bool:
        return self._handler in logging.getLogger().handlers

    def attach_root(self, level: int = logging.INFO) -> None:
        """Start capturing; lowers the root level to ``level`` when it is higher."""
        root = logging.getLogger()
        if self.attached:
            return
        root.addHandler(self._handler)
        if root.level == logging.NOTSET or root.level > level:
            root.setLevel(level)

    def detach_root(self) -> None:
        logging.getLogger().removeHandler(self._handler)

    def capture(self, record: logging.LogRecord) -> LogEntry:
        entry = LogEntry(record.levelname, record.name, record.getMessage(), record.created)
        with self._buffer_lock:
            self._buffer.append(entry)
        if self._bus is not None:
            self._bus.publish(
                GUIEvent.LOG_RECORD_ADDED,
                {
                    "level": entry.level,
                    "name": entry.name,
                    "message": entry.message[:MESSAGE_PREVIEW_CHARS],
                },
            )
        return entry

    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        """Oldest-first copy of the buffer, trimmed to the newest ``limit`` entries."""
        with self._buffer_lock:
            entries = list(self._buffer)
        if limit is None:
            return entries
        if limit <= 0:
            return []
        return entries[-limit:]

    def clear(self) -> None:
        with self._buffer_lock:
            self._buffer.clear()
