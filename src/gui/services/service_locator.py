"""Process-wide registry for the services built by ``gui.app.bootstrap``.

Keys in use: ``event_bus``, ``logging_service`` and ``error_service``.
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Dict, Type, TypeVar

T = TypeVar("T")

__all__ = ["ServiceLocator", "services", "ServiceAlreadyRegisteredError", "ServiceNotFoundError"]


class ServiceAlreadyRegisteredError(RuntimeError):
    pass


class ServiceNotFoundError(KeyError):
    pass


class ServiceLocator:
    def __init__(self) -> None:
        self._lock = RLock()
        self._entries: Dict[str, Any] = {}

    def register(self, key: str, value: Any, *, allow_override: bool = False) -> None:
        with self._lock:
            if not allow_override and key in self._entries:
                raise ServiceAlreadyRegisteredError(key)
            self._entries[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            try:
                return self._entries[key]
            except KeyError:
                raise ServiceNotFoundError(key) from None

    def get_typed(self, key: str, expected_type: Type[T]) -> T:
        value = self.get(key)
        if isinstance(value, expected_type):
            return value
        raise TypeError(f"{key!r} is a {type(value).__name__}, not {expected_type.__name__}")

    def try_get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._entries.get(key, default)


services = ServiceLocator()
