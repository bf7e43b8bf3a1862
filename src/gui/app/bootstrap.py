"""Wires up the services the users table window runs on.

``create_app`` builds a fresh event bus, a logging capture attached to the
root logger and the uncaught-exception hooks, registers all three in the
service locator and hands back an ``AppContext``. Services left over from an
earlier call are detached first, so tests may bootstrap repeatedly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import sys
import time
from typing import Any, Optional

from gui.services.error_handling_service import ErrorHandlingService
from gui.services.event_bus import EventBus, GUIEvent
from gui.services.logging_service import LoggingService
from gui.services.service_locator import ServiceLocator, services

try:
    from PyQt6.QtWidgets import QApplication  # type: ignore

    _QT_AVAILABLE = True
except ImportError:  # pragma: no cover
    QApplication = None  # type: ignore
    _QT_AVAILABLE = False

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    qt_app: Optional[Any]
    headless: bool
    services: ServiceLocator
    event_bus: EventBus
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


def _retire_previous(registry: ServiceLocator) -> None:
    old_logging = registry.try_get("logging_service")
    if isinstance(old_logging, LoggingService):
        old_logging.detach_root()
    old_errors = registry.try_get("error_service")
    if isinstance(old_errors, ErrorHandlingService):
        old_errors.uninstall()


def create_app(
    *,
    headless: bool | None = None,
    install_hooks: bool = True,
    locator: ServiceLocator | None = None,
) -> AppContext:
    t0 = time.perf_counter()
    registry = locator if locator is not None else services
    if headless is None:
        headless = not _QT_AVAILABLE
    qt_app = None
    if _QT_AVAILABLE and not headless:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    _retire_previous(registry)
    bus = EventBus()
    log_capture = LoggingService(event_bus=bus)
    log_capture.attach_root()
    error_hooks = ErrorHandlingService(event_bus=bus)
    if install_hooks:
        error_hooks.install()
    for key, service in (
        ("event_bus", bus),
        ("logging_service", log_capture),
        ("error_service", error_hooks),
    ):
        registry.register(key, service, allow_override=True)

    elapsed = time.perf_counter() - t0
    bus.publish(GUIEvent.STARTUP_COMPLETE, {"headless": headless})
    logger.info("Users table services ready in %.3fs (headless=%s)", elapsed, headless)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        services=registry,
        event_bus=bus,
        duration_s=elapsed,
        metadata={"qt_available": _QT_AVAILABLE},
    )
