"""Qt-free services behind the users table: event bus, locator, logging,
error hooks, sorting and HTML rendering."""

from .event_bus import Event, EventBus, GUIEvent
from .service_locator import ServiceLocator, services

__all__ = ["Event", "EventBus", "GUIEvent", "ServiceLocator", "services"]
