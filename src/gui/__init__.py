"""Users table desktop GUI.

Importing the package does not create a QApplication; ``gui.launcher.main``
(or ``python -m gui``) does.
"""

from __future__ import annotations

from .services import Event, EventBus, GUIEvent, ServiceLocator, services

__all__ = ["Event", "EventBus", "GUIEvent", "ServiceLocator", "services"]
