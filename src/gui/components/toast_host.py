"""Error toast overlay.

``ToastHost`` is a transparent column pinned to the main window's corner;
``ToastManager`` puts short error messages into it and removes each one after
``settings.TOAST_TIMEOUT_MS`` (or when its close button is pressed). Hovering
a toast freezes its countdown until the pointer leaves.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Dict, List, Optional
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget
from PyQt6.QtCore import Qt, QTimer

from config import settings

__all__ = ["ToastHost", "ToastManager", "ToastWidget"]

logger = logging.getLogger(__name__)


class ToastWidget(QFrame):
    """One error message with a close button."""

    def __init__(
        self,
        message: str,
        on_close: Callable[[], None],
        on_hover: Callable[[bool], None],
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._on_hover = on_hover
        self.setObjectName("errorToast")
        self.setProperty("severity", "error")
        row = QHBoxLayout(self)
        row.setContentsMargins(12, 8, 12, 8)
        self.label = QLabel(message)
        self.label.setWordWrap(True)
        row.addWidget(self.label, 1)
        close = QPushButton("✕")
        close.setObjectName("toastClose")
        close.setFixedSize(20, 20)
        close.clicked.connect(lambda _checked=False: on_close())  # type: ignore
        row.addWidget(close, alignment=Qt.AlignmentFlag.AlignTop)

    @property
    def message(self) -> str:
        return self.label.text()

    def enterEvent(self, event):  # type: ignore[override]
        self._on_hover(True)
        super().enterEvent(event)

    def leaveEvent(self, event):  # type: ignore[override]
        self._on_hover(False)
        super().leaveEvent(event)


class ToastHost(QWidget):
    """Column of toasts; the newest sits at the bottom."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("toastHost")
        column = QVBoxLayout(self)
        column.setContentsMargins(0, 0, 0, 0)
        column.setSpacing(8)
        column.setAlignment(Qt.AlignmentFlag.AlignTop)

    def add(self, toast: ToastWidget) -> None:
        self.layout().addWidget(toast)

    def remove(self, toast: ToastWidget) -> None:
        self.layout().removeWidget(toast)
        toast.setParent(None)
        toast.deleteLater()

    def toasts(self) -> List[ToastWidget]:
        layout = self.layout()
        found = (layout.itemAt(i).widget() for i in range(layout.count()))
        return [w for w in found if isinstance(w, ToastWidget)]


@dataclass
class _Shown:
    widget: ToastWidget
    timer: Optional[QTimer]
    remaining_ms: int


class ToastManager:
    def __init__(
        self,
        host: ToastHost,
        *,
        timeout_ms: int = settings.TOAST_TIMEOUT_MS,
        auto_dismiss: bool = True,
    ) -> None:
        self._host = host
        self._timeout_ms = timeout_ms
        self._auto_dismiss = auto_dismiss
        self._shown: Dict[int, _Shown] = {}
        self._last_id = 0

    def show_error(self, message: str) -> int:
        self._last_id += 1
        toast_id = self._last_id
        widget = ToastWidget(
            message,
            on_close=lambda: self.dismiss(toast_id),
            on_hover=lambda inside: self._set_paused(toast_id, inside),
            parent=self._host,
        )
        self._host.add(widget)
        timer = None
        if self._auto_dismiss and self._timeout_ms > 0:
            timer = QTimer(widget)
            timer.setSingleShot(True)
            timer.timeout.connect(lambda: self.dismiss(toast_id))  # type: ignore
            timer.start(self._timeout_ms)
        self._shown[toast_id] = _Shown(widget, timer, self._timeout_ms)
        logger.debug("Error toast %d shown: %s", toast_id, message)
        return toast_id

    def dismiss(self, toast_id: int) -> bool:
        shown = self._shown.pop(toast_id, None)
        if shown is None:
            return False
        if shown.timer is not None:
            shown.timer.stop()
        self._host.remove(shown.widget)
        return True

    def clear(self) -> None:
        for toast_id in list(self._shown):
            self.dismiss(toast_id)

    def toast_ids(self) -> List[int]:
        return sorted(self._shown)

    def messages(self) -> List[str]:
        return [self._shown[i].widget.message for i in self.toast_ids()]

    def is_counting_down(self, toast_id: int) -> bool:
        shown = self._shown.get(toast_id)
        return bool(shown and shown.timer and shown.timer.isActive())

    def _set_paused(self, toast_id: int, paused: bool) -> None:
        shown = self._shown.get(toast_id)
        if shown is None or shown.timer is None:
            return
        if paused and shown.timer.isActive():
            shown.remaining_ms = max(0, shown.timer.remainingTime())
            shown.timer.stop()
        elif not paused and not shown.timer.isActive():
            # resume with at least 250 ms left
            shown.timer.start(max(250, shown.remaining_ms))
