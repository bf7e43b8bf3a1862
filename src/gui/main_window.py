"""Main window hosting the users table and its toast overlay."""

from __future__ import annotations
from PyQt6.QtWidgets import QMainWindow, QVBoxLayout, QWidget
from typing import Callable, List, Optional
import logging

from config import settings
from domain.models import UserRecord
from gui.components.toast_host import ToastHost, ToastManager
from gui.services.event_bus import EventBus
from gui.viewmodels.user_table_viewmodel import UserTableViewModel
from gui.views.user_table_view import UserTableView
from gui.workers import UsersLoadWorker

logger = logging.getLogger(__name__)

TOAST_WIDTH = 320
TOAST_MARGIN = 16


class MainWindow(QMainWindow):
    def __init__(
        self,
        event_bus: EventBus | None = None,
        *,
        worker_factory: Optional[Callable[[], UsersLoadWorker]] = None,
        disable_toast_timers: bool = False,
        pulse: bool = True,
    ):
        super().__init__()
        self.setWindowTitle(settings.WINDOW_TITLE)
        self.viewmodel = UserTableViewModel(event_bus)
        self._worker_factory = worker_factory or UsersLoadWorker
        self.worker: UsersLoadWorker | None = None
        self._load_started = False
        self._build_ui(disable_toast_timers, pulse)

    def _build_ui(self, disable_toast_timers: bool, pulse: bool):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        self.table_view = UserTableView(self.viewmodel, pulse=pulse)
        layout.addWidget(self.table_view)
        # Overlay: parented to the central widget, positioned in resizeEvent
        self.toast_host = ToastHost(central)
        self.toast_host.setFixedWidth(TOAST_WIDTH)
        self.toasts = ToastManager(self.toast_host, auto_dismiss=not disable_toast_timers)
        self.resize(1100, 600)

    def resizeEvent(self, event):  # type: ignore[override]
        super().resizeEvent(event)
        central = self.centralWidget()
        if central is not None:
            self.toast_host.setGeometry(
                central.width() - TOAST_WIDTH - TOAST_MARGIN,
                TOAST_MARGIN,
                TOAST_WIDTH,
                max(0, central.height() - 2 * TOAST_MARGIN),
            )
            self.toast_host.raise_()

    def showEvent(self, event):  # type: ignore[override]
        super().showEvent(event)
        self.start_loading()

    # Loading --------------------------------------------------------------
    def start_loading(self) -> bool:
        """Start the one-and-only users fetch; later calls are ignored."""
        if self._load_started:
            return False
        self._load_started = True
        self.viewmodel.begin_loading()
        self.worker = self._worker_factory()
        self.worker.finished.connect(self._on_users_loaded)
        self.worker.start()
        return True

    def _on_users_loaded(self, users: List[UserRecord], error: str):
        if error:
            logger.warning("Users load failed: %s", error)
            self.viewmodel.set_failed(error)
            self.toasts.show_error(settings.FETCH_ERROR_MESSAGE)
            return
        self.viewmodel.set_users(users)

    @property
    def load_started(self) -> bool:
        return self._load_started
