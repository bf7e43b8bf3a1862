"""Background worker threads used by the GUI."""

from __future__ import annotations
from PyQt6.QtCore import QThread, pyqtSignal
from typing import Callable, List, Optional
import logging

from config import settings
from domain.models import UserRecord
from services.user_fetcher import FetchFailure, fetch_users

logger = logging.getLogger(__name__)


class UsersLoadWorker(QThread):
    """Fetch the users collection off the UI thread.

    Emits ``finished(users, error)``; ``error`` is an empty string on success
    and ``users`` is empty on failure. ``run`` never raises.
    """

    finished = pyqtSignal(list, str)  # users, error

    def __init__(
        self,
        url: str | None = None,
        *,
        fetcher: Optional[Callable[[str], List[UserRecord]]] = None,
    ):
        super().__init__()
        self.url = url or settings.USERS_URL
        self._fetcher = fetcher or fetch_users

    def run(self) -> None:  # type: ignore[override]
        try:
            users = self._fetcher(self.url)
        except FetchFailure as e:
            self.finished.emit([], str(e) or "fetch failed")
            return
        except Exception as e:  # noqa: BLE001 - nothing may escape the thread
            logger.exception("Unexpected error while loading users")
            self.finished.emit([], f"Unexpected error: {e}")
            return
        self.finished.emit(list(users), "")
