"""ViewModel for the users table.

Owns the explicit table state (fetched collection, display phase, sort
config) and derives the rows a view should draw. Every mutation publishes a
``TableSnapshot`` on the EventBus so any number of views can redraw from
the same source without holding their own copies.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import List, Optional, Sequence

from config import settings
from domain.models import UserRecord
from gui.services.event_bus import EventBus, GUIEvent
from gui.services.sorting import SortConfig, SortField, sort_users

__all__ = [
    "DisplayState",
    "RowKind",
    "DisplayRow",
    "TableSnapshot",
    "UserTableViewModel",
]

logger = logging.getLogger(__name__)


class DisplayState(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"
    FAILED = "failed"


class RowKind(str, Enum):
    PLACEHOLDER = "placeholder"
    DATA = "data"
    EMPTY = "empty"


@dataclass(frozen=True)
class DisplayRow:
    kind: RowKind
    index: int
    user: Optional[UserRecord] = None

    @property
    def stripe(self) -> str:
        return "even" if self.index % 2 == 0 else "odd"


@dataclass(frozen=True)
class TableSnapshot:
    display_state: DisplayState
    sort_config: SortConfig
    rows: List[DisplayRow] = field(default_factory=list)

    @property
    def data_rows(self) -> List[DisplayRow]:
        return [r for r in self.rows if r.kind is RowKind.DATA]

    @property
    def is_loading(self) -> bool:
        return self.display_state is DisplayState.LOADING


class UserTableViewModel:
    """Controller for the users table state.

    Starts in ``LOADING`` with an empty collection and an unset sort; the
    owner calls ``set_users`` or ``set_failed`` once the fetch resolves.
    """

    def __init__(
        self,
        event_bus: EventBus | None = None,
        *,
        placeholder_rows: int = settings.PLACEHOLDER_ROWS,
    ):
        self.event_bus = event_bus or EventBus()
        self._placeholder_rows = max(1, placeholder_rows)
        self._users: List[UserRecord] = []
        self._display_state = DisplayState.LOADING
        self._sort_config = SortConfig()
        self._failure: str | None = None

    # State accessors ----------------------------------------------------
    @property
    def display_state(self) -> DisplayState:
        return self._display_state

    @property
    def sort_config(self) -> SortConfig:
        return self._sort_config

    @property
    def failure(self) -> str | None:
        return self._failure

    def users(self) -> List[UserRecord]:
        """Arrival-order copy of the fetched collection."""
        return list(self._users)

    def sorted_users(self) -> List[UserRecord]:
        return sort_users(self._users, self._sort_config)

    # Mutations -------------------------------------------------------------
    def begin_loading(self) -> None:
        self._users = []
        self._failure = None
        self._display_state = DisplayState.LOADING
        self.event_bus.publish(GUIEvent.FETCH_STARTED)
        self._publish_state()

    def set_users(self, users: Sequence[UserRecord]) -> None:
        self._users = list(users)
        self._failure = None
        self._display_state = DisplayState.LOADED if self._users else DisplayState.EMPTY
        self.event_bus.publish(GUIEvent.USERS_LOADED, len(self._users))
        self._publish_state()

    def set_failed(self, message: str) -> None:
        self._users = []
        self._failure = message
        self._display_state = DisplayState.FAILED
        self.event_bus.publish(GUIEvent.FETCH_FAILED, message)
        self._publish_state()

    def activate_sort(self, sort_field: SortField) -> SortConfig:
        self._sort_config = self._sort_config.toggled(sort_field)
        logger.debug(
            "Sort changed to %s/%s", self._sort_config.field.value, self._sort_config.direction.value
        )
        self.event_bus.publish(GUIEvent.SORT_CHANGED, self._sort_config)
        self._publish_state()
        return self._sort_config

    # Derived view ----------------------------------------------------------
    def rows(self) -> List[DisplayRow]:
        if self._display_state is DisplayState.LOADING:
            return [DisplayRow(RowKind.PLACEHOLDER, i) for i in range(self._placeholder_rows)]
        if not self._users:
            return [DisplayRow(RowKind.EMPTY, 0)]
        return [DisplayRow(RowKind.DATA, i, u) for i, u in enumerate(self.sorted_users())]

    def snapshot(self) -> TableSnapshot:
        return TableSnapshot(
            display_state=self._display_state,
            sort_config=self._sort_config,
            rows=self.rows(),
        )

    def _publish_state(self) -> None:
        self.event_bus.publish(GUIEvent.STATE_CHANGED, self.snapshot())
