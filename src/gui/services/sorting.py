"""Single-key sorting for the users table.

Holds the sort state machine (``SortConfig.toggled``) and the comparator
used to derive display order. Sorting always works on a copy; the arrival
order of the fetched collection is never changed.

Text columns compare through ``QCollator`` pinned to ``en_US``, the same
ordering a browser's ``localeCompare`` gives: letters such as ``Ł`` or ``Ø``
sort next to their base letter, accents and case only break ties, and
lowercase comes first (``"alice" < "Bob"``, ``"bob" < "Bob"``).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key, lru_cache
from typing import Any, Callable, Dict, Iterable, List
from PyQt6.QtCore import QCollator, QLocale, Qt

from domain.models import UserRecord

__all__ = [
    "SortField",
    "SortDirection",
    "SortConfig",
    "COLLATION_LOCALE",
    "collation_key",
    "sort_users",
]

COLLATION_LOCALE = "en_US"


class SortField(str, Enum):
    NONE = "none"
    ID = "id"
    NAME = "name"
    COMPANY = "company"


class SortDirection(str, Enum):
    NONE = "none"
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortConfig:
    field: SortField = SortField.NONE
    direction: SortDirection = SortDirection.NONE

    def toggled(self, field: SortField) -> "SortConfig":
        """Return the config produced by activating ``field``'s header.

        Re-activating the current ascending field flips it to descending;
        anything else (including a different field) starts ascending.
        """
        if self.field == field and self.direction == SortDirection.ASC:
            return SortConfig(field, SortDirection.DESC)
        return SortConfig(field, SortDirection.ASC)

    @property
    def is_active(self) -> bool:
        return self.field != SortField.NONE

    def indicator_for(self, field: SortField) -> str:
        if self.field != field or not self.is_active:
            return ""
        return "▲" if self.direction == SortDirection.ASC else "▼"


@lru_cache(maxsize=1)
def _collator() -> QCollator:
    collator = QCollator(QLocale(COLLATION_LOCALE))
    collator.setCaseSensitivity(Qt.CaseSensitivity.CaseSensitive)
    collator.setNumericMode(False)
    return collator


def collation_key(text: str) -> Any:
    """Orderable key for ``text`` under the table's collation."""
    return cmp_to_key(_collator().compare)(text)


_FIELD_KEYS: Dict[SortField, Callable[[UserRecord], object]] = {
    SortField.ID: lambda u: u.id,
    SortField.NAME: lambda u: collation_key(u.name),
    SortField.COMPANY: lambda u: collation_key(u.company.name),
}


def sort_users(users: Iterable[UserRecord], config: SortConfig) -> List[UserRecord]:
    """Return ``users`` ordered according to ``config`` as a new list.

    ``sorted`` is stable for ``reverse=True`` as well, so ties keep their
    arrival order in both directions.
    """
    rows = list(users)
    key_func = _FIELD_KEYS.get(config.field)
    if key_func is None or config.direction == SortDirection.NONE:
        return rows
    return sorted(rows, key=key_func, reverse=config.direction == SortDirection.DESC)
