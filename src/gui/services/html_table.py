"""HTML rendering of the users table.

Pure function over a ``TableSnapshot`` so it can be exercised without Qt.
Produces the same structure the widget shows: a header row with sort
indicators followed by placeholder, data or empty-state rows.
"""

from __future__ import annotations
from html import escape
from typing import List, Sequence, Tuple

from config import settings
from gui.services.sorting import SortConfig, SortField
from gui.viewmodels.user_table_viewmodel import DisplayRow, RowKind, TableSnapshot

__all__ = ["COLUMNS", "header_labels", "row_values", "render_table_html"]

# (label, sort field or None)
COLUMNS: Tuple[Tuple[str, SortField | None], ...] = (
    ("ID", SortField.ID),
    ("Name", SortField.NAME),
    ("Address", None),
    ("Username", None),
    ("Email", None),
    ("Phone", None),
    ("Website", None),
    ("Company", SortField.COMPANY),
)

_STRIPE_CLASS = {"even": "bg-gray-100", "odd": "bg-white"}


def header_labels(config: SortConfig) -> List[str]:
    labels: List[str] = []
    for label, sort_field in COLUMNS:
        indicator = config.indicator_for(sort_field) if sort_field else ""
        labels.append(f"{label} {indicator}" if indicator else label)
    return labels


def row_values(row: DisplayRow) -> List[str]:
    """Plain-text cell values for a data row (empty list otherwise)."""
    u = row.user
    if row.kind is not RowKind.DATA or u is None:
        return []
    return [
        str(u.id),
        u.name,
        u.address.display,
        u.username,
        u.email,
        u.phone,
        u.website,
        u.company.name,
    ]


def _data_row_html(row: DisplayRow) -> str:
    u = row.user
    assert u is not None
    cells = [
        escape(str(u.id)),
        escape(u.name),
        escape(u.address.display),
        escape(u.username),
        f'<a href="{escape(u.mailto_url)}">{escape(u.email)}</a>',
        escape(u.phone),
        f'<a href="{escape(u.website_url)}" target="_blank" rel="noreferrer">{escape(u.website)}</a>',
        escape(u.company.name),
    ]
    tds = "".join(f"<td>{c}</td>" for c in cells)
    return f'<tr class="{_STRIPE_CLASS[row.stripe]}" data-user-id="{u.id}">{tds}</tr>'


def _body_rows_html(rows: Sequence[DisplayRow]) -> List[str]:
    out: List[str] = []
    for row in rows:
        if row.kind is RowKind.PLACEHOLDER:
            cells = '<td><div class="skeleton-block"></div></td>' * len(COLUMNS)
            out.append(f'<tr class="animate-pulse">{cells}</tr>')
        elif row.kind is RowKind.EMPTY:
            out.append(
                f'<tr><td colspan="{len(COLUMNS)}" class="empty-state">'
                f"{escape(settings.EMPTY_MESSAGE)}</td></tr>"
            )
        else:
            out.append(_data_row_html(row))
    return out


def render_table_html(snapshot: TableSnapshot) -> str:
    ths = "".join(f"<th>{escape(label)}</th>" for label in header_labels(snapshot.sort_config))
    parts = ["<table>", f"<thead><tr>{ths}</tr></thead>", "<tbody>"]
    parts.extend(_body_rows_html(snapshot.rows))
    parts.append("</tbody></table>")
    return "\n".join(parts)
